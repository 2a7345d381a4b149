"""Fields displayed on a pass and the groups they are placed in."""

import typing as t
from datetime import datetime
from enum import StrEnum

from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_serializer, model_validator

from passkit.formatting import format_iso_date
from passkit.schema import PassModel

# Variants are tried in order and strictly, so no payload is coerced into
# another variant ("23" stays text, True stays a boolean).
Value = t.Annotated[
    StrictBool | StrictInt | StrictFloat | StrictStr | datetime,
    Field(union_mode="left_to_right"),
]


class TextAlignment(StrEnum):
    LEFT = "PKTextAlignmentLeft"
    CENTER = "PKTextAlignmentCenter"
    RIGHT = "PKTextAlignmentRight"
    NATURAL = "PKTextAlignmentNatural"


class DateStyle(StrEnum):
    """Style for dateStyle and timeStyle hints."""

    NONE = "PKDateStyleNone"
    SHORT = "PKDateStyleShort"
    MEDIUM = "PKDateStyleMedium"
    LONG = "PKDateStyleLong"
    FULL = "PKDateStyleFull"


class NumberStyle(StrEnum):
    DECIMAL = "PKNumberStyleDecimal"
    PERCENT = "PKNumberStylePercent"
    SCIENTIFIC = "PKNumberStyleScientific"
    SPELL_OUT = "PKNumberStyleSpellOut"


class DataDetectorType(StrEnum):
    PHONE_NUMBER = "PKDataDetectorTypePhoneNumber"
    LINK = "PKDataDetectorTypeLink"
    ADDRESS = "PKDataDetectorTypeAddress"
    CALENDAR_EVENT = "PKDataDetectorTypeCalendarEvent"


class PassField(PassModel):
    """A single datum displayed on the pass.

    Construction never fails on the key; emptiness and uniqueness are checked
    by the group holding the field (see ``FieldGroups``).
    """

    key: str
    value: Value
    label: str | None = None
    change_message: str | None = None
    text_alignment: TextAlignment | None = None
    currency_code: str | None = None
    date_style: DateStyle | None = None
    time_style: DateStyle | None = None
    number_style: NumberStyle | None = None
    is_relative: bool | None = None
    ignores_time_zone: bool | None = None
    data_detector_types: tuple[DataDetectorType, ...] | None = None

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: t.Any) -> t.Any:
        if isinstance(value, datetime):
            return format_iso_date(value)
        return value

    @classmethod
    def of(cls, key: str, *args: t.Any, **hints: t.Any) -> "PassField":
        """Build a field from ``(key, value)`` or ``(key, label, value)``.

        Extra keyword arguments are display hints (``currency_code``, ...).
        """
        if len(args) == 1:
            label, value = None, args[0]
        elif len(args) == 2:
            label, value = args
        else:
            raise TypeError(f"PassField.of() takes (key, value) or (key, label, value), got {len(args) + 1} arguments")
        return cls(key=key, label=label, value=value, **hints)

    @classmethod
    def coerce(cls, field: "PassField | tuple[t.Any, ...]") -> "PassField":
        """Accept a field or a ``(key, value)`` / ``(key, label, value)`` tuple."""
        if isinstance(field, PassField):
            return field
        return cls.of(*field)


FieldLike = PassField | tuple[t.Any, ...]


class FieldGroup(StrEnum):
    """Placement of a field on the pass. Values are the wire keys."""

    HEADER = "headerFields"
    PRIMARY = "primaryFields"
    SECONDARY = "secondaryFields"
    AUXILIARY = "auxiliaryFields"
    BACK = "backFields"

    @property
    def attribute(self) -> str:
        """Name of the matching ``FieldGroups`` attribute."""
        return f"{self.name.lower()}_fields"


class FieldGroups(PassModel):
    """Ordered fields per placement group. Order is display order."""

    header_fields: tuple[PassField, ...] = ()
    primary_fields: tuple[PassField, ...] = ()
    secondary_fields: tuple[PassField, ...] = ()
    auxiliary_fields: tuple[PassField, ...] = ()
    back_fields: tuple[PassField, ...] = ()

    @model_validator(mode="after")
    def validate_keys(self) -> t.Self:
        """Keys must be non-empty and unique within their group."""
        for group in FieldGroup:
            seen: set[str] = set()
            for field in self.group_fields(group):
                if not field.key:
                    raise ValueError(f"Field key must not be empty in {group.value}")
                if field.key in seen:
                    raise ValueError(f"Duplicate field key {field.key!r} in {group.value}")
                seen.add(field.key)
        return self

    def group_fields(self, group: FieldGroup) -> tuple[PassField, ...]:
        """Fields placed in ``group``."""
        return t.cast(tuple[PassField, ...], getattr(self, group.attribute))
