"""The pass content model serialized to pass.json.

A pass carries exactly one style payload (boarding pass, coupon, event
ticket, generic or store card). On the wire the style is a single top-level
key such as ``boardingPass``; in Python it is the ``style`` attribute, typed
as the union of the five style classes.
"""

import typing as t
from enum import StrEnum

from pydantic import (
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from passkit.fields import FieldGroups
from passkit.formatting import parse_rgb_color, rgb_string
from passkit.schema import JsonDocument, PassDateTime, PassModel

RequiredString = t.Annotated[str, Field(min_length=1)]


class BarcodeFormat(StrEnum):
    QR = "PKBarcodeFormatQR"
    PDF417 = "PKBarcodeFormatPDF417"
    AZTEC = "PKBarcodeFormatAztec"
    CODE128 = "PKBarcodeFormatCode128"


class TransitType(StrEnum):
    AIR = "PKTransitTypeAir"
    BOAT = "PKTransitTypeBoat"
    BUS = "PKTransitTypeBus"
    GENERIC = "PKTransitTypeGeneric"
    TRAIN = "PKTransitTypeTrain"


class Location(PassModel):
    """A location where the pass is relevant."""

    latitude: float
    longitude: float
    altitude: float | None = None
    max_distance: float | None = None  # relevance radius in metres
    relevant_text: str | None = None


class Beacon(PassModel):
    """A Bluetooth Low Energy beacon where the pass is relevant."""

    proximity_uuid: str = Field(alias="proximityUUID")
    major: int | None = Field(default=None, ge=0, le=65535)
    minor: int | None = Field(default=None, ge=0, le=65535)
    relevant_text: str | None = None


class Barcode(PassModel):
    format: BarcodeFormat
    message: str
    message_encoding: str = "iso-8859-1"
    alt_text: str | None = None


class WebService(PassModel):
    """Endpoint the wallet calls for pass updates."""

    url: str
    authentication_token: str


class BoardingPass(FieldGroups):
    kind: t.Literal["boardingPass"] = Field(default="boardingPass", exclude=True)
    transit_type: TransitType


class Coupon(FieldGroups):
    kind: t.Literal["coupon"] = Field(default="coupon", exclude=True)


class EventTicket(FieldGroups):
    kind: t.Literal["eventTicket"] = Field(default="eventTicket", exclude=True)


class Generic(FieldGroups):
    kind: t.Literal["generic"] = Field(default="generic", exclude=True)


class StoreCard(FieldGroups):
    kind: t.Literal["storeCard"] = Field(default="storeCard", exclude=True)


Style = t.Annotated[
    BoardingPass | Coupon | EventTicket | Generic | StoreCard,
    Field(discriminator="kind"),
]

STYLE_KEYS: tuple[str, ...] = ("boardingPass", "coupon", "eventTicket", "generic", "storeCard")
FALSE_OMITTED_FLAGS: tuple[str, ...] = ("voided", "sharing_prohibited", "suppress_strip_shine")


class Pass(JsonDocument):
    """Immutable pass content.

    Built with ``PassBuilder`` or parsed from a pass.json with ``Pass.from_json``.
    """

    format_version: int = 1
    pass_type_identifier: RequiredString
    serial_number: RequiredString
    team_identifier: RequiredString
    organization_name: str = ""
    description: str = ""
    logo_text: str | None = None
    background_color: str | None = None
    foreground_color: str | None = None
    label_color: str | None = None
    web_service: WebService | None = Field(default=None, exclude=True)
    relevant_date: PassDateTime | None = None
    expiration_date: PassDateTime | None = None
    voided: bool = False
    locations: tuple[Location, ...] = ()
    beacons: tuple[Beacon, ...] = ()
    max_distance: float | None = None
    barcodes: tuple[Barcode, ...] = ()
    grouping_identifier: str | None = None
    sharing_prohibited: bool = False
    suppress_strip_shine: bool = False
    app_launch_url: str | None = Field(default=None, alias="appLaunchURL")
    associated_store_identifiers: tuple[int, ...] = ()
    user_info: dict[str, t.Any] | None = None
    style: Style = Field(exclude=True)

    @field_validator("background_color", "foreground_color", "label_color")
    @classmethod
    def normalize_color(cls, value: str | None) -> str | None:
        """Colours are "rgb(r, g, b)" strings."""
        if value is None:
            return None
        return rgb_string(*parse_rgb_color(value))

    @model_validator(mode="before")
    @classmethod
    def unflatten_wire_keys(cls, data: t.Any) -> t.Any:
        """Fold the flat pass.json keys into ``style`` and ``web_service``."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if "style" not in data:
            present = [key for key in STYLE_KEYS if key in data]
            if len(present) != 1:
                found = ", ".join(present) or "none"
                raise ValueError(f"Pass must contain exactly one of {', '.join(STYLE_KEYS)} (found: {found})")
            payload = data.pop(present[0])
            if not isinstance(payload, dict):
                raise ValueError(f"{present[0]} must be an object")
            data["style"] = {**payload, "kind": present[0]}

        if "web_service" not in data and ("webServiceURL" in data or "authenticationToken" in data):
            data["web_service"] = {
                "url": data.pop("webServiceURL", None),
                "authentication_token": data.pop("authenticationToken", None),
            }
        return data

    @model_serializer(mode="wrap")
    def flatten_wire_keys(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, t.Any]:
        data: dict[str, t.Any] = handler(self)
        if self.web_service is not None:
            data["webServiceURL"] = self.web_service.url
            data["authenticationToken"] = self.web_service.authentication_token
        data[self.style.kind] = self.style.model_dump(
            mode=info.mode,
            by_alias=bool(info.by_alias),
            exclude_none=info.exclude_none,
        )
        # Flags are only written when set
        for name in FALSE_OMITTED_FLAGS:
            for key in (name, to_camel(name)):
                if data.get(key) is False:
                    del data[key]
        return data
