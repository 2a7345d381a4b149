"""Fluent, immutable construction of passes.

Every operation returns a new builder and leaves the receiver untouched, so
a partially configured builder can be shared as a template::

    base = PassBuilder("0001", "pass.com.example.ticket", "ABC123").organization_name("Example")
    boarding_pass = (
        base.add_barcode((BarcodeFormat.QR, "0001"))
        .add_header_field(("gate", "GATE", "23"))
        .finish_boarding_pass(TransitType.TRAIN)
    )

Intermediate steps never validate. The ``finish_*`` operations build the
``Pass`` and raise ``PassBuilderError`` if it is invalid (empty identifiers,
empty or duplicate field keys within a group).
"""

import typing as t
from dataclasses import dataclass, field, replace
from datetime import datetime

from pydantic import ValidationError

from passkit import settings
from passkit.fields import FieldGroup, FieldGroups, FieldLike, PassField
from passkit.formatting import parse_iso_date
from passkit.passes import (
    Barcode,
    BarcodeFormat,
    Beacon,
    BoardingPass,
    Coupon,
    EventTicket,
    Generic,
    Location,
    Pass,
    StoreCard,
    TransitType,
    WebService,
)


class PassBuilderError(ValueError):
    """Raised when a finished pass is invalid."""


Color = str | tuple[int, int, int]


def _color(value: Color) -> str:
    # Range is checked when the pass is finished
    if isinstance(value, tuple):
        red, green, blue = value
        return f"rgb({red}, {green}, {blue})"
    return value


def _timestamp(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    return parse_iso_date(value)


@dataclass(frozen=True)
class PassBuilder:
    """Accumulates pass attributes until a ``finish_*`` call.

    Builders compare by value but are unhashable: ``user_info`` and the
    accumulated attributes may hold dicts.
    """

    __hash__ = None  # type: ignore[assignment]

    serial_number: str
    pass_type_identifier: str
    team_identifier: str
    attributes: dict[str, t.Any] = field(default_factory=dict)
    locations: tuple[Location, ...] = ()
    beacons: tuple[Beacon, ...] = ()
    barcodes: tuple[Barcode, ...] = ()
    associated_store_identifiers: tuple[int, ...] = ()
    groups: dict[FieldGroup, tuple[PassField, ...]] = field(default_factory=dict)

    @classmethod
    def new(cls, serial_number: str, pass_type_identifier: str, team_identifier: str) -> "PassBuilder":
        return cls(serial_number, pass_type_identifier, team_identifier)

    @classmethod
    def from_settings(cls, serial_number: str) -> "PassBuilder":
        """Seed the pass type and team identifiers from APPLE_WALLET_* settings."""
        return cls(serial_number, settings.APPLE_WALLET_PASS_TYPE_ID, settings.APPLE_WALLET_TEAM_ID)

    # --- Single-value setters (a repeated call overwrites) ---

    def _set(self, **attributes: t.Any) -> "PassBuilder":
        return replace(self, attributes={**self.attributes, **attributes})

    def web_service(self, auth_token: str, url: str) -> "PassBuilder":
        return self._set(web_service=WebService(url=url, authentication_token=auth_token))

    def relevant_date(self, timestamp: datetime | str) -> "PassBuilder":
        return self._set(relevant_date=_timestamp(timestamp))

    def expiration_date(self, timestamp: datetime | str) -> "PassBuilder":
        return self._set(expiration_date=_timestamp(timestamp))

    def organization_name(self, name: str) -> "PassBuilder":
        return self._set(organization_name=name)

    def description(self, description: str) -> "PassBuilder":
        return self._set(description=description)

    def logo_text(self, text: str) -> "PassBuilder":
        return self._set(logo_text=text)

    def format_version(self, version: int) -> "PassBuilder":
        return self._set(format_version=version)

    def background_color(self, color: Color) -> "PassBuilder":
        return self._set(background_color=_color(color))

    def foreground_color(self, color: Color) -> "PassBuilder":
        return self._set(foreground_color=_color(color))

    def label_color(self, color: Color) -> "PassBuilder":
        return self._set(label_color=_color(color))

    def grouping_identifier(self, identifier: str) -> "PassBuilder":
        return self._set(grouping_identifier=identifier)

    def max_distance(self, meters: float) -> "PassBuilder":
        return self._set(max_distance=meters)

    def app_launch_url(self, url: str) -> "PassBuilder":
        return self._set(app_launch_url=url)

    def user_info(self, info: dict[str, t.Any]) -> "PassBuilder":
        return self._set(user_info=dict(info))

    def voided(self, voided: bool = True) -> "PassBuilder":
        return self._set(voided=voided)

    def sharing_prohibited(self, prohibited: bool = True) -> "PassBuilder":
        return self._set(sharing_prohibited=prohibited)

    def suppress_strip_shine(self, suppress: bool = True) -> "PassBuilder":
        return self._set(suppress_strip_shine=suppress)

    # --- Appending operations (order is preserved) ---

    def add_location(
        self,
        latitude: float,
        longitude: float,
        *,
        altitude: float | None = None,
        max_distance: float | None = None,
        relevant_text: str | None = None,
    ) -> "PassBuilder":
        location = Location(
            latitude=latitude,
            longitude=longitude,
            altitude=altitude,
            max_distance=max_distance,
            relevant_text=relevant_text,
        )
        return replace(self, locations=(*self.locations, location))

    def add_beacon(
        self,
        proximity_uuid: str,
        *,
        major: int | None = None,
        minor: int | None = None,
        relevant_text: str | None = None,
    ) -> "PassBuilder":
        beacon = Beacon(proximity_uuid=proximity_uuid, major=major, minor=minor, relevant_text=relevant_text)
        return replace(self, beacons=(*self.beacons, beacon))

    def add_barcode(self, barcode: Barcode | tuple[BarcodeFormat, str]) -> "PassBuilder":
        """Append a barcode, given as a ``Barcode`` or a ``(format, message)`` tuple."""
        if not isinstance(barcode, Barcode):
            barcode_format, message = barcode
            barcode = Barcode(format=barcode_format, message=message)
        return replace(self, barcodes=(*self.barcodes, barcode))

    def add_associated_store_identifier(self, identifier: int) -> "PassBuilder":
        return replace(self, associated_store_identifiers=(*self.associated_store_identifiers, identifier))

    def add_field(self, group: FieldGroup, pass_field: FieldLike) -> "PassBuilder":
        """Append a field to a group.

        ``pass_field`` is a ``PassField`` or a ``(key, value)`` /
        ``(key, label, value)`` tuple.
        """
        fields = (*self.groups.get(group, ()), PassField.coerce(pass_field))
        return replace(self, groups={**self.groups, group: fields})

    def add_header_field(self, pass_field: FieldLike) -> "PassBuilder":
        return self.add_field(FieldGroup.HEADER, pass_field)

    def add_primary_field(self, pass_field: FieldLike) -> "PassBuilder":
        return self.add_field(FieldGroup.PRIMARY, pass_field)

    def add_secondary_field(self, pass_field: FieldLike) -> "PassBuilder":
        return self.add_field(FieldGroup.SECONDARY, pass_field)

    def add_auxiliary_field(self, pass_field: FieldLike) -> "PassBuilder":
        return self.add_field(FieldGroup.AUXILIARY, pass_field)

    def add_back_field(self, pass_field: FieldLike) -> "PassBuilder":
        return self.add_field(FieldGroup.BACK, pass_field)

    # --- Terminal operations ---

    def finish_boarding_pass(self, transit_type: TransitType) -> Pass:
        return self._finish(BoardingPass, transit_type=transit_type)

    def finish_coupon(self) -> Pass:
        return self._finish(Coupon)

    def finish_event_ticket(self) -> Pass:
        return self._finish(EventTicket)

    def finish_generic(self) -> Pass:
        return self._finish(Generic)

    def finish_store_card(self) -> Pass:
        return self._finish(StoreCard)

    def _finish(self, style_class: type[FieldGroups], **style_attributes: t.Any) -> Pass:
        group_fields = {group.attribute: fields for group, fields in self.groups.items()}
        try:
            style = style_class(**group_fields, **style_attributes)
            return Pass(
                serial_number=self.serial_number,
                pass_type_identifier=self.pass_type_identifier,
                team_identifier=self.team_identifier,
                locations=self.locations,
                beacons=self.beacons,
                barcodes=self.barcodes,
                associated_store_identifiers=self.associated_store_identifiers,
                style=style,
                **self.attributes,
            )
        except ValidationError as e:
            raise PassBuilderError(str(e)) from e
