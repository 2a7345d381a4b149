"""Rewards enrollment personalization (personalization.json).

A personalizable pass asks the user for the listed fields when it is added
to the wallet. The dictionary travels as its own archive entry and is
hashed into the manifest like pass.json.
"""

from enum import StrEnum

from pydantic import Field

from passkit.schema import JsonDocument


class PersonalizationField(StrEnum):
    NAME = "PKPassPersonalizationFieldName"
    POSTAL_CODE = "PKPassPersonalizationFieldPostalCode"
    EMAIL_ADDRESS = "PKPassPersonalizationFieldEmailAddress"
    PHONE_NUMBER = "PKPassPersonalizationFieldPhoneNumber"


class Personalization(JsonDocument):
    required_personalization_fields: tuple[PersonalizationField, ...] = Field(min_length=1)
    description: str
    terms_and_conditions: str | None = None
