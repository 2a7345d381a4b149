"""Common pydantic base for pass content models."""

import json
import typing as t
from datetime import datetime

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from passkit.formatting import format_iso_date

PassDateTime = t.Annotated[datetime, PlainSerializer(format_iso_date, return_type=str, when_used="json")]


class PassModel(BaseModel):
    """Immutable model serialized with the wallet's camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class JsonDocument(PassModel):
    """A model written into the archive as a standalone JSON entry."""

    def to_json(self) -> bytes:
        """Serialize to the canonical entry bytes.

        Keys use the wire aliases, unset optional values are omitted and the
        output is 2-space indented UTF-8.
        """
        content = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(content, indent=2, ensure_ascii=False).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes | str) -> t.Self:
        """Parse entry bytes.

        Raises:
            pydantic.ValidationError: If the content is not valid JSON or
                does not match the schema.
        """
        return cls.model_validate_json(data)
