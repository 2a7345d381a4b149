"""Apple Wallet pass construction, packaging and signing."""

from passkit.archive import PassSource
from passkit.builder import PassBuilder, PassBuilderError
from passkit.errors import (
    CantCalculateHashes,
    CantCopySourceToTemp,
    CantCreateManifestFile,
    CantCreateTempDir,
    CantParsePassFile,
    CantReadEntry,
    CantReadTempDir,
    CantSerializePass,
    CantSignManifest,
    CantWritePassFile,
    PassContentNotFound,
    PassCreateError,
)
from passkit.fields import (
    DataDetectorType,
    DateStyle,
    FieldGroup,
    FieldGroups,
    NumberStyle,
    PassField,
    TextAlignment,
    Value,
)
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
from passkit.personalization import Personalization, PersonalizationField
from passkit.resolver import resolve_pass_content
from passkit.signer import PassSigner, sign
from passkit.sources import FilesystemSource, InMemorySource, SourceDirectory

__all__ = [
    "Barcode",
    "BarcodeFormat",
    "Beacon",
    "BoardingPass",
    "CantCalculateHashes",
    "CantCopySourceToTemp",
    "CantCreateManifestFile",
    "CantCreateTempDir",
    "CantParsePassFile",
    "CantReadEntry",
    "CantReadTempDir",
    "CantSerializePass",
    "CantSignManifest",
    "CantWritePassFile",
    "Coupon",
    "DataDetectorType",
    "DateStyle",
    "EventTicket",
    "FieldGroup",
    "FieldGroups",
    "FilesystemSource",
    "Generic",
    "InMemorySource",
    "Location",
    "NumberStyle",
    "Pass",
    "PassBuilder",
    "PassBuilderError",
    "PassContentNotFound",
    "PassCreateError",
    "PassField",
    "PassSigner",
    "PassSource",
    "Personalization",
    "PersonalizationField",
    "SourceDirectory",
    "StoreCard",
    "TextAlignment",
    "TransitType",
    "Value",
    "WebService",
    "resolve_pass_content",
    "sign",
]
