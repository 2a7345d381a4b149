"""Pass package (.pkpass) assembly.

A .pkpass file is a ZIP archive containing:
- every asset of the source directory (images, localized folders, ...)
- pass.json: The pass definition
- personalization.json: Optional enrollment dictionary
- manifest.json: SHA-1 hashes of all files above
- signature: PKCS#7 detached signature of the manifest
"""

import io
import os
import tempfile
import zipfile
from pathlib import Path

import structlog
from pydantic_core import PydanticSerializationError

from passkit.errors import (
    CantCopySourceToTemp,
    CantCreateManifestFile,
    CantCreateTempDir,
    CantSerializePass,
    CantSignManifest,
    CantWritePassFile,
    PassCreateError,
)
from passkit.manifest import MANIFEST_FILENAME, SIGNATURE_FILENAME, create_manifest, serialize_manifest
from passkit.passes import Pass
from passkit.personalization import Personalization
from passkit.resolver import PASS_FILENAME, PERSONALIZATION_FILENAME, resolve_pass_content
from passkit.signer import PassSigner
from passkit.sources import SourceDirectory, as_source

logger = structlog.get_logger(__name__)

# Root entries regenerated on every build rather than copied from the source
GENERATED_FILENAMES = frozenset({PASS_FILENAME, MANIFEST_FILENAME, SIGNATURE_FILENAME})


class PassSource:
    """A source directory of pass assets plus the signer used to package it.

    Neither the source nor the signer is modified by a build, and every
    build works on its own buffer and manifest.
    """

    CONTENT_TYPE = "application/vnd.apple.pkpass"
    FILE_EXTENSION = "pkpass"

    def __init__(self, source: SourceDirectory | str | os.PathLike[str], signer: PassSigner) -> None:
        """Initialize the pass source.

        Args:
            source: A directory path or any ``SourceDirectory``.
            signer: The signer used for the manifest signature.
        """
        self.source = as_source(source)
        self.signer = signer

    def __repr__(self) -> str:
        return f"PassSource(source={self.source!r}, signer={self.signer!r})"

    @classmethod
    def from_der(
        cls,
        source: SourceDirectory | str | os.PathLike[str],
        certificate_bytes: bytes,
        private_key_bytes: bytes,
        password: str | None = None,
        wwdr_certificate_bytes: bytes | None = None,
    ) -> "PassSource":
        """Build a pass source from raw certificate and key container bytes.

        See ``PassSigner.from_der``.
        """
        signer = PassSigner.from_der(certificate_bytes, private_key_bytes, password, wwdr_certificate_bytes)
        return cls(source, signer)

    def build_pkpass(self, pass_: Pass | None = None, personalization: Personalization | None = None) -> bytes:
        """Create a .pkpass archive and return it as bytes.

        Args:
            pass_: The pass to package. If None, pass.json from the source
                directory is used.
            personalization: Optional personalization dictionary. Replaces a
                personalization.json from the source directory.

        Returns:
            The .pkpass file as bytes.

        Raises:
            PassCreateError: On any failure. No archive is returned.
        """
        try:
            pass_content = resolve_pass_content(pass_, self.source)
            assets = self._read_assets(skip_personalization=personalization is not None)

            generated = {PASS_FILENAME: self._serialize(pass_content)}
            if personalization is not None:
                generated[PERSONALIZATION_FILENAME] = self._serialize(personalization)

            manifest = create_manifest({**assets, **generated})
            buffer = io.BytesIO()

            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
                for filename, content in assets.items():
                    self._write_entry(zf, filename, content, CantCopySourceToTemp)
                for filename, content in generated.items():
                    self._write_entry(zf, filename, content, CantWritePassFile)

                manifest_data = serialize_manifest(manifest)
                signature = self.signer.sign_manifest(manifest_data)

                self._write_entry(zf, MANIFEST_FILENAME, manifest_data, CantCreateManifestFile)
                self._write_entry(zf, SIGNATURE_FILENAME, signature, CantSignManifest)

        except PassCreateError as e:
            logger.error("pkpass_build_failed", source=repr(self.source), error=str(e))
            raise

        pkpass_bytes = buffer.getvalue()
        logger.info(
            "pkpass_built",
            serial_number=pass_content.serial_number,
            pass_type_identifier=pass_content.pass_type_identifier,
            entries=len(manifest) + 2,
            size=len(pkpass_bytes),
        )
        return pkpass_bytes

    def write_pkpass(
        self,
        path: str | os.PathLike[str],
        pass_: Pass | None = None,
        personalization: Personalization | None = None,
    ) -> Path:
        """Build a .pkpass archive and write it to ``path``.

        The archive is written to a temporary file next to ``path`` and moved
        into place, so a failed build or write never leaves a partial file.

        Returns:
            The path written.

        Raises:
            PassCreateError: On any failure.
        """
        pkpass_bytes = self.build_pkpass(pass_, personalization)
        destination = Path(path)

        try:
            fd, temp_name = tempfile.mkstemp(dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp")
        except OSError as e:
            raise CantCreateTempDir(str(e)) from e

        try:
            with os.fdopen(fd, "wb") as temp_file:
                temp_file.write(pkpass_bytes)
            os.replace(temp_name, destination)
        except OSError as e:
            Path(temp_name).unlink(missing_ok=True)
            logger.error("pkpass_write_failed", path=str(destination), error=str(e))
            raise CantCopySourceToTemp(str(e)) from e

        logger.info("pkpass_written", path=str(destination), size=len(pkpass_bytes))
        return destination

    def _read_assets(self, skip_personalization: bool) -> dict[str, bytes]:
        skipped = set(GENERATED_FILENAMES)
        if skip_personalization:
            skipped.add(PERSONALIZATION_FILENAME)
        return {
            filename: self.source.read_entry(filename)
            for filename in self.source.list_entries()
            if filename not in skipped
        }

    @staticmethod
    def _serialize(document: Pass | Personalization) -> bytes:
        try:
            return document.to_json()
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise CantSerializePass(str(e)) from e

    @staticmethod
    def _write_entry(
        zf: zipfile.ZipFile,
        filename: str,
        content: bytes,
        error: type[PassCreateError],
    ) -> None:
        try:
            zf.writestr(filename, content)
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise error(f"{filename}: {e}") from e
