"""Pass signing using PKCS#7.

A .pkpass file requires a PKCS#7 detached signature of the manifest.json
file, signed with the Pass Type ID certificate and including the Apple
WWDR (Worldwide Developer Relations) intermediate certificate.

The WWDR certificate is never downloaded or bundled here: callers obtain it
from Apple and inject it, and signing fails without it.
"""

from pathlib import Path
from typing import Any

import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.serialization import pkcs7, pkcs12

from passkit import settings
from passkit.errors import CantSignManifest

logger = structlog.get_logger(__name__)

PEM_MARKER = b"-----BEGIN"


def _is_pem(data: bytes) -> bool:
    return data.lstrip().startswith(PEM_MARKER)


def load_certificate(data: bytes) -> x509.Certificate:
    """Load an X.509 certificate from DER or PEM bytes.

    Raises:
        CantSignManifest: If the certificate cannot be loaded.
    """
    try:
        if _is_pem(data):
            return x509.load_pem_x509_certificate(data)
        return x509.load_der_x509_certificate(data)
    except ValueError as e:
        raise CantSignManifest(f"Failed to load certificate: {e}") from e


def load_private_key(data: bytes, password: str | None = None) -> Any:
    """Load a private key.

    Accepts a PKCS#12 container (DER, as exported from Keychain Access), a
    PEM private key or a DER private key, optionally password protected.

    Raises:
        CantSignManifest: If no private key can be loaded.
    """
    password_bytes = password.encode() if password else None

    if _is_pem(data):
        try:
            return serialization.load_pem_private_key(data, password=password_bytes)
        except (TypeError, ValueError) as e:
            raise CantSignManifest(f"Failed to load private key: {e}") from e

    try:
        private_key, _certificate, _additional = pkcs12.load_key_and_certificates(data, password_bytes)
    except ValueError:
        private_key = None
        # Containers exported without a password are often encrypted with an empty one
        if password_bytes is None:
            try:
                private_key, _certificate, _additional = pkcs12.load_key_and_certificates(data, b"")
            except ValueError:
                private_key = None
    if private_key is not None:
        return private_key

    try:
        return serialization.load_der_private_key(data, password=password_bytes)
    except (TypeError, ValueError) as e:
        raise CantSignManifest(f"Failed to load private key: {e}") from e


def _public_key_bytes(key: Any) -> bytes:
    return key.public_bytes(serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo)


def sign(
    certificate: x509.Certificate,
    private_key: Any,
    wwdr_certificate: x509.Certificate | None,
    message: bytes,
) -> bytes:
    """Create a PKCS#7 detached signature of ``message``.

    The signed-data structure embeds the signer certificate and the WWDR
    intermediate certificate and does not contain the message itself.

    Args:
        certificate: The Pass Type ID certificate.
        private_key: The private key matching ``certificate``.
        wwdr_certificate: The Apple WWDR intermediate certificate.
        message: The bytes to sign (the manifest.json content).

    Returns:
        The signature in DER format.

    Raises:
        CantSignManifest: If the chain is incomplete or signing fails.
    """
    if wwdr_certificate is None:
        raise CantSignManifest("WWDR intermediate certificate not provided")

    try:
        if _public_key_bytes(certificate.public_key()) != _public_key_bytes(private_key.public_key()):
            raise CantSignManifest("Private key does not match the pass certificate")

        return (
            pkcs7.PKCS7SignatureBuilder()
            .set_data(message)
            .add_signer(certificate, private_key, hashes.SHA256())
            .add_certificate(wwdr_certificate)
            .sign(
                serialization.Encoding.DER,
                [pkcs7.PKCS7Options.DetachedSignature, pkcs7.PKCS7Options.Binary],
            )
        )
    except CantSignManifest:
        raise
    except Exception as e:
        logger.error("manifest_signing_failed", error=str(e))
        raise CantSignManifest(str(e)) from e


class PassSigner:
    """Signs pass manifests with a Pass Type ID certificate.

    Holds the loaded certificate, key and WWDR certificate; they are never
    modified after construction, so one signer can serve concurrent builds.
    """

    def __init__(
        self,
        certificate: x509.Certificate,
        private_key: Any,
        wwdr_certificate: x509.Certificate | None = None,
    ) -> None:
        self.certificate = certificate
        self.private_key = private_key
        self.wwdr_certificate = wwdr_certificate

    def __repr__(self) -> str:
        return (
            f"PassSigner(certificate={self.certificate.subject.rfc4514_string()!r}, "
            f"private_key=<hidden>, wwdr_certificate={self.wwdr_certificate is not None})"
        )

    @classmethod
    def from_der(
        cls,
        certificate_bytes: bytes,
        private_key_bytes: bytes,
        password: str | None = None,
        wwdr_certificate_bytes: bytes | None = None,
    ) -> "PassSigner":
        """Build a signer from raw certificate and key container bytes.

        Args:
            certificate_bytes: The Pass Type ID certificate (DER).
            private_key_bytes: The PKCS#12 container holding the private key (DER).
            password: Password of the container, if protected.
            wwdr_certificate_bytes: The Apple WWDR intermediate certificate.

        Raises:
            CantSignManifest: If any of the material cannot be loaded.
        """
        wwdr_certificate = load_certificate(wwdr_certificate_bytes) if wwdr_certificate_bytes else None
        return cls(
            certificate=load_certificate(certificate_bytes),
            private_key=load_private_key(private_key_bytes, password),
            wwdr_certificate=wwdr_certificate,
        )

    @classmethod
    def from_files(
        cls,
        cert_path: str | Path,
        key_path: str | Path,
        key_password: str | None = None,
        wwdr_cert_path: str | Path | None = None,
    ) -> "PassSigner":
        """Build a signer from certificate and key files (PEM or DER).

        Raises:
            CantSignManifest: If a file is missing or cannot be loaded.
        """
        return cls.from_der(
            _read_file(cert_path, "Certificate"),
            _read_file(key_path, "Private key"),
            key_password,
            _read_file(wwdr_cert_path, "WWDR certificate") if wwdr_cert_path else None,
        )

    @classmethod
    def from_settings(cls) -> "PassSigner":
        """Build a signer from the APPLE_WALLET_* settings.

        Raises:
            CantSignManifest: If the settings are incomplete or a file cannot be loaded.
        """
        if not cls.is_configured():
            raise CantSignManifest(
                "Apple Wallet is not configured. Set APPLE_WALLET_CERT_PATH, "
                "APPLE_WALLET_KEY_PATH and APPLE_WALLET_WWDR_CERT_PATH."
            )
        signer = cls.from_files(
            settings.APPLE_WALLET_CERT_PATH,
            settings.APPLE_WALLET_KEY_PATH,
            settings.APPLE_WALLET_KEY_PASSWORD or None,
            settings.APPLE_WALLET_WWDR_CERT_PATH,
        )
        logger.info("pass_signer_loaded", cert_path=settings.APPLE_WALLET_CERT_PATH)
        return signer

    @staticmethod
    def is_configured() -> bool:
        """Check if all certificate paths are set in settings."""
        return bool(
            settings.APPLE_WALLET_CERT_PATH
            and settings.APPLE_WALLET_KEY_PATH
            and settings.APPLE_WALLET_WWDR_CERT_PATH
        )

    def sign_manifest(self, manifest_data: bytes) -> bytes:
        """Create the detached DER signature of the manifest.

        Raises:
            CantSignManifest: If signing fails.
        """
        signature = sign(self.certificate, self.private_key, self.wwdr_certificate, manifest_data)
        logger.debug(
            "manifest_signed",
            manifest_size=len(manifest_data),
            signature_size=len(signature),
        )
        return signature


def _read_file(path: str | Path, what: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as e:
        raise CantSignManifest(f"{what} not found: {path}") from e
    except OSError as e:
        raise CantSignManifest(f"Failed to read {what.lower()} {path}: {e}") from e
