"""Test fixtures for passkit tests.

Certificates are generated per test session with throwaway keys: a
self-signed stand-in for the Apple WWDR authority and a Pass Type ID
certificate issued by it.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

from passkit.builder import PassBuilder
from passkit.passes import BarcodeFormat, Pass, TransitType
from passkit.signer import PassSigner
from passkit.sources import InMemorySource

PKCS12_PASSWORD = "wallet-secret"

# --- Certificate Fixtures ---


def _build_certificate(
    subject: x509.Name,
    issuer: x509.Name,
    public_key: rsa.RSAPublicKey,
    signing_key: rsa.RSAPrivateKey,
    is_ca: bool,
) -> x509.Certificate:
    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=is_ca, path_length=None), critical=True)
        .sign(signing_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def wwdr_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def mock_private_key() -> rsa.RSAPrivateKey:
    """RSA key of the Pass Type ID certificate."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def mock_wwdr_certificate(wwdr_private_key: rsa.RSAPrivateKey) -> x509.Certificate:
    """A stand-in for the Apple WWDR intermediate certificate."""
    name = x509.Name(
        [
            x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Apple Inc."),
            x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "Apple Worldwide Developer Relations"),
            x509.NameAttribute(NameOID.COMMON_NAME, "Apple Worldwide Developer Relations Certification Authority"),
        ]
    )
    return _build_certificate(name, name, wwdr_private_key.public_key(), wwdr_private_key, is_ca=True)


@pytest.fixture(scope="session")
def mock_certificate(
    mock_private_key: rsa.RSAPrivateKey,
    wwdr_private_key: rsa.RSAPrivateKey,
    mock_wwdr_certificate: x509.Certificate,
) -> x509.Certificate:
    """A Pass Type ID certificate issued by the mock WWDR authority."""
    subject = x509.Name(
        [
            x509.NameAttribute(NameOID.USER_ID, "pass.it.example"),
            x509.NameAttribute(NameOID.COMMON_NAME, "Pass Type ID: pass.it.example"),
            x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "ABC123"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Test Org"),
            x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
        ]
    )
    return _build_certificate(
        subject, mock_wwdr_certificate.subject, mock_private_key.public_key(), wwdr_private_key, is_ca=False
    )


@pytest.fixture(scope="session")
def certificate_der(mock_certificate: x509.Certificate) -> bytes:
    return mock_certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def wwdr_certificate_der(mock_wwdr_certificate: x509.Certificate) -> bytes:
    return mock_wwdr_certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def pkcs12_password() -> str:
    return PKCS12_PASSWORD


@pytest.fixture(scope="session")
def pkcs12_der(mock_private_key: rsa.RSAPrivateKey, mock_certificate: x509.Certificate) -> bytes:
    """The private key in a password protected PKCS#12 container."""
    return pkcs12.serialize_key_and_certificates(
        name=b"pass",
        key=mock_private_key,
        cert=mock_certificate,
        cas=None,
        encryption_algorithm=serialization.BestAvailableEncryption(PKCS12_PASSWORD.encode()),
    )


@pytest.fixture
def signer(
    mock_certificate: x509.Certificate,
    mock_private_key: rsa.RSAPrivateKey,
    mock_wwdr_certificate: x509.Certificate,
) -> PassSigner:
    return PassSigner(mock_certificate, mock_private_key, mock_wwdr_certificate)


@pytest.fixture
def certificate_files(
    tmp_path: Path,
    mock_certificate: x509.Certificate,
    mock_private_key: rsa.RSAPrivateKey,
    mock_wwdr_certificate: x509.Certificate,
) -> dict[str, Path]:
    """PEM files for the certificate, an unencrypted key and the WWDR certificate."""
    files = {
        "cert": tmp_path / "cert.pem",
        "key": tmp_path / "key.pem",
        "wwdr": tmp_path / "wwdr.pem",
    }
    files["cert"].write_bytes(mock_certificate.public_bytes(serialization.Encoding.PEM))
    files["key"].write_bytes(
        mock_private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    files["wwdr"].write_bytes(mock_wwdr_certificate.public_bytes(serialization.Encoding.PEM))
    return files


# --- Pass Fixtures ---


@pytest.fixture
def icon_bytes() -> bytes:
    """17 bytes of arbitrary icon content."""
    return b"\x89PNG\r\n\x1a\nfake-icon"


@pytest.fixture
def example_pass() -> Pass:
    """The pass of the reference packaging scenario."""
    return (
        PassBuilder("0001", "pass.it.example", "ABC123")
        .add_header_field(("gate", "GATE", "23"))
        .add_barcode((BarcodeFormat.CODE128, "HELLO"))
        .finish_boarding_pass(TransitType.TRAIN)
    )


@pytest.fixture
def full_builder() -> PassBuilder:
    return (
        PassBuilder("0001", "pass.it.cinemapedagna.tkt", "5BW43H5V5J")
        .web_service("vxwxd7J8AlNNFPS8k0a0FfUFtq0ewzFdc", "https://example.com/passes/")
        .relevant_date("2018-11-25T14:25-08:00")
        .add_location(37.6189722, -122.3748889)
        .add_barcode((BarcodeFormat.CODE128, "FOOBAR BAZBAF 193197"))
        .organization_name("Surface Lines")
        .description("Surface Lines Pass")
        .logo_text("Surface Lines")
        .add_header_field(("gate", "GATE", "23"))
        .add_header_field(("example", "EXAM", 22))
    )


@pytest.fixture
def icon_source(icon_bytes: bytes) -> InMemorySource:
    return InMemorySource({"icon.png": icon_bytes})
