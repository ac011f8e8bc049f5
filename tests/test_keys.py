import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.x509.oid import NameOID

from gomagw.keys import KeyLoadError, load_rsa_public_key


@pytest.fixture(scope="module")
def rsa_private():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def _public_pem(private) -> str:
    return private.public_key().public_bytes(
        Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
    ).decode()


def _self_signed(private) -> str:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "example.com")])
    now = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private.public_key())
        .serial_number(1)
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(private, hashes.SHA256())
    )
    return cert.public_bytes(Encoding.PEM).decode()


def test_load_from_pem_text(rsa_private):
    key = load_rsa_public_key(_public_pem(rsa_private))
    assert key.public_numbers() == rsa_private.public_key().public_numbers()


def test_load_from_file(rsa_private, tmp_path):
    path = tmp_path / "public.pem"
    path.write_text(_public_pem(rsa_private))
    key = load_rsa_public_key(str(path))
    assert key.public_numbers() == rsa_private.public_key().public_numbers()


def test_load_from_certificate(rsa_private):
    key = load_rsa_public_key(_self_signed(rsa_private))
    assert key.public_numbers() == rsa_private.public_key().public_numbers()


def test_leading_text_is_ignored(rsa_private):
    text = "some preamble\n" + _public_pem(rsa_private)
    key = load_rsa_public_key(text)
    assert key.public_numbers().n == rsa_private.public_key().public_numbers().n


def test_non_rsa_public_key_rejected():
    ec_key = ec.generate_private_key(ec.SECP256R1())
    pem = ec_key.public_key().public_bytes(
        Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
    ).decode()
    with pytest.raises(KeyLoadError, match="key is not an RSA public key"):
        load_rsa_public_key(pem)


def test_non_rsa_certificate_rejected():
    ec_key = ec.generate_private_key(ec.SECP256R1())
    with pytest.raises(KeyLoadError, match="certificate does not contain an RSA public key"):
        load_rsa_public_key(_self_signed(ec_key))


def test_unsupported_block_type(rsa_private):
    pem = rsa_private.public_key().public_bytes(Encoding.PEM, PublicFormat.PKCS1).decode()
    with pytest.raises(KeyLoadError, match="unsupported PEM block type: RSA PUBLIC KEY"):
        load_rsa_public_key(pem)


def test_invalid_pem_format():
    with pytest.raises(KeyLoadError, match="invalid PEM format"):
        load_rsa_public_key("-----BEGIN garbage without end")


def test_corrupt_public_key_payload():
    pem = "-----BEGIN PUBLIC KEY-----\nAAAA\n-----END PUBLIC KEY-----\n"
    with pytest.raises(KeyLoadError, match="failed to parse public key"):
        load_rsa_public_key(pem)


def test_missing_file(tmp_path):
    with pytest.raises(KeyLoadError, match="failed to read file"):
        load_rsa_public_key(str(tmp_path / "absent.pem"))