"""Unit tests for admin credential verification"""

import pytest
from pawn_calculator.infrastructure.auth.credentials import Pbkdf2CredentialVerifier, hash_password


@pytest.fixture
def verifier() -> Pbkdf2CredentialVerifier:
    return Pbkdf2CredentialVerifier("admin", hash_password("s3cret-pass", iterations=1_000))


def test_hash_format():
    """Hashes carry algorithm, iterations, salt and digest"""
    encoded = hash_password("pw", iterations=1_000, salt=b"\x00" * 16)
    algorithm, iterations, salt_hex, digest_hex = encoded.split("$")

    assert algorithm == "pbkdf2_sha256"
    assert iterations == "1000"
    assert salt_hex == "00" * 16
    assert len(digest_hex) == 64


def test_hash_is_salted():
    """Same password hashes differently each time"""
    assert hash_password("pw", iterations=1_000) != hash_password("pw", iterations=1_000)


def test_verify_accepts_correct_credentials(verifier):
    assert verifier.verify("admin", "s3cret-pass")


@pytest.mark.parametrize(
    "username, password",
    [("admin", "wrong"), ("root", "s3cret-pass"), ("", ""), ("admin", "")],
)
def test_verify_rejects_wrong_credentials(verifier, username, password):
    assert not verifier.verify(username, password)


def test_empty_hash_disables_admin():
    """No configured hash means nobody gets in"""
    assert not Pbkdf2CredentialVerifier("admin", "").verify("admin", "")


@pytest.mark.parametrize(
    "password_hash",
    [
        "plaintext",
        "md5$1000$00$00",
        "pbkdf2_sha256$many$00$00",
        "pbkdf2_sha256$1000$zz$00",
        "pbkdf2_sha256$0$00$00",
        "pbkdf2_sha256$-5$00$00",
    ],
)
def test_malformed_hash_rejects(password_hash):
    assert not Pbkdf2CredentialVerifier("admin", password_hash).verify("admin", "anything")
