from datetime import timedelta

import pytest
from jose import JWTError

from app.models.auth_models import PasswordValidationError
from app.services.auth_services import (
    create_access_token,
    create_user_token,
    decode_access_token,
    hash_password,
    serialize_user,
    validate_password,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("Secret123!")

    assert verify_password("Secret123!", hashed)
    assert not verify_password("secret123!", hashed)


def test_strong_password_passes():
    assert validate_password("Secret123!") is True


@pytest.mark.parametrize(
    "password, expected",
    [
        ("S3cret!", "8_characters_long"),
        ("Secretpass!", "one_digit"),
        ("secret123!", "one_uppercase"),
        ("SECRET123!", "one_lowercase"),
        ("Secret1234", "one_special"),
    ],
)
def test_weak_password_reports_each_rule(password, expected):
    with pytest.raises(PasswordValidationError) as exc_info:
        validate_password(password)
    assert expected in exc_info.value.messages


def test_user_token_decodes_to_email(test_user):
    token = create_user_token(test_user)

    assert decode_access_token(token).email == test_user.email


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "alice@example.com"}, expires_delta=timedelta(seconds=-1))

    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_without_subject_is_rejected():
    token = create_access_token({"name": "Alice"})

    with pytest.raises(JWTError):
        decode_access_token(token)


def test_serialize_user_exposes_handle_as_user_id(test_user):
    data = serialize_user(test_user)

    assert data["userId"] == "alice"
    assert "password_hash" not in data
    assert set(data["socialLinks"]) == {"instagram", "twitter", "linkedin", "github", "youtube", "tiktok", "website"}
