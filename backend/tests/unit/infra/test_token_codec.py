"""Unit tests for FlaskJWTTokenCodec (signing, verification and expiry)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from authcore.infra.jwt.flask_jwt_token_codec import FlaskJWTTokenCodec
from authcore.services._shared.ports import (
    Identity,
    InvalidSignatureError,
    SignatureExpiredError,
    TokenKind,
    TokenVerificationError,
    WrongTokenKindError,
)
from freezegun import freeze_time

ALICE = Identity(user_id=7, email="alice@example.com")
T0 = "2030-01-01 12:00:00"


@pytest.fixture()
def codec(app) -> FlaskJWTTokenCodec:
    return FlaskJWTTokenCodec()


def test_access_round_trip(codec):
    token = codec.sign_access(ALICE)
    verified = codec.verify(token, expected_kind=TokenKind.ACCESS)

    assert verified.identity == ALICE
    assert verified.kind is TokenKind.ACCESS


def test_refresh_round_trip_without_expected_kind(codec):
    verified = codec.verify(codec.sign_refresh(ALICE))

    assert verified.kind is TokenKind.REFRESH
    assert verified.identity.email == "alice@example.com"


def test_two_tokens_for_same_identity_differ(codec):
    assert codec.sign_refresh(ALICE) != codec.sign_refresh(ALICE)
    assert codec.sign_access(ALICE) != codec.sign_access(ALICE)


def test_expires_at_matches_configured_lifetimes(codec):
    with freeze_time(T0):
        now = datetime.now(UTC)
        access = codec.verify(codec.sign_access(ALICE))
        refresh = codec.verify(codec.sign_refresh(ALICE))

    assert access.expires_at == now + timedelta(minutes=15)
    assert refresh.expires_at == now + timedelta(days=7)


def test_access_token_expires_after_fifteen_minutes(codec):
    with freeze_time(T0) as frozen:
        token = codec.sign_access(ALICE)

        frozen.tick(timedelta(minutes=14, seconds=59))
        assert codec.verify(token, expected_kind=TokenKind.ACCESS).identity == ALICE

        frozen.tick(timedelta(seconds=2))
        with pytest.raises(SignatureExpiredError):
            codec.verify(token, expected_kind=TokenKind.ACCESS)


def test_refresh_token_expires_after_seven_days(codec):
    with freeze_time(T0) as frozen:
        token = codec.sign_refresh(ALICE)

        frozen.tick(timedelta(days=6, hours=23))
        codec.verify(token, expected_kind=TokenKind.REFRESH)

        frozen.tick(timedelta(hours=1, seconds=1))
        with pytest.raises(SignatureExpiredError):
            codec.verify(token, expected_kind=TokenKind.REFRESH)


def test_wrong_kind_is_rejected(codec):
    with pytest.raises(WrongTokenKindError) as exc_info:
        codec.verify(codec.sign_refresh(ALICE), expected_kind=TokenKind.ACCESS)
    assert exc_info.value.expected is TokenKind.ACCESS
    assert exc_info.value.actual == "refresh"

    with pytest.raises(WrongTokenKindError):
        codec.verify(codec.sign_access(ALICE), expected_kind=TokenKind.REFRESH)


def test_swapped_payload_breaks_signature(codec):
    header, _, signature = codec.sign_access(ALICE).split(".")
    _, payload, _ = codec.sign_access(Identity(user_id=1, email="mallory@example.com")).split(".")

    with pytest.raises(InvalidSignatureError):
        codec.verify(f"{header}.{payload}.{signature}")


def test_token_signed_with_another_secret_is_rejected(codec):
    now = datetime.now(UTC)
    forged = pyjwt.encode(
        {
            "sub": "7",
            "uid": 7,
            "email": "alice@example.com",
            "type": "access",
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(minutes=5),
            "jti": "forged",
        },
        "some-other-secret-that-is-long-enough",
        algorithm="HS256",
    )

    with pytest.raises(InvalidSignatureError):
        codec.verify(forged)


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_malformed_tokens_are_rejected(codec, garbage):
    with pytest.raises(TokenVerificationError):
        codec.verify(garbage)
