from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backend.auth import jwt_handler, passwords
from backend.core import config


def test_access_token_round_trip_embeds_user_id_and_role() -> None:
    token = jwt_handler.create_access_token(user_id=42, role='admin')

    payload = jwt_handler.decode_access_token(token)

    assert payload['sub'] == '42'
    assert payload['role'] == 'admin'
    assert payload['exp'] > payload['iat']


def test_access_token_uses_configured_lifetime() -> None:
    token = jwt_handler.create_access_token(user_id=1, role='candidate')

    payload = jwt_handler.decode_access_token(token)

    assert payload['exp'] - payload['iat'] == config.JWT_EXPIRES_MINUTES * 60


def test_decode_rejects_expired_token() -> None:
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {'sub': '1', 'role': 'candidate', 'iat': issued_at, 'exp': issued_at + timedelta(hours=1)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt.ExpiredSignatureError):
        jwt_handler.decode_access_token(token)


def test_decode_rejects_token_signed_with_another_key(monkeypatch: pytest.MonkeyPatch) -> None:
    token = jwt_handler.create_access_token(user_id=1, role='admin')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'rotated-secret')

    with pytest.raises(jwt.InvalidSignatureError):
        jwt_handler.decode_access_token(token)


def test_password_hash_verifies_only_the_original_password() -> None:
    hashed = passwords.hash_password('secret123')

    assert passwords.verify_password('secret123', hashed)
    assert not passwords.verify_password('secret124', hashed)
    assert not passwords.verify_password('secret123', '')


def test_password_hashes_are_salted() -> None:
    assert passwords.hash_password('secret123') != passwords.hash_password('secret123')
