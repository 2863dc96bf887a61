"""
Unit tests for bearer-token authentication.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest
from jose import jwt

from clinic_site.api.auth import (
    ADMIN_AND_ABOVE,
    Principal,
    create_access_token,
    decode_access_token,
    require_roles,
)
from clinic_site.api.error_handlers import ForbiddenError, UnauthorizedError
from tests.api.support import build_test_config


def test_token_round_trip_carries_claims() -> None:
    config = build_test_config()
    token = create_access_token(user_id=7, role="pr", email="pr@example.com", config=config)

    principal = decode_access_token(token, config=config)

    assert principal == Principal(user_id=7, role="pr", email="pr@example.com")


def test_expired_token_is_rejected() -> None:
    config = build_test_config()
    token = create_access_token(user_id=7, role="pr", config=config, expires_minutes=-1)

    with pytest.raises(UnauthorizedError, match="Invalid or expired token."):
        decode_access_token(token, config=config)


def test_token_without_role_is_rejected() -> None:
    config = build_test_config()
    token = jwt.encode({"sub": "7"}, config.jwt_secret_key, algorithm=config.jwt_algorithm)

    with pytest.raises(UnauthorizedError, match="Invalid token payload."):
        decode_access_token(token, config=config)


def test_require_roles_allows_admins_only() -> None:
    checker = require_roles(*ADMIN_AND_ABOVE)

    assert checker(Principal(user_id=1, role="super_admin")).user_id == 1
    with pytest.raises(ForbiddenError):
        checker(Principal(user_id=2, role="doctor"))
