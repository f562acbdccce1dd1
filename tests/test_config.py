"""Settings validation tests."""

import pytest
from pydantic import ValidationError

from messagely.config import DEFAULT_JWT_SECRET, Settings


def test_development_allows_default_secret():
    s = Settings(environment="development")
    assert s.jwt_secret == DEFAULT_JWT_SECRET
    assert s.token_expire_minutes is None


def test_production_requires_real_secret():
    with pytest.raises(ValidationError):
        Settings(environment="production", jwt_secret=DEFAULT_JWT_SECRET)
    assert Settings(environment="production", jwt_secret="x" * 32).environment == "production"


@pytest.mark.parametrize("rounds", [3, 32])
def test_work_factor_bounds(rounds):
    with pytest.raises(ValidationError):
        Settings(bcrypt_work_factor=rounds)


def test_storage_backend_choices():
    assert Settings(storage_backend="memory").storage_backend == "memory"
    with pytest.raises(ValidationError):
        Settings(storage_backend="redis")
