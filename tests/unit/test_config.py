"""Settings validation tests (required values and the development bypass gate)."""

import pytest
from pydantic import ValidationError

from pindown.core.config import Settings

BASE = {
    "firebase_database_url": "http://127.0.0.1:9000/?ns=test",
    "firebase_project_id": "test",
    "firebase_emulator": True,
    "api_key_salt": "salt",
    "environment": "test",
}


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**BASE, **overrides})


def test_valid_emulator_settings() -> None:
    s = _settings()
    assert s.firebase_emulator is True
    assert s.store_max_cas_retries == 5
    assert not s.is_production


def test_bypass_refused_in_production() -> None:
    with pytest.raises(ValidationError, match="DEV_AUTH_BYPASS"):
        _settings(environment="production", dev_auth_bypass=True)


def test_bypass_allowed_in_development() -> None:
    assert _settings(environment="development", dev_auth_bypass=True).dev_auth_bypass


def test_database_url_required() -> None:
    with pytest.raises(ValidationError, match="FIREBASE_DATABASE_URL"):
        _settings(firebase_database_url="")


def test_salt_required() -> None:
    with pytest.raises(ValidationError, match="API_KEY_SALT"):
        _settings(api_key_salt="")


def test_credentials_required_outside_emulator() -> None:
    with pytest.raises(ValidationError, match="FIREBASE_SERVICE_ACCOUNT"):
        _settings(firebase_emulator=False)


def test_service_account_path_satisfies_credentials() -> None:
    s = _settings(firebase_emulator=False, firebase_service_account_path="/tmp/sa.json")
    assert s.firebase_service_account_path == "/tmp/sa.json"


def test_unknown_environment_rejected() -> None:
    with pytest.raises(ValidationError, match="environment"):
        _settings(environment="qa")


def test_cas_retries_must_be_positive() -> None:
    with pytest.raises(ValidationError, match="STORE_MAX_CAS_RETRIES"):
        _settings(store_max_cas_retries=0)
