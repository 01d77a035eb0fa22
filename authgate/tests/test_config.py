"""
Unit tests for environment configuration and logging setup.
"""

import logging
import os
from unittest.mock import patch

import pytest

from authgate.config.provider import DEFAULT_PUBLIC_PATHS, EnvConfigProvider
from authgate.logging_config import HealthCheckFilter, get_logging_config
from authgate.modules.errors import ConfigurationError

SECRETS = {
    "AUTH_ACCESS_TOKEN_SECRET": "env-access-secret-0123456789abcdefghij",
    "AUTH_REFRESH_TOKEN_SECRET": "env-refresh-secret-0123456789abcdefghij",
}


def test_token_defaults():
    with patch.dict(os.environ, SECRETS, clear=True):
        config = EnvConfigProvider().get_token_config()

    assert config.access_ttl_seconds == 900
    assert config.refresh_ttl_seconds == 1209600
    assert config.exchange_code_ttl_seconds == 60


def test_missing_secret_is_configuration_error():
    with patch.dict(os.environ, {"AUTH_ACCESS_TOKEN_SECRET": "x" * 40}, clear=True):
        with pytest.raises(ConfigurationError):
            EnvConfigProvider().get_token_config()


@pytest.mark.parametrize("value", ["0", "-1", "ten"])
def test_invalid_ttl_is_configuration_error(value):
    env = dict(SECRETS, AUTH_REFRESH_TOKEN_TTL_SECONDS=value)
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(ConfigurationError):
            EnvConfigProvider().get_token_config()


def test_non_numeric_ttl_keeps_parse_error_as_cause():
    env = dict(SECRETS, AUTH_ACCESS_TOKEN_TTL_SECONDS="ten")
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(ConfigurationError) as exc_info:
            EnvConfigProvider().get_token_config()

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert "AUTH_ACCESS_TOKEN_TTL_SECONDS" in exc_info.value.message


def test_gateway_config_from_env():
    env = {
        "GATEWAY_PUBLIC_PATHS": "/public/**, /api/v1/search/books",
        "GATEWAY_CREDENTIAL_CARRIER": "Cookie",
        "GATEWAY_DOWNSTREAM_URL": "http://backend:8080",
        "GATEWAY_DEVICE_COOKIE_NAME": "did",
    }
    with patch.dict(os.environ, env, clear=True):
        config = EnvConfigProvider().get_gateway_config()

    assert config.public_paths == ["/public/**", "/api/v1/search/books"]
    assert config.credential_carrier == "cookie"
    assert config.downstream_url == "http://backend:8080"
    assert config.device_cookie_name == "did"


def test_gateway_defaults():
    with patch.dict(os.environ, {}, clear=True):
        config = EnvConfigProvider().get_gateway_config()

    assert config.public_paths == DEFAULT_PUBLIC_PATHS
    assert config.credential_carrier == "header"
    assert config.downstream_url is None
    assert config.device_cookie_name == "deviceId"


def test_unknown_carrier_is_configuration_error():
    with patch.dict(os.environ, {"GATEWAY_CREDENTIAL_CARRIER": "query"}, clear=True):
        with pytest.raises(ConfigurationError):
            EnvConfigProvider().get_gateway_config()


def test_cookie_and_user_service_config():
    env = {
        "REFRESH_COOKIE_SAMESITE": "Lax",
        "REFRESH_COOKIE_SECURE": "false",
        "USER_SERVICE_BASE_URL": "http://users:8081/",
    }
    with patch.dict(os.environ, env, clear=True):
        provider = EnvConfigProvider()
        cookie = provider.get_cookie_config()
        users = provider.get_user_service_config()

    assert cookie.same_site == "lax"
    assert cookie.secure is False
    assert cookie.path == "/api/v1/auth"
    assert users.users_url == "http://users:8081/internal/v1/users"


def test_relative_internal_path_is_rejected():
    with patch.dict(os.environ, {"USER_SERVICE_INTERNAL_PATH": "internal"}, clear=True):
        with pytest.raises(ConfigurationError):
            EnvConfigProvider().get_user_service_config()


def test_redis_url():
    with patch.dict(os.environ, {"REDIS_HOST": "cache", "REDIS_DB": "2"}, clear=True):
        config = EnvConfigProvider().get_redis_config()

    assert config.url == "redis://cache:6379/2"
    assert config.password is None


def test_logging_config_uses_level():
    config = get_logging_config("debug")

    assert config["loggers"]["authgate"]["level"] == "DEBUG"


def test_health_check_access_logs_are_filtered():
    health_filter = HealthCheckFilter()
    health = logging.LogRecord("uvicorn.access", logging.INFO, "", 0, '"GET /health HTTP/1.1" 200', None, None)
    other = logging.LogRecord("uvicorn.access", logging.INFO, "", 0, '"POST /api/v1/auth/login HTTP/1.1" 200', None, None)

    assert health_filter.filter(health) is False
    assert health_filter.filter(other) is True


def test_access_handler_carries_health_filter():
    config = get_logging_config()

    assert config["handlers"]["access"]["filters"] == ["health"]
    assert "filters" not in config["handlers"]["app"]
    assert config["loggers"]["uvicorn.access"]["handlers"] == ["access"]
