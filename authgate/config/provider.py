"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..modules.errors import ConfigurationError

DEFAULT_PUBLIC_PATHS = ["/health", "/public/**", "/api/v1/auth/**"]
CREDENTIAL_CARRIERS = ("header", "cookie")
SAME_SITE_VALUES = ("strict", "lax", "none")


@dataclass
class TokenConfig:
    """Token lifetimes and signing material."""
    access_secret: str
    refresh_secret: str
    access_ttl_seconds: int = 900
    refresh_ttl_seconds: int = 1209600
    exchange_code_ttl_seconds: int = 60
    login_success_redirect_uri: str = "http://localhost:3000/login/callback"


@dataclass
class RedisConfig:
    """Redis connection configuration."""
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    socket_timeout: float = 2.0

    @property
    def url(self) -> str:
        return f"redis://{self.host}:{self.port}/{self.db}"


@dataclass
class CookieConfig:
    """Refresh cookie attributes."""
    name: str = "refresh_token"
    path: str = "/api/v1/auth"
    same_site: str = "strict"
    secure: bool = True


@dataclass
class GatewayConfig:
    """Ingress filter and downstream forwarding configuration."""
    public_paths: List[str] = field(default_factory=lambda: list(DEFAULT_PUBLIC_PATHS))
    credential_carrier: str = "header"
    access_cookie_name: str = "access_token"
    device_cookie_name: str = "deviceId"
    downstream_url: Optional[str] = None
    forward_timeout: float = 10.0


@dataclass
class UserServiceConfig:
    """User-profile collaborator location."""
    base_url: str = "http://localhost:8081"
    internal_path: str = "/internal/v1/users"
    timeout: float = 5.0

    @property
    def users_url(self) -> str:
        return self.base_url.rstrip("/") + self.internal_path


@dataclass
class APIConfig:
    """API configuration."""
    port: int = 8080
    host: str = "0.0.0.0"
    log_level: str = "INFO"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_token_config(self) -> TokenConfig:
        """Get token configuration."""
        ...

    def get_redis_config(self) -> RedisConfig:
        """Get Redis configuration."""
        ...

    def get_cookie_config(self) -> CookieConfig:
        """Get refresh cookie configuration."""
        ...

    def get_gateway_config(self) -> GatewayConfig:
        """Get gateway filter configuration."""
        ...

    def get_user_service_config(self) -> UserServiceConfig:
        """Get user service configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


def _positive_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _required(name: str) -> str:
    value = os.getenv(name)
    if not value or not value.strip():
        raise ConfigurationError(f"{name} environment variable is required")
    return value


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_token_config(self) -> TokenConfig:
        """Get token configuration from environment variables."""
        return TokenConfig(
            access_secret=_required("AUTH_ACCESS_TOKEN_SECRET"),
            refresh_secret=_required("AUTH_REFRESH_TOKEN_SECRET"),
            access_ttl_seconds=_positive_int("AUTH_ACCESS_TOKEN_TTL_SECONDS", "900"),
            refresh_ttl_seconds=_positive_int("AUTH_REFRESH_TOKEN_TTL_SECONDS", "1209600"),
            exchange_code_ttl_seconds=_positive_int("AUTH_EXCHANGE_CODE_TTL_SECONDS", "60"),
            login_success_redirect_uri=os.getenv(
                "AUTH_LOGIN_SUCCESS_REDIRECT_URI", "http://localhost:3000/login/callback"
            ),
        )

    def get_redis_config(self) -> RedisConfig:
        """Get Redis configuration from environment variables."""
        return RedisConfig(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            password=os.getenv("REDIS_PASSWORD") or None,
            socket_timeout=float(os.getenv("REDIS_SOCKET_TIMEOUT", "2.0")),
        )

    def get_cookie_config(self) -> CookieConfig:
        """Get refresh cookie configuration from environment variables."""
        same_site = os.getenv("REFRESH_COOKIE_SAMESITE", "strict").lower()
        if same_site not in SAME_SITE_VALUES:
            raise ConfigurationError(f"REFRESH_COOKIE_SAMESITE must be one of {SAME_SITE_VALUES}")
        return CookieConfig(
            name=os.getenv("REFRESH_COOKIE_NAME", "refresh_token"),
            path=os.getenv("REFRESH_COOKIE_PATH", "/api/v1/auth"),
            same_site=same_site,
            secure=_flag("REFRESH_COOKIE_SECURE", "true"),
        )

    def get_gateway_config(self) -> GatewayConfig:
        """Get gateway filter configuration from environment variables."""
        carrier = os.getenv("GATEWAY_CREDENTIAL_CARRIER", "header").lower()
        if carrier not in CREDENTIAL_CARRIERS:
            raise ConfigurationError(
                f"GATEWAY_CREDENTIAL_CARRIER must be one of {CREDENTIAL_CARRIERS}, got {carrier!r}"
            )
        paths_env = os.getenv("GATEWAY_PUBLIC_PATHS")
        public_paths = (
            [p.strip() for p in paths_env.split(",") if p.strip()]
            if paths_env
            else list(DEFAULT_PUBLIC_PATHS)
        )
        return GatewayConfig(
            public_paths=public_paths,
            credential_carrier=carrier,
            access_cookie_name=os.getenv("GATEWAY_ACCESS_COOKIE_NAME", "access_token"),
            device_cookie_name=os.getenv("GATEWAY_DEVICE_COOKIE_NAME", "deviceId"),
            downstream_url=os.getenv("GATEWAY_DOWNSTREAM_URL") or None,
            forward_timeout=float(os.getenv("GATEWAY_FORWARD_TIMEOUT", "10.0")),
        )

    def get_user_service_config(self) -> UserServiceConfig:
        """Get user service configuration from environment variables."""
        internal_path = os.getenv("USER_SERVICE_INTERNAL_PATH", "/internal/v1/users")
        if not internal_path.startswith("/"):
            raise ConfigurationError("USER_SERVICE_INTERNAL_PATH must start with '/'")
        return UserServiceConfig(
            base_url=os.getenv("USER_SERVICE_BASE_URL", "http://localhost:8081"),
            internal_path=internal_path,
            timeout=float(os.getenv("USER_SERVICE_TIMEOUT", "5.0")),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@dataclass
class StaticConfigProvider:
    """Configuration provider backed by explicit dataclass instances."""
    token: TokenConfig
    redis: RedisConfig = field(default_factory=RedisConfig)
    cookie: CookieConfig = field(default_factory=CookieConfig)
    gateway: GatewayConfig = field(default_factory=GatewayConfig)
    user_service: UserServiceConfig = field(default_factory=UserServiceConfig)
    api: APIConfig = field(default_factory=APIConfig)

    def get_token_config(self) -> TokenConfig:
        return self.token

    def get_redis_config(self) -> RedisConfig:
        return self.redis

    def get_cookie_config(self) -> CookieConfig:
        return self.cookie

    def get_gateway_config(self) -> GatewayConfig:
        return self.gateway

    def get_user_service_config(self) -> UserServiceConfig:
        return self.user_service

    def get_api_config(self) -> APIConfig:
        return self.api
