from .provider import ConfigProvider, EnvConfigProvider, StaticConfigProvider

__all__ = ["ConfigProvider", "EnvConfigProvider", "StaticConfigProvider"]
