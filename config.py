import json
import os
from pathlib import Path

from core.errors import ConfigError
from prefixed.generator import Options
from prefixed.token import VerifyTokenParams

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class GeneratorConfig:
    __slots__ = ("length", "delimiter", "include_timestamp")
    
    def __init__(self, length=16, delimiter="_", include_timestamp=True):
        self.length = length
        self.delimiter = delimiter
        self.include_timestamp = include_timestamp


class VerifyConfig:
    __slots__ = ("enabled", "length", "key_env", "key")
    
    def __init__(self, enabled=False, length=12, key_env="PREFIXED_VERIFY_KEY", key=None):
        self.enabled = enabled
        self.length = length
        self.key_env = key_env
        self.key = key

    def resolve_key(self):
        """Explicit key first, then the environment variable."""
        if self.key:
            return self.key
        if self.key_env:
            return os.environ.get(self.key_env) or None
        return None

    def to_params(self):
        if not self.enabled:
            return None
        if not isinstance(self.length, int) or self.length <= 0:
            raise ConfigError("Token length must be a positive integer", field="verify.length")
        key = self.resolve_key()
        if not key:
            raise ConfigError(
                f"Verification enabled but no key set (config or ${self.key_env})",
                field="verify.key",
            )
        return VerifyTokenParams(length=self.length, key=key)


class ServerConfig:
    __slots__ = ("host", "port")
    
    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file", "crash_prefix")
    
    def __init__(self, level="INFO", crash_file="logs/crash.log", crash_prefix="crash"):
        self.level = level
        self.crash_file = crash_file
        self.crash_prefix = crash_prefix


class Config:
    __slots__ = ("generator", "verify", "server", "logging")
    
    def __init__(self, generator=None, verify=None, server=None, logging=None):
        self.generator = generator or GeneratorConfig()
        self.verify = verify or VerifyConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            GeneratorConfig(**d.get("generator", {})),
            VerifyConfig(**d.get("verify", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )

    def id_options(self):
        """Unsigned Options for internal ids (crash records and the like)."""
        return Options(
            length=self.generator.length,
            delimiter=self.generator.delimiter,
            include_timestamp=self.generator.include_timestamp,
        )

    def to_options(self):
        """Build generator Options; raises ConfigError on a bad verify section."""
        return self.id_options().merge(include_verify_token=self.verify.to_params())


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG
    
    if not config_path.exists():
        return Config()
    
    with open(config_path) as file:
        return Config.from_dict(json.load(file))
