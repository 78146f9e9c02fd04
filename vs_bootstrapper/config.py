"""Configuration management for the bootstrapper."""

from pathlib import Path
from typing import Iterable, Literal, Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class KeyPair(NamedTuple):
    """A property key together with the deprecated key it replaces."""

    preferred: str
    legacy: str | None = None


# Property keys read from the host configuration
SOLUTION = KeyPair("sonar.visualstudio.solution", "sonar.dotnet.visualstudio.solution.file")
SKIP = KeyPair("sonar.visualstudio.skip")
ENABLE = KeyPair("sonar.visualstudio.enable")
OUTPUT_PATH = KeyPair("sonar.visualstudio.outputPath", "sonar.dotnet.assemblies")
BUILD_CONFIGURATION = KeyPair("sonar.dotnet.buildConfiguration")
BUILD_PLATFORM = KeyPair("sonar.dotnet.buildPlatform")
TEST_PROJECT_PATTERN = KeyPair("sonar.visualstudio.testProjectPattern")
SKIPPED_PROJECTS = KeyPair("sonar.visualstudio.skippedProjects")
PROJECT_KEY_STRATEGY = KeyPair("sonar.visualstudio.projectKeyStrategy")
MODULES = KeyPair("sonar.modules")

KNOWN_KEYS: tuple[KeyPair, ...] = (
    SOLUTION,
    SKIP,
    ENABLE,
    OUTPUT_PATH,
    BUILD_CONFIGURATION,
    BUILD_PLATFORM,
    TEST_PROJECT_PATTERN,
    SKIPPED_PROJECTS,
    PROJECT_KEY_STRATEGY,
    MODULES,
)

_KNOWN_KEY_NAMES = frozenset(
    name for pair in KNOWN_KEYS for name in pair if name is not None
)

BOOTSTRAPPER_KEY_PREFIX = "sonar.visualstudio."


class AnalysisProperties(BaseModel):
    """
    Read-only key/value view over the host analysis properties.

    Passed explicitly to every component instead of being looked up globally.
    """

    model_config = ConfigDict(frozen=True)

    values: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object] | None = None) -> "AnalysisProperties":
        """Build properties from any mapping, stringifying values."""
        mapping = mapping or {}
        return cls(values={str(k): _to_string(v) for k, v in mapping.items()})

    @classmethod
    def from_pairs(cls, pairs: Iterable[str]) -> "AnalysisProperties":
        """
        Build properties from ``key=value`` strings.

        Args:
            pairs: Strings such as ``sonar.visualstudio.skip=true``

        Raises:
            ValueError: If an item has no ``=`` separator
        """
        values: dict[str, str] = {}
        for pair in pairs:
            key, sep, value = pair.partition("=")
            if not sep or not key.strip():
                raise ValueError(f"Expected key=value, got: {pair!r}")
            values[key.strip()] = value
        return cls(values=values)

    def has_key(self, key: str | KeyPair) -> bool:
        """Whether the key (or its legacy alias) is set."""
        if isinstance(key, KeyPair):
            return self.lookup(key) is not None
        return key in self.values

    def get_string(self, key: str) -> str | None:
        return self.values.get(key)

    def get_bool(self, key: str | KeyPair, default: bool = False) -> bool:
        value = self.lookup(key) if isinstance(key, KeyPair) else self.get_string(key)
        if value is None or not value.strip():
            return default
        return value.strip().lower() == "true"

    def lookup(self, pair: KeyPair) -> str | None:
        """Resolve a key, falling back to its deprecated name."""
        value = self.values.get(pair.preferred)
        if value is None and pair.legacy is not None:
            value = self.values.get(pair.legacy)
        return value

    def unknown_keys(self, prefix: str = BOOTSTRAPPER_KEY_PREFIX) -> list[str]:
        """Keys under ``prefix`` that no component reads, usually typos."""
        return sorted(
            key for key in self.values
            if key.startswith(prefix) and key not in _KNOWN_KEY_NAMES
        )

    def with_prefix(self, prefix: str) -> dict[str, str]:
        """Return the properties starting with ``prefix``, prefix stripped."""
        return {
            key[len(prefix):]: value
            for key, value in self.values.items()
            if key.startswith(prefix)
        }


def _to_string(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path (None for console only)",
    )
    rich_console: bool = Field(
        default=True,
        description="Use rich console for prettier output",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables and .env file."""
        return cls(logging=LoggingSettings())


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure_settings(settings: Settings) -> None:
    """Override the global settings instance."""
    global _settings
    _settings = settings
