"""Configuration management with Pydantic models."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://www.internet-radio.com"


class FetcherConfig(BaseModel):
    """Configuration for page fetching."""

    timeout_ms: int = Field(default=30000, ge=1000, le=120000)
    user_agent: str = "RadioScraper/0.1 (Station Directory Crawler)"


class RateLimitConfig(BaseModel):
    """Configuration for pacing and retries."""

    delay_seconds: float = Field(default=1.0, ge=0.0, le=60.0)
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_base_delay: float = Field(default=1.0, ge=0.1, le=30.0)


class StorageConfig(BaseModel):
    """Configuration for persisted crawl state."""

    directory: Path | None = None  # None = in-memory only, no resume


class AppConfig(BaseModel):
    """Main application configuration."""

    base_url: str = DEFAULT_BASE_URL
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    verbose: bool = False

    @property
    def root_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.base_url.rstrip("/")

    @classmethod
    def from_toml(cls, path: Path) -> "AppConfig":
        """Load config from a TOML file."""
        try:
            import tomllib  # type: ignore[import-not-found]
        except ModuleNotFoundError:
            import tomli as tomllib  # type: ignore[import-not-found]
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return cls.model_validate(data)

    def to_toml(self) -> str:
        """Serialize config to TOML format."""
        data = self.model_dump(mode="json", exclude_defaults=True, exclude_none=True)
        return _dict_to_toml(data)


def _toml_value(v: object) -> str:
    """Format a Python value as a TOML literal."""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, str):
        escaped = v.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return f'"{v}"'


def _dict_to_toml(data: dict) -> str:
    """Convert a nested dict to TOML string (2 levels deep max)."""
    lines: list[str] = []
    # Scalars must precede any table header
    for k, v in data.items():
        if not isinstance(v, dict):
            lines.append(f"{k} = {_toml_value(v)}")
    for k, v in data.items():
        if isinstance(v, dict) and v:
            lines.append(f"\n[{k}]")
            for sk, sv in v.items():
                lines.append(f"{sk} = {_toml_value(sv)}")
    return "\n".join(lines) + "\n"
