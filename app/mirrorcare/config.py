"""Runtime settings for the MirrorCare clinical analysis service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_TIMEOUT_MS = 20000


def _demo_mode(value: str | None) -> bool:
    # Demo mode stays on unless explicitly switched off.
    if value is None:
        return True
    return value.strip().lower() not in {"0", "false", "no", "off"}


def _as_int(value: str | None, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _as_list(value: str | None, *, default: list[str]) -> list[str]:
    if not value:
        return list(default)
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item] or list(default)


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class ProviderConfig:
    """Explicit provider-router configuration passed in at construction."""

    demo_mode: bool = True
    endpoint: str = ""
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_sec(self) -> float:
        return max(self.timeout_ms, 0) / 1000.0

    @property
    def has_endpoint(self) -> bool:
        return bool(self.endpoint and self.endpoint.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("MIRRORCARE_APP_NAME", "mirrorcare-api"))

    demo_mode: bool = field(default_factory=lambda: _demo_mode(os.getenv("MEDGEMMA_DEMO_MODE")))
    medgemma_endpoint: str = field(
        default_factory=lambda: _first_env("MEDGEMMA_ENDPOINT", "MEDGEMMA_URL") or ""
    )
    medgemma_timeout_ms: int = field(
        default_factory=lambda: _as_int(os.getenv("MEDGEMMA_TIMEOUT_MS"), default=DEFAULT_TIMEOUT_MS)
    )

    cors_origins: list[str] = field(
        default_factory=lambda: _as_list(os.getenv("MIRRORCARE_CORS_ORIGINS"), default=["*"])
    )

    def provider_config(self) -> ProviderConfig:
        return ProviderConfig(
            demo_mode=self.demo_mode,
            endpoint=self.medgemma_endpoint,
            timeout_ms=self.medgemma_timeout_ms,
        )


def get_settings() -> Settings:
    return Settings()
