"""Runtime configuration loaded from environment variables.

Settings come from ``TAQDIR_*`` variables (plus ``ANTHROPIC_API_KEY``) and
from ``.env`` files in the project root and ``backend/``; variables already
set in the process win over the files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from taqdir.models.rates import EstimationRates

logger = logging.getLogger(__name__)

_backend_dir = Path(__file__).resolve().parent.parent
_project_root = _backend_dir.parent

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_AI_TIMEOUT = 60.0
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)


class Settings(BaseSettings):
    """Service settings.

    Attributes:
        anthropic_api_key: Key for the AI project-study service. Empty
            disables the AI endpoints.
        model: Model name used for project-study generation.
        ai_timeout: Request timeout in seconds for the AI service.
        cors_origins: Origins allowed to call the API from a browser, given
            as a comma-separated list in ``TAQDIR_CORS_ORIGINS``.
        labor_rate: Labor share of material costs.
        contingency_rate: Contingency share of the pre-contingency subtotal.
    """

    model_config = SettingsConfigDict(
        env_prefix="TAQDIR_",
        env_file=(_project_root / ".env", _backend_dir / ".env"),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    anthropic_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ANTHROPIC_API_KEY", "anthropic_api_key"),
    )
    model: str = DEFAULT_MODEL
    ai_timeout: float = Field(default=DEFAULT_AI_TIMEOUT, gt=0)
    cors_origins: Annotated[tuple[str, ...], NoDecode] = DEFAULT_CORS_ORIGINS
    labor_rate: float = Field(default=0.30, ge=0)
    contingency_rate: float = Field(default=0.10, ge=0)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(origin.strip() for origin in v.split(",") if origin.strip())
        return v

    @property
    def ai_enabled(self) -> bool:
        return bool(self.anthropic_api_key)

    def rates(self) -> EstimationRates:
        """Build the engine rates from these settings."""
        return EstimationRates(
            labor_rate=self.labor_rate,
            contingency_rate=self.contingency_rate,
        )


def load_settings(**overrides: Any) -> Settings:
    """Read settings from the environment; keyword overrides take precedence."""
    settings = Settings(**overrides)
    if not settings.ai_enabled:
        logger.info("ANTHROPIC_API_KEY not set; AI project-study endpoints disabled")
    return settings
