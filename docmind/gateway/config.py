"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the backend gateway client and the
defaults applied to uploads and questions.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _timeout_from_env() -> float | None:
    raw = os.getenv("API_TIMEOUT", "120").strip().lower()
    if raw in ("", "none"):
        return None
    return float(raw)


class GatewayConfig(BaseModel):
    """Configuration for the backend gateway.

    Attributes:
        base_url: Base URL of the RAG backend.
        timeout: Transport timeout in seconds (None disables it).
        chunk_size: Default chunk size sent with uploads.
        chunk_overlap: Default chunk overlap sent with uploads.
        top_k: Number of context chunks requested per question.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the RAG backend",
    )
    timeout: float | None = Field(
        default_factory=_timeout_from_env,
        ge=0.0,
        description="Transport timeout in seconds, None for no timeout",
    )
    chunk_size: int = Field(
        default_factory=lambda: int(os.getenv("CHUNK_SIZE", "400")),
        gt=0,
        description="Default chunk size for document uploads",
    )
    chunk_overlap: int = Field(
        default_factory=lambda: int(os.getenv("CHUNK_OVERLAP", "50")),
        gt=0,
        description="Default chunk overlap for document uploads",
    )
    top_k: int = Field(
        default_factory=lambda: int(os.getenv("TOP_K", "5")),
        ge=1,
        description="Context chunks retrieved per question",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that the base URL is an absolute http(s) URL."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("API base URL required. Set API_BASE_URL in .env")
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.

    Raises:
        ValueError: If a configured value is invalid.
    """
    return GatewayConfig()
