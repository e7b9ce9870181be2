"""
Configuration for fetch_request_builder.
"""
from typing import Optional

from pydantic import BaseModel, Field


class BuilderConfig(BaseModel):
    """Request builder configuration."""

    mask_visible_chars: int = Field(default=10, ge=0)
    """Visible prefix length of credentials in debug logs. Default: 10"""

    quality_precision: int = Field(default=3, ge=1, le=3)
    """Decimal places written for Accept q-values. Default: 3

    A positive quality that rounds to 0 at this precision raises OutOfRangeError.
    """

    model_config = {"frozen": True}


DEFAULT_CONFIG = BuilderConfig()


def resolve_config(config: Optional[BuilderConfig] = None) -> BuilderConfig:
    """Return the given config, or the defaults when None."""
    return config if config is not None else DEFAULT_CONFIG


def _mask_value(val: Optional[str], visible_chars: int = 10) -> str:
    """Mask sensitive value for logging, showing the first visible_chars chars."""
    if not val:
        return "<empty>"
    if len(val) <= visible_chars:
        return "*" * len(val)
    return val[:visible_chars] + "*" * (len(val) - visible_chars)
