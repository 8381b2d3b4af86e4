"""Settings for sheetmatch, read from ``SHEETMATCH_*`` environment variables."""

from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration for the store, workflows and CLI."""

    model_config = {"env_prefix": "SHEETMATCH_"}

    data_file: str = "data.xlsx"
    # most significant first; the last one is dropped in the relaxed pass
    match_fields: List[str] = Field(default_factory=lambda: ["省", "市", "区"])
    merge_field: str = "订单.*号"
    category_column: str = "快递名称"
    drop_incomplete_rows: bool = True
    pad_headers: bool = True
    log_level: str = "WARNING"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
