# -*- coding: utf-8 -*-
"""
LoreMaker Universe - 角色图鉴与对决引擎
LoreMaker Universe - Character Taxonomy & Duel Engine

Copyright © 2025-2026 LoreMaker Team
License: PolyForm Noncommercial License 1.0.0

模块说明 / Module Description:
  配置中心 - 环境变量配置（Settings）与 YAML 调优配置（config）
  Configuration - environment-driven Settings plus optional YAML tuning config.

使用示例 / Usage:
    from loremaker.config import settings, config

    settings.auto_advance_interval_ms
    config.get("library", {})
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT = BACKEND_ROOT.parent
CONFIG_PATH = PROJECT_ROOT / "config.yaml"


class Settings(BaseSettings):
    """Runtime settings, read from ``LOREMAKER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LOREMAKER_",
        env_file=".env",
        extra="ignore",
    )

    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_dir: Path = BACKEND_ROOT / "logs"

    # Character library / 角色库
    sheet_id: str = "1nbAsU-zNe4HbM0bBLlYofi1pHhneEjEIWfW22JODBeM"
    sheet_tab: Optional[str] = None
    sheets_cache_ttl_ms: int = 600_000
    sheets_timeout_s: float = 10.0
    fallback_roster: Path = Path(__file__).resolve().parent / "data" / "fallback_characters.yaml"

    # Engine / 引擎
    rng_seed: Optional[int] = None
    auto_advance_interval_ms: int = 60_000
    spotlight_limit: int = 6


def load_config(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    """
    读取 YAML 调优配置，文件缺失时返回空字典

    Load the YAML tuning config; a missing file yields an empty dict.
    """
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data if isinstance(data, dict) else {}


settings = Settings()
config = load_config()
