"""
Ingest / 数据导入

Parsing and normalisation of raw character rows into immutable records.
"""

from .normalize import (
    build_library,
    ensure_unique_slugs,
    fill_daily_powers,
    split_era_values,
    validate_library,
)
from .parsing import normalize_drive_url, parse_gviz, parse_powers, rows_from_gviz, split_list

__all__ = [
    "build_library",
    "ensure_unique_slugs",
    "fill_daily_powers",
    "split_era_values",
    "validate_library",
    "normalize_drive_url",
    "parse_gviz",
    "parse_powers",
    "rows_from_gviz",
    "split_list",
]
