"""
Base storage: async file reads for bundled data.
"""

import json
from pathlib import Path
from typing import Any

import aiofiles
import yaml


class BaseStorage:
    """Async read helpers shared by file-backed stores."""

    encoding = "utf-8"

    def __init__(self, data_dir: str | Path | None = None):
        self.data_dir = Path(data_dir) if data_dir else Path(__file__).resolve().parent.parent / "data"

    def resolve(self, path: str | Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.data_dir / path

    async def read_text(self, path: str | Path) -> str:
        file_path = self.resolve(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        async with aiofiles.open(file_path, "r", encoding=self.encoding) as f:
            return await f.read()

    async def read_yaml(self, path: str | Path) -> Any:
        raw = await self.read_text(path)
        return yaml.safe_load(raw)

    async def read_json(self, path: str | Path) -> Any:
        raw = await self.read_text(path)
        return json.loads(raw)
