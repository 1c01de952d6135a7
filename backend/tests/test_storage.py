"""Basic storage read tests using tmp_path."""
import pytest

from loremaker.storage.base import BaseStorage


@pytest.fixture
def storage(tmp_path):
    return BaseStorage(data_dir=str(tmp_path))


@pytest.mark.asyncio
async def test_read_yaml(storage, tmp_path):
    filepath = tmp_path / "roster.yaml"
    filepath.write_text("characters:\n  - name: Kade Rho\n", encoding="utf-8")
    result = await storage.read_yaml(filepath)
    assert result["characters"][0]["name"] == "Kade Rho"


@pytest.mark.asyncio
async def test_read_relative_path(storage, tmp_path):
    (tmp_path / "data.json").write_text('{"value": 42}', encoding="utf-8")
    result = await storage.read_json("data.json")
    assert result["value"] == 42


@pytest.mark.asyncio
async def test_read_yaml_missing_raises(storage, tmp_path):
    with pytest.raises(FileNotFoundError):
        await storage.read_yaml(tmp_path / "nonexistent.yaml")


def test_default_data_dir_holds_fallback_roster():
    storage = BaseStorage()
    assert storage.resolve("fallback_characters.yaml").exists()
