"""Unit tests for JsonFileStore."""

import pytest

from cmdhints.infrastructure.json_store import JsonFileStore


class TestJsonFileStore:
    @pytest.mark.asyncio
    async def test_write_and_read(self, tmp_path):
        store = JsonFileStore(tmp_path / "deep" / "dir" / "data.json")
        data = {"version": "1.0.0", "entries": [{"command": "ビルド"}]}

        await store.write(data)

        assert store.exists()
        assert await store.read() == data

    @pytest.mark.asyncio
    async def test_read_missing_returns_none(self, tmp_path):
        assert await JsonFileStore(tmp_path / "nope.json").read() is None

    @pytest.mark.asyncio
    async def test_no_temp_file_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        await store.write({"a": 1})
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    @pytest.mark.asyncio
    async def test_corrupted_file_raises_value_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(ValueError):
            await JsonFileStore(path).read()

    @pytest.mark.asyncio
    async def test_non_object_raises_value_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError):
            await JsonFileStore(path).read()

    @pytest.mark.asyncio
    async def test_unserializable_data_raises_value_error(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")

        with pytest.raises(ValueError):
            await store.write({"bad": object()})

        assert not store.exists()
