"""Unit tests for CommandMetadataStore."""

import pytest

from cmdhints.domain.models import CommandMetadata
from cmdhints.metadata import CommandMetadataStore


class TestRegistry:
    def test_register_and_lookup(self, store):
        assert store.has_command("build")
        assert store.get_command("build").category == "Development"
        assert store.get_command("nope") is None
        assert len(store) == 3

    def test_all_commands_is_ordered_copy(self, store):
        commands = store.get_all_commands()
        assert list(commands) == ["build", "implement", "analyze"]

        commands.clear()
        assert len(store) == 3

    def test_reregistering_replaces(self, store):
        store.register_command(CommandMetadata(name="build", description="Replaced"))
        assert store.get_command("build").description == "Replaced"
        assert len(store) == 3

    def test_all_flags_first_definition_wins(self, store):
        flags = store.all_flags()
        names = [f.name for f in flags]
        assert names == ["think", "plan", "uc", "verbose", "no-mcp", "seq", "focus"]
        assert flags[1].description == "Show the execution plan"

    def test_find_flag_by_alias(self, store):
        assert store.find_flag("--ultracompressed").name == "uc"
        assert store.find_flag("--nope") is None

    def test_clear(self, store):
        store.clear()
        assert len(store) == 0
        assert store.get_all_commands() == {}


class TestLoading:
    @pytest.mark.asyncio
    async def test_load_commands_from_directory(self, commands_dir):
        store = CommandMetadataStore()

        result = await store.load_commands_from_directory(commands_dir)

        assert result.ok
        assert store.has_command("build")
        assert store.has_command("analyze")
        assert not store.has_command("broken")

    @pytest.mark.asyncio
    async def test_load_command_is_memoized(self, commands_dir):
        store = CommandMetadataStore()
        path = commands_dir / "build.md"

        first = await store.load_command(path)
        path.write_text("---\ndescription: Changed\n---\n", encoding="utf-8")
        second = await store.load_command(path)

        assert first.ok and second.ok
        assert second.value.description == "Framework-detecting project builder"
        assert store.get_command("build") is first.value

    @pytest.mark.asyncio
    async def test_load_command_failure_is_not_registered(self, tmp_path):
        store = CommandMetadataStore()

        result = await store.load_command(tmp_path / "missing.md")

        assert not result.ok
        assert len(store) == 0
