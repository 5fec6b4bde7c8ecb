"""Shared fixtures: translation bundles, command files and wired components."""

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from cmdhints.domain.models import CommandMetadata, FlagMetadata
from cmdhints.i18n import TranslationResolver
from cmdhints.metadata import CommandMetadataStore

EN_BUNDLE: dict[str, Any] = {
    "commands": {
        "build": {
            "description": "Framework-detecting project builder",
            "category": "Development",
            "arguments": "[target] [--flags]",
        },
        "analyze": {"description": "Code quality and security analysis"},
    },
    "flags": {
        "plan": {"description": "Show the execution plan", "example": "/build --plan"},
        "think": {"description": "Multi-file analysis"},
        "uc": {"description": "Ultra-compressed output"},
    },
    "errors": {
        "COMMAND_NOT_FOUND": 'Command "{{command}}" not found',
        "FLAG_NOT_FOUND": 'Flag "{{flag}}" is not available',
        "RESOURCE_NOT_FOUND": "Resource not found for locale: {{locale}}",
    },
    "arguments": {
        "production": {"description": "Production environment"},
        "staging": {"description": "Staging environment"},
    },
    "flag_suggestions": {"complex_analysis": "Structured reasoning for complex analysis"},
    "flag_examples": {"think_seq": "/analyze src --think --seq"},
    "conflicts": {"uc_with_verbose": "--uc and --verbose work against each other"},
    "labels": {
        "error": "Error",
        "suggestions": "Suggestions",
        "alias": "alias",
        "example": "Example",
        "available_flags": "Available flags:",
        "directory": "Directory",
        "file": "File",
    },
}

JA_BUNDLE: dict[str, Any] = {
    "commands": {
        "build": {
            "description": "フレームワーク検出付きプロジェクトビルダー",
            "category": "開発",
        },
    },
    "flags": {
        "plan": {"description": "実行前に計画を表示"},
    },
    "errors": {
        "COMMAND_NOT_FOUND": "コマンド \"{{command}}\" が見つかりません",
    },
    "arguments": {
        "production": {"description": "本番環境"},
    },
    "labels": {
        "error": "エラー",
        "suggestions": "候補",
        "command": "コマンド",
        "flags": "フラグ",
        "arguments": "引数",
    },
}


def write_bundle(root: Path, locale: str, bundle: dict[str, Any], version: str = "1.0.0") -> Path:
    """Write one JSON file per section under ``root/locale``."""
    locale_dir = root / locale
    locale_dir.mkdir(parents=True, exist_ok=True)
    for namespace, section in bundle.items():
        document = {"version": version, namespace: section}
        (locale_dir / f"{namespace}.json").write_text(
            json.dumps(document, ensure_ascii=False), encoding="utf-8"
        )
    return locale_dir


def make_store() -> CommandMetadataStore:
    store = CommandMetadataStore()
    store.register_command(
        CommandMetadata(
            name="build",
            description="Framework-detecting project builder",
            localized_descriptions={"ja": "ビルダー（メタデータ）"},
            category="Development",
            argument_hint="[target]",
            flags=[
                FlagMetadata(name="think", description="Multi-file analysis"),
                FlagMetadata(name="plan", description="Show the execution plan"),
                FlagMetadata(name="uc", alias="ultracompressed", description="Token-efficient output"),
                FlagMetadata(name="verbose", description="Detailed output"),
                FlagMetadata(name="no-mcp", description="Disable MCP servers"),
                FlagMetadata(name="seq"),
            ],
        )
    )
    store.register_command(
        CommandMetadata(
            name="implement",
            description="Feature and code implementation",
            localized_descriptions={"ja": "機能とコードの実装"},
            category="Development",
            flags=[FlagMetadata(name="plan", description="Plan the implementation first")],
        )
    )
    store.register_command(
        CommandMetadata(
            name="analyze",
            description="Code quality and security analysis",
            category="Analysis",
            flags=[
                FlagMetadata(name="think", description="Analysis depth"),
                FlagMetadata(name="focus"),
            ],
        )
    )
    return store


def make_resolver(translations_dir: Path, locale: str = "en") -> TranslationResolver:
    resolver = TranslationResolver(translations_dir)
    result = asyncio.run(resolver.initialize(locale))
    assert result.ok, result
    return resolver


@pytest.fixture
def translations_dir(tmp_path):
    """Translation tree with complete ``en`` and ``ja`` bundles."""
    root = tmp_path / "translations"
    write_bundle(root, "en", EN_BUNDLE)
    write_bundle(root, "ja", JA_BUNDLE)
    return root


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def resolver_en(translations_dir):
    return make_resolver(translations_dir, "en")


@pytest.fixture
def resolver_ja(translations_dir):
    return make_resolver(translations_dir, "ja")


@pytest.fixture
def commands_dir(tmp_path):
    """Directory of Markdown command definitions with YAML front matter."""
    root = tmp_path / "commands"
    (root / "nested").mkdir(parents=True)
    (root / "build.md").write_text(
        "---\n"
        "description: Framework-detecting project builder\n"
        "description-ja: フレームワーク検出付きプロジェクトビルダー\n"
        "category: Development\n"
        'argument-hint: "[target] [--flags]"\n'
        'argument-hint-ja: "[ターゲット]"\n'
        "allowed-tools: [Read, Bash]\n"
        "flags:\n"
        "  - plan\n"
        "  - {name: uc, alias: ultracompressed, description: Token-efficient output}\n"
        "---\n"
        "# /build\n",
        encoding="utf-8",
    )
    (root / "nested" / "analyze.md").write_text(
        "---\ndescription: Code quality analysis\ncategory: Analysis\n---\n# /analyze\n",
        encoding="utf-8",
    )
    (root / "broken.md").write_text("---\ndescription: [unclosed\n---\n", encoding="utf-8")
    (root / "notes.txt").write_text("not a command", encoding="utf-8")
    return root
