"""Configuration for cmdhints components."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

PACKAGE_DIR = Path(__file__).parent

DEFAULT_TRANSLATIONS_DIR = PACKAGE_DIR / "translations"
DEFAULT_COMMANDS_DIR = PACKAGE_DIR / "commands"
DEFAULT_HISTORY_FILE = Path.home() / ".cmdhints" / "history.json"


@dataclass
class HintsConfig:
    """Explicit configuration handed to every component constructor.

    Only the CLI entry point builds one from the environment; everything else
    receives it (or the individual values) as arguments.
    """

    # Localization
    locale: str = "ja"
    translations_dir: Path = DEFAULT_TRANSLATIONS_DIR

    # Command metadata
    commands_dir: Path = DEFAULT_COMMANDS_DIR
    metadata_cache_size: int = 100
    metadata_cache_ttl_ms: int = 3_600_000  # 1 hour

    # Rendered hint cache
    hint_cache_size: int = 200
    hint_cache_ttl_ms: int = 300_000  # 5 minutes

    # Usage history
    history_file: Path = DEFAULT_HISTORY_FILE
    max_history_size: int = 1000

    # Logging
    log_file: Optional[str] = None
    log_level: str = "INFO"
