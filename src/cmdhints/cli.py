"""Shell completion helper.

Usage::

    cmdhints command <prefix>
    cmdhints flag <command> [<prefix>]
    cmdhints argument <command> <prefix>
    cmdhints hint <command>
    cmdhints record <command>

Completion subcommands print one space-separated line of candidate names.
A malformed invocation prints nothing on stdout and exits with status 2;
internal failures print an empty line and exit 0 so the shell never breaks.
"""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TypeVar

import typer
from dotenv import load_dotenv

from cmdhints.completion import CompletionEngine, UsageHistory
from cmdhints.config import (
    DEFAULT_COMMANDS_DIR,
    DEFAULT_HISTORY_FILE,
    DEFAULT_TRANSLATIONS_DIR,
    HintsConfig,
)
from cmdhints.core.cache import ResultCache
from cmdhints.domain.errors import ErrorCode, SystemFailure, UserError
from cmdhints.errors import ErrorHandler
from cmdhints.hint import HintProvider
from cmdhints.i18n import TranslationResolver
from cmdhints.logger import get_logger, setup_logger
from cmdhints.metadata import CommandMetadataStore

load_dotenv()

logger = get_logger("cli")

T = TypeVar("T")

USAGE_ERROR_EXIT_CODE = 2

app = typer.Typer(
    name="cmdhints",
    help="Localized completion candidates and hints for slash commands",
    epilog="""
    Examples:
    $ cmdhints command bui
    $ CMDHINTS_LANG=en cmdhints flag build --p
    """,
    add_completion=False,
)

# Flag prefixes such as "--p" must reach the command as plain arguments
_PASSTHROUGH = {"ignore_unknown_options": True}


def load_config() -> HintsConfig:
    """Build the configuration from ``CMDHINTS_*`` environment variables."""
    return HintsConfig(
        locale=os.getenv("CMDHINTS_LANG", "ja"),
        translations_dir=Path(os.getenv("CMDHINTS_TRANSLATIONS_DIR", str(DEFAULT_TRANSLATIONS_DIR))),
        commands_dir=Path(os.getenv("CMDHINTS_COMMANDS_DIR", str(DEFAULT_COMMANDS_DIR))),
        history_file=Path(os.getenv("CMDHINTS_HISTORY_FILE", str(DEFAULT_HISTORY_FILE))),
        log_file=os.getenv("CMDHINTS_LOG_FILE") or None,
        log_level=os.getenv("CMDHINTS_LOG_LEVEL", "INFO").upper(),
    )


@dataclass
class Services:
    config: HintsConfig
    resolver: TranslationResolver
    store: CommandMetadataStore
    engine: CompletionEngine
    hints: HintProvider
    errors: ErrorHandler


async def build_services(config: HintsConfig) -> Optional[Services]:
    """Wire every component; None when no locale could be loaded."""
    resolver = TranslationResolver(config.translations_dir)
    store = CommandMetadataStore(config.metadata_cache_size, config.metadata_cache_ttl_ms)
    errors = ErrorHandler(resolver, store)

    initialized = await resolver.initialize(config.locale)
    if not initialized.ok:
        report = errors.handle_system_error(
            SystemFailure(
                type=initialized.error.type,
                locale=config.locale,
                message=initialized.error.message,
            )
        )
        if report.fallback_locale is None:
            return None
        logger.info(f"Falling back to locale '{report.fallback_locale}'")
        if not (await resolver.initialize(report.fallback_locale)).ok:
            return None

    await store.load_commands_from_directory(config.commands_dir)

    hint_cache: ResultCache[str] = ResultCache(max_size=config.hint_cache_size, ttl=config.hint_cache_ttl_ms)
    return Services(
        config=config,
        resolver=resolver,
        store=store,
        engine=CompletionEngine(store, resolver),
        hints=HintProvider(resolver, store, cache=hint_cache),
        errors=errors,
    )


def _run(action: Callable[[Services], Awaitable[T] | T]) -> Optional[T]:
    config = load_config()
    setup_logger(log_file=config.log_file, log_level=config.log_level)

    async def runner() -> Optional[T]:
        services = await build_services(config)
        if services is None:
            return None
        outcome = action(services)
        if asyncio.iscoroutine(outcome):
            outcome = await outcome
        return outcome

    try:
        return asyncio.run(runner())
    except Exception:
        logger.exception("Completion helper failed")
        return None


def _echo_names(names: Optional[list[str]]) -> None:
    typer.echo(" ".join(names or []))


@app.command("command")
def command_candidates(prefix: str = typer.Argument(..., help="Typed part of the command name")):
    """Complete a command name."""

    def complete(services: Services) -> list[str]:
        result = services.engine.complete_command(prefix)
        return [candidate.name for candidate in result.value] if result.ok else []

    _echo_names(_run(complete))


@app.command("flag", context_settings=_PASSTHROUGH)
def flag_candidates(
    command: str = typer.Argument(..., help="Command whose flags are completed"),
    prefix: str = typer.Argument("", help="Typed part of the flag, with or without --"),
):
    """Complete a flag for COMMAND."""

    def complete(services: Services) -> list[str]:
        result = services.engine.complete_flag(prefix, command)
        return [candidate.name for candidate in result.value] if result.ok else []

    _echo_names(_run(complete))


@app.command("argument", context_settings=_PASSTHROUGH)
def argument_candidates(
    command: str = typer.Argument(..., help="Command whose argument is completed"),
    prefix: str = typer.Argument(..., help="Typed part of the argument or path"),
):
    """Complete an argument value or a filesystem path."""

    def complete(services: Services) -> list[str]:
        result = services.engine.complete_argument(command, 0, prefix)
        return [candidate.name for candidate in result.value] if result.ok else []

    _echo_names(_run(complete))


@app.command("hint")
def command_hint(
    command: str = typer.Argument(..., help="Command to describe"),
    plain: bool = typer.Option(False, "--plain", help="Print without ANSI colors"),
):
    """Print the localized hint for COMMAND."""

    def describe(services: Services) -> tuple[bool, str]:
        hints = services.hints
        result = hints.generate_command_hint_plain(command) if plain else hints.generate_command_hint(command)
        if result.ok:
            return True, result.value
        report = services.errors.handle_user_error(
            UserError(type=ErrorCode.COMMAND_NOT_FOUND, command=command)
        )
        return False, services.errors.format_error_message_plain(report)

    outcome = _run(describe)
    if outcome is None:
        typer.echo("")
        return
    found, text = outcome
    if not found:
        typer.echo(text, err=True)
        raise typer.Exit(code=1)
    typer.echo(text)


@app.command("record")
def record_usage(command: str = typer.Argument(..., help="Command that was run")):
    """Record one use of COMMAND in the usage history."""

    async def record(services: Services) -> None:
        history = UsageHistory(services.config.history_file, services.config.max_history_size)
        loaded = await history.load()
        if not loaded.ok:
            logger.warning(f"History left untouched: {loaded.error.message}")
            return
        await history.record_command(command)
        await history.save()

    _run(record)


def main(argv: Optional[list[str]] = None) -> int:
    """Console-script entry point; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return USAGE_ERROR_EXIT_CODE
    try:
        app(args=args, prog_name="cmdhints")
    except SystemExit as e:
        if e.code == USAGE_ERROR_EXIT_CODE:
            logger.debug(f"Malformed invocation {args}")
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
