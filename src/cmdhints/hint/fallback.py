"""Display-text fallback chain shared by completion and hints.

Precedence for every lookup:

1. translation in the active locale
2. locale-specific field on the metadata record
3. the metadata record's default-language field
4. a hardcoded default
"""

from __future__ import annotations

from typing import Optional

from cmdhints.domain.models import CommandMetadata, FlagMetadata
from cmdhints.i18n.resolver import TranslationResolver

__all__ = [
    "NO_DESCRIPTION",
    "no_description",
    "command_description",
    "command_category",
    "command_argument_hint",
    "flag_description",
]

NO_DESCRIPTION = {
    "en": "No description available",
    "ja": "説明なし",
}


def no_description(locale: str) -> str:
    return NO_DESCRIPTION.get(locale, NO_DESCRIPTION["en"])


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def command_description(resolver: TranslationResolver, metadata: CommandMetadata) -> str:
    locale = resolver.current_locale
    translated = resolver.translate(f"commands.{metadata.name}.description")
    return _first(
        translated.value if translated.ok else None,
        metadata.description_for(locale),
        metadata.description,
    ) or no_description(locale)


def command_category(resolver: TranslationResolver, metadata: CommandMetadata) -> Optional[str]:
    translated = resolver.translate(f"commands.{metadata.name}.category")
    return translated.value if translated.ok else metadata.category


def command_argument_hint(resolver: TranslationResolver, metadata: CommandMetadata) -> str:
    locale = resolver.current_locale
    translated = resolver.translate(f"commands.{metadata.name}.arguments")
    return (
        _first(
            translated.value if translated.ok else None,
            metadata.argument_hint_for(locale),
            metadata.argument_hint,
        )
        or ""
    )


def flag_description(
    resolver: TranslationResolver,
    flag: FlagMetadata,
    default: str = "",
) -> str:
    locale = resolver.current_locale
    translated = resolver.translate(f"flags.{flag.name}.description")
    return (
        _first(
            translated.value if translated.ok else None,
            flag.description_for(locale),
            flag.description,
        )
        or default
    )
