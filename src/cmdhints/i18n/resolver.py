"""Translation resolver.

Holds one validated bundle per locale for the lifetime of the process and
resolves dotted keys against the active one. Bundles are loaded lazily: the
first ``initialize``/``change_language`` for a locale reads it from disk,
later switches reuse the cached copy.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from cmdhints.domain.errors import (
    ErrorCode,
    I18nError,
    LoadError,
    TranslationNotFound,
    ValidationFailure,
)
from cmdhints.domain.models import TranslationResource
from cmdhints.domain.result import Err, Ok, Result
from cmdhints.i18n.loader import TranslationLoader
from cmdhints.logger import get_logger

logger = get_logger("i18n.resolver")

DEFAULT_LOCALE = "en"


def interpolate(text: str, values: Mapping[str, object]) -> str:
    """Replace ``{{name}}`` placeholders literally; unknown ones are left as-is."""
    for name, value in values.items():
        replacement = str(value)
        pattern = re.compile(r"\{\{\s*" + re.escape(str(name)) + r"\s*\}\}")
        text = pattern.sub(lambda _match: replacement, text)
    return text


class TranslationResolver:
    """Resolves localized strings with a caller-supplied default short-circuit.

    Example:
        >>> resolver = TranslationResolver("translations")
        >>> await resolver.initialize("ja")
        >>> resolver.translate("commands.build.description").value
        'フレームワーク検出付きプロジェクトビルダー'
    """

    def __init__(
        self,
        translations_dir: Optional[str | Path] = None,
        *,
        loader: Optional[TranslationLoader] = None,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        if loader is None:
            if translations_dir is None:
                raise ValueError("Either translations_dir or loader is required")
            loader = TranslationLoader(translations_dir)
        self._loader = loader
        self._locale = default_locale
        self._bundles: dict[str, TranslationResource] = {}
        self._initialized = False

    @property
    def current_locale(self) -> str:
        return self._locale

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def loaded_locales(self) -> list[str]:
        return list(self._bundles)

    async def initialize(self, locale: str) -> Result[None, I18nError]:
        """Load ``locale`` and make it active.

        Returns:
            Ok(None) on success; Err with RESOURCE_NOT_FOUND when the locale
            has no files, SCHEMA_VALIDATION_FAILED listing every bad field, or
            INIT_FAILED for anything unexpected.
        """
        result = await self._activate(locale)
        if result.ok:
            logger.info(f"Translation resolver initialized: locale={locale}")
        return result

    async def change_language(self, locale: str) -> Result[None, I18nError]:
        """Switch the active locale, loading it on first use.

        A failed switch leaves the previous locale active.
        """
        previous = self._locale
        result = await self._activate(locale)
        if result.ok:
            logger.debug(f"Changed language: {previous} -> {locale}")
        return result

    def translate(
        self,
        key: str,
        default_value: Optional[str] = None,
        interpolation: Optional[Mapping[str, object]] = None,
    ) -> Result[str, TranslationNotFound]:
        """Resolve ``key`` (e.g. ``commands.build.description``) in the active locale.

        Args:
            key: Dot-separated path into the bundle
            default_value: Returned instead of an error when the key cannot be resolved
            interpolation: Values for ``{{name}}`` placeholders

        Returns:
            Ok with the (interpolated) string, or Err(TRANSLATION_NOT_FOUND)
        """
        bundle = self._bundles.get(self._locale) if self._initialized else None
        value = bundle.lookup(key) if bundle is not None else None

        if value is None:
            if default_value is not None:
                return Ok(default_value)
            logger.debug(f"Translation not found: key={key}, locale={self._locale}")
            return Err(TranslationNotFound(key=key, locale=self._locale))

        if interpolation:
            value = interpolate(value, interpolation)
        return Ok(value)

    def text(self, key: str, /, default: str = "", **interpolation: object) -> str:
        """Shorthand for ``translate(...)`` that always yields a string."""
        result = self.translate(key, default_value=default, interpolation=interpolation or None)
        return result.value if result.ok else default

    async def _activate(self, locale: str) -> Result[None, I18nError]:
        if locale not in self._bundles:
            try:
                loaded = await self._loader.load(locale)
            except Exception as e:
                logger.exception(f"Unexpected failure loading translations for '{locale}'")
                return Err(I18nError(type=ErrorCode.INIT_FAILED, locale=locale, message=str(e)))

            if not loaded.ok:
                return Err(self._to_i18n_error(locale, loaded.error))
            self._bundles[locale] = loaded.value

        self._locale = locale
        self._initialized = True
        return Ok(None)

    @staticmethod
    def _to_i18n_error(locale: str, error: Union[LoadError, ValidationFailure]) -> I18nError:
        if isinstance(error, ValidationFailure):
            return I18nError(
                type=ErrorCode.SCHEMA_VALIDATION_FAILED,
                locale=locale,
                message="Schema validation failed",
                errors=error.errors,
            )
        if error.type is ErrorCode.FILE_NOT_FOUND:
            logger.warning(f"No translation resource for locale '{locale}' ({error.path})")
            return I18nError(type=ErrorCode.RESOURCE_NOT_FOUND, locale=locale)
        return I18nError(type=ErrorCode.INIT_FAILED, locale=locale, message=error.message)
