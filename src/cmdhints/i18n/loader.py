"""Translation bundle loader.

A locale bundle is spread over one JSON file per namespace::

    <translations_dir>/<locale>/commands.json   {"version": "1.0.0", "commands": {...}}
    <translations_dir>/<locale>/flags.json      {"version": "1.0.0", "flags": {...}}
    <translations_dir>/<locale>/errors.json     {"version": "1.0.0", "errors": {...}}

``commands``, ``flags`` and ``errors`` are required; ``arguments``,
``flag_suggestions``, ``flag_examples``, ``conflicts`` and ``labels`` are
merged in when their file exists. The bundle version is taken from
``commands.json``.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from cmdhints.domain.errors import ErrorCode, FieldError, LoadError, ValidationFailure
from cmdhints.domain.models import OPTIONAL_SECTIONS, REQUIRED_SECTIONS, TranslationResource
from cmdhints.domain.result import Err, Ok, Result
from cmdhints.logger import get_logger

logger = get_logger("i18n.loader")

_MESSAGES = {
    "missing": "{field} is required",
    "dict_type": "{field} must be an object",
    "string_type": "{field} must be a string",
    "string_pattern_mismatch": "{field} must follow semantic versioning (x.y.z)",
}


def _field_error(error: dict[str, Any]) -> FieldError:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else "root"
    template = _MESSAGES.get(error.get("type", ""))
    if template is None:
        return FieldError(field=field, message=error.get("msg", "Invalid value"))
    return FieldError(field=field, message=template.format(field=field.capitalize()))


class TranslationLoader:
    """Reads and validates translation bundles from a directory tree."""

    def __init__(self, translations_dir: str | Path):
        self.translations_dir = Path(translations_dir)

    def translation_path(self, locale: str, namespace: str) -> Path:
        """Return ``<translations_dir>/<locale>/<namespace>.json``."""
        return self.translations_dir / locale / f"{namespace}.json"

    async def load(
        self, locale: str
    ) -> Result[TranslationResource, Union[LoadError, ValidationFailure]]:
        """Load, merge and validate the bundle for ``locale``."""
        for namespace in REQUIRED_SECTIONS:
            path = self.translation_path(locale, namespace)
            if not path.is_file():
                logger.debug(f"Translation file missing for locale '{locale}': {path}")
                return Err(LoadError(type=ErrorCode.FILE_NOT_FOUND, path=str(path)))

        try:
            documents = await asyncio.to_thread(self._read_documents, locale)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in translations for locale '{locale}': {e}")
            return Err(LoadError(type=ErrorCode.PARSE_ERROR, message=str(e)))
        except OSError as e:
            logger.error(f"Cannot read translations for locale '{locale}': {e}")
            return Err(LoadError(type=ErrorCode.PARSE_ERROR, message=str(e)))

        bundle = self._merge(documents)
        result = self.validate(bundle)
        if result.ok:
            logger.info(
                f"Loaded translations: locale={locale}, version={result.value.version}, "
                f"namespaces={sorted(documents)}"
            )
        else:
            logger.warning(f"Translations for locale '{locale}' failed validation: {result.error.fields}")
        return result

    def validate(self, data: Any) -> Result[TranslationResource, ValidationFailure]:
        """Validate a merged bundle, reporting every violated field at once."""
        if not isinstance(data, dict):
            return Err(ValidationFailure(errors=(FieldError("root", "Data must be an object"),)))

        try:
            return Ok(TranslationResource.model_validate(data))
        except ValidationError as e:
            errors = tuple(_field_error(error) for error in e.errors())
            return Err(ValidationFailure(errors=errors))

    def _read_documents(self, locale: str) -> dict[str, Any]:
        documents: dict[str, Any] = {}
        for namespace in REQUIRED_SECTIONS + OPTIONAL_SECTIONS:
            path = self.translation_path(locale, namespace)
            if not path.is_file():
                continue
            with open(path, "r", encoding="utf-8") as f:
                documents[namespace] = json.load(f)
        return documents

    @staticmethod
    def _merge(documents: dict[str, Any]) -> dict[str, Any]:
        bundle: dict[str, Any] = {}

        commands_doc = documents.get("commands")
        if isinstance(commands_doc, dict) and commands_doc.get("version") is not None:
            bundle["version"] = commands_doc["version"]

        for namespace, document in documents.items():
            section = document.get(namespace) if isinstance(document, dict) else document
            if section is not None:
                bundle[namespace] = section
        return bundle
