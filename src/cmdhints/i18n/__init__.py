"""Localization: translation bundle loading and key resolution."""

from cmdhints.i18n.loader import TranslationLoader
from cmdhints.i18n.resolver import TranslationResolver, interpolate

__all__ = [
    "TranslationLoader",
    "TranslationResolver",
    "interpolate",
]
