"""Completion engine for commands, flags and arguments.

Each request is served by one of three paths that share the scoring and
ranking rules from :mod:`cmdhints.core.scoring`:

- command names from the metadata store
- flags of one command, or of every command when none is given
- argument values, either filesystem paths or predefined registry values
"""

from __future__ import annotations

from typing import Optional, Union

from cmdhints.completion.paths import PathCompleter, is_path_input
from cmdhints.completion.registry import ArgumentRegistry
from cmdhints.core.scoring import ScoringEngine
from cmdhints.domain.errors import CompletionError, ErrorCode
from cmdhints.domain.models import CandidateKind, CompletionCandidate, union_flags
from cmdhints.domain.protocols.metadata import MetadataStore
from cmdhints.domain.result import Err, Ok, Result
from cmdhints.hint.fallback import command_category, command_description, flag_description
from cmdhints.i18n.resolver import TranslationResolver
from cmdhints.logger import get_logger

logger = get_logger("completion.engine")

CompletionResult = Result[list[CompletionCandidate], CompletionError]

_PATH_LABELS = {
    CandidateKind.FILE: "File",
    CandidateKind.DIRECTORY: "Directory",
}


class CompletionEngine:
    """Produces ranked candidates for whatever the user is typing.

    Example:
        >>> engine = CompletionEngine(store, resolver)
        >>> [c.name for c in engine.complete_command("bui").value]
        ['build']
    """

    def __init__(
        self,
        metadata_store: MetadataStore,
        resolver: TranslationResolver,
        *,
        scorer: Optional[ScoringEngine] = None,
        argument_registry: Optional[ArgumentRegistry] = None,
        path_completer: Optional[PathCompleter] = None,
    ) -> None:
        self._store = metadata_store
        self._resolver = resolver
        self._scorer = scorer or ScoringEngine()
        self._registry = argument_registry or ArgumentRegistry()
        self._paths = path_completer or PathCompleter(scorer=self._scorer)

    def complete_command(self, prefix: str) -> CompletionResult:
        """Complete a command name; matching ignores case."""
        normalized = prefix.lower()
        candidates: list[CompletionCandidate] = []

        for name, metadata in self._store.get_all_commands().items():
            lowered = name.lower()
            if not lowered.startswith(normalized):
                continue
            candidates.append(
                CompletionCandidate(
                    name=name,
                    description=command_description(self._resolver, metadata),
                    score=self._scorer.score(lowered, normalized),
                    category=command_category(self._resolver, metadata),
                    kind=CandidateKind.COMMAND,
                )
            )

        logger.debug(f"Command completion: prefix={prefix!r}, matches={len(candidates)}")
        return Ok(self._scorer.rank(candidates))

    def complete_flag(self, prefix: str, command_name: Optional[str] = None) -> CompletionResult:
        """Complete a flag, matching on name or alias.

        Args:
            prefix: What the user typed, with or without the leading ``--``
            command_name: Restrict to this command's flags; None means all flags

        Returns:
            Ok with ranked ``--name`` candidates, or Err(INVALID_COMMAND)
        """
        if command_name is not None:
            metadata = self._store.get_command(command_name)
            if metadata is None:
                logger.debug(f"Flag completion for unknown command '{command_name}'")
                return Err(CompletionError(type=ErrorCode.INVALID_COMMAND, command=command_name))
            flags = list(metadata.flags)
        else:
            flags = union_flags(self._store.get_all_commands().values())

        normalized = prefix.removeprefix("--").lower()
        candidates: list[CompletionCandidate] = []

        for flag in flags:
            name = flag.name.lower()
            alias = flag.alias.lower() if flag.alias else None
            if not (name.startswith(normalized) or (alias and alias.startswith(normalized))):
                continue
            candidates.append(
                CompletionCandidate(
                    name=flag.option,
                    description=flag_description(self._resolver, flag),
                    score=self._scorer.score_flag(name, alias, normalized),
                    alias=flag.alias,
                    kind=CandidateKind.FLAG,
                )
            )

        logger.debug(
            f"Flag completion: prefix={prefix!r}, command={command_name}, matches={len(candidates)}"
        )
        return Ok(self._scorer.rank(candidates))

    def complete_argument(
        self,
        command_name: str,
        argument: Union[str, int, None],
        prefix: str,
    ) -> CompletionResult:
        """Complete an argument value for ``command_name``.

        Path-like input goes to the filesystem; anything else is matched
        against the predefined values registered for ``argument``.
        """
        if not self._store.has_command(command_name):
            logger.debug(f"Argument completion for unknown command '{command_name}'")
            return Err(CompletionError(type=ErrorCode.INVALID_COMMAND, command=command_name))

        if is_path_input(prefix):
            candidates = self._paths.complete(prefix)
            for candidate in candidates:
                candidate.description = self._resolver.text(
                    f"labels.{candidate.kind.value}", default=_PATH_LABELS[candidate.kind]
                )
        else:
            candidates = self._registry_candidates(argument, prefix)

        logger.debug(
            f"Argument completion: command={command_name}, prefix={prefix!r}, matches={len(candidates)}"
        )
        return Ok(self._scorer.rank(candidates))

    def _registry_candidates(
        self, argument: Union[str, int, None], prefix: str
    ) -> list[CompletionCandidate]:
        normalized = prefix.lower()
        candidates = []
        for item in self._registry.values_for(argument):
            lowered = item.value.lower()
            if not lowered.startswith(normalized):
                continue
            candidates.append(
                CompletionCandidate(
                    name=item.value,
                    description=self._resolver.text(
                        f"arguments.{item.value}.description", default=item.description
                    ),
                    score=self._scorer.score(lowered, normalized),
                    category=item.category,
                    kind=CandidateKind.ARGUMENT,
                )
            )
        return candidates
