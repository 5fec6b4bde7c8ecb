"""Input-stage analysis for context-aware hints.

The typed line is split into a command, its ``--`` flags and positional
arguments. A trailing space moves the stage forward: after the command it
opens the flag stage, after a flag it opens the argument stage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cmdhints.domain.protocols.metadata import MetadataStore
from cmdhints.hint.fallback import command_argument_hint, command_description, flag_description
from cmdhints.hint.flags import FlagCombinationSuggestor, FlagSuggestion
from cmdhints.i18n.resolver import TranslationResolver
from cmdhints.logger import get_logger

logger = get_logger("hint.context")


class InputStage(str, Enum):
    COMMAND = "command"
    FLAGS = "flags"
    ARGUMENTS = "arguments"


class HintType(str, Enum):
    COMMAND_DESCRIPTION = "command_description"
    FLAG_SUGGESTIONS = "flag_suggestions"
    ARGUMENT_HINT = "argument_hint"


@dataclass(frozen=True, slots=True)
class CommandContext:
    command: str
    flags: tuple[str, ...] = ()
    arguments: tuple[str, ...] = ()
    stage: InputStage = InputStage.COMMAND


@dataclass(frozen=True, slots=True)
class ContextualHint:
    hint: str
    type: HintType
    suggestions: list[FlagSuggestion] = field(default_factory=list)


class CommandContextAnalyzer:
    """Works out what the user is typing and which hint fits.

    Example:
        >>> analyzer.analyze("/build --plan ").stage
        <InputStage.ARGUMENTS: 'arguments'>
    """

    def __init__(
        self,
        resolver: TranslationResolver,
        store: MetadataStore,
        suggestor: FlagCombinationSuggestor | None = None,
    ) -> None:
        self._resolver = resolver
        self._store = store
        self._suggestor = suggestor or FlagCombinationSuggestor(resolver)

    def analyze(self, text: str) -> CommandContext:
        tokens = text.split()
        trailing_space = bool(tokens) and text[-1].isspace()

        command = tokens[0].removeprefix("/") if tokens else ""
        rest = tokens[1:]
        flags = tuple(token for token in rest if token.startswith("--"))
        arguments = tuple(token for token in rest if not token.startswith("--"))

        if trailing_space:
            if flags:
                stage = InputStage.ARGUMENTS
            elif command:
                stage = InputStage.FLAGS
            else:
                stage = InputStage.COMMAND
        elif arguments:
            stage = InputStage.ARGUMENTS
        elif flags:
            stage = InputStage.FLAGS
        else:
            stage = InputStage.COMMAND

        return CommandContext(command=command, flags=flags, arguments=arguments, stage=stage)

    def contextual_hint(self, text: str) -> ContextualHint:
        """Hint for the current stage.

        Command stage yields the description, flag stage the flags still
        available (typed and conflicting ones removed), argument stage the
        command's argument synopsis.
        """
        context = self.analyze(text)
        metadata = self._store.get_command(context.command)

        if context.stage is InputStage.COMMAND:
            if metadata is not None:
                description = command_description(self._resolver, metadata)
            else:
                description = self._resolver.text(
                    f"commands.{context.command}.description", default=f"Command: {context.command}"
                )
            return ContextualHint(hint=description, type=HintType.COMMAND_DESCRIPTION)

        if context.stage is InputStage.FLAGS or text.endswith("--"):
            excluded: set[str] = set()
            for typed in context.flags:
                excluded |= self._suggestor.conflicts_with(typed)

            suggestions = []
            for flag in metadata.flags if metadata is not None else ():
                if flag.option in excluded or any(flag.matches(typed) for typed in context.flags):
                    continue
                suggestions.append(
                    FlagSuggestion(
                        flag=flag.option,
                        reason=flag.description or "flag_option",
                        description=flag_description(self._resolver, flag, default=flag.name),
                    )
                )
            logger.debug(f"{len(suggestions)} flag suggestion(s) for '{context.command}'")
            return ContextualHint(
                hint=self._resolver.text("labels.available_flags", default="Available flags:"),
                type=HintType.FLAG_SUGGESTIONS,
                suggestions=suggestions,
            )

        synopsis = command_argument_hint(self._resolver, metadata) if metadata is not None else ""
        return ContextualHint(
            hint=synopsis or self._resolver.text("labels.enter_argument", default="Enter argument"),
            type=HintType.ARGUMENT_HINT,
        )

    def dynamic_hint(self, text: str) -> str:
        """One-line summary such as ``Command: ... | Flags: ... | Arguments: ...``."""
        context = self.analyze(text)
        parts = []

        if context.command:
            metadata = self._store.get_command(context.command)
            description = (
                command_description(self._resolver, metadata)
                if metadata is not None
                else self._resolver.text(
                    f"commands.{context.command}.description", default=context.command
                )
            )
            parts.append(f"{self._label('command', 'Command')}: {description}")

        if context.flags:
            descriptions = [self._describe_flag(context.command, typed) for typed in context.flags]
            parts.append(f"{self._label('flags', 'Flags')}: {', '.join(descriptions)}")

        if context.arguments:
            parts.append(f"{self._label('arguments', 'Arguments')}: {', '.join(context.arguments)}")

        return " | ".join(parts)

    def _describe_flag(self, command_name: str, typed: str) -> str:
        bare = typed.removeprefix("--")
        metadata = self._store.get_command(command_name)
        flag = metadata.find_flag(typed) if metadata is not None else None
        if flag is not None:
            return flag_description(self._resolver, flag, default=bare)
        return self._resolver.text(f"flags.{bare}.description", default=bare)

    def _label(self, name: str, default: str) -> str:
        return self._resolver.text(f"labels.{name}", default=default)
