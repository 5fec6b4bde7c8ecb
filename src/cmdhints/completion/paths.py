"""Filesystem path completion for arguments.

Triggered by inputs beginning with ``./``, ``../``, ``/``, ``~/`` or ``@``.
Completed values keep the style the user typed: ``~/`` stays unexpanded,
relative prefixes are preserved and ``@`` notation is re-applied.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from cmdhints.core.scoring import ScoringEngine
from cmdhints.domain.models import CandidateKind, CompletionCandidate
from cmdhints.logger import get_logger

logger = get_logger("completion.paths")

PATH_PREFIXES = ("./", "../", "/", "~/", "@")
AT_NOTATION = "@"


def is_path_input(text: str) -> bool:
    return text.startswith(PATH_PREFIXES)


class PathCompleter:
    """Lists the directory named by the input and matches its last component."""

    def __init__(
        self,
        cwd: Optional[str | Path] = None,
        home: Optional[str | Path] = None,
        scorer: Optional[ScoringEngine] = None,
    ) -> None:
        self._cwd = Path(cwd) if cwd is not None else None
        self._home = Path(home) if home is not None else None
        self._scorer = scorer or ScoringEngine()

    @property
    def cwd(self) -> Path:
        return self._cwd or Path.cwd()

    @property
    def home(self) -> Path:
        return self._home or Path.home()

    def complete(self, text: str) -> list[CompletionCandidate]:
        """Return unranked candidates; filesystem errors yield an empty list."""
        at_notation = text.startswith(AT_NOTATION)
        path_text = text[len(AT_NOTATION):] if at_notation else text

        slash = path_text.rfind("/")
        dir_part = path_text[: slash + 1]
        leaf = path_text[slash + 1:]
        directory = self._resolve(dir_part)

        try:
            candidates = self._list(directory, dir_part, leaf, at_notation)
        except OSError as e:
            logger.debug(f"Path completion skipped for {directory}: {e}")
            return []

        logger.debug(f"Path completion: input={text!r}, directory={directory}, matches={len(candidates)}")
        return candidates

    def _resolve(self, dir_part: str) -> Path:
        if not dir_part:
            return self.cwd
        if dir_part.startswith("~/"):
            return self.home / dir_part[2:]
        path = Path(dir_part)
        if path.is_absolute():
            return path
        return self.cwd / path

    def _list(
        self,
        directory: Path,
        dir_part: str,
        leaf: str,
        at_notation: bool,
    ) -> list[CompletionCandidate]:
        needle = leaf.lower()
        show_hidden = leaf.startswith(".")
        candidates: list[CompletionCandidate] = []

        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda item: item.name):
                if entry.name.startswith(".") and not show_hidden:
                    continue
                if not entry.name.lower().startswith(needle):
                    continue

                is_dir = entry.is_dir()
                value = f"{dir_part}{entry.name}{'/' if is_dir else ''}"
                if at_notation:
                    value = AT_NOTATION + value

                candidates.append(
                    CompletionCandidate(
                        name=value,
                        score=self._scorer.score(entry.name.lower(), needle),
                        kind=CandidateKind.DIRECTORY if is_dir else CandidateKind.FILE,
                    )
                )
        return candidates
