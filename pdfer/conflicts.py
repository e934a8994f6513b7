"""Output conflict resolution.

Before an output target is written the :class:`ConflictResolver` checks
whether its path already exists. If it does, a decision provider chooses to
overwrite it, write to an alternate name instead, or abort the whole
operation.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set

import click

from .exceptions import AbortedByUser, OutputConflict
from .types import ConflictChoice, OutputTarget

LOGGER = logging.getLogger("pdfer.conflicts")

_PROMPT_ANSWERS = {
    "y": ConflictChoice.OVERWRITE,
    "yes": ConflictChoice.OVERWRITE,
    "overwrite": ConflictChoice.OVERWRITE,
    "r": ConflictChoice.RENAME,
    "rename": ConflictChoice.RENAME,
    "n": ConflictChoice.ABORT,
    "no": ConflictChoice.ABORT,
    "abort": ConflictChoice.ABORT,
}


class ConflictDecisionProvider(Protocol):
    """Chooses what to do with an output path that already exists."""

    def decide(self, path: Path) -> ConflictChoice:
        """Return OVERWRITE, RENAME or ABORT for *path*."""


class PromptDecisionProvider:
    """Ask on the terminal. End of input counts as abort."""

    def decide(self, path: Path) -> ConflictChoice:
        try:
            answer = click.prompt(
                f"⚠️  Output '{path}' already exists. Action? (Y=overwrite, R=rename, N=abort)",
                type=click.Choice(sorted(_PROMPT_ANSWERS), case_sensitive=False),
                show_choices=False,
                err=True,
            )
        except (click.Abort, EOFError):
            LOGGER.debug("No answer for %s, aborting", path)
            return ConflictChoice.ABORT
        return _PROMPT_ANSWERS[answer.lower()]


class FixedDecisionProvider:
    """Always make the same choice."""

    def __init__(self, choice: ConflictChoice) -> None:
        if choice is ConflictChoice.PROCEED:
            raise ValueError("A conflict cannot be resolved by proceeding")
        self.choice = choice

    def decide(self, path: Path) -> ConflictChoice:
        return self.choice


class ScriptedDecisionProvider:
    """Answer from a fixed queue of choices; abort once it runs dry."""

    def __init__(self, choices: Iterable[ConflictChoice]) -> None:
        self._choices = deque(choices)
        self.asked: List[Path] = []

    def decide(self, path: Path) -> ConflictChoice:
        self.asked.append(Path(path))
        if not self._choices:
            return ConflictChoice.ABORT
        return self._choices.popleft()


def alternate_path(path: Path, taken: Optional[Set[Path]] = None) -> Path:
    """Return the first ``<stem>_<n><suffix>`` sibling of *path* that is free."""

    taken = taken or set()
    counter = 1
    while True:
        candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
        if not candidate.exists() and candidate not in taken:
            return candidate
        counter += 1


class ConflictResolver:
    """Resolve output conflicts for the targets of one operation."""

    def __init__(self, provider: Optional[ConflictDecisionProvider] = None) -> None:
        self.provider: ConflictDecisionProvider = provider or PromptDecisionProvider()
        self._claimed: Set[Path] = set()

    def resolve(self, target: OutputTarget) -> OutputTarget:
        """Settle the conflict policy of *target* and return it.

        Raises:
            AbortedByUser: The provider chose to abort.
            OutputConflict: The path is an existing directory.
        """

        path = target.path
        if not path.exists() and path not in self._claimed:
            target.policy = ConflictChoice.PROCEED
            self._claimed.add(path)
            return target

        if path.is_dir():
            raise OutputConflict(path, f"Output path is an existing directory: {path}")

        choice = self.provider.decide(path)
        LOGGER.debug("Conflict on %s resolved as %s", path, choice.value)

        if choice is ConflictChoice.ABORT:
            raise AbortedByUser(f"Aborted: output '{path}' already exists.")
        if choice is ConflictChoice.RENAME:
            target.path = alternate_path(path, self._claimed)
            LOGGER.info("Writing %s instead of existing %s", target.path, path)
        elif choice is not ConflictChoice.OVERWRITE:
            raise OutputConflict(path, f"Unsupported conflict choice: {choice!r}")

        target.policy = choice
        self._claimed.add(target.path)
        return target


__all__ = [
    "ConflictDecisionProvider",
    "PromptDecisionProvider",
    "FixedDecisionProvider",
    "ScriptedDecisionProvider",
    "ConflictResolver",
    "alternate_path",
]
