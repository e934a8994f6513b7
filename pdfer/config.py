"""Runtime configuration for pdfer.

Settings come from ``PDFER_*`` environment variables; command-line options
override them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .types import ConflictChoice

ON_CONFLICT_CHOICES = ("ask", "overwrite", "rename", "abort")


@dataclass(frozen=True)
class PdferConfig:
    """
    Settings for one invocation.

    Attributes:
        on_conflict: ``"ask"`` to prompt, or a fixed overwrite/rename/abort
        log_level: Level for the ``pdfer`` logger
        padding: Digits used for page numbers in split filenames
        merge_output: Default merge destination
    """
    on_conflict: str = "ask"
    log_level: int = logging.WARNING
    padding: int = 3
    merge_output: str = "merged.pdf"

    def __post_init__(self) -> None:
        if self.on_conflict not in ON_CONFLICT_CHOICES:
            raise ValueError(
                f"on_conflict must be one of {', '.join(ON_CONFLICT_CHOICES)}, got {self.on_conflict!r}"
            )
        if self.padding < 1:
            raise ValueError(f"padding must be >= 1, got {self.padding}")

    @property
    def fixed_choice(self) -> Optional[ConflictChoice]:
        """The non-interactive conflict choice, or ``None`` when prompting."""
        if self.on_conflict == "ask":
            return None
        return ConflictChoice(self.on_conflict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PdferConfig":
        env = os.environ if environ is None else environ
        values = {}
        if env.get("PDFER_ON_CONFLICT"):
            values["on_conflict"] = env["PDFER_ON_CONFLICT"].strip().lower()
        if env.get("PDFER_LOG_LEVEL"):
            values["log_level"] = parse_log_level(env["PDFER_LOG_LEVEL"])
        if env.get("PDFER_PADDING"):
            values["padding"] = int(env["PDFER_PADDING"])
        return cls(**values)

    def override(self, **changes) -> "PdferConfig":
        """Return a copy with every non-``None`` value in *changes* applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def parse_log_level(value: str) -> int:
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


__all__ = ["PdferConfig", "ON_CONFLICT_CHOICES", "parse_log_level"]
