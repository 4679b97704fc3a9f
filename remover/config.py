"""remover/config.py — ustawienia narzędzia ze zmiennych środowiskowych."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .extractor import MOVED_BLOCK
from .processor import ProcessOptions

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class Settings:
    normalize_whitespace: bool = True    # TFMR_NORMALIZE
    dry_run:              bool = False   # TFMR_DRY_RUN
    verbose:              bool = False   # TFMR_VERBOSE

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            normalize_whitespace = _flag("TFMR_NORMALIZE", True),
            dry_run              = _flag("TFMR_DRY_RUN",   False),
            verbose              = _flag("TFMR_VERBOSE",   False),
        )

    def with_overrides(
        self,
        dry_run:      bool | None = None,
        verbose:      bool | None = None,
        no_normalize: bool | None = None,
    ) -> Settings:
        """Nakłada flagi CLI; None oznacza „bez zmian”."""
        s = self
        if dry_run:
            s = replace(s, dry_run=True)
        if verbose:
            s = replace(s, verbose=True)
        if no_normalize:
            s = replace(s, normalize_whitespace=False)
        return s

    def to_options(self) -> ProcessOptions:
        return ProcessOptions(
            kind=MOVED_BLOCK,
            dry_run=self.dry_run,
            normalize_whitespace=self.normalize_whitespace,
        )
