"""
remover/batch.py — przetwarzanie listy plików i składanie statystyk.

Każdy plik jest niezależną jednostką pracy. Błąd jednego pliku jest
zapisywany w statystykach i nie przerywa przebiegu.
"""

from __future__ import annotations

import time
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable, TypeAlias

from data_model import AggregateStats, ProcessingError, ProcessingResult

from .processor import ProcessOptions, process_file

Outcome: TypeAlias = "ProcessingResult | ProcessingError"
Reporter: TypeAlias = "Callable[[Path, Outcome], None]"


def fold_outcome(stats: AggregateStats, outcome: Outcome) -> AggregateStats:
    """Dokłada wynik (albo błąd) jednego pliku do statystyk."""
    if isinstance(outcome, ProcessingError):
        return stats.record_failure(outcome.to_failure())
    return stats.absorb(outcome)


def run_batch(
    files:    Iterable[Path],
    options:  ProcessOptions,
    reporter: Reporter | None = None,
) -> AggregateStats:
    """
    Przetwarza pliki po kolei i zwraca zsumowane statystyki.

    reporter (opcjonalny) dostaje każdy plik razem z wynikiem lub błędem,
    zanim wynik zostanie dołożony do statystyk.
    """
    started = time.perf_counter()
    stats   = AggregateStats()
    for path in files:
        outcome: Outcome
        try:
            outcome = process_file(path, options)
        except ProcessingError as e:
            outcome = e
        if reporter is not None:
            reporter(path, outcome)
        stats = fold_outcome(stats, outcome)
    return replace(stats, elapsed=time.perf_counter() - started)
