"""
data_model/results.py — wynik przetworzenia pliku i statystyki całego przebiegu.

ProcessingResult odpowiada jednemu plikowi; AggregateStats to wartość
składana z wyników kolejnych plików. Składanie jest przemienne i łączne,
więc kolejność przetwarzania plików nie wpływa na sumy.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .errors import FileFailure


@dataclass(slots=True)
class ProcessingResult:
    """
    Wynik przetworzenia jednego pliku.

    - path:           identyfikator pliku (tylko do komunikatów)
    - modified:       True gdy tekst wynikowy różni się od wejścia
    - blocks_removed: liczba usuniętych bloków (> 0 ⇒ modified)
    - output:         nowa treść pliku; None gdy plik nie wymaga zapisu
    """
    path:           str
    modified:       bool
    blocks_removed: int
    output:         bytes | None = None

    def __post_init__(self) -> None:
        if self.blocks_removed < 0:
            raise ValueError(f"blocks_removed < 0 dla {self.path}")
        if self.blocks_removed > 0 and not self.modified:
            raise ValueError(f"{self.path}: usunięto bloki, ale plik oznaczono jako niezmieniony")


@dataclass(frozen=True, slots=True)
class AggregateStats:
    """
    Statystyki przebiegu. Wartość niemutowalna: absorb() i + zwracają nową.

    - files_processed: pliki sparsowane i przetworzone
    - files_modified:  pliki zapisane (lub zapisane „na niby” w dry-run)
    - blocks_removed:  suma usuniętych bloków
    - files_failed:    pliki z błędem odczytu / parsowania / zapisu
    - elapsed:         czas przetwarzania w sekundach
    - failures:        szczegóły błędów w kolejności wystąpienia
    """
    files_processed: int   = 0
    files_modified:  int   = 0
    blocks_removed:  int   = 0
    files_failed:    int   = 0
    elapsed:         float = 0.0
    failures:        tuple[FileFailure, ...] = field(default=())

    def absorb(self, result: ProcessingResult) -> AggregateStats:
        return replace(
            self,
            files_processed=self.files_processed + 1,
            files_modified=self.files_modified + int(result.modified),
            blocks_removed=self.blocks_removed + result.blocks_removed,
        )

    def record_failure(self, failure: FileFailure) -> AggregateStats:
        return replace(
            self,
            files_failed=self.files_failed + 1,
            failures=self.failures + (failure,),
        )

    def __add__(self, other: AggregateStats) -> AggregateStats:
        if not isinstance(other, AggregateStats):
            return NotImplemented
        return AggregateStats(
            files_processed=self.files_processed + other.files_processed,
            files_modified=self.files_modified + other.files_modified,
            blocks_removed=self.blocks_removed + other.blocks_removed,
            files_failed=self.files_failed + other.files_failed,
            elapsed=self.elapsed + other.elapsed,
            failures=self.failures + other.failures,
        )

    def counters(self) -> tuple[int, int, int, int]:
        """Same liczniki (bez czasu i listy błędów) — do porównań."""
        return (self.files_processed, self.files_modified, self.blocks_removed, self.files_failed)
