"""
data_model/errors.py — taksonomia błędów przetwarzania plików.

Błędy per plik (ProcessingError) są raportowane i nie przerywają przebiegu:
  ReadFailure  — pliku nie da się otworzyć / odczytać
  ParseFailure — treść nie jest poprawną składnią HCL (plik nietknięty)
  WriteFailure — nie da się zapisać nowej treści (plik nietknięty)

DiscoveryError dotyczy całego przebiegu (np. brak katalogu głównego)
i kończy program z kodem 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FailureKind(StrEnum):
    """Rodzaj błędu pojedynczego pliku."""
    READ  = "read"
    PARSE = "parse"
    WRITE = "write"


@dataclass(frozen=True, slots=True)
class FileFailure:
    """Zapis błędu pliku w statystykach przebiegu."""
    path:    str
    kind:    FailureKind
    message: str


class RemoverError(Exception):
    """Bazowy wyjątek narzędzia."""


class DiscoveryError(RemoverError):
    """Nie można przeszukać katalogu głównego."""


class ProcessingError(RemoverError):
    kind: FailureKind

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path    = path
        self.message = message

    def to_failure(self) -> FileFailure:
        return FileFailure(self.path, self.kind, self.message)


class ReadFailure(ProcessingError):
    kind = FailureKind.READ


class ParseFailure(ProcessingError):
    kind = FailureKind.PARSE


class WriteFailure(ProcessingError):
    kind = FailureKind.WRITE
