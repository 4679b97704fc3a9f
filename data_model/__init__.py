"""
data_model — struktury danych narzędzia tf-moved-remover.

Użycie:
  from data_model import ProcessingResult, AggregateStats, ParseFailure, ...

Moduły:
  results — ProcessingResult, AggregateStats
  errors  — FailureKind, FileFailure, RemoverError, DiscoveryError,
            ProcessingError, ReadFailure, ParseFailure, WriteFailure

Drzewo składniowe (Document, Block) należy do pakietu hcl_syntax.
"""

from .errors import (
    FailureKind,
    FileFailure,
    RemoverError,
    DiscoveryError,
    ProcessingError,
    ReadFailure,
    ParseFailure,
    WriteFailure,
)
from .results import (
    ProcessingResult,
    AggregateStats,
)

__all__ = [
    # errors
    "FailureKind",
    "FileFailure",
    "RemoverError",
    "DiscoveryError",
    "ProcessingError",
    "ReadFailure",
    "ParseFailure",
    "WriteFailure",
    # results
    "ProcessingResult",
    "AggregateStats",
]
