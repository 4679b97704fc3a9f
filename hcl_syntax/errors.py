"""hcl_syntax/errors.py — błąd składni zgłaszany przez lekser i parser HCL."""

from __future__ import annotations


class HCLSyntaxError(Exception):
    """
    Błąd składni z pozycją w pliku.

    Tekst wyjątku ma postać diagnostyki HCL: ``plik.tf:3,5: komunikat``.
    - filename: nazwa pliku (tylko do komunikatów)
    - line:     numer linii (1-based)
    - column:   numer kolumny w znakach (1-based)
    - message:  opis błędu bez pozycji
    """

    def __init__(self, message: str, filename: str = "<input>", line: int = 1, column: int = 1) -> None:
        super().__init__(f"{filename}:{line},{column}: {message}")
        self.message  = message
        self.filename = filename
        self.line     = line
        self.column   = column
