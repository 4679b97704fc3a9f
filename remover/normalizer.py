"""
remover/normalizer.py — sprzątanie pustych linii po usunięciu bloków.

normalize():
  - Linia pusta = zero znaków albo wyłącznie spacje / tabulatory.
  - Każdy maksymalny ciąg >= 3 pustych linii zastępowany jest jedną pustą
    linią (pierwszą z ciągu, bez zmian, razem z jej znakiem końca linii).
  - Ciągi 1 i 2 pustych linii zostają bez zmian.
  - Linie niepuste i styl końców linii ("\\n" / "\\r\\n") przechodzą bez zmian.
  - Funkcja jest idempotentna.
"""

from __future__ import annotations

import re

# Ciąg co najmniej trzech pustych linii zaczynający się na początku linii.
# Grupa 1 to pierwsza linia ciągu; ona zostaje.
_BLANK_RUN_RE = re.compile(r"^([ \t]*\r?\n)(?:[ \t]*\r?\n){2,}", re.MULTILINE)


def normalize(text: str) -> str:
    """Zwija ciągi >= 3 pustych linii do jednej pustej linii."""
    return _BLANK_RUN_RE.sub(r"\1", text)
