"""
remover/extractor.py — usuwanie bloków danego typu z najwyższego poziomu pliku.

extract_blocks():
  - Przegląda bloki najwyższego poziomu dokładnie raz, w kolejności pliku.
  - Blok jest usuwany wtedy i tylko wtedy, gdy jego typ == kind
    (z rozróżnieniem wielkości liter, bez wzorców).
  - Bloki zagnieżdżone nie są kandydatami; komentarze nie są blokami.
  - Najpierw zbiera pasujące bloki do listy, potem je usuwa — dzięki temu
    sąsiednie bloki tego samego typu nie są pomijane.
"""

from __future__ import annotations

from hcl_syntax import Block, Document

# Typ bloku usuwanego przez narzędzie.
MOVED_BLOCK = "moved"


def matching_blocks(document: Document, kind: str) -> list[Block]:
    """Bloki najwyższego poziomu o typie kind, w kolejności pliku."""
    return [b for b in document.blocks() if b.kind == kind]


def count_blocks(document: Document, kind: str) -> int:
    return len(matching_blocks(document, kind))


def extract_blocks(document: Document, kind: str) -> tuple[Document, int]:
    """
    Usuwa z dokumentu wszystkie bloki najwyższego poziomu o typie kind.

    Modyfikuje dokument w miejscu i zwraca go razem z liczbą usuniętych
    bloków (0 → dokument nietknięty). Nie zgłasza błędów: pusty dokument
    i dokument bez pasujących bloków są poprawnym wejściem.
    """
    matches = matching_blocks(document, kind)
    for block in matches:
        document.remove_block(block)
    return document, len(matches)
