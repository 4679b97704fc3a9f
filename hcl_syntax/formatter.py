"""
hcl_syntax/formatter.py — kanoniczne formatowanie tekstu HCL (jak hclwrite.Format).

Co zmieniamy:
  - Wcięcia: 2 spacje na poziom zagnieżdżenia nawiasów; linia otwierająca
    kilka nawiasów naraz wcina tylko o jeden poziom.
  - Odstępy między tokenami w linii (np. "a=1" → "a = 1", "f (x)" → "f(x)").
  - Wyrównanie '=' w kolejnych liniach z jednoliniowym przypisaniem
    oraz wyrównanie komentarzy na końcu kolejnych linii.
  - Białe znaki na końcu linii i w pustych liniach.

Czego nie ruszamy:
  - Treści literałów, heredoc i komentarzy (to pojedyncze tokeny).
  - Liczby pustych linii i znaków końca linii ("\\n" / "\\r\\n").

Wynik jest stabilny: format_source(format_source(s)) == format_source(s).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .lexer import Token, TokenKind, bracket_change, tokenize

_INDENT_WIDTH = 2

# Po tych tokenach minus jest jednoargumentowy.
_NON_OPERAND_CLOSERS = (")", "]", "}")


@dataclass(slots=True)
class _Line:
    lead:    list[Token]
    newline: Token | None
    assign:  list[Token] | None = None
    comment: list[Token] | None = None
    indent:  int = 0
    spaces:  list[int] = field(default_factory=list)   # odstęp przed każdym tokenem

    def cells(self) -> list[Token]:
        return self.lead + (self.assign or []) + (self.comment or [])


# ---------------------------------------------------------------------------
# Podział na linie i komórki
# ---------------------------------------------------------------------------

def _split_lines(tokens: list[Token]) -> list[_Line]:
    lines: list[_Line] = []
    current: list[Token] = []
    for tok in tokens:
        if tok.kind is TokenKind.WHITESPACE:
            continue
        if tok.kind is TokenKind.NEWLINE:
            lines.append(_Line(current, tok))
            current = []
        else:
            current.append(tok)
    lines.append(_Line(current, None))
    return lines


def _split_cells(line: _Line) -> None:
    """Wydziela komórkę komentarza końcowego i komórkę przypisania."""
    if len(line.lead) > 1 and line.lead[-1].kind is TokenKind.COMMENT:
        line.comment = line.lead[-1:]
        line.lead    = line.lead[:-1]

    for i, tok in enumerate(line.lead):
        if i > 0 and tok.is_punct("="):
            # Tylko gdy prawa strona jest całym wyrażeniem w tej linii.
            if sum(bracket_change(t) for t in line.lead[i:]) == 0:
                line.assign = line.lead[i:]
                line.lead   = line.lead[:i]
            break


# ---------------------------------------------------------------------------
# Wcięcia
# ---------------------------------------------------------------------------

def _assign_indents(lines: list[_Line]) -> None:
    indents: list[int] = []
    for line in lines:
        if not line.lead:
            continue
        net = sum(bracket_change(t) for t in line.lead + (line.assign or []))
        if net > 0:
            line.indent = _INDENT_WIDTH * len(indents)
            indents.append(net)
        elif net < 0:
            closed = -net
            while closed > 0 and indents:
                if closed > indents[-1]:
                    closed -= indents.pop()
                elif closed < indents[-1]:
                    indents[-1] -= closed
                    closed = 0
                else:
                    indents.pop()
                    closed = 0
            line.indent = _INDENT_WIDTH * len(indents)
        else:
            line.indent = _INDENT_WIDTH * len(indents)


# ---------------------------------------------------------------------------
# Odstępy między tokenami
# ---------------------------------------------------------------------------

def _is_unary_minus(before: Token | None) -> bool:
    if before is None:
        return True
    if before.kind is TokenKind.PUNCT:
        return before.text not in _NON_OPERAND_CLOSERS
    return before.kind is TokenKind.IDENT and before.text in ("in", "return")


def _space_after(subject: Token, before: Token | None, after: Token) -> bool:
    if after.kind is TokenKind.COMMENT:
        return True
    if subject.kind is TokenKind.IDENT and after.is_punct("("):
        return False
    if subject.is_punct(".", "::") or after.is_punct(".", "::"):
        return False
    if after.is_punct(",", "..."):
        return False
    if subject.is_punct(","):
        return True
    if after.is_punct("[") and (
        subject.kind in (TokenKind.IDENT, TokenKind.NUMBER, TokenKind.STRING)
        or bracket_change(subject) < 0
    ):
        return False
    if subject.is_punct("(", "[") or after.is_punct(")", "]"):
        return False
    if subject.is_punct("-") and _is_unary_minus(before):
        return False
    if subject.is_punct("{") or after.is_punct("}"):
        return not (subject.is_punct("{") and after.is_punct("}"))
    if subject.is_punct("!"):
        return False
    return True


def _assign_spaces(lines: list[_Line]) -> None:
    for line in lines:
        cells = line.cells()
        line.spaces = [line.indent] if cells else []
        for k in range(1, len(cells)):
            before = cells[k - 2] if k >= 2 else None
            line.spaces.append(1 if _space_after(cells[k - 1], before, cells[k]) else 0)


# ---------------------------------------------------------------------------
# Wyrównanie komórek
# ---------------------------------------------------------------------------

def _width(tok: Token) -> int:
    nl = tok.text.rfind("\n")
    return len(tok.text) if nl == -1 else len(tok.text) - nl - 1


def _columns(line: _Line, upto: int) -> int:
    cells = line.cells()
    return sum(line.spaces[k] + _width(cells[k]) for k in range(upto))


def _align(lines: list[_Line], has_cell, cell_index) -> None:
    """Wyrównuje początek komórki w każdym ciągu kolejnych linii, które ją mają."""
    chain: list[_Line] = []

    def close() -> None:
        widest = max(_columns(ln, cell_index(ln)) for ln in chain)
        for ln in chain:
            ln.spaces[cell_index(ln)] = widest - _columns(ln, cell_index(ln)) + 1
        chain.clear()

    for line in lines:
        if has_cell(line):
            chain.append(line)
        elif chain:
            close()
    if chain:
        close()


def _align_cells(lines: list[_Line]) -> None:
    # Najpierw '=', bo przesuwa on także komentarze końcowe.
    _align(
        lines,
        lambda ln: ln.assign is not None,
        lambda ln: len(ln.lead),
    )
    _align(
        lines,
        lambda ln: ln.comment is not None,
        lambda ln: len(ln.lead) + len(ln.assign or []),
    )


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def format_tokens(tokens: list[Token]) -> str:
    lines = _split_lines(tokens)
    for line in lines:
        _split_cells(line)
    _assign_indents(lines)
    _assign_spaces(lines)
    _align_cells(lines)

    out: list[str] = []
    for line in lines:
        for spaces, tok in zip(line.spaces, line.cells()):
            out.append(" " * spaces)
            out.append(tok.text)
        if line.newline is not None:
            out.append(line.newline.text)
    return "".join(out)


def format_source(src: str, filename: str = "<input>") -> str:
    """
    Zwraca kanoniczną postać tekstu HCL.

    Rzuca HCLSyntaxError tylko przy błędach leksykalnych; struktura
    nie jest walidowana (zwykle wejściem jest wynik Document.render()).
    """
    return format_tokens(tokenize(src, filename))
