"""
hcl_syntax/lexer.py — bezstratny lekser natywnej składni HCL (pliki .tf).

Każdy znak wejścia trafia do dokładnie jednego tokenu, więc zawsze
"".join(t.text for t in tokenize(src)) == src. Na tym opiera się
renderowanie nietkniętych węzłów drzewa bajt w bajt.

Typy tokenów:
  NEWLINE     — "\\n" lub "\\r\\n"
  WHITESPACE  — spacje, tabulatory (i samotne "\\r")
  COMMENT     — "# …" i "// …" (bez znaku końca linii) albo "/* … */"
  IDENT       — identyfikator: litera lub "_", dalej litery, cyfry, "_", "-"
  NUMBER      — literał liczbowy
  STRING      — cały literał "…" razem z interpolacjami ${…} / %{…}
  HEREDOC     — od <<EOF / <<-EOF do linii ze znacznikiem zamykającym
  PUNCT       — operatory i nawiasy
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from .errors import HCLSyntaxError


class TokenKind(StrEnum):
    NEWLINE    = "newline"
    WHITESPACE = "whitespace"
    COMMENT    = "comment"
    IDENT      = "ident"
    NUMBER     = "number"
    STRING     = "string"
    HEREDOC    = "heredoc"
    PUNCT      = "punct"


@dataclass(frozen=True, slots=True)
class Token:
    kind:   TokenKind
    text:   str
    line:   int      # 1-based
    column: int      # 1-based, w znakach

    def is_punct(self, *texts: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text in texts


# ---------------------------------------------------------------------------
# Wzorce
# ---------------------------------------------------------------------------

_WHITESPACE_RE   = re.compile(r"(?:[ \t]|\r(?!\n))+")
_LINE_COMMENT_RE = re.compile(r"(?:#|//)(?:[^\r\n]|\r(?!\n))*")
_IDENT_RE        = re.compile(r"[^\W\d][\w-]*")
_NUMBER_RE       = re.compile(r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_HEREDOC_RE      = re.compile(r"<<(-?)([^\W\d][\w-]*)\r?\n")

# Dłuższe operatory muszą być sprawdzane przed krótszymi.
_PUNCTUATORS = (
    "...", "::", "<=", ">=", "==", "!=", "&&", "||", "=>",
    "{", "}", "[", "]", "(", ")",
    "=", ",", ".", ":", "?", "!", "+", "-", "*", "/", "%", "<", ">",
)

_OPENING = {"{": "}", "[": "]", "(": ")"}
_CLOSING = {v: k for k, v in _OPENING.items()}


def bracket_change(tok: Token) -> int:
    """+1 dla nawiasu otwierającego, -1 dla zamykającego, 0 dla reszty."""
    if tok.kind is not TokenKind.PUNCT:
        return 0
    if tok.text in _OPENING:
        return 1
    if tok.text in _CLOSING:
        return -1
    return 0


def matching_bracket(opening: str) -> str:
    return _OPENING[opening]


# ---------------------------------------------------------------------------
# Lekser
# ---------------------------------------------------------------------------

class _Lexer:
    def __init__(self, src: str, filename: str) -> None:
        self.src      = src
        self.filename = filename
        self.pos      = 0
        self.line     = 1
        self.column   = 1

    # -- pozycje i błędy ----------------------------------------------------

    def _error(self, message: str, at: int | None = None) -> HCLSyntaxError:
        line, column = self._position_of(self.pos if at is None else at)
        return HCLSyntaxError(message, self.filename, line, column)

    def _position_of(self, index: int) -> tuple[int, int]:
        line = self.src.count("\n", 0, index) + 1
        last_nl = self.src.rfind("\n", 0, index)
        return line, index - last_nl

    def _emit(self, kind: TokenKind, end: int) -> Token:
        text = self.src[self.pos:end]
        tok  = Token(kind, text, self.line, self.column)
        newlines = text.count("\n")
        if newlines:
            self.line  += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)
        self.pos = end
        return tok

    # -- skanowanie literałów -----------------------------------------------

    def _scan_string(self, start: int) -> int:
        """Zwraca indeks za zamykającym cudzysłowem literału zaczynającego się w start."""
        src = self.src
        i = start + 1
        while i < len(src):
            ch = src[i]
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                return i + 1
            if ch in "\r\n":
                raise self._error("Niezamknięty literał tekstowy", start)
            if ch in "$%" and src.startswith("{", i + 1):
                i = self._scan_template(i + 2, start)
                continue
            if ch in "$%" and src.startswith(ch + "{", i + 1):
                # $${ i %%{ to dosłowne sekwencje, nie interpolacje
                i += 3
                continue
            i += 1
        raise self._error("Niezamknięty literał tekstowy", start)

    def _scan_template(self, i: int, string_start: int) -> int:
        """Przeskakuje wnętrze ${…} / %{…}; zwraca indeks za zamykającym '}'."""
        src = self.src
        depth = 1
        while i < len(src):
            ch = src[i]
            if ch == '"':
                i = self._scan_string(i)
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1
        raise self._error("Niezamknięta sekwencja szablonu w literale", string_start)

    def _scan_heredoc(self, m: re.Match[str]) -> int:
        """Zwraca indeks końca linii ze znacznikiem zamykającym (bez znaku nowej linii)."""
        src    = self.src
        marker = m.group(2)
        i      = m.end()
        while i <= len(src):
            nl  = src.find("\n", i)
            end = len(src) if nl == -1 else nl
            if src[i:end].strip() == marker:
                if end > i and src[end - 1] == "\r":
                    end -= 1
                return end
            if nl == -1:
                break
            i = nl + 1
        raise self._error(f"Brak znacznika zamykającego heredoc {marker!r}", m.start())

    # -- główna pętla -------------------------------------------------------

    def tokens(self) -> list[Token]:
        src = self.src
        out: list[Token] = []
        while self.pos < len(src):
            pos = self.pos
            ch  = src[pos]

            if src.startswith("\r\n", pos):
                out.append(self._emit(TokenKind.NEWLINE, pos + 2))
            elif ch == "\n":
                out.append(self._emit(TokenKind.NEWLINE, pos + 1))
            elif m := _WHITESPACE_RE.match(src, pos):
                out.append(self._emit(TokenKind.WHITESPACE, m.end()))
            elif m := _LINE_COMMENT_RE.match(src, pos):
                out.append(self._emit(TokenKind.COMMENT, m.end()))
            elif src.startswith("/*", pos):
                end = src.find("*/", pos + 2)
                if end == -1:
                    raise self._error("Niezamknięty komentarz blokowy")
                out.append(self._emit(TokenKind.COMMENT, end + 2))
            elif ch == '"':
                out.append(self._emit(TokenKind.STRING, self._scan_string(pos)))
            elif m := _HEREDOC_RE.match(src, pos):
                out.append(self._emit(TokenKind.HEREDOC, self._scan_heredoc(m)))
            elif m := _NUMBER_RE.match(src, pos):
                out.append(self._emit(TokenKind.NUMBER, m.end()))
            elif m := _IDENT_RE.match(src, pos):
                out.append(self._emit(TokenKind.IDENT, m.end()))
            else:
                for punct in _PUNCTUATORS:
                    if src.startswith(punct, pos):
                        out.append(self._emit(TokenKind.PUNCT, pos + len(punct)))
                        break
                else:
                    raise self._error(f"Nieoczekiwany znak {ch!r}")
        return out


def tokenize(src: str, filename: str = "<input>") -> list[Token]:
    """
    Dzieli tekst HCL na tokeny bez utraty żadnego znaku.

    Rzuca HCLSyntaxError dla niezamkniętych literałów, komentarzy,
    heredoc i nieznanych znaków.
    """
    return _Lexer(src, filename).tokens()
