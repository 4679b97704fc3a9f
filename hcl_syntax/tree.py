"""
hcl_syntax/tree.py — drzewo składniowe pliku HCL z wierną rekonstrukcją tekstu.

Document przechowuje uporządkowaną listę węzłów najwyższego poziomu:
  Block        — blok "typ etykiety… { … }" (np. resource, moved)
  Attribute    — przypisanie "nazwa = wyrażenie"
  Unstructured — wszystko pomiędzy: puste linie, samodzielne komentarze

Każdy węzeł posiada swoje tokeny, a węzły razem pokrywają cały plik,
więc Document.render() dla nietkniętego drzewa zwraca dokładnie tekst
wejściowy. Blok i atrybut obejmują (tak jak w hclwrite):
  - komentarze wiodące (linie komentarzy tuż nad nim, bez pustej linii),
  - wcięcie własnej linii,
  - komentarz na końcu ostatniej linii i kończący znak nowej linii.

Ciała bloków są parsowane rekurencyjnie wyłącznie w celu walidacji
składni — dla drzewa pozostają nieprzezroczyste.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import HCLSyntaxError
from .lexer import Token, TokenKind, bracket_change, matching_bracket, tokenize


# ---------------------------------------------------------------------------
# Węzły
# ---------------------------------------------------------------------------

@dataclass(eq=False, slots=True)
class Node:
    """Fragment pliku złożony z kolejnych tokenów. Tożsamość = obiekt."""
    tokens: list[Token]

    @property
    def text(self) -> str:
        return "".join(t.text for t in self.tokens)


@dataclass(eq=False, slots=True)
class Block(Node):
    kind:   str             = ""     # typ bloku, np. "moved"
    labels: tuple[str, ...] = ()     # etykiety bez cudzysłowów, np. ("aws_instance", "web")
    lead:   int             = 0      # liczba tokenów komentarzy wiodących na początku tokens

    def __repr__(self) -> str:
        head = " ".join([self.kind, *(f'"{lbl}"' for lbl in self.labels)])
        return f"<Block {head}>"


@dataclass(eq=False, slots=True)
class Attribute(Node):
    name: str = ""

    def __repr__(self) -> str:
        return f"<Attribute {self.name}>"


@dataclass(eq=False, slots=True)
class Unstructured(Node):
    def __repr__(self) -> str:
        return f"<Unstructured {self.text!r}>"


@dataclass(eq=False)
class Document:
    """Sparsowany plik HCL. Modyfikowalny; należy wyłącznie do jednego przetwarzania."""
    filename: str
    nodes:    list[Node] = field(default_factory=list)

    def blocks(self) -> list[Block]:
        """Migawka bloków najwyższego poziomu w kolejności pliku."""
        return [n for n in self.nodes if isinstance(n, Block)]

    def attributes(self) -> list[Attribute]:
        return [n for n in self.nodes if isinstance(n, Attribute)]

    def remove_block(self, block: Block) -> None:
        """
        Usuwa blok razem z jego wcięciem i końcem linii.

        Komentarze wiodące zostają w dokumencie jako Unstructured; mogą
        zawierać zakomentowany kod, którego narzędzie nie usuwa.
        """
        for i, node in enumerate(self.nodes):
            if node is block:
                if block.lead:
                    self.nodes[i] = Unstructured(block.tokens[:block.lead])
                else:
                    del self.nodes[i]
                return
        raise ValueError(f"{block!r} nie należy do dokumentu {self.filename}")

    def render(self) -> str:
        return "".join(node.text for node in self.nodes)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

_TRIVIA = (TokenKind.WHITESPACE, TokenKind.COMMENT)


@dataclass(slots=True)
class _Item:
    start:  int                       # indeks pierwszego tokenu (nazwa)
    end:    int                       # indeks za ostatnim tokenem (za NEWLINE)
    name:   str
    labels: tuple[str, ...] | None    # None → atrybut


class _Parser:
    def __init__(self, tokens: list[Token], filename: str, src: str) -> None:
        self.tokens   = tokens
        self.filename = filename
        self.pos      = 0
        self._eof_line   = src.count("\n") + 1
        self._eof_column = len(src) - src.rfind("\n")

    # -- pomocnicze ---------------------------------------------------------

    def _error(self, message: str, tok: Token | None = None) -> HCLSyntaxError:
        if tok is None:
            return HCLSyntaxError(message, self.filename, self._eof_line, self._eof_column)
        return HCLSyntaxError(message, self.filename, tok.line, tok.column)

    def _peek(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _skip(self, *kinds: TokenKind) -> None:
        while self.pos < len(self.tokens) and self.tokens[self.pos].kind in kinds:
            self.pos += 1

    def _skip_inline(self) -> None:
        # Komentarz blokowy może zawierać znaki nowej linii, ale nie kończy wiersza.
        self._skip(TokenKind.WHITESPACE, TokenKind.COMMENT)

    @staticmethod
    def _describe(tok: Token | None) -> str:
        if tok is None:
            return "koniec pliku"
        if tok.kind is TokenKind.NEWLINE:
            return "koniec linii"
        return repr(tok.text)

    # -- ciało --------------------------------------------------------------

    def parse_body(self, nested: bool) -> list[_Item]:
        items: list[_Item] = []
        while True:
            self._skip(TokenKind.WHITESPACE, TokenKind.COMMENT, TokenKind.NEWLINE)
            tok = self._peek()
            if tok is None:
                if nested:
                    raise self._error("Brak nawiasu '}' zamykającego blok")
                return items
            if nested and tok.is_punct("}"):
                return items
            if tok.kind is not TokenKind.IDENT:
                raise self._error(
                    f"Oczekiwano nazwy atrybutu lub bloku, napotkano {self._describe(tok)}", tok
                )
            items.append(self._parse_item())

    def _parse_item(self) -> _Item:
        start    = self.pos
        name_tok = self.tokens[self.pos]
        self.pos += 1
        self._skip_inline()

        tok = self._peek()
        if tok is not None and tok.is_punct("="):
            self.pos += 1
            self._parse_expression(name_tok)
            self._expect_line_end()
            return _Item(start, self.pos, name_tok.text, None)

        labels: list[str] = []
        while tok is not None and tok.kind in (TokenKind.STRING, TokenKind.IDENT):
            labels.append(tok.text[1:-1] if tok.kind is TokenKind.STRING else tok.text)
            self.pos += 1
            self._skip_inline()
            tok = self._peek()

        if tok is None or not tok.is_punct("{"):
            raise self._error(
                f"Oczekiwano '=' lub '{{' po {name_tok.text!r}, napotkano {self._describe(tok)}",
                tok,
            )
        self.pos += 1
        self._parse_block_body(name_tok)
        self._expect_line_end()
        return _Item(start, self.pos, name_tok.text, tuple(labels))

    def _parse_block_body(self, name_tok: Token) -> None:
        """Wywoływane za '{'; konsumuje wszystko do pasującego '}' włącznie."""
        self._skip_inline()
        tok = self._peek()
        if tok is None:
            raise self._error(f"Brak nawiasu '}}' zamykającego blok {name_tok.text!r}")

        if tok.kind is TokenKind.NEWLINE:
            self.parse_body(nested=True)
        elif not tok.is_punct("}"):
            # Blok jednoliniowy: co najwyżej jeden atrybut.
            if tok.kind is not TokenKind.IDENT:
                raise self._error(f"Oczekiwano nazwy atrybutu, napotkano {self._describe(tok)}", tok)
            attr_tok = tok
            self.pos += 1
            self._skip_inline()
            eq = self._peek()
            if eq is None or not eq.is_punct("="):
                raise self._error(
                    f"Blok jednoliniowy może zawierać tylko atrybut, napotkano {self._describe(eq)}", eq
                )
            self.pos += 1
            self._parse_expression(attr_tok)
            self._skip_inline()

        tok = self._peek()
        if tok is None or not tok.is_punct("}"):
            raise self._error(
                f"Oczekiwano '}}' zamykającego blok {name_tok.text!r}, napotkano {self._describe(tok)}", tok
            )
        self.pos += 1

    def _parse_expression(self, owner: Token) -> None:
        """
        Konsumuje wyrażenie do końca linii na głębokości 0 nawiasów.

        Wewnątrz nawiasów znaki nowej linii są dozwolone. Zamykający nawias
        bez pary na głębokości 0 kończy wyrażenie (np. '}' bloku jednoliniowego).
        """
        stack: list[Token] = []
        consumed = 0
        while True:
            tok = self._peek()
            if tok is None:
                if stack:
                    raise self._error(
                        f"Brak nawiasu {matching_bracket(stack[-1].text)!r} "
                        f"(otwartego w linii {stack[-1].line})"
                    )
                break
            if tok.kind is TokenKind.NEWLINE and not stack:
                break
            change = bracket_change(tok)
            if change > 0:
                stack.append(tok)
            elif change < 0:
                if not stack:
                    break
                opening = stack.pop()
                if matching_bracket(opening.text) != tok.text:
                    raise self._error(
                        f"Niepasujący nawias {tok.text!r} dla {opening.text!r} "
                        f"z linii {opening.line}", tok
                    )
            if tok.kind not in _TRIVIA and tok.kind is not TokenKind.NEWLINE:
                consumed += 1
            self.pos += 1
        if consumed == 0:
            raise self._error(f"Brak wartości atrybutu {owner.text!r}", self._peek())

    def _expect_line_end(self) -> None:
        self._skip_inline()
        tok = self._peek()
        if tok is None:
            return
        if tok.kind is not TokenKind.NEWLINE:
            raise self._error(f"Oczekiwano końca linii, napotkano {self._describe(tok)}", tok)
        self.pos += 1


def _leading_start(tokens: list[Token], start: int, floor: int) -> int:
    """
    Cofa początek elementu o wcięcie i komentarze wiodące.

    Komentarz wiodący to linia zawierająca wyłącznie komentarz, leżąca
    bezpośrednio nad elementem (albo nad innym komentarzem wiodącym).
    """
    i = start
    if i - 1 >= floor and tokens[i - 1].kind is TokenKind.WHITESPACE:
        i -= 1
    while True:
        j = i - 1
        if j < floor or tokens[j].kind is not TokenKind.NEWLINE:
            return i
        k = j - 1
        if k >= floor and tokens[k].kind is TokenKind.WHITESPACE:
            k -= 1
        if k < floor or tokens[k].kind is not TokenKind.COMMENT:
            return i
        k -= 1
        if k >= floor and tokens[k].kind is TokenKind.WHITESPACE:
            k -= 1
        if k >= floor and tokens[k].kind is not TokenKind.NEWLINE:
            return i
        i = k + 1


def _lead_length(own: list[Token]) -> int:
    """Liczba tokenów linii komentarzy przed linią nagłówka elementu."""
    head = 0
    while head < len(own) and own[head].kind in _TRIVIA + (TokenKind.NEWLINE,):
        head += 1
    for i in range(head - 1, -1, -1):
        if own[i].kind is TokenKind.NEWLINE:
            return i + 1
    return 0


def parse_config(src: str, filename: str = "<input>") -> Document:
    """
    Parsuje tekst pliku .tf do Document.

    Rzuca HCLSyntaxError, gdy tekst nie jest poprawną składnią HCL.
    """
    tokens = tokenize(src, filename)
    items  = _Parser(tokens, filename, src).parse_body(nested=False)

    doc    = Document(filename)
    cursor = 0
    for item in items:
        start = _leading_start(tokens, item.start, cursor)
        if start > cursor:
            doc.nodes.append(Unstructured(tokens[cursor:start]))
        own = tokens[start:item.end]
        if item.labels is None:
            doc.nodes.append(Attribute(own, name=item.name))
        else:
            doc.nodes.append(Block(own, kind=item.name, labels=item.labels, lead=_lead_length(own)))
        cursor = item.end
    if cursor < len(tokens):
        doc.nodes.append(Unstructured(tokens[cursor:]))
    return doc
