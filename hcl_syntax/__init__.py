"""
hcl_syntax — bezstratne parsowanie, renderowanie i formatowanie plików HCL (.tf).

Publiczne API:
  parse_config(src, filename)   -> Document
  Document.render()             -> str   (nietknięte węzły bajt w bajt)
  format_source(src, filename)  -> str   (kanoniczny format, jak hclwrite.Format)
  tokenize(src, filename)       -> list[Token]

Typowe użycie:
    from hcl_syntax import parse_config, format_source

    doc = parse_config(text, "main.tf")
    for block in doc.blocks():
        print(block.kind, block.labels)
    text = format_source(doc.render())
"""

from .errors import HCLSyntaxError
from .lexer import Token, TokenKind, tokenize
from .tree import Attribute, Block, Document, Node, Unstructured, parse_config
from .formatter import format_source, format_tokens

__all__ = [
    "HCLSyntaxError",
    "Token",
    "TokenKind",
    "tokenize",
    "Node",
    "Block",
    "Attribute",
    "Unstructured",
    "Document",
    "parse_config",
    "format_source",
    "format_tokens",
]
