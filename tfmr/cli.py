"""
tfmr — narzędzie CLI usuwające bloki `moved` z plików Terraform.

Użycie:
  tfmr <komenda> [opcje]

Komendy:
  remove   Usuwa bloki `moved` ze wszystkich plików .tf w katalogu i formatuje pliki.
  scan     Pokazuje, ile bloków `moved` zawiera każdy plik (bez zapisu).

Zmienne środowiskowe:
  TFMR_NORMALIZE  Zwijanie ciągów >= 3 pustych linii (domyślnie: 1).
  TFMR_DRY_RUN    Tryb podglądu bez zapisu (domyślnie: 0).
  TFMR_VERBOSE    Wypisywanie każdego przetwarzanego pliku (domyślnie: 0).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
# w komunikatach były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from tfmr.commands import remove as cmd_remove
from tfmr.commands import scan as cmd_scan

VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfmr",
        description="Terraform Moved Directive Remover — usuwa bloki `moved` i formatuje pliki .tf.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"tfmr {VERSION}"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_remove.add_parser(subparsers)
    cmd_scan.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
