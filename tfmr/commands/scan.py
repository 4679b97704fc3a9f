"""Komenda: tfmr scan — podgląd bloków `moved` w plikach .tf (bez zapisu)."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from data_model import DiscoveryError
from hcl_syntax import Block, HCLSyntaxError, parse_config
from remover import MOVED_BLOCK, find_terraform_files, matching_blocks

console = Console()


def _scan_file(path: Path) -> tuple[list[str], str | None]:
    """Zwraca opisy bloków `moved` w pliku albo komunikat błędu."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        return [], f"Błąd odczytu: {e}"
    try:
        doc = parse_config(text, str(path))
    except HCLSyntaxError as e:
        return [], str(e)
    return [_describe(b) for b in matching_blocks(doc, MOVED_BLOCK)], None


def _describe(block: Block) -> str:
    """Pierwsza linia bloku (z pominięciem komentarzy wiodących)."""
    for line in block.text.splitlines():
        if line.strip().startswith(block.kind):
            return line.strip()
    return block.kind


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def run(args: argparse.Namespace) -> None:
    root = Path(args.directory)
    try:
        files = find_terraform_files(root)
    except DiscoveryError as e:
        console.print(f"[red]Błąd:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not files:
        console.print(f"[yellow]Brak plików .tf w {escape(str(root))}[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("PLIK", no_wrap=True, style="bold cyan")
    table.add_column("MOVED", justify="right", no_wrap=True)
    table.add_column("SZCZEGÓŁY", no_wrap=False, max_width=70)

    total  = 0
    errors = 0
    for path in files:
        blocks, error = _scan_file(path)
        if error is not None:
            errors += 1
            table.add_row(escape(_relative(path, root)), "[red]—[/red]", f"[red]{escape(error)}[/red]")
            continue
        total += len(blocks)
        if not args.only_moved or blocks:
            table.add_row(escape(_relative(path, root)), str(len(blocks)), escape("; ".join(blocks)) or "-")

    console.print()
    console.print(table)
    summary = f"  [dim]{len(files)} plików, bloków moved: {total}"
    if errors:
        summary += f", błędów: {errors}"
    console.print(summary + "[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "scan",
        help="Pokazuje bloki `moved` w plikach .tf (bez zapisu).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przeszukuje katalog tak samo jak `tfmr remove`, ale niczego nie zapisuje:
wypisuje tabelę plików z liczbą bloków `moved` najwyższego poziomu.

Przykłady:
  tfmr scan ./terraform
  tfmr scan ./terraform --only-moved
        """,
    )
    p.add_argument(
        "directory",
        metavar="KATALOG",
        help="Katalog główny z plikami Terraform.",
    )
    p.add_argument(
        "--only-moved",
        action="store_true",
        help="Pokaż tylko pliki zawierające bloki `moved`.",
    )
    p.set_defaults(func=run)
