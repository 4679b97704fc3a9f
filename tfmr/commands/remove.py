"""Komenda: tfmr remove — usuwanie bloków `moved` i formatowanie plików .tf."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from data_model import AggregateStats, DiscoveryError, ProcessingError
from remover import Settings, find_terraform_files, run_batch
from remover.batch import Outcome

console = Console()


# ---------------------------------------------------------------------------
# Raportowanie
# ---------------------------------------------------------------------------

def _failure_line(path: Path, error: ProcessingError) -> str:
    # Komunikat błędu składni zaczyna się już od "plik:linia,kolumna:".
    if error.message.startswith(f"{error.path}:"):
        return error.message
    return f"{path}: {error.message}"


def _reporter(verbose: bool):
    def report(path: Path, outcome: Outcome) -> None:
        if isinstance(outcome, ProcessingError):
            console.print(f"[red]Błąd przetwarzania[/red] {escape(_failure_line(path, outcome))}")
            return
        if not verbose:
            return
        shown = escape(str(path))
        if outcome.blocks_removed:
            console.print(
                f"Przetworzono: {shown}  [green]usunięte bloki: {outcome.blocks_removed}[/green]"
            )
        elif outcome.modified:
            console.print(f"Przetworzono: {shown}  [cyan]sformatowano[/cyan]")
        else:
            console.print(f"Przetworzono: {shown}  [dim]bez zmian[/dim]")
    return report


def _show_summary(stats: AggregateStats, dry_run: bool) -> None:
    console.print()
    console.print("[bold]Statystyki:[/bold]")
    if dry_run:
        console.print("[yellow]DRY RUN: żaden plik nie został zmodyfikowany[/yellow]")

    table = Table(box=box.SIMPLE_HEAD, show_header=False, expand=False)
    table.add_column("MIARA", style="bold white", no_wrap=True)
    table.add_column("WARTOŚĆ", justify="right", no_wrap=True)
    table.add_row("Przetworzone pliki", str(stats.files_processed))
    table.add_row("Zmodyfikowane pliki", str(stats.files_modified))
    table.add_row("Usunięte bloki moved", str(stats.blocks_removed))
    if stats.files_failed:
        table.add_row("[red]Pliki z błędami[/red]", f"[red]{stats.files_failed}[/red]")
    table.add_row("Czas przetwarzania", f"{stats.elapsed:.3f} s")
    console.print(table)


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    settings = Settings.from_env().with_overrides(
        dry_run=args.dry_run,
        verbose=args.verbose,
        no_normalize=args.no_normalize,
    )
    root = Path(args.directory)

    console.print(f"Skanowanie katalogu: [bold]{escape(str(root))}[/bold]")
    try:
        files = find_terraform_files(root)
    except DiscoveryError as e:
        console.print(f"[red]Błąd:[/red] {escape(str(e))}")
        raise SystemExit(1)
    console.print(f"Znaleziono [bold]{len(files)}[/bold] plików Terraform")

    stats = run_batch(files, settings.to_options(), _reporter(settings.verbose))
    _show_summary(stats, settings.dry_run)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "remove",
        help="Usuwa bloki `moved` ze wszystkich plików .tf w katalogu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Rekurencyjnie przeszukuje katalog, usuwa z plików .tf wszystkie bloki `moved`
najwyższego poziomu i formatuje pliki jak `terraform fmt`. Plik jest zapisywany
tylko wtedy, gdy jego treść faktycznie się zmieniła.

Błąd odczytu, parsowania lub zapisu jednego pliku jest wypisywany,
a przetwarzanie przechodzi do kolejnego pliku.

Przykłady:
  tfmr remove ./terraform
  tfmr remove ./terraform --dry-run
  tfmr remove ./terraform --verbose --no-normalize
        """,
    )
    p.add_argument(
        "directory",
        metavar="KATALOG",
        help="Katalog główny z plikami Terraform.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Nie zapisuj plików; statystyki jak przy zapisie.",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Wypisz każdy przetwarzany plik.",
    )
    p.add_argument(
        "--no-normalize",
        action="store_true",
        help="Nie zwijaj ciągów >= 3 pustych linii po usunięciu bloków.",
    )
    p.set_defaults(func=run)
