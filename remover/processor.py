"""
remover/processor.py — przetwarzanie pojedynczego pliku .tf.

Publiczne API:
  process_source(content, path, options) -> (ProcessingResult, bytes)
      czysta funkcja: parse → usunięcie bloków → render → format → normalizacja
  process_file(path, options)            -> ProcessingResult
      odczyt + process_source + atomowy zapis (o ile plik się zmienił)

Polityka „licz zawsze, zapisuj tylko przy różnicy”: formatowanie
i normalizacja działają dla każdego pliku, a plik jest zapisywany tylko
wtedy, gdy wynik różni się od wejścia bajt w bajt.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from data_model import ParseFailure, ProcessingResult, ReadFailure, WriteFailure
from hcl_syntax import HCLSyntaxError, format_source, parse_config

from .extractor import MOVED_BLOCK, extract_blocks
from .normalizer import normalize

_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class ProcessOptions:
    """
    Flagi przetwarzania.

    - kind:                 typ usuwanych bloków
    - dry_run:              nie zapisuj plików (statystyki liczone jak przy zapisie)
    - normalize_whitespace: zwijaj ciągi >= 3 pustych linii po renderowaniu
    """
    kind:                 str  = MOVED_BLOCK
    dry_run:              bool = False
    normalize_whitespace: bool = True


# ---------------------------------------------------------------------------
# Czysta transformacja
# ---------------------------------------------------------------------------

def process_source(
    content: bytes,
    path:    str,
    options: ProcessOptions = ProcessOptions(),
) -> tuple[ProcessingResult, bytes]:
    """
    Przekształca treść pliku; nie wykonuje żadnego I/O.

    Zwraca wynik i bajty wyjściowe (równe wejściu, gdy nic się nie zmieniło).
    Rzuca ParseFailure, gdy treść nie jest poprawnym UTF-8 albo HCL.
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseFailure(path, f"Plik nie jest poprawnym UTF-8: {e}") from e

    bom = text.startswith(_BOM)
    if bom:
        text = text[len(_BOM):]

    try:
        document = parse_config(text, path)
    except HCLSyntaxError as e:
        raise ParseFailure(path, str(e)) from e

    document, removed = extract_blocks(document, options.kind)

    rendered = format_source(document.render(), path)
    if options.normalize_whitespace:
        rendered = normalize(rendered)

    output   = ((_BOM if bom else "") + rendered).encode("utf-8")
    modified = removed > 0 or output != content
    result   = ProcessingResult(
        path=path,
        modified=modified,
        blocks_removed=removed,
        output=output if modified else None,
    )
    return result, (output if modified else content)


# ---------------------------------------------------------------------------
# Odczyt i zapis
# ---------------------------------------------------------------------------

def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ReadFailure(str(path), f"Błąd odczytu: {e}") from e


def _write_atomic(path: Path, data: bytes) -> None:
    """
    Zapisuje całość albo nic: plik tymczasowy obok celu + os.replace.

    Dowiązanie symboliczne zostaje; zapis trafia do pliku, na który wskazuje.
    Uprawnienia są kopiowane, właściciel i grupa, o ile proces może je ustawić.
    """
    target = path.resolve()
    tmp_name: str | None = None
    try:
        st = target.stat()
        with tempfile.NamedTemporaryFile(
            "wb", dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        shutil.copymode(target, tmp_name)
        if hasattr(os, "chown") and (st.st_uid, st.st_gid) != _owner(tmp_name):
            # Bez uprawnień właściciel zostaje ten, który uruchomił narzędzie.
            with contextlib.suppress(PermissionError):
                os.chown(tmp_name, st.st_uid, st.st_gid)
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteFailure(str(path), f"Błąd zapisu: {e}") from e


def _owner(name: str) -> tuple[int, int]:
    st = os.stat(name)
    return st.st_uid, st.st_gid


def process_file(path: Path, options: ProcessOptions = ProcessOptions()) -> ProcessingResult:
    """
    Przetwarza plik na dysku.

    Plik jest nadpisywany tylko gdy result.modified i nie jest to dry-run.
    Rzuca ReadFailure / ParseFailure / WriteFailure.
    """
    content = _read(path)
    result, output = process_source(content, str(path), options)
    if result.modified and not options.dry_run:
        _write_atomic(path, output)
    return result
