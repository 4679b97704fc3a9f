"""remover/discovery.py — rekurencyjne wyszukiwanie plików .tf."""

from __future__ import annotations

import os
from pathlib import Path

from data_model import DiscoveryError

TERRAFORM_SUFFIX = ".tf"


def find_terraform_files(root: Path) -> list[Path]:
    """
    Zwraca posortowaną listę plików *.tf w katalogu root i podkatalogach.

    Rzuca DiscoveryError, gdy root nie istnieje, nie jest katalogiem
    albo nie da się go (lub któregoś podkatalogu) odczytać.
    """
    if not root.exists():
        raise DiscoveryError(f"Katalog nie istnieje: {root}")
    if not root.is_dir():
        raise DiscoveryError(f"{root} nie jest katalogiem")

    def _raise(err: OSError) -> None:
        raise DiscoveryError(f"Błąd dostępu do {err.filename}: {err.strerror}") from err

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(TERRAFORM_SUFFIX):
                path = Path(dirpath) / name
                if path.is_file():
                    files.append(path)
    return sorted(files)
