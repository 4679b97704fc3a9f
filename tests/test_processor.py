"""Testy przetwarzania pojedynczego pliku."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from data_model import FailureKind, ParseFailure, ReadFailure, WriteFailure
from remover import ProcessOptions, process_file, process_source

from conftest import (
    COMMENTED_MOVED,
    COMPLEX,
    FORMATTED,
    ONLY_MOVED,
    RESOURCES_AFTER_REMOVAL,
    RESOURCES_AND_MOVED,
    UNFORMATTED,
)

DRY_RUN = ProcessOptions(dry_run=True)


def _run(src: str | bytes, options: ProcessOptions = ProcessOptions()):
    content = src.encode("utf-8") if isinstance(src, str) else src
    return process_source(content, "main.tf", options)


class TestProcessSource:
    """process_source() — czysta transformacja."""

    def test_resources_and_moved(self) -> None:
        """Zasoby i dwa bloki moved → 2 usunięte, zasoby zostają."""
        result, output = _run(RESOURCES_AND_MOVED)
        assert result.modified
        assert result.blocks_removed == 2
        assert output == RESOURCES_AFTER_REMOVAL.encode()
        assert result.output == output

    def test_only_moved(self) -> None:
        """Same bloki moved → wynik złożony tylko z białych znaków."""
        result, output = _run(ONLY_MOVED)
        assert result.modified
        assert result.blocks_removed == 3
        assert output.strip() == b""

    def test_empty_file(self) -> None:
        result, output = _run("")
        assert not result.modified
        assert result.blocks_removed == 0
        assert result.output is None
        assert output == b""

    @pytest.mark.parametrize("src", [COMPLEX, COMMENTED_MOVED, FORMATTED])
    def test_noop(self, src: str) -> None:
        """Sformatowany plik bez bloków moved → niezmieniony, bajty identyczne."""
        result, output = _run(src)
        assert not result.modified
        assert result.blocks_removed == 0
        assert output == src.encode()

    def test_formatting_only_change(self) -> None:
        """Sama zmiana formatowania też oznacza plik jako zmieniony."""
        result, output = _run(UNFORMATTED)
        assert result.modified
        assert result.blocks_removed == 0
        assert output == FORMATTED.encode()

    def test_blank_runs_collapsed(self) -> None:
        src = "a = 1\n\n\n\n\nb = 2\n"
        result, output = _run(src)
        assert result.modified
        assert output == b"a = 1\n\nb = 2\n"

    def test_normalize_disabled(self) -> None:
        """Bez normalizacji ciągi pustych linii zostają."""
        src = "a = 1\n\n\nmoved {}\n\n\nb = 2\n"
        result, output = _run(src, ProcessOptions(normalize_whitespace=False))
        assert result.blocks_removed == 1
        assert output == b"a = 1\n\n\n\n\nb = 2\n"

    def test_normalize_after_removal(self) -> None:
        src = "a = 1\n\n\nmoved {}\n\n\nb = 2\n"
        _, output = _run(src)
        assert output == b"a = 1\n\nb = 2\n"

    def test_bom_preserved(self) -> None:
        src = "\ufeff" + RESOURCES_AND_MOVED
        result, output = _run(src)
        assert result.blocks_removed == 2
        assert output == ("\ufeff" + RESOURCES_AFTER_REMOVAL).encode("utf-8")

    def test_bom_noop(self) -> None:
        content = ("\ufeff" + FORMATTED).encode("utf-8")
        result, output = _run(content)
        assert not result.modified
        assert output == content

    def test_crlf_kept(self) -> None:
        src = "a = 1\r\n\r\nmoved {}\r\n\r\nb = 2\r\n"
        _, output = _run(src)
        assert output == b"a = 1\r\n\r\n\r\nb = 2\r\n"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ParseFailure) as exc:
            _run(b"a = \"\xff\xfe\"\n")
        assert exc.value.kind is FailureKind.PARSE
        assert exc.value.path == "main.tf"

    def test_invalid_hcl(self) -> None:
        """Błąd składni → ParseFailure z pozycją w komunikacie."""
        with pytest.raises(ParseFailure) as exc:
            _run("this is not valid HCL")
        assert "main.tf:1," in exc.value.message

    def test_commented_block_above_real_block(self) -> None:
        """Zakomentowany blok moved nad prawdziwym zostaje w wyniku."""
        commented = "# moved {\n#   from = a.old\n#   to   = a.new\n# }\n"
        src = 'resource "a" "b" {\n}\n\n' + commented + "moved {\n  from = a.old\n  to   = a.new\n}\n"
        result, output = _run(src)
        assert result.blocks_removed == 1
        assert output == ('resource "a" "b" {\n}\n\n' + commented).encode()

    def test_dry_run_same_result(self) -> None:
        """Dry-run liczy dokładnie to samo co zwykły przebieg."""
        normal, out_normal = _run(RESOURCES_AND_MOVED)
        dry,    out_dry    = _run(RESOURCES_AND_MOVED, DRY_RUN)
        assert (dry.modified, dry.blocks_removed) == (normal.modified, normal.blocks_removed)
        assert out_dry == out_normal

    def test_idempotent(self) -> None:
        """Drugie przetworzenie wyniku nic nie zmienia."""
        _, once = _run(RESOURCES_AND_MOVED)
        result, twice = _run(once)
        assert not result.modified
        assert twice == once


class TestProcessFile:
    """process_file() — odczyt i atomowy zapis."""

    def test_writes_modified_file(self, write_tf) -> None:
        path   = write_tf("main.tf", RESOURCES_AND_MOVED)
        result = process_file(path)
        assert result.blocks_removed == 2
        assert path.read_text(encoding="utf-8") == RESOURCES_AFTER_REMOVAL

    def test_unmodified_file_not_written(self, write_tf) -> None:
        path  = write_tf("main.tf", FORMATTED)
        mtime = path.stat().st_mtime_ns
        os.utime(path, ns=(mtime - 10**9, mtime - 10**9))
        result = process_file(path)
        assert not result.modified
        assert path.stat().st_mtime_ns == mtime - 10**9

    def test_dry_run_leaves_file(self, write_tf) -> None:
        """Dry-run z 2 blokami → zmieniony, 2 usunięte, plik na dysku nietknięty."""
        path   = write_tf("main.tf", RESOURCES_AND_MOVED)
        result = process_file(path, DRY_RUN)
        assert result.modified
        assert result.blocks_removed == 2
        assert path.read_text(encoding="utf-8") == RESOURCES_AND_MOVED

    def test_mode_preserved(self, write_tf) -> None:
        path = write_tf("main.tf", RESOURCES_AND_MOVED)
        path.chmod(0o640)
        process_file(path)
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_writes_through_symlink(self, tmp_path: Path, write_tf) -> None:
        """Dowiązanie symboliczne zostaje, zmienia się plik docelowy."""
        target = write_tf("shared/moves.tf", RESOURCES_AND_MOVED)
        link   = tmp_path / "modules" / "vpc" / "moves.tf"
        link.parent.mkdir(parents=True)
        link.symlink_to(target)

        result = process_file(link)
        assert result.blocks_removed == 2
        assert link.is_symlink()
        assert target.read_text(encoding="utf-8") == RESOURCES_AFTER_REMOVAL
        assert sorted(p.name for p in target.parent.iterdir()) == ["moves.tf"]
        assert list(link.parent.iterdir()) == [link]

    def test_owner_kept(self, write_tf) -> None:
        path  = write_tf("main.tf", RESOURCES_AND_MOVED)
        owner = (path.stat().st_uid, path.stat().st_gid)
        process_file(path)
        assert (path.stat().st_uid, path.stat().st_gid) == owner

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReadFailure) as exc:
            process_file(tmp_path / "missing.tf")
        assert exc.value.kind is FailureKind.READ

    def test_parse_failure_leaves_file(self, write_tf) -> None:
        path = write_tf("bad.tf", "resource {\n")
        with pytest.raises(ParseFailure):
            process_file(path)
        assert path.read_text(encoding="utf-8") == "resource {\n"

    def test_write_failure_cleans_up(self, write_tf, monkeypatch) -> None:
        """Nieudany zapis → WriteFailure, oryginał nietknięty, brak pliku tymczasowego."""
        path = write_tf("main.tf", RESOURCES_AND_MOVED)

        def _fail(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", _fail)
        with pytest.raises(WriteFailure) as exc:
            process_file(path)
        assert exc.value.kind is FailureKind.WRITE
        assert path.read_text(encoding="utf-8") == RESOURCES_AND_MOVED
        assert [p.name for p in path.parent.iterdir()] == ["main.tf"]
