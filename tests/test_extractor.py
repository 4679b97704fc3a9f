"""Testy usuwania bloków najwyższego poziomu."""

from __future__ import annotations

from hcl_syntax import parse_config
from remover import MOVED_BLOCK, count_blocks, extract_blocks

from conftest import COMMENTED_MOVED, COMPLEX, ONLY_MOVED, RESOURCES_AFTER_REMOVAL, RESOURCES_AND_MOVED


class TestExtractBlocks:
    """extract_blocks()"""

    def test_removes_all_matching(self) -> None:
        """Zasoby i dwa bloki moved → zostają same zasoby."""
        doc, removed = extract_blocks(parse_config(RESOURCES_AND_MOVED), MOVED_BLOCK)
        assert removed == 2
        assert doc.render() == RESOURCES_AFTER_REMOVAL
        assert [(b.kind, b.labels) for b in doc.blocks()] == [
            ("resource", ("aws_instance", "web")),
            ("resource", ("aws_s3_bucket", "data")),
        ]

    def test_count_matches_removed(self) -> None:
        """Liczba usuniętych == liczba bloków przed usunięciem."""
        doc    = parse_config(ONLY_MOVED)
        before = count_blocks(doc, MOVED_BLOCK)
        _, removed = extract_blocks(doc, MOVED_BLOCK)
        assert before == removed == 3
        assert count_blocks(doc, MOVED_BLOCK) == 0

    def test_adjacent_blocks(self) -> None:
        """Sąsiednie bloki tego samego typu nie są pomijane."""
        doc, removed = extract_blocks(parse_config("moved {}\nmoved {}\nmoved {}\nb {}\n"), MOVED_BLOCK)
        assert removed == 3
        assert doc.render() == "b {}\n"

    def test_only_matching_blocks_left_whitespace(self) -> None:
        """Po usunięciu samych bloków moved zostają tylko puste linie."""
        doc, removed = extract_blocks(parse_config(ONLY_MOVED), MOVED_BLOCK)
        assert removed == 3
        assert doc.render().strip() == ""

    def test_no_match_leaves_document(self) -> None:
        """Brak pasujących bloków → 0 i dokument bez zmian."""
        doc, removed = extract_blocks(parse_config(COMPLEX), MOVED_BLOCK)
        assert removed == 0
        assert doc.render() == COMPLEX

    def test_empty_document(self) -> None:
        doc, removed = extract_blocks(parse_config(""), MOVED_BLOCK)
        assert removed == 0
        assert doc.render() == ""

    def test_commented_block_inert(self) -> None:
        """Zakomentowany blok moved nie jest usuwany."""
        doc, removed = extract_blocks(parse_config(COMMENTED_MOVED), MOVED_BLOCK)
        assert removed == 0
        assert doc.render() == COMMENTED_MOVED

    def test_nested_block_not_removed(self) -> None:
        """Blok moved zagnieżdżony w innym bloku nie jest kandydatem."""
        src = 'resource "a" "b" {\n  moved {\n    from = a.b\n  }\n}\n'
        doc, removed = extract_blocks(parse_config(src), MOVED_BLOCK)
        assert removed == 0
        assert doc.render() == src

    def test_case_sensitive(self) -> None:
        """Typ porównywany dokładnie: Moved ≠ moved."""
        doc, removed = extract_blocks(parse_config("Moved {}\nMOVED {}\n"), MOVED_BLOCK)
        assert removed == 0
        assert count_blocks(doc, "Moved") == 1

    def test_other_kind(self) -> None:
        """Typ bloku jest parametrem."""
        doc, removed = extract_blocks(parse_config(COMPLEX), "locals")
        assert removed == 1
        assert "locals" not in [b.kind for b in doc.blocks()]

    def test_lead_comment_kept(self) -> None:
        """Komentarz tuż nad blokiem zostaje po usunięciu bloku."""
        src = "a {}\n\n# przeniesienie\nmoved {\n  from = x.y\n  to   = x.z\n}\n"
        doc, removed = extract_blocks(parse_config(src), MOVED_BLOCK)
        assert removed == 1
        assert doc.render() == "a {}\n\n# przeniesienie\n"

    def test_commented_block_above_real_block(self) -> None:
        """Zakomentowany blok moved tuż nad prawdziwym nie znika."""
        src = (
            'resource "a" "b" {\n}\n\n'
            "# moved {\n#   from = a.old\n#   to   = a.new\n# }\n"
            "moved {\n  from = a.old\n  to   = a.new\n}\n"
        )
        doc, removed = extract_blocks(parse_config(src), MOVED_BLOCK)
        assert removed == 1
        assert doc.render() == (
            'resource "a" "b" {\n}\n\n'
            "# moved {\n#   from = a.old\n#   to   = a.new\n# }\n"
        )
