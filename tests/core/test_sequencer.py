"""
Tests pour le module core.epub.sequencer.
"""

from epub_pager.core.epub.sequencer import PageSequencer, cover_page_html
from epub_pager.core.models import OrderedEntry, PageKind

from ..helpers import xhtml


def _text_entries(*paths):
    return [OrderedEntry(path=p, sequence_index=i) for i, p in enumerate(paths)]


def _assert_numbering(pages):
    assert [p.page_number for p in pages] == list(range(1, len(pages) + 1))
    assert sum(p.is_first for p in pages) == 1
    assert sum(p.is_last for p in pages) == 1
    assert pages[0].is_first and pages[-1].is_last


class TestPageOrdering:
    """Tests pour le tri des pages."""

    def test_labels_override_structural_order(self):
        entries = _text_entries("html/c1.xhtml", "html/c2.xhtml")
        content = {"html/c1.xhtml": xhtml("Page 5"), "html/c2.xhtml": xhtml("Page 3")}

        pages = PageSequencer().sequence(entries, content)

        assert [p.source_path for p in pages] == ["html/c2.xhtml", "html/c1.xhtml"]
        assert [p.title for p in pages] == ["Page 3", "Page 5"]
        _assert_numbering(pages)

    def test_without_titles_falls_back_to_structural_order(self):
        entries = _text_entries("html/c1.xhtml", "html/c2.xhtml")
        content = {"html/c1.xhtml": xhtml(None), "html/c2.xhtml": xhtml(None)}

        pages = PageSequencer().sequence(entries, content)

        assert [p.source_path for p in pages] == ["html/c1.xhtml", "html/c2.xhtml"]
        assert [p.title for p in pages] == [None, None]

    def test_unlabeled_pages_sort_after_labeled_ones(self):
        entries = _text_entries("intro.xhtml", "a.xhtml", "notes.xhtml", "b.xhtml")
        content = {
            "intro.xhtml": xhtml("Introduction"),
            "a.xhtml": xhtml("Page 2"),
            "notes.xhtml": xhtml("Notes"),
            "b.xhtml": xhtml("Page 1"),
        }

        pages = PageSequencer().sequence(entries, content)

        assert [p.source_path for p in pages] == [
            "b.xhtml", "a.xhtml", "intro.xhtml", "notes.xhtml",
        ]

    def test_equal_labels_keep_structural_order(self):
        entries = _text_entries("x.xhtml", "y.xhtml", "z.xhtml")
        content = {p: xhtml("Page 4") for p in ("x.xhtml", "y.xhtml", "z.xhtml")}

        pages = PageSequencer().sequence(entries, content)

        assert [p.source_path for p in pages] == ["x.xhtml", "y.xhtml", "z.xhtml"]

    def test_zero_label_counts_as_unlabeled(self):
        entries = _text_entries("p.xhtml", "q.xhtml")
        content = {"p.xhtml": xhtml("Page 0"), "q.xhtml": xhtml("Page 8")}

        pages = PageSequencer().sequence(entries, content)

        assert [p.source_path for p in pages] == ["q.xhtml", "p.xhtml"]

    def test_sequencing_is_deterministic(self):
        entries = _text_entries("c3.xhtml", "c1.xhtml", "intro.xhtml", "c2.xhtml")
        content = {p: xhtml(None) for p in ("c3.xhtml", "c1.xhtml", "intro.xhtml", "c2.xhtml")}

        first = PageSequencer().sequence(entries, content)
        second = PageSequencer().sequence(entries, content)

        assert first == second


class TestCoverPage:
    """Tests pour la page de couverture synthétisée."""

    def test_cover_is_first_page(self):
        entries = _text_entries("c1.xhtml", "c2.xhtml")
        content = {"c1.xhtml": xhtml("Page 2"), "c2.xhtml": xhtml("Page 1")}

        pages = PageSequencer().sequence(entries, content, cover_href="images/cover.jpg")

        assert len(pages) == 3
        assert pages[0].page_number == 1
        assert pages[0].is_first is True
        assert pages[0].title == "Cover"
        assert 'src="cover.jpg"' in pages[0].content
        assert pages[0].source_path == "images/cover.jpg"
        assert [p.source_path for p in pages[1:]] == ["c2.xhtml", "c1.xhtml"]
        _assert_numbering(pages)

    def test_cover_only(self):
        pages = PageSequencer().sequence([], {}, cover_href="cover.png")

        assert len(pages) == 1
        assert pages[0].is_first and pages[0].is_last

    def test_cover_html_escapes_href(self):
        assert 'src="a&quot;b.jpg"' in cover_page_html('a"b.jpg')


class TestEdgeCases:
    """Tests pour les cas limites."""

    def test_empty_input_gives_empty_sequence(self):
        assert PageSequencer().sequence([], {}) == []

    def test_single_page_is_first_and_last(self):
        pages = PageSequencer().sequence(_text_entries("only.xhtml"), {"only.xhtml": xhtml("x")})

        assert len(pages) == 1
        assert pages[0].is_first and pages[0].is_last

    def test_unreadable_document_is_skipped_with_warning(self):
        sequencer = PageSequencer()
        entries = _text_entries("ok.xhtml", "broken.xhtml")

        pages = sequencer.sequence(entries, {"ok.xhtml": xhtml("Page 1")})

        assert [p.source_path for p in pages] == ["ok.xhtml"]
        assert len(sequencer.warnings) == 1
        assert sequencer.warnings[0].path == "broken.xhtml"

    def test_warnings_reset_between_calls(self):
        sequencer = PageSequencer()
        sequencer.sequence(_text_entries("missing.xhtml"), {})

        sequencer.sequence([], {})

        assert sequencer.warnings == []

    def test_images_are_not_paginated_by_default(self):
        entries = [OrderedEntry("c1.xhtml", 0), OrderedEntry("img/p1.jpg", 1, is_image=True)]

        pages = PageSequencer().sequence(entries, {"c1.xhtml": xhtml(None)})

        assert [p.kind for p in pages] == [PageKind.TEXT]

    def test_paginate_images(self):
        entries = [
            OrderedEntry("img/p02.jpg", 0, is_image=True),
            OrderedEntry("img/p01.jpg", 1, is_image=True),
        ]

        pages = PageSequencer(paginate_images=True).sequence(entries, {})

        assert [p.kind for p in pages] == [PageKind.IMAGE, PageKind.IMAGE]
        assert [p.content for p in pages] == ["img/p01.jpg", "img/p02.jpg"]
