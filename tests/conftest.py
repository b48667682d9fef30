"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables pour tous les tests : fabrication
d'archives EPUB minimales avec zipfile.
"""

import zipfile
from typing import Dict, Optional

import pytest

from .helpers import CONTAINER_XML, build_opf, xhtml


@pytest.fixture
def make_epub(tmp_path):
    """Fabrique une archive EPUB à partir d'un dict chemin -> contenu."""

    def _make(
        files: Dict[str, object],
        name: str = "book.epub",
        opf_path: Optional[str] = "OEBPS/content.opf",
        directory=None,
    ) -> str:
        path = (directory or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("mimetype", "application/epub+zip")
            if opf_path is not None:
                zf.writestr("META-INF/container.xml", CONTAINER_XML.format(opf_path=opf_path))
            for entry, data in files.items():
                zf.writestr(entry, data)
        return str(path)

    return _make


@pytest.fixture
def make_book(make_epub):
    """
    Fabrique le livre de référence à deux chapitres.

    spine [ch1, ch2], manifeste {ch1: html/c1.xhtml, ch2: html/c2.xhtml}.
    """

    def _make(
        c1_title: Optional[str] = "Page 5",
        c2_title: Optional[str] = "Page 3",
        cover: bool = False,
        name: str = "book.epub",
        directory=None,
    ) -> str:
        items = [
            ("ch1", "html/c1.xhtml", "application/xhtml+xml"),
            ("ch2", "html/c2.xhtml", "application/xhtml+xml"),
        ]
        files = {
            "OEBPS/html/c1.xhtml": xhtml(c1_title, "<p>One</p>"),
            "OEBPS/html/c2.xhtml": xhtml(c2_title, "<p>Two</p>"),
        }
        extra = {}
        if cover:
            items.append(("cover-img", "images/cover.jpg", "image/jpeg"))
            extra["cover-img"] = 'properties="cover-image"'
            files["OEBPS/images/cover.jpg"] = b"\xff\xd8\xff\xe0fake-jpeg"
        files["OEBPS/content.opf"] = build_opf(items, ["ch1", "ch2"], extra_item_attrs=extra)
        return make_epub(files, name=name, directory=directory)

    return _make
