"""
Module EPUB - Moteur de conteneur EPUB.

Ce module fournit l'accès aux archives, le parsing du document OPF,
la reconstruction de l'ordre de lecture et le séquencement des pages.
"""

from .archive import EpubArchive, open_archive
from .container import locate_package_document
from .package import parse_package
from .page_labels import extract_number_from_path, extract_page_number, extract_title
from .reading_order import build_reading_order
from .sequencer import PageSequencer

__all__ = [
    "EpubArchive",
    "PageSequencer",
    "build_reading_order",
    "extract_number_from_path",
    "extract_page_number",
    "extract_title",
    "locate_package_document",
    "open_archive",
    "parse_package",
]
