"""
Service de lecture EPUB.

Service réutilisable qui orchestre tout le workflow du moteur:
localisation du document OPF, parsing, ordre de lecture, séquencement
des pages et extraction des ressources.

Ce service est utilisé à la fois par le mode CLI et par les tâches de
fond pour éviter la duplication de logique.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..config import COVERS_DIR, MAX_IMAGE_BYTES, RESOURCES_DIR, UNKNOWN_AUTHOR
from .epub import (
    PageSequencer,
    build_reading_order,
    locate_package_document,
    open_archive,
    parse_package,
)
from .epub.archive import EpubArchive
from .epub.metadata_extractors import detect_language_from_text, find_isbn
from .errors import EpubError
from .folder_scanner import scan_folder
from .models import BookMetadata, BookPages, OrderedEntry, PackageInfo, Page, ScanEvent
from .repository import BookRepository
from .resource_extractor import extract_all, extract_cover, resources_dir_for

logger = logging.getLogger(__name__)


class BookService:
    """
    Service de lecture EPUB.

    Fournit les opérations de haut niveau du moteur:
    - Extraction des métadonnées et du nombre de pages d'un livre
    - Chargement de la séquence de pages pour l'affichage
    - Synchronisation du nombre de pages avec le dépôt
    - Scan et import d'un dossier entier
    """

    def __init__(
        self,
        resources_root: str = RESOURCES_DIR,
        covers_dir: str = COVERS_DIR,
        max_image_bytes: int = MAX_IMAGE_BYTES,
        paginate_images: bool = False,
    ):
        self.resources_root = resources_root
        self.covers_dir = covers_dir
        self.max_image_bytes = max_image_bytes
        self.paginate_images = paginate_images
        logger.debug("BookService initialized (resources=%s)", resources_root)

    # --- Pipeline ---

    def _read_structure(
        self, archive: EpubArchive
    ) -> Tuple[PackageInfo, List[OrderedEntry], Dict[str, str]]:
        """Parse le package, construit l'ordre de lecture et lit les documents texte."""
        opf_path = locate_package_document(archive)
        info = parse_package(archive, opf_path)
        ordered = build_reading_order(
            info.spine, info.manifest, archive.list_entries(), info.media_types
        )

        content: Dict[str, str] = {}
        for entry in ordered:
            if entry.is_image:
                continue
            try:
                content[entry.path] = archive.read_text(entry.path)
            except EpubError as e:
                logger.warning("Unreadable document %s in %s: %s", entry.path, archive.path, e)
        return info, ordered, content

    def _sequence(self, epub_path: str):
        with open_archive(epub_path) as archive:
            info, ordered, content = self._read_structure(archive)
        sequencer = PageSequencer(paginate_images=self.paginate_images)
        pages = sequencer.sequence(ordered, content, info.cover_href)
        return info, pages, content, sequencer.warnings

    def _build_metadata(
        self, epub_path: str, info: PackageInfo, pages: List[Page], content: Dict[str, str]
    ) -> BookMetadata:
        language = info.language
        if not language and content:
            language = detect_language_from_text(next(iter(content.values())))

        return BookMetadata(
            title=info.title or Path(epub_path).stem,
            author=info.author or UNKNOWN_AUTHOR,
            cover_path=extract_cover(
                epub_path, info.cover_href, self.covers_dir, self.max_image_bytes
            ),
            file_path=epub_path,
            file_size=os.path.getsize(epub_path),
            total_page_count=len(pages),
            language=language,
            isbn=find_isbn(info.identifiers),
        )

    # --- Opérations publiques ---

    def parse_book(self, epub_path: str) -> Optional[BookMetadata]:
        """
        Extrait les métadonnées d'un fichier EPUB.

        Args:
            epub_path: Chemin vers le fichier EPUB

        Returns:
            BookMetadata (total_page_count = longueur de la séquence de pages),
            ou None si l'archive est introuvable ou illisible
        """
        try:
            info, pages, content, _ = self._sequence(epub_path)
        except EpubError as e:
            logger.warning("Could not import %s: %s", epub_path, e)
            return None

        meta = self._build_metadata(epub_path, info, pages, content)
        logger.info(
            "Parsed %s: title=%s, author=%s, pages=%d", epub_path, meta.title, meta.author,
            meta.total_page_count,
        )
        return meta

    def load_pages(self, epub_path: str) -> Optional[BookPages]:
        """
        Prépare un livre pour l'affichage.

        Extrait les ressources sous <resources>/<archiveStem>/ et calcule la
        séquence de pages. Les références relatives d'une page se résolvent
        depuis base_dir / dirname(page.source_path).

        Returns:
            BookPages, ou None si l'archive est illisible ou l'extraction échoue
        """
        base_dir = resources_dir_for(epub_path, self.resources_root)
        try:
            extract_all(epub_path, base_dir)
            info, pages, content, warnings = self._sequence(epub_path)
        except EpubError as e:
            logger.warning("Could not load pages of %s: %s", epub_path, e)
            return None

        meta = self._build_metadata(epub_path, info, pages, content)
        return BookPages(metadata=meta, pages=pages, base_dir=base_dir, warnings=warnings)

    def sync_page_count(self, repository: BookRepository, book_id: int, total: int) -> bool:
        """
        Corrige le nombre de pages stocké s'il diffère du nombre calculé.

        Returns:
            True si le dépôt a été mis à jour
        """
        stored = repository.get(book_id)
        if stored is None or stored.total_page_count == total:
            return False
        logger.info(
            "Correcting page count of book %d (%s): %d -> %d",
            book_id, stored.title, stored.total_page_count, total,
        )
        repository.update(book_id, replace(stored, total_page_count=total))
        return True

    def open_book(self, repository: BookRepository, book_id: int) -> Optional[BookPages]:
        """Charge un livre du dépôt et corrige son nombre de pages si besoin."""
        stored = repository.get(book_id)
        if stored is None:
            logger.warning("Book %d not found in repository", book_id)
            return None
        book = self.load_pages(stored.file_path)
        if book is not None:
            self.sync_page_count(repository, book_id, len(book.pages))
        return book

    def scan(self, root: str) -> Iterator[ScanEvent]:
        """Scanne un dossier et retourne le flux d'événements de progression."""
        return scan_folder(root, self.parse_book)

    def import_folder(self, repository: BookRepository, root: str) -> Iterator[ScanEvent]:
        """Scanne un dossier et insère chaque livre trouvé dans le dépôt."""
        inserted = 0
        for event in self.scan(root):
            for book in event.books_found_so_far[inserted:]:
                repository.insert(book)
                inserted += 1
            yield event
