# epub_pager/src/epub_pager/cli.py
"""
Logique pour le mode ligne de commande.

Utilise BookService pour réutiliser la logique du moteur.
"""

import logging
from typing import List, Optional

from .core.book_service import BookService
from .core.models import BookMetadata, BookPages
from .core.repository import InMemoryBookRepository

logger = logging.getLogger(__name__)


def cli_scan_folder(folder: str, service: Optional[BookService] = None) -> List[BookMetadata]:
    """
    Scanne un dossier entier en mode CLI.

    Args:
        folder: Chemin vers le dossier contenant les EPUBs
        service: Service à utiliser (un nouveau par défaut)

    Returns:
        Liste des livres importés
    """
    logger.info("CLI mode - scanning folder: %s", folder)
    service = service or BookService()
    repository = InMemoryBookRepository()

    last_progress = -1
    for event in service.import_folder(repository, folder):
        if event.current_file_name and event.progress_percent != last_progress:
            print(f"[{event.progress_percent:3d}%] {event.current_file_name}")
            last_progress = event.progress_percent

    books = repository.all()
    logger.info("CLI mode - imported %d book(s)", len(books))
    return books


def print_scan_summary(books: List[BookMetadata]):
    """Affiche un résumé des livres importés."""
    print("\n=== Résumé du scan ===")
    print(f"Livres trouvés: {len(books)}")

    for book in books:
        print(f"\n{book.title} - {book.author}")
        print(f"  Fichier: {book.file_path} ({book.file_size} octets)")
        print(f"  Pages: {book.total_page_count}")
        if book.language:
            print(f"  Langue: {book.language}")
        if book.isbn:
            print(f"  ISBN: {book.isbn}")
        if book.cover_path:
            print(f"  Couverture: {book.cover_path}")


def print_page_sequence(book: BookPages):
    """Affiche la séquence de pages d'un livre."""
    print(f"\n=== {book.metadata.title} ({len(book.pages)} pages) ===")
    print(f"Ressources: {book.base_dir}")
    for page in book.pages:
        flags = "".join(["F" if page.is_first else "", "L" if page.is_last else ""])
        print(f"  {page.page_number:4d} {page.kind.value:5s} {flags:2s} {page.source_path} "
              f"{page.title or ''}")
    for warning in book.warnings:
        print(f"  ! {warning.path}: {warning.reason}")
