# epub_pager/src/epub_pager/main.py
"""
Point d'entrée principal pour EPUB Pager
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)

USAGE = """Usage: python -m epub_pager <folder_path>
       python -m epub_pager --pages <book.epub>
  folder_path: Chemin vers le dossier contenant les fichiers EPUB
  --pages: Affiche la séquence de pages d'un livre"""


def setup_logging():
    """Configure le système de logging."""
    ensure_directories()
    logger = logging.getLogger("epub_pager")
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "epub_pager.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(threadName)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def run_pages(epub_path: str) -> int:
    """Affiche la séquence de pages d'un livre."""
    from .cli import print_page_sequence
    from .core.book_service import BookService

    if not os.path.isfile(epub_path):
        print(f"Error: {epub_path} is not a file")
        return 1

    book = BookService().load_pages(epub_path)
    if book is None:
        print(f"Error: could not import {epub_path}")
        return 1
    print_page_sequence(book)
    return 0


def run_cli(argv=None) -> int:
    """Lance le mode ligne de commande."""
    logger = logging.getLogger("epub_pager")
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        print(USAGE)
        return 1

    if argv[0] == "--pages":
        if len(argv) < 2:
            print(USAGE)
            return 1
        return run_pages(argv[1])

    folder_path = argv[0]
    if not os.path.isdir(folder_path):
        print(f"Error: {folder_path} is not a valid directory")
        return 1

    try:
        from .cli import cli_scan_folder, print_scan_summary

        books = cli_scan_folder(folder_path)
        print_scan_summary(books)
        return 0
    except Exception as e:
        logger.exception("Error in CLI mode")
        print(f"Error: {e}")
        return 1


def main(argv=None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    return run_cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
