"""
Scanner de dossiers EPUB.

Parcourt un dossier et fait passer chaque archive dans le moteur en
émettant la progression sous forme de générateur. Le consommateur qui
arrête d'itérer arrête le travail.
"""

import logging
import os
from typing import Callable, Iterator, List, Optional

from .file_utils import find_epubs_in_folder
from .models import BookMetadata, ScanEvent

logger = logging.getLogger(__name__)

BookParser = Callable[[str], Optional[BookMetadata]]


def scan_folder(root: str, parser: BookParser) -> Iterator[ScanEvent]:
    """
    Scanne un dossier (récursivement) à la recherche d'EPUB.

    Args:
        root: Dossier racine
        parser: Fonction chemin -> BookMetadata (ou None si échec)

    Yields:
        Un ScanEvent avant chaque fichier, puis un événement final
        is_complete=True (toujours émis, même pour un dossier vide ou absent)
    """
    if not os.path.isdir(root):
        logger.warning("Scan root %s is not a directory", root)
        yield ScanEvent(100, "", (), True)
        return

    files = find_epubs_in_folder(root)
    found: List[BookMetadata] = []

    for processed, path in enumerate(files):
        progress = processed * 100 // len(files)
        yield ScanEvent(progress, os.path.basename(path), tuple(found))

        try:
            book = parser(path)
        except Exception:
            logger.exception("Error parsing %s during scan", path)
            book = None
        if book is not None:
            found.append(book)

    logger.info("Scan of %s complete: %d/%d book(s)", root, len(found), len(files))
    yield ScanEvent(100, "", tuple(found), True)
