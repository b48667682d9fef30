"""
Extraction des ressources EPUB sur le stockage local.

Produit les fichiers consommés par la surface de rendu :
- <data>/epub_resources/<archiveStem>/... (arborescence de l'archive)
- <cache>/epub_images/<timestamp>_<nom> (images extraites à la demande)
- <data>/covers/<archiveStem>_cover<ext> (couvertures pour la bibliothèque)
"""

import logging
import os
import posixpath
from typing import Optional

from ..config import COVERS_DIR, IMAGE_CACHE_DIR, MAX_IMAGE_BYTES, RESOURCES_DIR, ensure_directory
from .epub import open_archive
from .errors import EpubError, ExtractionIOError, OversizedResourceError
from .file_utils import archive_stem, clear_directory, write_unique_file

logger = logging.getLogger(__name__)


def resources_dir_for(archive_path: str, resources_root: str = RESOURCES_DIR) -> str:
    """Dossier d'extraction dédié à une archive."""
    return os.path.join(resources_root, archive_stem(archive_path))


def extract_all(archive_path: str, dest_dir: str, clear_first: bool = True) -> int:
    """
    Extrait toute l'archive sous dest_dir.

    Args:
        archive_path: Chemin du fichier EPUB
        dest_dir: Dossier de destination
        clear_first: Vide dest_dir avant extraction (extraction idempotente)

    Returns:
        Nombre de fichiers écrits

    Raises:
        NotFoundError, CorruptArchiveError, ExtractionIOError
    """
    if clear_first:
        try:
            clear_directory(dest_dir)
        except OSError as e:
            raise ExtractionIOError(f"Cannot clear {dest_dir}: {e}") from e
    with open_archive(archive_path) as archive:
        return archive.extract_all(dest_dir)


def _check_size(entry_path: str, size: int, max_bytes: int):
    if size > max_bytes:
        raise OversizedResourceError(entry_path, size, max_bytes)


def extract_single(
    archive_path: str,
    entry_path: str,
    cache_dir: Optional[str] = None,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> str:
    """
    Extrait une seule entrée vers le cache, sous un nom sans collision.

    Returns:
        Chemin du fichier écrit, ou "" si l'entrée est absente, illisible
        ou trop volumineuse (aucune écriture dans ce cas)
    """
    cache_dir = cache_dir or IMAGE_CACHE_DIR
    try:
        with open_archive(archive_path) as archive:
            _check_size(entry_path, archive.entry_size(entry_path), max_bytes)
            data = archive.read_entry(entry_path)
    except OversizedResourceError as e:
        logger.warning("Oversized resource skipped in %s: %s", archive_path, e)
        return ""
    except EpubError as e:
        logger.warning("Cannot extract %s from %s: %s", entry_path, archive_path, e)
        return ""

    try:
        ensure_directory(cache_dir)
        path = write_unique_file(cache_dir, posixpath.basename(entry_path), data)
    except OSError:
        logger.exception("Failed to write %s to %s", entry_path, cache_dir)
        return ""
    logger.debug("Extracted %s -> %s", entry_path, path)
    return path


def extract_cover(
    archive_path: str,
    cover_href: Optional[str],
    covers_dir: Optional[str] = None,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> str:
    """
    Copie l'image de couverture vers <covers>/<archiveStem>_cover<ext>.

    Returns:
        Chemin de la couverture, ou "" si absente
    """
    if not cover_href:
        return ""
    covers_dir = covers_dir or COVERS_DIR
    ext = posixpath.splitext(cover_href)[1].lower() or ".jpg"
    target = os.path.join(covers_dir, f"{archive_stem(archive_path)}_cover{ext}")
    try:
        with open_archive(archive_path) as archive:
            _check_size(cover_href, archive.entry_size(cover_href), max_bytes)
            data = archive.read_entry(cover_href)
        ensure_directory(covers_dir)
        with open(target, "wb") as out:
            out.write(data)
    except OversizedResourceError as e:
        logger.warning("Oversized cover skipped in %s: %s", archive_path, e)
        return ""
    except (EpubError, OSError) as e:
        logger.warning("Could not extract cover image for %s: %s", archive_path, e)
        return ""
    logger.info("Cover image extracted for %s -> %s", archive_path, target)
    return target
