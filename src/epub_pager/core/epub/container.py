"""
Module de localisation du document OPF.

Lit l'entrée d'amorçage META-INF/container.xml. Ne lève jamais d'exception :
retourne toujours un chemin « meilleur effort ».
"""

import logging

from ...config import CONTAINER_PATH, DEFAULT_OPF_PATH
from ..errors import EpubError
from .archive import EpubArchive
from .markup import iter_tags

logger = logging.getLogger(__name__)


def _fallback_opf_path(archive: EpubArchive) -> str:
    """content.opf s'il existe, sinon le premier *.opf de l'archive."""
    paths = [e.path for e in archive.list_entries() if not e.is_directory]
    if DEFAULT_OPF_PATH in paths:
        return DEFAULT_OPF_PATH
    for path in paths:
        if path.lower().endswith(".opf"):
            return path
    return DEFAULT_OPF_PATH


def locate_package_document(archive: EpubArchive) -> str:
    """
    Trouve le chemin du document OPF.

    Args:
        archive: Archive EPUB ouverte

    Returns:
        Valeur du premier attribut full-path d'un élément rootfile,
        ou un chemin par défaut
    """
    try:
        text = archive.read_text(CONTAINER_PATH)
    except EpubError as e:
        logger.info("No usable %s in %s (%s), using fallback", CONTAINER_PATH, archive.path, e)
        return _fallback_opf_path(archive)

    for attrs in iter_tags(text, "rootfile"):
        full_path = attrs.get("full-path", "").strip()
        if full_path:
            return full_path.lstrip("/")

    logger.warning("Malformed %s in %s, using fallback", CONTAINER_PATH, archive.path)
    return _fallback_opf_path(archive)
