"""
Logique pour les opérations sur le système de fichiers (trouver, nommer, écrire).
"""

import logging
import os
import re
import shutil
import time
from pathlib import Path
from typing import List

from ..config import SUPPORTED_EXT

logger = logging.getLogger(__name__)


def find_epubs_in_folder(folder: str) -> List[str]:
    """Trouve tous les fichiers EPUB dans un dossier et ses sous-dossiers (ordre trié)."""
    files = []
    for root, dirnames, filenames in os.walk(folder):
        dirnames.sort()
        for f in sorted(filenames):
            if f.lower().endswith(SUPPORTED_EXT):
                files.append(os.path.join(root, f))
    logger.info("Found %d epub(s) in folder %s", len(files), folder)
    return files


def sanitize_filename(value: str) -> str:
    """Nettoie un texte pour un nom de fichier valide."""
    value = re.sub(r'[\\/*?:"<>|]', "", value)
    value = re.sub(r"\s+", " ", value)
    return value.strip()


def archive_stem(archive_path: str) -> str:
    """Nom de l'archive sans extension, nettoyé."""
    return sanitize_filename(Path(archive_path).stem) or "book"


def clear_directory(path: str) -> None:
    """Supprime un dossier et son contenu s'il existe."""
    if os.path.isdir(path):
        shutil.rmtree(path)
        logger.debug("Cleared %s", path)


def write_unique_file(folder: str, original_name: str, data: bytes) -> str:
    """
    Écrit data dans folder sous le nom <timestamp>_<original_name>.

    En cas de collision, un compteur est ajouté au nom. Le fichier est
    créé en mode exclusif, donc deux écritures concurrentes ne
    s'écrasent jamais.

    Returns:
        Chemin du fichier écrit
    """
    ts = int(time.time() * 1000)
    name = sanitize_filename(os.path.basename(original_name)) or "resource"
    stem, ext = os.path.splitext(name)

    candidate = f"{ts}_{name}"
    counter = 1
    while True:
        path = os.path.join(folder, candidate)
        try:
            with open(path, "xb") as out:
                out.write(data)
            return path
        except FileExistsError:
            candidate = f"{ts}_{stem} ({counter}){ext}"
            counter += 1
