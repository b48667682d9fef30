"""
Module d'accès aux archives EPUB.

Responsabilité unique: Ouvrir un conteneur ZIP, lister, lire et extraire
ses entrées. Chaque opération ouvre puis referme sa propre archive.
"""

import logging
import os
import posixpath
import zipfile
import zlib
from typing import List, Optional

from ..errors import (
    CorruptArchiveError,
    EntryNotFoundError,
    ExtractionIOError,
    NotFoundError,
)
from ..models import Entry

logger = logging.getLogger(__name__)


def normalize_entry_path(path: str) -> Optional[str]:
    """
    Normalise un chemin interne d'archive.

    Returns:
        Chemin relatif normalisé, ou None s'il sort de la racine
        (chemin absolu, lettre de lecteur, segments '..').
    """
    path = path.replace("\\", "/")
    if path.startswith("/") or (len(path) > 1 and path[1] == ":"):
        return None
    normalized = posixpath.normpath(path)
    if normalized in (".", "") or normalized == ".." or normalized.startswith("../"):
        return None
    return normalized


class EpubArchive:
    """Archive EPUB ouverte. À utiliser comme gestionnaire de contexte."""

    def __init__(self, path: str, zf: zipfile.ZipFile):
        self.path = path
        self._zf = zf

    def __enter__(self) -> "EpubArchive":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self._zf.close()

    def list_entries(self) -> List[Entry]:
        """Liste les entrées dans l'ordre d'énumération de l'archive."""
        return [
            Entry(path=info.filename, size_bytes=info.file_size, is_directory=info.is_dir())
            for info in self._zf.infolist()
        ]

    def has_entry(self, entry_path: str) -> bool:
        try:
            self._zf.getinfo(entry_path)
            return True
        except KeyError:
            return False

    def entry_size(self, entry_path: str) -> int:
        try:
            return self._zf.getinfo(entry_path).file_size
        except KeyError:
            raise EntryNotFoundError(entry_path) from None

    def read_entry(self, entry_path: str) -> bytes:
        try:
            return self._zf.read(entry_path)
        except KeyError:
            raise EntryNotFoundError(entry_path) from None
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as e:
            raise CorruptArchiveError(f"Cannot read {entry_path} from {self.path}: {e}") from e

    def read_text(self, entry_path: str) -> str:
        """Lit une entrée et la décode en UTF-8 (caractères invalides remplacés)."""
        return self.read_entry(entry_path).decode("utf-8", errors="replace")

    def extract_all(self, dest_dir: str) -> int:
        """
        Recrée l'arborescence interne de l'archive sous dest_dir.

        Les entrées dont le chemin sortirait de dest_dir sont ignorées.

        Returns:
            Nombre de fichiers écrits
        """
        root = os.path.realpath(dest_dir)
        count = 0
        try:
            os.makedirs(root, exist_ok=True)
            for info in self._zf.infolist():
                rel = normalize_entry_path(info.filename)
                target = os.path.realpath(os.path.join(root, rel)) if rel else None
                if target is None or os.path.commonpath([root, target]) != root:
                    logger.warning("Skipping unsafe entry %r in %s", info.filename, self.path)
                    continue
                if info.is_dir():
                    os.makedirs(target, exist_ok=True)
                    continue
                os.makedirs(os.path.dirname(target), exist_ok=True)
                with open(target, "wb") as out:
                    out.write(self.read_entry(info.filename))
                count += 1
        except OSError as e:
            raise ExtractionIOError(f"Extraction to {dest_dir} failed: {e}") from e
        logger.info("Extracted %d file(s) from %s to %s", count, self.path, dest_dir)
        return count


def open_archive(path: str) -> EpubArchive:
    """
    Ouvre une archive EPUB.

    Raises:
        NotFoundError: si le fichier n'existe pas
        CorruptArchiveError: si le fichier n'est pas un ZIP lisible
    """
    if not os.path.isfile(path):
        raise NotFoundError(f"Archive not found: {path}")
    try:
        return EpubArchive(path, zipfile.ZipFile(path))
    except (zipfile.BadZipFile, zlib.error, EOFError, OSError) as e:
        raise CorruptArchiveError(f"Cannot open {path}: {e}") from e
