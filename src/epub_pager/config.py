# epub_pager/src/epub_pager/config.py
"""
Configuration et constantes pour EPUB Pager
"""

import os
import threading

# ---------- Dossiers ----------
DATA_DIR = os.getenv("EPUB_PAGER_DATA_DIR", "data")
CACHE_DIR = os.getenv("EPUB_PAGER_CACHE_DIR", ".cache")
RESOURCES_DIR = os.path.join(DATA_DIR, "epub_resources")
COVERS_DIR = os.path.join(DATA_DIR, "covers")
IMAGE_CACHE_DIR = os.path.join(CACHE_DIR, "epub_images")
LOG_DIR = "logs"

# ---------- Extensions supportées ----------
SUPPORTED_EXT = (".epub",)
IMAGE_EXT = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".svg")

# ---------- Conteneur EPUB ----------
CONTAINER_PATH = "META-INF/container.xml"
DEFAULT_OPF_PATH = "content.opf"

# ---------- Limites ----------
MAX_IMAGE_BYTES = int(os.getenv("EPUB_PAGER_MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))  # 10MB
LANGDETECT_SAMPLE_CHARS = 3000

# ---------- Configuration logging ----------
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"

# ---------- Valeurs par défaut ----------
UNKNOWN_AUTHOR = "Unknown"
COVER_PAGE_TITLE = "Cover"


# ---------- Initialisation des dossiers ----------
_dirs_lock = threading.Lock()


def ensure_directory(path: str) -> str:
    """Crée un dossier s'il n'existe pas (idempotent, thread-safe)."""
    with _dirs_lock:
        os.makedirs(path, exist_ok=True)
    return path


def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    for path in (LOG_DIR, RESOURCES_DIR, COVERS_DIR, IMAGE_CACHE_DIR):
        ensure_directory(path)
