"""
Gestionnaire des tâches de fond (threading).
Le moteur est sans état : chaque tâche ouvre ses propres archives et
remet ses résultats à l'appelant via des callbacks.
"""

import logging
import threading
from typing import TYPE_CHECKING, Callable, Optional

from .core.book_service import BookService

if TYPE_CHECKING:
    from .core.models import BookPages, ScanEvent

logger = logging.getLogger(__name__)

# --- TÂCHE DE SCAN ---


def start_scan_task(
    service: BookService,
    root: str,
    on_event: Callable[["ScanEvent"], None],
    on_complete: Optional[Callable[[], None]] = None,
) -> threading.Thread:
    """Lance le thread de scan d'un dossier."""
    logger.debug("Starting scan task for %s", root)
    thread = threading.Thread(
        target=_scan_worker, args=(service, root, on_event, on_complete), daemon=True
    )
    thread.start()
    return thread


def _scan_worker(
    service: BookService,
    root: str,
    on_event: Callable[["ScanEvent"], None],
    on_complete: Optional[Callable[[], None]],
):
    """Logique exécutée dans le thread de scan."""
    try:
        for event in service.scan(root):
            on_event(event)
    except Exception:
        logger.exception("Scan task failed for %s", root)
    finally:
        if on_complete:
            on_complete()


# --- TÂCHE DE CHARGEMENT ---


def start_load_task(
    service: BookService,
    epub_path: str,
    on_loaded: Callable[[Optional["BookPages"]], None],
) -> threading.Thread:
    """Lance un thread dédié au chargement des pages d'un livre."""
    logger.debug("Starting load task for %s", epub_path)
    thread = threading.Thread(
        target=_load_worker, args=(service, epub_path, on_loaded), daemon=True
    )
    thread.start()
    return thread


def _load_worker(
    service: BookService,
    epub_path: str,
    on_loaded: Callable[[Optional["BookPages"]], None],
):
    """Worker pour charger un seul livre. on_loaded reçoit None en cas d'échec."""
    book = None
    try:
        book = service.load_pages(epub_path)
    except Exception:
        logger.exception("Load task failed for %s", epub_path)
    finally:
        on_loaded(book)
