"""
Module de reconstruction de l'ordre de lecture.

Compose spine + manifeste en une liste ordonnée d'entrées, puis ajoute
les images orphelines dans l'ordre d'énumération de l'archive. Cet ordre
est l'unique source de « l'ordre structurel » utilisé en aval.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models import Entry, ManifestMap, OrderedEntry, Spine
from .package import is_image_resource

logger = logging.getLogger(__name__)


def build_reading_order(
    spine: Spine,
    manifest: ManifestMap,
    archive_entries: Iterable[Entry],
    media_types: Optional[Dict[str, str]] = None,
) -> List[OrderedEntry]:
    """
    Construit l'ordre de lecture.

    Args:
        spine: idrefs dans l'ordre déclaré
        manifest: id -> chemin dans l'archive
        archive_entries: Entrées de l'archive (ordre d'énumération)
        media_types: id -> media-type déclaré (optionnel)

    Returns:
        Liste d'OrderedEntry indexées de 0 à n-1
    """
    media_types = media_types or {}
    entries = [e for e in archive_entries if not e.is_directory]
    existing = {e.path for e in entries}

    ordered: List[OrderedEntry] = []
    seen = set()

    def _append(path: str, is_image: bool):
        ordered.append(OrderedEntry(path=path, sequence_index=len(ordered), is_image=is_image))
        seen.add(path)

    for item_id in spine:
        path = manifest.get(item_id)
        if path is None or path not in existing:
            logger.debug("Dropping spine item %s (path %s not in archive)", item_id, path)
            continue
        if path in seen:
            continue
        _append(path, is_image_resource(path, media_types.get(item_id)))

    spine_count = len(ordered)
    for entry in entries:
        if entry.path not in seen and is_image_resource(entry.path):
            _append(entry.path, True)

    logger.debug(
        "Reading order: %d spine entr(y/ies), %d orphan image(s)",
        spine_count,
        len(ordered) - spine_count,
    )
    return ordered
