"""
Module de parsing du document OPF.

Responsabilité unique: Extraire titre, auteur, manifeste, spine et
couverture du document de package. Toute erreur produit un PackageInfo
vide : les métadonnées sont alors considérées comme indisponibles.
"""

import logging
import posixpath
from typing import Callable, Dict, Optional
from urllib.parse import unquote

from ...config import IMAGE_EXT
from ..errors import EpubError, MalformedPackageError
from ..models import PackageInfo
from .archive import EpubArchive, normalize_entry_path
from .markup import find_region, first_element_text, iter_element_texts, iter_tags

logger = logging.getLogger(__name__)


def resolve_href(opf_path: str, href: str) -> Optional[str]:
    """
    Résout un href du manifeste en chemin d'archive.

    Les href commençant par '/' sont relatifs à la racine de l'archive,
    les autres au dossier du document OPF.
    """
    href = unquote(href.split("#", 1)[0].strip())
    if not href:
        return None
    if href.startswith("/"):
        return normalize_entry_path(href.lstrip("/"))
    return normalize_entry_path(posixpath.join(posixpath.dirname(opf_path), href))


def is_image_resource(path: str, media_type: Optional[str] = None) -> bool:
    """Heuristique image: media-type image/* ou extension connue."""
    if media_type and media_type.lower().startswith("image/"):
        return True
    return path.lower().endswith(IMAGE_EXT)


# --- Stratégies de recherche de couverture ---


def _find_cover_by_properties(items: Dict[str, Dict[str, str]]) -> Optional[str]:
    for item_id, attrs in items.items():
        if "cover-image" in attrs.get("properties", "").split():
            return item_id
    return None


def _find_cover_by_meta(opf: str) -> Optional[str]:
    for attrs in iter_tags(opf, "meta"):
        if attrs.get("name", "").lower() == "cover" and attrs.get("content"):
            return attrs["content"].strip()
    return None


def _find_cover_by_id(items: Dict[str, Dict[str, str]]) -> Optional[str]:
    for item_id in items:
        if item_id.lower() == "cover":
            return item_id
    return None


def _find_cover(
    opf: str,
    items: Dict[str, Dict[str, str]],
    info: PackageInfo,
    has_entry: Callable[[str], bool],
) -> Optional[str]:
    """Applique les stratégies en cascade; seules les images présentes sont retenues."""
    for strategy in (
        lambda: _find_cover_by_properties(items),
        lambda: _find_cover_by_meta(opf),
        lambda: _find_cover_by_id(items),
    ):
        item_id = strategy()
        path = info.manifest.get(item_id) if item_id else None
        if not path or not is_image_resource(path, info.media_types.get(item_id)):
            continue
        if has_entry(path):
            return path
        logger.info("Declared cover %s is missing from the archive", path)
    return None


# --- Fonction principale ---


def _parse_package_text(opf: str, opf_path: str, has_entry: Callable[[str], bool]) -> PackageInfo:
    info = PackageInfo()
    info.title = first_element_text(opf, "title") or ""
    info.author = first_element_text(opf, "creator") or ""
    info.language = first_element_text(opf, "language") or None
    info.identifiers = list(iter_element_texts(opf, "identifier"))

    manifest_region = find_region(opf, "manifest")
    if manifest_region is None:
        raise MalformedPackageError(f"No <manifest> in {opf_path}")

    items: Dict[str, Dict[str, str]] = {}
    for attrs in iter_tags(manifest_region, "item"):
        item_id, href = attrs.get("id"), attrs.get("href")
        if not item_id or not href:
            continue
        path = resolve_href(opf_path, href)
        if path is None:
            logger.debug("Skipping manifest item %s with unusable href %r", item_id, href)
            continue
        items[item_id] = attrs
        info.manifest[item_id] = path
        if attrs.get("media-type"):
            info.media_types[item_id] = attrs["media-type"]

    spine_region = find_region(opf, "spine")
    if spine_region is not None:
        info.spine = [
            attrs["idref"] for attrs in iter_tags(spine_region, "itemref") if attrs.get("idref")
        ]
    else:
        logger.warning("No <spine> in %s", opf_path)

    info.cover_href = _find_cover(opf, items, info, has_entry)
    return info


def parse_package(archive: EpubArchive, opf_path: str) -> PackageInfo:
    """
    Parse le document OPF d'une archive.

    Args:
        archive: Archive EPUB ouverte
        opf_path: Chemin du document OPF dans l'archive

    Returns:
        PackageInfo rempli, ou vide si le document est illisible
    """
    try:
        opf = archive.read_text(opf_path)
        info = _parse_package_text(opf, opf_path, archive.has_entry)
    except EpubError as e:
        logger.warning("Package metadata unavailable for %s: %s", archive.path, e)
        return PackageInfo()

    logger.info(
        "Parsed package %s: title=%s, author=%s, %d manifest item(s), %d spine item(s), cover=%s",
        opf_path,
        info.title,
        info.author,
        len(info.manifest),
        len(info.spine),
        info.cover_href,
    )
    return info
