from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

# id de ressource -> chemin dans l'archive
ManifestMap = Dict[str, str]
# idrefs dans l'ordre de lecture déclaré
Spine = List[str]


@dataclass(frozen=True)
class Entry:
    """Entrée d'une archive EPUB (chemin interne séparé par '/')."""

    path: str
    size_bytes: int
    is_directory: bool = False


@dataclass
class PackageInfo:
    """Résultat du parsing du document OPF."""

    title: str = ""
    author: str = ""
    manifest: ManifestMap = field(default_factory=dict)
    spine: Spine = field(default_factory=list)
    cover_href: Optional[str] = None
    media_types: Dict[str, str] = field(default_factory=dict)
    language: Optional[str] = None
    identifiers: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class OrderedEntry:
    path: str
    sequence_index: int
    is_image: bool = False


class PageKind(Enum):
    TEXT = "text"
    IMAGE = "image"


@dataclass
class PageCandidate:
    """Page avant tri : ordre structurel + numéro extrait (-1 si absent)."""

    source_path: str
    structural_order: int
    extracted_page_label: int = -1
    title: Optional[str] = None
    html_body: str = ""
    kind: PageKind = PageKind.TEXT


@dataclass
class Page:
    """Page finale, numérotée de 1 à N."""

    kind: PageKind
    content: str
    page_number: int
    is_first: bool = False
    is_last: bool = False
    title: Optional[str] = None
    source_path: Optional[str] = None


@dataclass(frozen=True)
class SequenceWarning:
    path: str
    reason: str


@dataclass
class BookMetadata:
    """Métadonnées transmises au dépôt de livres."""

    title: str
    author: str
    cover_path: str
    file_path: str
    file_size: int
    total_page_count: int = 0
    language: Optional[str] = None
    isbn: Optional[str] = None


@dataclass
class BookPages:
    """Livre prêt pour l'affichage : pages + dossier de base des ressources."""

    metadata: BookMetadata
    pages: List[Page]
    base_dir: str
    warnings: List[SequenceWarning] = field(default_factory=list)


@dataclass(frozen=True)
class ScanEvent:
    progress_percent: int
    current_file_name: str
    books_found_so_far: Tuple[BookMetadata, ...] = ()
    is_complete: bool = False
