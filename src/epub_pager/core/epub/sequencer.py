"""
Module de séquencement des pages.

Réconcilie les numéros de page extraits du contenu avec l'ordre
structurel, synthétise une page de couverture et émet la liste finale.

Règle de tri: un numéro explicite (> 0) l'emporte sur l'ordre du spine ;
les pages sans numéro passent après toutes les pages numérotées, et les
égalités se résolvent par ordre structurel.
"""

import html
import logging
import posixpath
import sys
from typing import List, Mapping, Optional, Sequence

from ...config import COVER_PAGE_TITLE
from ..models import OrderedEntry, Page, PageCandidate, PageKind, SequenceWarning
from .page_labels import extract_number_from_path, extract_page_number, extract_title

logger = logging.getLogger(__name__)

UNLABELED_SENTINEL = sys.maxsize

COVER_TEMPLATE = (
    '<html><head><title>{title}</title></head>'
    '<body style="margin:0;text-align:center">'
    '<img src="{src}" alt="{title}" style="max-width:100%;max-height:100%"/>'
    "</body></html>"
)


def cover_page_html(cover_href: str, title: str = COVER_PAGE_TITLE) -> str:
    """
    Enveloppe HTML minimale autour de l'image de couverture.

    cover_href est relatif au dossier de la page, c'est-à-dire au dossier
    de l'image elle-même (la page porte source_path = chemin de l'image).
    """
    return COVER_TEMPLATE.format(src=html.escape(cover_href, quote=True), title=html.escape(title))


def sort_key(candidate: PageCandidate):
    label = candidate.extracted_page_label
    return (label if label > 0 else UNLABELED_SENTINEL, candidate.structural_order)


class PageSequencer:
    """
    Produit la séquence finale de pages.

    Après chaque appel à sequence(), `warnings` contient les documents
    ignorés (contenu absent ou illisible).
    """

    def __init__(self, paginate_images: bool = False):
        self.paginate_images = paginate_images
        self.warnings: List[SequenceWarning] = []

    def _warn(self, path: str, reason: str):
        logger.warning("Skipping %s: %s", path, reason)
        self.warnings.append(SequenceWarning(path=path, reason=reason))

    def _text_candidate(self, entry: OrderedEntry, body: str) -> PageCandidate:
        title = extract_title(body)
        label = extract_page_number(title)
        if label < 0:
            label = extract_number_from_path(entry.path)
        return PageCandidate(
            source_path=entry.path,
            structural_order=entry.sequence_index,
            extracted_page_label=label,
            title=title,
            html_body=body,
        )

    def build_candidates(
        self, ordered_entries: Sequence[OrderedEntry], rendered_content: Mapping[str, str]
    ) -> List[PageCandidate]:
        candidates = []
        for entry in ordered_entries:
            if entry.is_image:
                if self.paginate_images:
                    candidates.append(
                        PageCandidate(
                            source_path=entry.path,
                            structural_order=entry.sequence_index,
                            extracted_page_label=extract_number_from_path(entry.path),
                            kind=PageKind.IMAGE,
                        )
                    )
                continue
            body = rendered_content.get(entry.path)
            if body is None:
                self._warn(entry.path, "content unavailable")
                continue
            candidates.append(self._text_candidate(entry, body))
        return candidates

    def sequence(
        self,
        ordered_entries: Sequence[OrderedEntry],
        rendered_content: Mapping[str, str],
        cover_href: Optional[str] = None,
    ) -> List[Page]:
        """
        Calcule la séquence de pages.

        Args:
            ordered_entries: Sortie du constructeur d'ordre de lecture
            rendered_content: chemin -> HTML des documents texte lisibles
            cover_href: Chemin de l'image de couverture (optionnel)

        Returns:
            Pages numérotées de 1 à N ; liste vide si le livre n'est pas ordonnable
        """
        self.warnings = []
        candidates = sorted(self.build_candidates(ordered_entries, rendered_content), key=sort_key)

        pages: List[Page] = []
        if cover_href:
            pages.append(
                Page(
                    kind=PageKind.TEXT,
                    content=cover_page_html(posixpath.basename(cover_href)),
                    page_number=0,
                    title=COVER_PAGE_TITLE,
                    source_path=cover_href,
                )
            )
        for c in candidates:
            pages.append(
                Page(
                    kind=c.kind,
                    content=c.html_body if c.kind is PageKind.TEXT else c.source_path,
                    page_number=0,
                    title=c.title,
                    source_path=c.source_path,
                )
            )

        for number, page in enumerate(pages, start=1):
            page.page_number = number
            page.is_first = number == 1
            page.is_last = number == len(pages)

        logger.info(
            "Sequenced %d page(s) (%d candidate(s), cover=%s, %d warning(s))",
            len(pages),
            len(candidates),
            bool(cover_href),
            len(self.warnings),
        )
        return pages
