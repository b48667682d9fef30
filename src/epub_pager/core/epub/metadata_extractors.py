"""
Module d'extracteurs de métadonnées complémentaires.

Responsabilité unique: Fournir l'ISBN et la langue quand le document
OPF ne les donne pas directement sous une forme exploitable.
"""

import logging
import re
from typing import Iterable, Optional

from isbnlib import canonical, is_isbn10, is_isbn13
from langdetect import DetectorFactory, detect
from langdetect.lang_detect_exception import LangDetectException

from ...config import LANGDETECT_SAMPLE_CHARS

logger = logging.getLogger(__name__)

ISBN_RE = re.compile(r"(?:(?:ISBN(?:-1[03])?:?\s*)?)(97[89][ -]?)?[0-9][0-9 -]{8,}[0-9Xx]")

# Résultats reproductibles d'un appel à l'autre
DetectorFactory.seed = 0


def find_isbn(identifiers: Iterable[str]) -> Optional[str]:
    """
    Retourne le premier ISBN valide parmi les dc:identifier.

    Args:
        identifiers: Valeurs brutes (ex: 'urn:isbn:978-2-07-036822-8')

    Returns:
        ISBN canonique ou None
    """
    for candidate in identifiers:
        m = ISBN_RE.search(candidate or "")
        if not m:
            continue
        raw = m.group(0)
        if is_isbn10(raw) or is_isbn13(raw):
            return canonical(raw)
    return None


def detect_language_from_text(html_content: str) -> Optional[str]:
    """
    Détecte la langue depuis un document XHTML.

    Fallback utilisé quand la métadonnée dc:language est absente.

    Returns:
        Code de langue (ex: 'fr', 'en') ou None si échec
    """
    sample = re.sub("<[^<]+?>", "", html_content or "")[:LANGDETECT_SAMPLE_CHARS]
    if not sample.strip():
        return None
    try:
        lang = detect(sample)
    except LangDetectException:
        logger.info("Language detection failed.", exc_info=True)
        return None
    logger.info("Language detected from text: %s", lang)
    return lang
