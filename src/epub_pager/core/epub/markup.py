"""
Module de lecture tolérante du balisage XML/XHTML.

Responsabilité unique: Extraire des valeurs d'attributs et d'éléments
depuis un balisage semi-structuré, sans parser XML strict. Les préfixes
de namespace et la casse des noms de balises sont ignorés.
"""

import html
import re
from typing import Dict, Iterator, Optional

_ATTR_RE = re.compile(r"""([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""")
_TAG_STRIP_RE = re.compile(r"<[^>]*>")
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)


def _name_pattern(name: str) -> str:
    # Préfixe de namespace optionnel : <dc:title>, <opf:item>, <item>
    return r"(?:[\w.-]+:)?" + re.escape(name)


def _open_tag_re(name: str) -> "re.Pattern[str]":
    return re.compile(r"<" + _name_pattern(name) + r"(?=[\s/>])([^>]*)>", re.IGNORECASE)


def _close_tag_re(name: str) -> "re.Pattern[str]":
    return re.compile(r"</" + _name_pattern(name) + r"\s*>", re.IGNORECASE)


def parse_attributes(raw: str) -> Dict[str, str]:
    """Parse les attributs d'une balise ; clés en minuscules, préfixes retirés."""
    attrs: Dict[str, str] = {}
    raw = raw.rstrip()
    if raw.endswith("/"):
        raw = raw[:-1]
    for m in _ATTR_RE.finditer(raw):
        key = m.group(1).lower().split(":")[-1]
        value = next(v for v in m.groups()[1:] if v is not None)
        attrs.setdefault(key, html.unescape(value))
    return attrs


def find_region(text: str, name: str) -> Optional[str]:
    """
    Retourne le contenu entre <name ...> et </name>.

    Si la balise fermante manque, le contenu court jusqu'à la fin du texte.
    """
    start = _open_tag_re(name).search(text)
    if not start:
        return None
    if start.group(1).rstrip().endswith("/"):
        return ""
    end = _close_tag_re(name).search(text, start.end())
    return text[start.end() : end.start() if end else len(text)]


def iter_tags(text: str, name: str) -> Iterator[Dict[str, str]]:
    """Itère sur les attributs de chaque balise ouvrante (ou auto-fermante) name."""
    for m in _open_tag_re(name).finditer(text):
        yield parse_attributes(m.group(1))


def _clean_inner(inner: str) -> str:
    inner = _CDATA_RE.sub(r"\1", inner)
    return html.unescape(_TAG_STRIP_RE.sub("", inner)).strip()


def _iter_inner_texts(text: str, name: str) -> Iterator[str]:
    close_re = _close_tag_re(name)
    for start in _open_tag_re(name).finditer(text):
        if start.group(1).rstrip().endswith("/"):
            yield ""
            continue
        end = close_re.search(text, start.end())
        if not end:
            return
        yield _clean_inner(text[start.end() : end.start()])


def first_element_text(text: str, name: str) -> Optional[str]:
    """Texte du premier élément name (balises internes retirées), ou None."""
    return next(_iter_inner_texts(text, name), None)


def iter_element_texts(text: str, name: str) -> Iterator[str]:
    """Itère sur le texte de chaque élément name non vide."""
    return (value for value in _iter_inner_texts(text, name) if value)
