"""
Module d'extraction heuristique des numéros de page.

Les EPUB réels embarquent leurs numéros de page dans des titres aux
conventions incohérentes. On essaie, dans l'ordre :
1. Le marqueur de page CJK (第12页, 12頁, 第十二页)
2. Le motif latin "Page N"
3. La première suite de chiffres
"""

import posixpath
import re
from typing import Optional

from .markup import first_element_text

NO_PAGE = -1
_MAX_PAGE = 2**31 - 1

_CJK_DIGITS = {
    "〇": 0, "零": 0, "一": 1, "二": 2, "两": 2, "兩": 2, "三": 3, "四": 4,
    "五": 5, "六": 6, "七": 7, "八": 8, "九": 9,
}
_CJK_UNITS = {"十": 10, "百": 100, "千": 1000, "万": 10000, "萬": 10000}
_CJK_NUM = "[〇零一二两兩三四五六七八九十百千万萬]+"

_CJK_PAGE_RE = re.compile(r"第\s*(\d+|" + _CJK_NUM + r")\s*[页頁]|(\d+)\s*[页頁]")
_LATIN_PAGE_RE = re.compile(r"page\s*(\d+)", re.IGNORECASE)
_DIGITS_RE = re.compile(r"\d+")


def _parse_cjk_numeral(text: str) -> int:
    """Convertit un numéral idéographique (十二, 一百零五, 二〇三) en entier."""
    if all(ch in _CJK_DIGITS for ch in text):
        # Notation positionnelle : 二〇三 -> 203
        return int("".join(str(_CJK_DIGITS[ch]) for ch in text))
    total, section, digit = 0, 0, 0
    for ch in text:
        if ch in _CJK_DIGITS:
            digit = _CJK_DIGITS[ch]
        elif ch == "万" or ch == "萬":
            total += (section + digit) * 10000
            section, digit = 0, 0
        else:
            section += (digit or 1) * _CJK_UNITS[ch]
            digit = 0
    return total + section + digit


def _to_page(raw: str) -> int:
    try:
        value = int(raw) if raw.isdigit() else _parse_cjk_numeral(raw)
    except (ValueError, KeyError):
        return NO_PAGE
    return value if 0 <= value <= _MAX_PAGE else NO_PAGE


def extract_title(html_content: str) -> Optional[str]:
    """Premier <title> du document, ou None s'il est absent ou vide."""
    if not html_content:
        return None
    return first_element_text(html_content, "title") or None


def extract_page_number(title: Optional[str]) -> int:
    """
    Extrait un numéro de page depuis un titre.

    Returns:
        Le numéro trouvé, ou -1
    """
    if not title:
        return NO_PAGE
    m = _CJK_PAGE_RE.search(title)
    if m:
        return _to_page(m.group(1) or m.group(2))
    m = _LATIN_PAGE_RE.search(title)
    if m:
        return _to_page(m.group(1))
    m = _DIGITS_RE.search(title)
    if m:
        return _to_page(m.group(0))
    return NO_PAGE


def extract_number_from_path(path: str) -> int:
    """Dernier recours: première suite de chiffres du nom de fichier."""
    m = _DIGITS_RE.search(posixpath.basename(path or ""))
    return _to_page(m.group(0)) if m else NO_PAGE
