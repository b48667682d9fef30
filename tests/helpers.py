"""
Constructeurs de documents EPUB pour les tests.
"""

from typing import Dict, Optional, Sequence, Tuple

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def build_opf(
    items: Sequence[Tuple[str, str, str]],
    spine: Sequence[str],
    title: str = "Test Book",
    author: str = "Test Author",
    extra_metadata: str = "",
    extra_item_attrs: Optional[Dict[str, str]] = None,
) -> str:
    """Construit un document OPF. items: (id, href, media-type)."""
    extra_item_attrs = extra_item_attrs or {}
    manifest = "\n".join(
        f'    <item id="{i}" href="{h}" media-type="{m}" {extra_item_attrs.get(i, "")}/>'
        for i, h, m in items
    )
    itemrefs = "\n".join(f'    <itemref idref="{i}"/>' for i in spine)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:isbn:9780306406157</dc:identifier>
    <dc:title>{title}</dc:title>
    <dc:creator>{author}</dc:creator>
    <dc:language>en</dc:language>
    {extra_metadata}
  </metadata>
  <manifest>
{manifest}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>
"""


def xhtml(title: Optional[str] = None, body: str = "<p>Some text.</p>") -> str:
    head = f"<title>{title}</title>" if title is not None else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        f"<head>{head}</head><body>{body}</body></html>"
    )


