"""Minimal XML construction for XUnit documents.

Only what the ``<testsuite>`` schema needs: escaped attributes, verbatim
child content and CDATA blocks.
"""
import re
from typing import Any, Mapping, Optional

# characters XML 1.0 does not allow anywhere in a document, and lone surrogates UTF-8 cannot encode
_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

_ENTITIES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))


def escape(value: Any) -> str:
    text = "" if value is None else str(value)
    for raw, entity in _ENTITIES:
        text = text.replace(raw, entity)
    return _ILLEGAL.sub("\ufffd", text)


def tag(name: str, attrs: Optional[Mapping[str, Any]] = None, close: bool = False,
        content: Optional[str] = None) -> str:
    """Build ``<name attr="...">``.

    With ``close`` the element is self-closing and takes no content. Otherwise
    ``content`` (already serialized markup) is embedded as-is and followed by
    the closing tag; without content only the opening tag is returned.
    """
    if close and content:
        raise ValueError(f"Self-closing <{name}> cannot carry content")
    pairs = [f'{key}="{escape(value)}"' for key, value in (attrs or {}).items()]
    head = "<" + name + (" " + " ".join(pairs) if pairs else "")
    if close:
        return head + "/>"
    if content is None:
        return head + ">"
    return f"{head}>{content}</{name}>"


def cdata(text: Any) -> str:
    return "<![CDATA[" + escape(text) + "]]>"
