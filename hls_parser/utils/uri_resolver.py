"""Resolve playlist references against the playlist's own URI."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def has_scheme(uri: str) -> bool:
    return bool(_SCHEME_RE.match(uri))


def resolve_uri(base_uri: str, reference: str) -> str:
    """Resolves ``reference`` against ``base_uri``.

    Absolute references are returned unchanged, network-path references
    (``//host/x``) take the base scheme, absolute-path references (``/x``)
    take the base scheme and authority, and anything else is appended to
    the base directory. Dot segments are left as they are.
    """

    if not reference:
        return base_uri
    if has_scheme(reference) or not base_uri:
        return reference

    parts = urlsplit(base_uri)
    if reference.startswith("//"):
        return f"{parts.scheme}:{reference}" if parts.scheme else reference

    if parts.netloc or (parts.scheme and base_uri[len(parts.scheme) + 1 :].startswith("//")):
        origin = f"{parts.scheme}://{parts.netloc}" if parts.scheme else f"//{parts.netloc}"
    elif parts.scheme:
        origin = f"{parts.scheme}:"
    else:
        origin = ""

    if reference.startswith("/"):
        return f"{origin}{reference}"

    path = parts.path
    if parts.netloc and not path:
        path = "/"
    directory = path[: path.rfind("/") + 1]
    return f"{origin}{directory}{reference}"
