"""URL parsing and host helpers."""

from __future__ import annotations

import ipaddress
import re
import socket
from urllib.parse import urlsplit

from link_inspector.domain.url.models import NormalizedUrl

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*$")
_IPV4_RE = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
_NUMERIC_HOST_RE = re.compile(r"^(?:0x[0-9a-f]*|\d+)(?:\.(?:0x[0-9a-f]*|\d+))*\.?$")
# Schemes whose URLs must carry a host.
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_WWW_PREFIX = "www."


def _canonical_host(host: str) -> str | None:
    """Rewrite decimal/hex/octal IPv4 forms to dotted-quad and IDNA-encode non-ASCII hosts."""

    value = host.lower()
    if _NUMERIC_HOST_RE.match(value):
        try:
            packed = socket.inet_aton(value.rstrip("."))
        except OSError:
            return None
        return str(ipaddress.IPv4Address(packed))
    if not value.isascii():
        try:
            return value.encode("idna").decode("ascii")
        except UnicodeError:
            return None
    return value


def normalize(raw: str) -> NormalizedUrl | None:
    """Parse ``raw`` into its components, or return ``None`` when it is not a URL.

    Schemes such as ``mailto:`` or ``javascript:`` parse with an empty host;
    http(s) and the other network schemes need one.
    """

    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text or any(ch.isspace() or ord(ch) < 32 for ch in text):
        return None
    try:
        parts = urlsplit(text)
        # Accessing .port validates it; urlsplit alone does not.
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return None
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if not host:
        if scheme in _HOST_SCHEMES:
            return None
        return NormalizedUrl(raw=raw, scheme=scheme, host="", path=parts.path, query=parts.query, fragment=parts.fragment)
    canonical = _canonical_host(host)
    if canonical is None:
        return None
    return NormalizedUrl(
        raw=raw,
        scheme=scheme,
        host=canonical,
        path=parts.path or "/",
        query=parts.query,
        fragment=parts.fragment,
    )


def is_valid_url(raw: str) -> bool:
    """True for parsable http(s) URLs, the only ones worth collecting."""

    parsed = normalize(raw)
    return parsed is not None and parsed.is_http


def display_domain(host: str) -> str:
    value = (host or "").lower()
    if value.startswith(_WWW_PREFIX):
        return value[len(_WWW_PREFIX) :]
    return value


def same_domain(left: str, right: str) -> bool:
    return display_domain(left) == display_domain(right)


def is_ip_address(host: str) -> bool:
    value = (host or "").strip("[]")
    if _IPV4_RE.match(value):
        return True
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def url_domain(raw: str) -> str:
    parsed = normalize(raw)
    return parsed.host if parsed else "unknown"
