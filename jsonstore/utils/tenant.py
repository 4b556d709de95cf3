import re
from typing import Mapping, Optional
from urllib.parse import urlsplit

from jsonstore.Logger.log_main import get_logger

logger = get_logger()

DEFAULT_TENANT = "default"
_UNSAFE = re.compile(r"[^A-Za-z0-9.-]")

def sanitize_tenant_key(raw: str) -> str:
    """
    Make `raw` usable as a single path segment.
    172.16.50.100:4200 -> 172.16.50.100-4200
    """
    key = _UNSAFE.sub("_", raw.strip().replace(":", "-"))
    if not key:
        return DEFAULT_TENANT
    # "." and ".." would point at the storage root or above it
    if not key.strip("."):
        key = key.replace(".", "_")
    return key

def _origin_host(origin: str, include_port: bool) -> Optional[str]:
    try:
        parts = urlsplit(origin)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        hostname = None
    if not hostname:
        logger.warning("invalid_origin_header", extra={"error": origin})
        return None
    if not include_port:
        return hostname
    return f"{hostname}:{port or 80}"

def _strip_port(host: str) -> str:
    if host.startswith("["):
        # bracketed IPv6 literal, e.g. [::1]:8080
        return host[1:host.index("]")] if "]" in host else host
    return host.rsplit(":", 1)[0] if host.count(":") == 1 else host

def resolve_tenant(headers: Mapping[str, str], override_header: str = "X-Host", include_port: bool = True) -> str:
    """
    Tenant key for a request.

    Precedence: explicit override header, then the Origin URL, then the
    transport Host header. A malformed Origin is logged and skipped.
    """
    override = (headers.get(override_header) or "").strip() if override_header else ""
    if override:
        return sanitize_tenant_key(override)

    origin = (headers.get("Origin") or "").strip()
    if origin:
        host = _origin_host(origin, include_port)
        if host:
            return sanitize_tenant_key(host)

    host = (headers.get("Host") or "").strip()
    if host:
        return sanitize_tenant_key(host if include_port else _strip_port(host))

    return DEFAULT_TENANT
