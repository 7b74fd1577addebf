"""URL normalisation and image reference resolution."""

from __future__ import annotations

import re
from typing import Dict
from urllib.parse import urlparse

from .errors import InvalidURL
from .models import PageContext

DOMAIN_PATTERN = re.compile(
    r"^(http://www\.|https://www\.|http://|https://)?([a-z0-9]+\.)*[a-z0-9]+\.[a-z]+"
)
FRAGMENT_OR_QUERY = re.compile(r"[#?]")

DEFAULT_IMAGE_EXTENSION = "jpg"
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
IMAGE_MIME_TYPES: Dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
}


def normalize_page_url(raw_url: str) -> str:
    """Prefix bare domains with ``https://``."""
    url = raw_url.strip()
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return f"https://{url}"


def extract_domain(url: str) -> str:
    """Return the scheme-and-host prefix of ``url`` matched by ``DOMAIN_PATTERN``."""
    match = DOMAIN_PATTERN.match(url)
    if not match:
        raise InvalidURL(url)
    return match.group(0)


def page_protocol(url: str) -> str:
    return "https://" if url.startswith("https://") else "http://"


def build_page_context(url: str) -> PageContext:
    """Derive domain, protocol and path for a normalised page URL."""
    domain = extract_domain(url)
    return PageContext(
        url=url,
        domain=domain,
        protocol=page_protocol(url),
        path=urlparse(url).path or "/",
    )


def resolve_image_url(reference: str, domain: str, protocol: str) -> str:
    """Turn a raw ``src`` value into an absolute URL.

    Host-relative references are joined to ``domain`` first; the result then
    goes through the protocol rules, so a domain that already carries a scheme
    is left alone while a bare one receives ``protocol``.
    """
    value = reference
    if value.startswith("/") and not value.startswith("//"):
        value = f"{domain}{value}"

    if value.startswith("//"):
        return f"https:{value}"
    if value.startswith(("http://", "https://")):
        return value
    return f"{protocol}{value}"


def get_image_extension(reference: str) -> str:
    """Guess the file extension from the original (unresolved) reference."""
    without_suffix = FRAGMENT_OR_QUERY.split(reference, maxsplit=1)[0]
    segment = without_suffix.rsplit("/", 1)[-1]
    if "." not in segment:
        return DEFAULT_IMAGE_EXTENSION
    extension = segment.rsplit(".", 1)[-1].strip()
    return extension or DEFAULT_IMAGE_EXTENSION


def mime_type_for_extension(extension: str) -> str:
    return IMAGE_MIME_TYPES.get(extension.lower(), DEFAULT_IMAGE_MIME_TYPE)
