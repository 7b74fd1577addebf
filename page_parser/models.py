"""Data models used throughout the page job."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping


def _attribute_value(attributes: Mapping[str, Mapping[str, str]], name: str) -> str:
    attribute = attributes.get(name) or {}
    return attribute.get("stringValue") or ""


def _is_enabled(value: str) -> bool:
    return value == "true"


@dataclass(frozen=True)
class JobRequest:
    """Parameters of a single page job, as delivered by the queue message."""

    page_id: str
    website_id: str
    url: str
    seo: bool = False
    images: bool = False
    texts: bool = False

    @classmethod
    def from_message_attributes(
        cls, attributes: Mapping[str, Mapping[str, str]]
    ) -> "JobRequest":
        """Read string-typed message attributes; flags are on only for ``"true"``."""
        return cls(
            page_id=_attribute_value(attributes, "pageId"),
            website_id=_attribute_value(attributes, "websiteId"),
            url=_attribute_value(attributes, "url"),
            seo=_is_enabled(_attribute_value(attributes, "seo")),
            images=_is_enabled(_attribute_value(attributes, "images")),
            texts=_is_enabled(_attribute_value(attributes, "texts")),
        )


@dataclass(frozen=True)
class PageContext:
    """Values derived once from the requested URL."""

    url: str
    domain: str
    protocol: str
    path: str


@dataclass(frozen=True)
class SeoMetadata:
    """Title and description found in the document head."""

    title: str
    description: str
    url: str

    def to_payload(self, page_id: str) -> Dict[str, str]:
        return {
            "id": page_id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
        }


@dataclass
class ImageUpload:
    """Image that was downloaded and re-hosted in the content store."""

    source: str
    resolved_url: str
    key: str
    content_type: str
