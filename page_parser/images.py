"""Image downloading and re-hosting utilities."""

from __future__ import annotations

import logging
from typing import List, Optional

import requests
from filetype import guess

from .errors import FetchFailure, UploadFailure
from .models import ImageUpload, PageContext
from .storage import S3ImageStore, build_image_key
from .urls import get_image_extension, mime_type_for_extension, resolve_image_url

logger = logging.getLogger("page_parser")


def detect_non_image(data: bytes) -> Optional[str]:
    """Return the sniffed MIME type when the payload is recognisably not an image."""
    kind = guess(data)
    if kind and not kind.mime.startswith("image/"):
        return kind.mime
    return None


def download_image(session: requests.Session, url: str, timeout: float) -> bytes:
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchFailure(url, exc) from exc
    return resp.content


def rehost_images(
    website_id: str,
    references: List[str],
    context: PageContext,
    session: requests.Session,
    store: S3ImageStore,
    timeout: float = 15.0,
) -> List[ImageUpload]:
    """Download each referenced image and upload it to the store, one at a time.

    A failing image is logged and skipped; the remaining ones are still
    processed.
    """
    uploads: List[ImageUpload] = []
    for reference in references:
        resolved_url = resolve_image_url(reference, context.domain, context.protocol)
        try:
            data = download_image(session, resolved_url, timeout)
        except FetchFailure as exc:
            logger.warning("Error getting third-party image content with URL %s: %s", reference, exc)
            continue

        sniffed = detect_non_image(data)
        if sniffed:
            logger.warning("Skipping %s: payload is %s, not an image", resolved_url, sniffed)
            continue

        extension = get_image_extension(reference)
        content_type = mime_type_for_extension(extension)
        key = build_image_key(website_id, extension)
        try:
            store.upload(key, data, content_type)
        except UploadFailure as exc:
            logger.warning("Error uploading third-party image to S3 with URL %s: %s", reference, exc)
            continue

        uploads.append(
            ImageUpload(
                source=reference,
                resolved_url=resolved_url,
                key=key,
                content_type=content_type,
            )
        )
    logger.info("Re-hosted %d of %d images", len(uploads), len(references))
    return uploads
