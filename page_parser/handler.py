"""Orchestration of a single page job and the queue entry point."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from .api import PagesApiClient
from .config import JobConfig
from .content import extract_images, extract_seo, extract_texts, locate_document
from .errors import FetchFailure, InvalidURL, MissingNode, UploadFailure
from .images import rehost_images
from .models import JobRequest
from .storage import S3ImageStore
from .tree import parse_markup
from .urls import build_page_context, normalize_page_url

logger = logging.getLogger("page_parser")

SUCCESS_MESSAGE = "Successfully processed messages."

MISSING_NODE_MESSAGES = {
    "html": "Missing HTML node for URL: {url}",
    "body": "Missing BODY node for URL: {url}",
    "head": "Missing HEAD node for URL: {url}",
    "title": "Missing TITLE node for URL: {url}",
    "title text": "Page title missing for: {url}",
}


def _finish(message: str) -> str:
    logger.info(message)
    return message


class PageJob:
    """Runs the extraction flags of a :class:`JobRequest` against one page."""

    def __init__(
        self,
        session: requests.Session,
        api: PagesApiClient,
        store: S3ImageStore,
        config: JobConfig,
    ) -> None:
        self.session = session
        self.api = api
        self.store = store
        self.config = config

    @classmethod
    def from_config(cls, config: JobConfig) -> "PageJob":
        session = requests.Session()
        return cls(
            session=session,
            api=PagesApiClient(config.api_url, session, timeout=config.request_timeout),
            store=S3ImageStore.from_region(config.bucket, config.aws_region),
            config=config,
        )

    def fetch_page(self, url: str) -> str:
        try:
            resp = self.session.get(url, timeout=self.config.request_timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchFailure(url, exc) from exc
        return resp.text

    def run(self, request: JobRequest) -> str:
        url = normalize_page_url(request.url)
        logger.info(
            "Processing page %s (website %s) at %s [seo=%s images=%s texts=%s]",
            request.page_id,
            request.website_id,
            url,
            request.seo,
            request.images,
            request.texts,
        )

        try:
            context = build_page_context(url)
        except InvalidURL as exc:
            return _finish(str(exc))

        try:
            html = self.fetch_page(url)
        except FetchFailure as exc:
            logger.error("%s", exc)
            return _finish(f"Unable to fetch the provided URL: {url}")

        root = parse_markup(html, self.config.parser_features)
        try:
            html_node, body_node = locate_document(root)
            seo = extract_seo(html_node, context.path) if request.seo else None
        except MissingNode as exc:
            return _finish(MISSING_NODE_MESSAGES[exc.node].format(url=url))

        if seo is not None:
            logger.debug("TITLE %s", seo.title)
            logger.debug("DESCRIPTION %s", seo.description)
            try:
                self.api.update_seo(request.page_id, seo)
            except UploadFailure as exc:
                logger.error("%s", exc)
                return _finish(f"Unable to update page with ID: {request.page_id}")

        if request.texts:
            snippets = extract_texts(body_node)
            try:
                self.api.create_snippets(request.page_id, snippets)
            except UploadFailure as exc:
                logger.error("%s", exc)
                return _finish(f"Unable to upload texts to DB for page with ID: {request.page_id}")

        if request.images:
            references = extract_images(body_node)
            uploads = rehost_images(
                request.website_id,
                references,
                context,
                self.session,
                self.store,
                timeout=self.config.request_timeout,
            )
            for upload in uploads:
                logger.debug("Uploaded %s as %s", upload.resolved_url, upload.key)

        return _finish(SUCCESS_MESSAGE)


def handler(event: Mapping[str, Any], context: Any = None, job: Optional[PageJob] = None) -> str:
    """Queue entry point: process the first record of ``event``."""
    attributes = event["Records"][0]["messageAttributes"]
    request = JobRequest.from_message_attributes(attributes)
    if job is None:
        job = PageJob.from_config(JobConfig.from_env())
    return job.run(request)
