"""Exceptions raised while processing a page job."""

from __future__ import annotations


class PageParserError(Exception):
    """Base class for page job failures."""


class InvalidURL(PageParserError):
    """The requested URL does not contain a recognisable domain."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Provided external URL is incorrect: {url}")
        self.url = url


class MissingNode(PageParserError):
    """A structural node required by the extractors is absent."""

    def __init__(self, node: str) -> None:
        super().__init__(f"Missing {node} node")
        self.node = node


class FetchFailure(PageParserError):
    """Downloading a page or an image failed."""

    def __init__(self, url: str, reason: object = None) -> None:
        message = f"Unable to fetch {url}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url


class UploadFailure(PageParserError):
    """Persisting results to the API or the image store failed."""

    def __init__(self, target: str, reason: object = None) -> None:
        message = f"Unable to upload to {target}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.target = target
