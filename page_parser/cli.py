"""Command-line entry point for running a page job locally."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import Sequence

from dotenv import load_dotenv

from .config import JobConfig
from .handler import SUCCESS_MESSAGE, PageJob
from .models import JobRequest

logger = logging.getLogger("page_parser.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Fetch a page and extract its SEO metadata, text snippets and images."
        ),
    )
    parser.add_argument("url", help="Page URL; bare domains are fetched over https")
    parser.add_argument("--page-id", required=True, help="Identifier of the page record")
    parser.add_argument(
        "--website-id",
        required=True,
        help="Identifier of the website, used in image storage keys",
    )
    parser.add_argument("--seo", action="store_true", help="Extract title and description")
    parser.add_argument("--texts", action="store_true", help="Extract text snippets")
    parser.add_argument("--images", action="store_true", help="Re-host page images")
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the pages API (defaults to $API_URL)",
    )
    parser.add_argument(
        "--bucket",
        default=None,
        help="S3 bucket for re-hosted images (defaults to $S3_BUCKET)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds for page, image and API requests",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> JobConfig:
    """Command-line flags take precedence over the environment."""
    environ = dict(os.environ)
    if args.api_url:
        environ["API_URL"] = args.api_url
    if args.bucket:
        environ["S3_BUCKET"] = args.bucket
    if args.timeout is not None:
        environ["REQUEST_TIMEOUT"] = str(args.timeout)
    return JobConfig.from_env(environ)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        config = build_config(args)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    request = JobRequest(
        page_id=args.page_id,
        website_id=args.website_id,
        url=args.url,
        seo=args.seo,
        images=args.images,
        texts=args.texts,
    )
    start = time.perf_counter()
    message = PageJob.from_config(config).run(request)
    logger.debug("Job finished in %.2fs", time.perf_counter() - start)
    print(message)
    return 0 if message == SUCCESS_MESSAGE else 1


if __name__ == "__main__":
    sys.exit(main())
