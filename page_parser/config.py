"""Configuration objects and constants for the page job."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BUCKET = "lk2-stage"
DEFAULT_PARSER = "html5lib"
DEFAULT_REQUEST_TIMEOUT = 15.0


@dataclass
class JobConfig:
    """Top-level settings that control fetching and persistence."""

    api_url: str
    bucket: str = DEFAULT_BUCKET
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    parser_features: str = DEFAULT_PARSER
    aws_region: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JobConfig":
        """Build a config from environment variables."""
        env = os.environ if environ is None else environ

        api_url = (env.get("API_URL") or "").strip()
        if not api_url:
            raise ValueError("API_URL environment variable is required")

        raw_timeout = env.get("REQUEST_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError as exc:
            raise ValueError(f"REQUEST_TIMEOUT must be a number, got {raw_timeout!r}") from exc

        return cls(
            api_url=api_url.rstrip("/"),
            bucket=env.get("S3_BUCKET") or DEFAULT_BUCKET,
            request_timeout=timeout,
            parser_features=env.get("HTML_PARSER") or DEFAULT_PARSER,
            aws_region=env.get("AWS_REGION") or None,
        )
