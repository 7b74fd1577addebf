"""Tests for page_parser.cli."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from page_parser import cli
from page_parser.handler import SUCCESS_MESSAGE
from page_parser.models import JobRequest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("API_URL", "S3_BUCKET", "REQUEST_TIMEOUT", "HTML_PARSER", "AWS_REGION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)


def test_parse_args_flags():
    args = cli.parse_args(
        ["example.com", "--page-id", "p1", "--website-id", "w1", "--seo", "--images"]
    )
    assert args.url == "example.com"
    assert args.seo and args.images and not args.texts
    assert args.timeout is None


def test_build_config_prefers_flags(monkeypatch):
    monkeypatch.setenv("API_URL", "https://env.example.com")
    monkeypatch.setenv("S3_BUCKET", "env-bucket")
    args = cli.parse_args(
        [
            "example.com",
            "--page-id",
            "p1",
            "--website-id",
            "w1",
            "--api-url",
            "https://flag.example.com/",
            "--timeout",
            "3",
        ]
    )
    config = cli.build_config(args)
    assert config.api_url == "https://flag.example.com"
    assert config.bucket == "env-bucket"
    assert config.request_timeout == 3.0


def test_main_without_api_url_fails(capsys):
    assert cli.main(["example.com", "--page-id", "p1", "--website-id", "w1"]) == 2


def test_main_runs_job(capsys):
    with patch.object(cli.PageJob, "from_config") as from_config:
        from_config.return_value.run.return_value = SUCCESS_MESSAGE
        code = cli.main(
            [
                "example.com",
                "--page-id",
                "p1",
                "--website-id",
                "w1",
                "--texts",
                "--api-url",
                "https://api.example.com",
                "--bucket",
                "b",
            ]
        )

    assert code == 0
    assert SUCCESS_MESSAGE in capsys.readouterr().out
    config = from_config.call_args.args[0]
    assert config.bucket == "b"
    from_config.return_value.run.assert_called_once_with(
        JobRequest(page_id="p1", website_id="w1", url="example.com", texts=True)
    )


def test_main_reports_job_failure():
    with patch.object(cli.PageJob, "from_config") as from_config:
        from_config.return_value.run.return_value = "Missing BODY node for URL: https://a.com"
        code = cli.main(
            ["a.com", "--page-id", "p1", "--website-id", "w1", "--api-url", "https://api"]
        )
    assert code == 1
