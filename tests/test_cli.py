"""Tests for the publish-go-lambda command line."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from publisher.cli import EXIT_INTERRUPTED, build_parser, main
from publisher.errors import AnalysisError
from publisher.remote import PublishResult


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["orders"])
        assert args.name == "orders"
        assert args.relaxed_checks is False
        assert args.source_dir == Path(".")

    def test_relaxed_flag(self):
        args = build_parser().parse_args(["-f", "arn:aws:lambda:us-east-1:1:function:orders"])
        assert args.relaxed_checks is True

    def test_name_required(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_usage_explains_identifier_forms(self):
        assert "fully qualified ARN" in build_parser().format_help()


class TestMain:
    @patch("publisher.cli.publish")
    def test_success_exit_zero(self, mock_publish, tmp_path):
        mock_publish.return_value = PublishResult(function_arn="arn:x", version="4")

        code = main(["-f", "-C", str(tmp_path), "orders"])

        assert code == 0
        args, kwargs = mock_publish.call_args
        assert args == ("orders", True)
        assert kwargs["source_dir"] == tmp_path

    @patch("publisher.cli.publish")
    def test_pipeline_error_exit_one(self, mock_publish, capsys):
        mock_publish.side_effect = AnalysisError("cannot find main package")

        code = main(["orders"])

        assert code == 1
        assert capsys.readouterr().err.count("cannot find main package") == 1

    @patch("publisher.cli.publish")
    def test_interrupt_exit_130(self, mock_publish):
        mock_publish.side_effect = KeyboardInterrupt

        assert main(["orders"]) == EXIT_INTERRUPTED

    def test_invalid_settings_exit_one(self, monkeypatch, capsys):
        monkeypatch.setenv("PUBLISHER_FETCH_TIMEOUT_SECONDS", "-1")

        assert main(["orders"]) == 1
        assert "configuration failed" in capsys.readouterr().err

    @patch("publisher.cli.publish")
    def test_json_log_lines_carry_function_name(self, mock_publish, monkeypatch, capsys):
        monkeypatch.setenv("PUBLISHER_LOG_JSON", "true")

        def _publish(*args, **kwargs):
            logging.getLogger("publisher.pipeline.driver").info("Published arn:x version 4")
            return PublishResult(function_arn="arn:x", version="4")

        mock_publish.side_effect = _publish

        assert main(["arn:aws:lambda:us-east-1:123456789012:function:orders"]) == 0

        records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
        assert [r["event"] for r in records] == ["Published arn:x version 4", "published"]
        assert all(r["function"] == "orders" for r in records)
