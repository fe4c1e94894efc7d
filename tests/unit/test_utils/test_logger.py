"""Tests for the logging helpers."""

import json
import logging

from docsync.utils import JsonFormatter, get_logger, setup_logging, to_snake_case


class TestJsonFormatter:
    def test_includes_extra_fields(self) -> None:
        record = logging.LogRecord(
            "docsync.engine.context", logging.INFO, __file__, 1, "Indexed %s", ("docs",), None
        )
        record.index = "docs"

        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "Indexed docs"
        assert data["level"] == "INFO"
        assert data["logger"] == "docsync.engine.context"
        assert data["index"] == "docs"


class TestLoggers:
    def test_get_logger_namespace(self) -> None:
        assert get_logger("engine.registry").name == "docsync.engine.registry"

    def test_setup_logging(self) -> None:
        logger = setup_logging(level="debug", format_type="text")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JsonFormatter)

        logger = setup_logging(level="INFO", format_type="json")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)


class TestText:
    def test_to_snake_case(self) -> None:
        assert to_snake_case("Article") == "article"
        assert to_snake_case("BlogPost") == "blog_post"
        assert to_snake_case("HTMLPage") == "html_page"
