"""Demo entry point: emits sample structured log lines to stdout."""

from __future__ import annotations

import argparse
import logging
import uuid

from cloudlog.config import load_config, load_yaml_config
from cloudlog.formatter import configure_logging
from cloudlog.models import HTTPRequest, LogEntryOperation
from cloudlog.severity import Severity
from cloudlog.wire_types import Duration

logger = logging.getLogger("cloudlog.demo")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Emit sample Cloud Logging JSON lines")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    parser.add_argument("--level", default="DEBUG", help="Root logger level")
    return parser.parse_args(argv)


def emit_samples() -> None:
    """Log one line of each kind the formatter understands."""
    trace = uuid.uuid4().hex
    op_id = f"job-{uuid.uuid4().hex[:8]}"

    logger.debug("Cache lookup for key 'session:42' returned miss")
    logger.info("Service starting", extra={"trace": trace})
    logger.info("Config reloaded", extra={"severity": Severity.NOTICE})

    logger.info(
        "GET /api/v1/users 200",
        extra={
            "trace": trace,
            "span_id": "000000000000004a",
            "http_request": HTTPRequest(
                request_method="GET",
                request_url="https://example.com/api/v1/users",
                status=200,
                protocol="HTTP/1.1",
                request_size=512,
                response_size=2048,
                user_agent="curl/8.5.0",
                remote_ip="203.0.113.7",
                latency=Duration.from_seconds(0.125),
                cache_lookup=True,
                cache_hit=False,
            ),
        },
    )

    logger.info(
        "Export started",
        extra={"operation": LogEntryOperation(id=op_id, producer="exporter", first=True)},
    )
    logger.info(
        "Export finished",
        extra={"operation": LogEntryOperation(id=op_id, producer="exporter", last=True)},
    )

    try:
        raise ConnectionError("database connection refused")
    except ConnectionError:
        logger.exception("Failed to persist batch")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_config(load_yaml_config(args.config))
    configure_logging(level=args.level.upper(), config=config)
    emit_samples()


if __name__ == "__main__":
    main()
