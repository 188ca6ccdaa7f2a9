"""Structured JSON logging configuration with rotation."""

import json
import logging
import sys
from typing import Any, Dict
from uuid import uuid4

from loguru import logger
from starlette.requests import Request
from starlette_context import context

from .config import settings

REQUEST_ID_HEADER = "X-Request-ID"


class InterceptHandler(logging.Handler):
    """Route standard logging records (uvicorn, sqlalchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def current_request_id() -> str | None:
    """Return the request id of the request being handled, if any."""
    if context.exists():
        return context.data.get("request_id")
    return None


def serialize(record: Dict[str, Any]) -> str:
    """Serialize a loguru record to a single JSON line."""
    subset = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["module"],
        "function": record["function"],
        "line": record["line"],
    }

    request_id = current_request_id()
    if request_id:
        subset["request_id"] = request_id

    extra = {k: v for k, v in record["extra"].items() if k != "serialized"}
    if extra:
        subset.update(extra)

    if record["exception"] is not None:
        subset["exception"] = repr(record["exception"].value)

    return json.dumps(subset, default=str)


def patching(record: Dict[str, Any]) -> None:
    record["extra"]["serialized"] = serialize(record)


def setup_logging() -> None:
    """Configure loguru sinks and intercept standard logging."""
    logger.remove()

    if settings.log_format == "json":
        logger.configure(patcher=patching)
        log_config: Dict[str, Any] = {
            "sink": settings.log_file or sys.stdout,
            "format": "{extra[serialized]}",
            "level": settings.log_level.upper(),
            "serialize": False,
        }
    else:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "{message}"
        )
        log_config = {
            "sink": settings.log_file or sys.stderr,
            "format": log_format,
            "level": settings.log_level.upper(),
            "colorize": settings.log_file is None,
        }

    if settings.log_file:
        log_config.update({
            "rotation": settings.log_rotation,
            "retention": settings.log_retention,
            "compression": "zip",
        })

    logger.add(**log_config)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


async def request_id_middleware(request: Request, call_next):
    """Tag every request with an id and echo it back in the response."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
    context.data["request_id"] = request_id

    with logger.contextualize(method=request.method, path=request.url.path):
        response = await call_next(request)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
