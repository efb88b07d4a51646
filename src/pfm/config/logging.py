"""Log routing for pfm.

Every record, whether it comes from a structlog logger or a plain stdlib
``logging`` call, ends up on one stderr handler so stdout stays reserved
for command results.  ``--log-json`` switches the renderer to JSON lines.

The ``-v`` count picks the level of the ``pfm`` logger tree: none shows
warnings only, one adds info, two or more add debug.  HTTP library loggers
stay at WARNING regardless.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

_NOISY_LOGGERS = ("httpx", "httpcore")

# Event keys whose values must never reach a log sink.
SECRET_KEYS = frozenset({"password", "auth_token", "token", "authorization"})
REDACTED = "**********"


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count to a stdlib log level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def redact_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential-bearing keys in a structlog event."""
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


def _processor_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(
    pre_chain: list[structlog.types.Processor], *, log_json: bool
) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(*, verbosity: int = 0, log_json: bool = False) -> None:
    """Install the stderr handler and set pfm's log level.

    Safe to call more than once; the root logger always ends up with a
    single handler.

    Args:
        verbosity: Number of ``-v`` flags given.
        log_json: Render JSON lines instead of the console format.
    """
    chain = _processor_chain()
    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(chain, log_json=log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger("pfm").setLevel(level_for_verbosity(verbosity))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
