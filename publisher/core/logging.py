"""Structured logging via structlog.

Configures structlog once at CLI startup. Pipeline modules keep using
`logging.getLogger(__name__)`; the stdlib bridge renders their records
through the same processors and renderer as structlog lines, and writes
them to stderr so they never mix with `go build` output on stdout.

Renderer selection:
  json_output=False: `ConsoleRenderer` for interactive use.
  json_output=True:  `JSONRenderer` for CI logs.

ContextVar injection:
  The `function` field is injected into every log line, structlog or
  stdlib, from a ContextVar set for the duration of a run.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog

_function_var: ContextVar[str] = ContextVar("function", default="")


def get_function_name() -> str:
    """Return the function short name bound to the current run, if any."""
    return _function_var.get()


def bind_function_name(name: str):
    """Bind the function short name for subsequent log lines.

    Returns the ContextVar token so callers can reset it.
    """
    return _function_var.set(name)


def reset_function_name(token) -> None:
    _function_var.reset(token)


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject the function name from the ContextVar."""
    function = get_function_name()
    if function:
        event_dict["function"] = function
    return event_dict


def configure_structlog(debug: bool = False, json_output: bool = False) -> None:
    """Configure structlog for the process lifetime.

    Safe to call more than once.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Bridge stdlib logging: pipeline modules and botocore go through the
    # shared processors and the same renderer on stderr.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logging.basicConfig(handlers=[handler], level=level, force=True)
    # botocore is chatty at DEBUG.
    logging.getLogger("botocore").setLevel(logging.INFO)
