"""structlog setup for the proxy.

Every line goes to stdout: JSON in production, console rendering in
development. Third-party loggers share the same formatter.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Covered by the proxy's own http_request and tdt_proxy_request events
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def setup_logging(
    *,
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "tdt_proxy",
) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Args:
        log_level: Root log level name, case-insensitive.
        json_logs: Render JSON lines instead of the console format.
        service_name: Value of the ``service`` key on every line.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            {structlog.processors.CallsiteParameter.MODULE}
        ),
        lambda _logger, _method, event_dict: {**event_dict, "service": service_name},
    ]

    renderer: structlog.types.Processor
    if json_logs:
        pre_chain.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(log_level.upper())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
