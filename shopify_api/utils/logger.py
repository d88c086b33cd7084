import logging
import sys
import structlog
from structlog.stdlib import ProcessorFormatter


def add_shop_info(
    logger: structlog.BoundLogger, method_name: str, event_dict: dict
) -> dict:
    context_vars = structlog.contextvars.get_contextvars()
    shop = context_vars.get("shop")
    if shop:
        event_dict["shop"] = shop
    return event_dict


SHARED_PROCESSORS: list = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    add_shop_info,
    structlog.processors.UnicodeDecoder(),
]


def build_formatter(is_production: bool = False) -> ProcessorFormatter:
    """Formatter rendering structlog and stdlib records alike.

    JSON in production, colored console output otherwise. Attach it to any
    stdlib handler the application owns.
    """
    if is_production:
        renderer = structlog.processors.JSONRenderer(sort_keys=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True, pad_event=8)
    return ProcessorFormatter(
        processor=renderer, foreign_pre_chain=SHARED_PROCESSORS
    )


def setup_logging(
    is_production: bool = False,
    level: int = logging.INFO,
    install_root_handler: bool = False,
):
    """Route structlog events through stdlib logging.

    Only structlog itself is configured by default, so the handlers of the
    host application stay as they are. Pass ``install_root_handler=True``
    from an application entry point to replace the root logger's handlers
    with a single stdout handler using :func:`build_formatter`.
    """
    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if install_root_handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(is_production))

        root_logger = logging.getLogger()
        root_logger.handlers = [handler]
        root_logger.setLevel(level)

        # aiohttp access noise is only useful when debugging the transport
        logging.getLogger("aiohttp").setLevel(logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger instance with optional name."""
    return structlog.get_logger(name)
