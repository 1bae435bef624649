import structlog
import logging
import sys
from typing import Any, MutableMapping

SENSITIVE_KEYS = frozenset({"password", "channel_password", "token", "secret"})
DEV_ENVIRONMENTS = ("local", "development")
HANDLER_NAME = "acc_core"


def _security_filter(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Mask channel credentials before they reach a renderer.
    """
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = "***"
    return event_dict


def setup_logging(env: Any) -> None:
    """
    Configure structlog and route stdlib records (uvicorn, aiohttp) through the
    same renderer. Every line carries the thread name so the sampling worker
    can be told apart from the control API.
    """
    env = getattr(env, "value", env)
    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder({structlog.processors.CallsiteParameter.THREAD_NAME}),
        _security_filter,
    ]

    if env in DEV_ENVIRONMENTS:
        # Development: Colored Console
        renderers = [structlog.dev.ConsoleRenderer()]
    else:
        # Production: JSON
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    # calling twice replaces our handler instead of doubling every line
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.INFO)
