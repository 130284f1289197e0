"""Logging and logfire tracing for the circulation desk.

The workflows themselves stay free of side effects; everything here is used
by CirculationDesk, which is where state transitions actually happen.
"""

import functools
import inspect
import logging
import sys
from collections.abc import Callable
from datetime import datetime
from typing import Any

import logfire

from .config import LibrarySettings, get_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: LibrarySettings | None = None) -> None:
    """Send package logs to stderr at the configured level."""
    settings = settings or get_config()
    package_logger = logging.getLogger("library_circulation")
    package_logger.setLevel(settings.effective_log_level)

    if not any(getattr(h, "_library_circulation", False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._library_circulation = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)


def initialize_observability(
    settings: LibrarySettings | None = None,
    *,
    send_to_logfire: bool = False,
) -> None:
    """
    Configure logfire for desk tracing.

    Spans stay local unless ``send_to_logfire`` is set; console output is
    only switched on in development.
    """
    settings = settings or get_config()
    if not settings.trace_workflows:
        logger.debug("Workflow tracing disabled via configuration")
        return

    logfire.configure(
        service_name="library-circulation",
        send_to_logfire=send_to_logfire,
        console=None if settings.is_development else False,
    )


def trace_workflow(workflow_name: str):
    """
    Decorator to trace a CirculationDesk command.

    The span is skipped when the desk's settings turn tracing off.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            if not self.settings.trace_workflows:
                return func(self, *args, **kwargs)

            with logfire.span(
                f"workflow.{workflow_name}",
                workflow_name=workflow_name,
            ) as span:
                start_time = datetime.now()
                arguments = signature.bind(self, *args, **kwargs).arguments
                arguments.pop("self", None)
                _add_attributes(span, "input", arguments)

                try:
                    result = func(self, *args, **kwargs)
                except Exception as e:
                    span.set_attribute("workflow.success", False)
                    span.set_attribute("workflow.error", str(e))
                    raise

                span.set_attribute("workflow.success", True)
                span.set_attribute(
                    "workflow.duration_ms",
                    (datetime.now() - start_time).total_seconds() * 1000,
                )
                span.set_attribute("result.catalog_size", len(result.catalog))
                span.set_attribute("result.circulation_count", len(result.circulations))
                return result

        return wrapper

    return decorator


def _add_attributes(span, prefix: str, data: dict[str, Any]):
    for key, value in data.items():
        if isinstance(value, str | int | float | bool):
            span.set_attribute(f"{prefix}.{key}", value)
        elif value is not None:
            span.set_attribute(f"{prefix}.{key}", str(value))
