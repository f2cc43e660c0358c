"""Tracing for taskagent.

Modules take a tracer from :func:`get_tracer` at import time. Until
:func:`configure_telemetry` installs an SDK provider (``taskagent serve
--telemetry`` or ``--otlp-endpoint``), every span is a no-op, so the
``otel`` extra is only needed when spans are exported.

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("task.send") as span:
        span.set_attribute(ATTR_TASK_ID, task_id)
"""

from __future__ import annotations

import logging
from typing import Any

from opentelemetry import trace

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "taskagent.rpc.method"
ATTR_RPC_ERROR_CODE = "taskagent.rpc.error_code"
ATTR_TASK_ID = "taskagent.task.id"
ATTR_TASK_STATE = "taskagent.task.state"
ATTR_MAX_STEPS = "taskagent.max_steps"
ATTR_STEP = "taskagent.step"
ATTR_MODEL = "taskagent.model"
ATTR_PROVIDER = "taskagent.provider"
ATTR_TOKENS_PROMPT = "taskagent.tokens.prompt"
ATTR_TOKENS_COMPLETION = "taskagent.tokens.completion"
ATTR_TOKENS_TOTAL = "taskagent.tokens.total"
ATTR_FINISH_REASON = "taskagent.finish_reason"
ATTR_TOOL_NAME = "taskagent.tool.name"

_INSTRUMENTATION_NAME = "taskagent"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = _INSTRUMENTATION_NAME,
    console: bool = True,
    otlp_endpoint: str | None = None,
) -> trace.TracerProvider:
    """Install an SDK tracer provider and return it.

    Spans go to stdout when *console* is set and to an OTLP/gRPC collector
    when *otlp_endpoint* is given. Requires the ``otel`` extra.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        raise ImportError(_missing_extra("opentelemetry-sdk")) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    trace.set_tracer_provider(provider)
    logger.info(
        "Tracing enabled for %s (console=%s, otlp=%s)", service_name, console, otlp_endpoint
    )
    return provider


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        raise ImportError(_missing_extra("opentelemetry-exporter-otlp")) from exc
    return OTLPSpanExporter(endpoint=endpoint)


def _missing_extra(package: str) -> str:
    return f"{package} is required for tracing export; install it with: pip install taskagent[otel]"
