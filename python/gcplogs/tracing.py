# Trace correlation: log lines carrying TRACE_KEY are grouped under the request trace.

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from opentelemetry import trace as otel_trace
from opentelemetry.context import Context

# Environment variable naming the Google Cloud project.
PROJECT_ENV_VAR = "GOOGLE_CLOUD_PROJECT"

# HTTP header carrying "TRACE_ID/SPAN_ID;o=OPTIONS" on Google Cloud.
TRACE_HEADER = "X-Cloud-Trace-Context"

# https://cloud.google.com/logging/docs/agent/configuration#special-fields
TRACE_KEY = "logging.googleapis.com/trace"
SPAN_KEY = "logging.googleapis.com/spanId"


def trace_name(project_id: str, trace_id: str) -> str:
    return "projects/" + project_id + "/traces/" + trace_id


@dataclass(frozen=True)
class Tracer:
    """Builds trace keys for one project. An empty project never yields a trace."""

    project_id: str = ""

    def from_header(self, value: Optional[str]) -> str:
        """Trace key for an X-Cloud-Trace-Context value, or "" if there is none.

        https://cloud.google.com/trace/docs/troubleshooting#force-trace
        """
        if not self.project_id or not value:
            return ""
        trace_id, slash, _ = value.partition("/")
        if not slash:
            return ""
        return trace_name(self.project_id, trace_id)

    def from_headers(self, headers: Mapping[str, str]) -> str:
        if not self.project_id:
            return ""
        value = headers.get(TRACE_HEADER)
        if value is None:
            lowered = TRACE_HEADER.lower()
            for key, candidate in headers.items():
                if key.lower() == lowered:
                    value = candidate
                    break
        return self.from_header(value)


def trace_from_context(project_id: str, context: Optional[Context] = None) -> Tuple[str, str]:
    """(trace key, span id) for the active OpenTelemetry span, or ("", "")."""
    if not project_id:
        return "", ""
    span_ctx = otel_trace.get_current_span(context).get_span_context()
    if not span_ctx.is_valid:
        return "", ""
    return (
        trace_name(project_id, otel_trace.format_trace_id(span_ctx.trace_id)),
        otel_trace.format_span_id(span_ctx.span_id),
    )
