"""
Structured JSON logging.

``CustomJsonFormatter`` is the formatter named in ``LOGGING``; it adds the
active OpenTelemetry trace and span ids to every record.
"""

from opentelemetry import trace
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = trace.format_trace_id(span_context.trace_id)
            log_record["span_id"] = trace.format_span_id(span_context.span_id)
        log_record.setdefault("level", record.levelname)
        log_record.setdefault("logger", record.name)
