import logging

from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from gcplogs import Config, Tracer, get_logger, init, shutdown, with_trace

def main():
    cfg = init(Config(project_id="demo-project", level="DEBUG"))
    log = logging.getLogger("stdlib_demo")

    log.info("plain stdlib record")
    headers = {"x-cloud-trace-context": "105445aa7843bc8bf206b120001000/0;o=1"}
    with_trace(log, Tracer(cfg.project_id), headers).warning("record tied to the request trace")

    span = NonRecordingSpan(SpanContext(
        trace_id=0x105445AA7843BC8BF206B12000100000, span_id=0x51, is_remote=True,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    ))
    with trace.use_span(span):
        log.info("record inside an OpenTelemetry span")

    try:
        1 / 0
    except ZeroDivisionError:
        log.exception("division failed")

    get_logger().info("facade line", example_key=7)
    shutdown()

if __name__ == "__main__":
    main()
