"""Per-request observability context."""

from pydantic import BaseModel


class RequestContext(BaseModel):
    """Identifiers bound to every log line emitted while serving a request."""

    request_id: str
    trace_id: str
    span_id: str = ""
