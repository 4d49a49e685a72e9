import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

TRACE_ID_CTX_VAR: ContextVar[str] = ContextVar("trace_id", default="")
TRACE_HEADER = "x-trace-id"


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with a trace id, reusing the caller's x-trace-id when
    one is sent. The id is kept in a context variable for logs and error
    envelopes and echoed back on the response.
    """
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = (request.headers.get(TRACE_HEADER) or "").strip()
        trace_id = incoming[:64] if incoming else str(uuid.uuid4())
        token = TRACE_ID_CTX_VAR.set(trace_id)
        request.state.trace_id = trace_id
        try:
            response = await call_next(request)
        finally:
            TRACE_ID_CTX_VAR.reset(token)

        response.headers[TRACE_HEADER] = trace_id
        return response
