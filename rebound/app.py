# --- imports (top of rebound/app.py) ---
import json
import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from rebound import settings
from rebound.middleware.tracing import TRACE_ID_CTX_VAR, TracingMiddleware
from rebound.models import init_db
from rebound.routes import documents_routes, profile_routes, recovery_routes, symptoms_routes
from rebound.services.taxonomy import get_taxonomy
from rebound.utils.exceptions import (
    handle_http_exception,
    handle_rate_limit,
    handle_unhandled_exception,
    handle_validation_error,
)
from rebound.utils.rate_limit import limiter


# --- logging setup ---
class JsonFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "function": record.funcName,
            "message": record.getMessage(),
        }
        trace_id = TRACE_ID_CTX_VAR.get()
        if trace_id:
            payload["trace_id"] = trace_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging() -> logging.Logger:
    logger = logging.getLogger("rebound")
    logger.setLevel(settings.LOG_LEVEL)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    return logger


logger = configure_logging()

# --- app & router setup ---
app = FastAPI(title="Rebound Backend", version="0.1.0")

app.state.limiter = limiter
app.add_middleware(TracingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RateLimitExceeded, handle_rate_limit)
app.add_exception_handler(StarletteHTTPException, handle_http_exception)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(Exception, handle_unhandled_exception)


@app.on_event("startup")
def _startup():
    init_db()
    # Fail fast on a broken taxonomy file rather than on the first request
    taxonomy = get_taxonomy()
    logger.info({"function": "startup", "taxonomy_version": taxonomy.version})


@app.get("/api/health")
def health():
    return {"status": "ok", "taxonomy_version": get_taxonomy().version}


app.include_router(symptoms_routes.router)
app.include_router(documents_routes.router)
app.include_router(profile_routes.router)
app.include_router(recovery_routes.router)
