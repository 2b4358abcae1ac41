
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from processflow.config import settings
from processflow.errors import FlowImportError, NotFoundError, StepIndexError
from processflow.routers import catalog, flows
from processflow.util.ids import new_id
from processflow.util.logging import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Process Flow Editor API", version="0.1.0", openapi_url="/openapi.json")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router, prefix="/api/v0", tags=["catalog"])
app.include_router(flows.router, prefix="/api/v0", tags=["flows"])

@app.get("/api/v0/healthz")
def healthz():
    return {"status": "ok"}

@app.middleware("http")
async def add_request_id_header(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or new_id("req_")
    resp: Response = await call_next(request)
    resp.headers.setdefault("X-Request-Id", request_id)
    return resp


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "details": details or []}},
    )

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return error_response(404, "NOT_FOUND", str(exc))

@app.exception_handler(StepIndexError)
async def step_index_handler(request: Request, exc: StepIndexError):
    return error_response(422, "STEP_INDEX", str(exc), [{"index": exc.index, "length": exc.length}])

@app.exception_handler(FlowImportError)
async def import_error_handler(request: Request, exc: FlowImportError):
    logger.warning("import rejected (%s): %s", exc.kind.value, exc.message)
    return error_response(400, f"IMPORT_{exc.kind.value.upper()}", exc.message, exc.details)

@app.exception_handler(Exception)
async def default_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "INTERNAL", "Unhandled error", [{"path": "", "msg": str(exc)}])
