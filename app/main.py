# app/main.py
import logging
import os
import uuid

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse

from app.core.config import settings
from app.core.errors import DocumentError
from app.db.session import get_db, init_db

# Routers
from app.routers import auth, health, checklist, work_records, document_templates
from app.services.audit import write_audit

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger("app")

app = FastAPI(title="Crane Ops Documents")

# ---------------- Session cookie ----------------
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=60 * 60 * 24 * 7,  # 7 ngày
    same_site="lax",
)


# ---------------- Correlation-ID ----------------
@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    cid = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    request.state.correlation_id = cid
    resp = await call_next(request)
    resp.headers["X-Correlation-ID"] = cid
    return resp


# ---------------- Lỗi nghiệp vụ (validation / not found / format / render) ----------------
@app.exception_handler(DocumentError)
async def document_error_handler(request: Request, exc: DocumentError):
    if exc.status_code >= 500:
        log.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# ---------------- Global exception handler ----------------
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log.exception("unhandled error on %s", request.url.path, exc_info=exc)
    db = next(get_db())
    try:
        write_audit(
            db,
            action="EXCEPTION",
            target_type="System",
            status="FAILURE",
            new_values={"path": request.url.path, "error": type(exc).__name__},
            request=request,
        )
        db.commit()
    except Exception:
        db.rollback()
        log.exception("audit write failed for unhandled error")
    finally:
        db.close()
    return JSONResponse(status_code=500, content={"detail": "処理中にエラーが発生しました。もう一度お試しください。"})


# ---------------- Mount routers ----------------
app.include_router(auth.router,               prefix="/api", tags=["Auth"])
app.include_router(health.router,             prefix="/api", tags=["Health"])
app.include_router(checklist.router,          prefix="/api", tags=["Checklist"])
app.include_router(work_records.router,       prefix="/api", tags=["WorkRecords"])
app.include_router(document_templates.router, prefix="/api", tags=["DocumentTemplates"])


# ---------------- Startup ----------------
@app.on_event("startup")
def startup():
    init_db()
