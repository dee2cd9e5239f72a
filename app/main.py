import logging
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import blog, connections, generation, health, topics, upload
from app.core.config import settings
from app.core.lifespan import lifespan
from app.core.logging import setup_logging
from app.core.rate_limit import enforce_rate_limit
from app.schemas.common import ErrorResponse

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan, dependencies=[Depends(enforce_rate_limit)])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-ADMIN-TOKEN"],
)

# 라우트 매칭 순서: 고정 경로(/public, /topics, /generate)를 /api/blog/{post_id} 보다 먼저 등록
app.include_router(health.router)
app.include_router(blog.public_router)
app.include_router(topics.router)
app.include_router(generation.router)
app.include_router(blog.router)
app.include_router(connections.router)
app.include_router(upload.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    error = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and error == "Not Found":
        error = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(error)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=f"{location}: {message}" if location else message).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Server Error" if settings.is_production else str(exc)).model_dump(),
    )


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "blog": "/api/blog",
            "connections": "/api/connections",
            "upload": "/api/upload",
            "health": "/api/health",
        }
    }
