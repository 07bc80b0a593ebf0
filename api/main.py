"""
Main API application
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from api.submit_api import router as submit_router, CORS_HEADERS, SUBMIT_PATH, error_response
from api.shared import get_settings, configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup và shutdown events"""
    settings = get_settings()
    configure_logging(settings)

    logger.info("Starting server")
    logger.info("TELEGRAM_BOT_TOKEN: %s", "set" if settings.telegram_bot_token else "missing")
    logger.info("TELEGRAM_CHAT_ID: %s", "set" if settings.telegram_chat_id else "missing")
    if not settings.telegram_configured:
        logger.info("Telegram delivery disabled - reports will only be logged")

    yield

    logger.info("Shutting down server...")


app = FastAPI(
    title="Quiz Submission Relay API",
    description="API nhận bài làm, chấm điểm và gửi báo cáo lên Telegram",
    version="1.0.0",
    lifespan=lifespan
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    """Gắn CORS headers cho mọi response, kể cả response lỗi"""
    response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Method không được route tới submit_test (TRACE, verb tuỳ ý...) vẫn trả body 405 chuẩn"""
    if exc.status_code == 405 and request.url.path.rstrip("/") == SUBMIT_PATH:
        logger.warning("Method not allowed: %s", request.method)
        return error_response(405, "Method not allowed")
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error", str(exc))


app.include_router(submit_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Quiz Submission Relay API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
