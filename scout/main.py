import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scout.api.routes import router as api_router
from scout.config import public_settings, setup_logging
from scout.errors import RATE_LIMIT_ERRORS, ScoutError, ValidationError

logger = setup_logging()
app = FastAPI(title="Scout Interview Knowledge Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("Application starting")
logger.info("Loaded settings: %s", public_settings())


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.exception_handler(ScoutError)
async def scout_error_handler(request: Request, exc: ScoutError):
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"detail": exc.message})
    if isinstance(exc, RATE_LIMIT_ERRORS):
        return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded. Please try again later."})
    logger.error("Request failed", extra={"path": request.url.path, "error": type(exc).__name__})
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(api_router)
