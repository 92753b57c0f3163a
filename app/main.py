"""
Main FastAPI application
"""
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, timezone
import logging
import traceback
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.exceptions import AppError
from app.models.models import SuccessResponse, ErrorResponse
from app.api.mentorship.routes import router as booking_router
from app.api.mentor.routes import router as mentor_router
from app.api.quiz.routes import router as quiz_router
from app.api.assignment.routes import router as assignment_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting {settings.app_name} ({settings.environment})")
    yield
    logger.info(f"Shutting down {settings.app_name}")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Backend API for EmpowerHerEd - mentorship bookings and course quizzes",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url] if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message, error_code=exc.error_code).model_dump(exclude_none=True)
    )

HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Auth guards and routing errors use the same body as every other error"""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            message=message,
            error_code=HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
        ).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            message="Validation Error",
            error_code="VALIDATION_ERROR",
            details=jsonable_encoder(exc.errors())
        ).model_dump(exclude_none=True)
    )

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    content = ErrorResponse(
        message=str(exc) or "Internal server error",
        error_code="INTERNAL_ERROR"
    ).model_dump(exclude_none=True)
    content["path"] = request.url.path
    content["timestamp"] = datetime.now(timezone.utc).isoformat()
    if not settings.is_production:
        content["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

# Health check endpoint
@app.get("/health", response_model=SuccessResponse)
async def health_check():
    """Health check endpoint"""
    return SuccessResponse(message=f"{settings.app_name} is running")

# Include routers
app.include_router(booking_router)
app.include_router(mentor_router)
app.include_router(quiz_router)
app.include_router(assignment_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
