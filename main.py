from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.logging import configure_logging
from app.endpoints import auth, course, lesson, enrollment, course_progress, certificate, review, admin
from app.middleware.exceptions import (
    global_exception_handler, http_exception_handler, integrity_error_handler, validation_exception_handler
)
from app.middleware.logging import RequestLoggingMiddleware

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(course.router, prefix="/courses", tags=["Courses"])
app.include_router(lesson.router, prefix="/lessons", tags=["Lessons"])
app.include_router(enrollment.router, prefix="/enrollments", tags=["Enrollments"])
app.include_router(course_progress.router, prefix="/progress", tags=["Progress"])
app.include_router(certificate.router, prefix="/certificates", tags=["Certificates"])
app.include_router(review.router, prefix="/reviews", tags=["Reviews"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])

@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "OK", "service": settings.PROJECT_NAME, "version": settings.VERSION}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
