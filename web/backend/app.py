#!/usr/bin/env python3
"""
MaxJobOffers API - FastAPI Application

Resume and cover letter generation, interview preparation, job search and
application tracking, plus the retirement rollover lead funnel.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .rate_limit import add_rate_limit_handlers
from .routers import (
    retirement_router,
    interview_prep_router,
    cover_letters_router,
    resumes_router,
    resume_parser_router,
    jobs_router,
    applications_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()

# Create FastAPI app
app = FastAPI(
    title="MaxJobOffers API",
    description="Job-search assistant and retirement planning API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

if config.web.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(retirement_router)
app.include_router(interview_prep_router)
app.include_router(cover_letters_router)
app.include_router(resumes_router)
app.include_router(resume_parser_router)
app.include_router(jobs_router)
app.include_router(applications_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "maxjoboffers-api"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting MaxJobOffers API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
