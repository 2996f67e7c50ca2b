"""
Alumni Advantage - Main Application

FastAPI backend with:
- Record store (JSON file, MongoDB or in-memory) behind the PortalService facade
- Approval workflows for accounts, postings and events
- Two-track application decisions (alumni recommendation + admin final status)
- Poll-based notifications
- JWT bearer tokens to identify the caller

Run: uvicorn alumni_portal.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from alumni_portal.api.routes import api_router
from alumni_portal.core.config import get_settings
from alumni_portal.core.errors import PortalError, status_code_for
from alumni_portal.core.logging_config import setup_logging
from alumni_portal.services.portal import get_portal
from alumni_portal.services.seed import seed_demo_data

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        description="""
        Placement & career portal connecting students, alumni and the placement cell.

        ## Features
        - **Accounts**: Students approved on signup, alumni/admins approved by an admin
        - **Opportunities**: Alumni post jobs & mentorships, admins moderate
        - **Events**: Alumni propose events, admins moderate, students register
        - **Applications**: Alumni recommend, admins decide
        - **Notifications**: Every transition notifies the affected users
        - **Analytics**: Selections by department, applications by status, postings by company
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        code = status_code_for(exc)
        logger.info("%s %s -> %d %s", request.method, request.url.path, code, exc.message)
        return JSONResponse(status_code=code, content={"detail": exc.message, "success": False})

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        """Load demo data into an empty store."""
        if settings.seed_demo_data:
            portal_factory = app.dependency_overrides.get(get_portal, get_portal)
            seed_demo_data(portal_factory())

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release the record store (closes the Mongo client)."""
        portal_factory = app.dependency_overrides.get(get_portal, get_portal)
        portal_factory().store.close()

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check, including the record store backend in use."""
        result = {"status": "healthy", "app": settings.app_name, "store": settings.store_backend}
        if settings.store_backend == "mongo":
            from alumni_portal.db.mongodb import test_mongo_connection
            result["mongodb"] = "connected" if test_mongo_connection() else "disconnected"
        return result

    return app


app = create_app()
