"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from alumni_portal.api.routes.analytics_routes import router as analytics_router
from alumni_portal.api.routes.application_routes import router as application_router
from alumni_portal.api.routes.auth_routes import router as auth_router
from alumni_portal.api.routes.event_routes import router as event_router
from alumni_portal.api.routes.notification_routes import router as notification_router
from alumni_portal.api.routes.opportunity_routes import router as opportunity_router
from alumni_portal.api.routes.user_routes import router as user_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(opportunity_router)
api_router.include_router(event_router)
api_router.include_router(application_router)
api_router.include_router(notification_router)
api_router.include_router(analytics_router)
