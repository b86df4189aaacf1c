import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from supabase import Client

from app.config import settings
from app.core.rate_limit import limiter
from app.database.supabase_client import get_supabase
from app.modules.auth import routes as auth_routes
from app.modules.admins import routes as admins_routes
from app.modules.leads import routes as leads_routes
from app.modules.quotes import routes as quotes_routes
from app.modules.salespeople import routes as salespeople_routes
from app.modules.canvassers import routes as canvassers_routes
from app.modules.canvassing_activities import routes as canvassing_activities_routes
from app.modules.inventory import routes as inventory_routes
from app.modules.tasks import routes as tasks_routes
from app.modules.calendar_events import routes as calendar_events_routes
from app.modules.form_submissions import routes as form_submissions_routes
from app.modules.homepage_content import routes as homepage_content_routes
from app.modules.canvasser_portal import routes as canvasser_portal_routes
from app.modules.documents import routes as documents_routes
from app.modules.notifications import routes as notifications_routes
from app.modules.dashboard import routes as dashboard_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
for module_routes in (
    auth_routes,
    admins_routes,
    leads_routes,
    quotes_routes,
    salespeople_routes,
    canvassers_routes,
    canvassing_activities_routes,
    inventory_routes,
    tasks_routes,
    calendar_events_routes,
    form_submissions_routes,
    homepage_content_routes,
    canvasser_portal_routes,
    documents_routes,
    notifications_routes,
    dashboard_routes,
):
    app.include_router(module_routes.router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup (%s)", settings.environment)
    if not settings.supabase_service_role_key:
        logger.warning("SUPABASE_SERVICE_ROLE_KEY not set: creating admin and canvasser logins will fail")
    if settings.captcha_secret == "change-me" and settings.is_production:
        logger.warning("CAPTCHA_SECRET is the default value; contact form challenges can be forged")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to pines-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready(supabase: Client = Depends(get_supabase)):
    """Readiness probe: the database must answer a one-row select"""
    try:
        supabase.table("admins").select("id").limit(1).execute()
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
