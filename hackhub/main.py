"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging
import sys
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from hackhub.auth import Role, session_from_request
from hackhub.auth.gate import DENY, REDIRECT, authorize
from hackhub.config import settings
from hackhub.database import connect_db, disconnect_db
from hackhub.errors import ValidationError

app_logger = logging.getLogger("hackhub")
if not app_logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    app_logger.addHandler(handler)
app_logger.setLevel(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

# Paths the page gate never looks at; API routes authorize per route
GATE_EXEMPT_PREFIXES = (
    "/api",
    f"/{settings.CERTIFICATES_DIR_NAME}",
    "/docs",
    "/redoc",
    "/openapi.json",
)


def _is_gate_exempt(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in GATE_EXEMPT_PREFIXES)


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Prevent browser from caching HTML pages"""
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        ct = response.headers.get("content-type", "")
        if "text/html" in ct:
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response


class DashboardGateMiddleware(BaseHTTPMiddleware):
    """Apply the authorization gate to every page request"""
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if _is_gate_exempt(path):
            return await call_next(request)

        decision = authorize(path, session_from_request(request))
        if decision.outcome == DENY:
            return RedirectResponse(settings.LOGIN_PATH)
        if decision.outcome == REDIRECT:
            return RedirectResponse(decision.target)
        return await call_next(request)


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Hackathon events, teams and participation certificates",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(NoCacheMiddleware)
app.add_middleware(DashboardGateMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        details[field] = error.get("msg", "Invalid value")
    error = ValidationError(details)
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


# Setup Jinja2 templates
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# Custom 404 handler: JSON for the API, a small page otherwise
@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    detail = getattr(exc, "detail", None) or "Not Found"
    if request.url.path.startswith("/api/") or "application/json" in request.headers.get("accept", ""):
        return JSONResponse(status_code=404, content={"detail": detail})
    return templates.TemplateResponse(
        request,
        "page.html",
        {"title": "Page Not Found", "message": "The page you're looking for doesn't exist or has been moved."},
        status_code=404
    )


# Certificate artifacts are public and path-addressable
settings.certificates_path.mkdir(parents=True, exist_ok=True)
app.mount(
    f"/{settings.CERTIFICATES_DIR_NAME}",
    StaticFiles(directory=str(settings.certificates_path)),
    name="certificates"
)


@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)


@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


# HTML Page Routes
def _page(request: Request, title: str, message: str = ""):
    return templates.TemplateResponse(request, "page.html", {"title": title, "message": message})


def _dashboard(request: Request, role: Role):
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"role": role.value, "session": session_from_request(request)}
    )


@app.get("/", response_class=HTMLResponse)
async def home_page(request: Request):
    return _page(request, settings.APP_NAME, "Hackathons, teams and certificates.")


@app.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    return _page(request, "Login")


@app.get("/register", response_class=HTMLResponse)
async def register_page(request: Request):
    return _page(request, "Register")


@app.get("/events", response_class=HTMLResponse)
async def events_page(request: Request):
    return _page(request, "Events")


@app.get("/verify", response_class=HTMLResponse)
async def verify_page(request: Request):
    """Public certificate verification page"""
    return _page(request, "Verify a Certificate")


@app.get("/profile", response_class=HTMLResponse)
async def profile_page(request: Request):
    return _page(request, "Profile")


@app.get("/admin", response_class=HTMLResponse)
async def admin_dashboard(request: Request):
    return _dashboard(request, Role.ADMIN)


@app.get("/organizer", response_class=HTMLResponse)
async def organizer_dashboard(request: Request):
    return _dashboard(request, Role.ORGANIZER)


@app.get("/judge", response_class=HTMLResponse)
async def judge_dashboard(request: Request):
    return _dashboard(request, Role.JUDGE)


@app.get("/mentor", response_class=HTMLResponse)
async def mentor_dashboard(request: Request):
    return _dashboard(request, Role.MENTOR)


@app.get("/participant", response_class=HTMLResponse)
async def participant_dashboard(request: Request):
    return _dashboard(request, Role.PARTICIPANT)


# Import and include routers
from hackhub.routes import auth, events, certificates, teams, admin

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(certificates.router, prefix="/api/certificates", tags=["Certificates"])
app.include_router(teams.router, prefix="/api/teams", tags=["Teams"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hackhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Auto-reload on code changes
    )
