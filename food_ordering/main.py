"""
FastAPI Application Entry Point

Food Ordering - session-gated tab shell.
Supports both Mock services (development) and Appwrite (production).

Endpoints:
    - GET /, /search, /cart, /profile: Tab shell (signed-in users only)
    - GET /sign-in: Sign-in page unauthenticated visitors are sent to
    - GET /health: System health check

Run with:
    uvicorn food_ordering.main:app --reload

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from food_ordering.core.config import get_settings, setup_logging
from food_ordering.navigation import TABS_BY_NAME, RouteDecision, decide_route, tab_bar
from food_ordering.schemas import HealthResponse
from food_ordering.services.backend import get_backend_service
from food_ordering.services.session import SessionStore, get_session_provider

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.

    The session is resolved once here; every tab reads the result.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info("=" * 60)

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    store = SessionStore(get_session_provider())
    app.state.session_store = store
    await store.fetch_authenticated_user()
    logger.info(f"✅ Session provider: {store.provider.provider_name}")
    logger.info(f"✅ Authenticated: {store.is_authenticated}")

    yield  # Application runs

    logger.info("Shutting down...")
    await store.provider.aclose()
    if get_backend_service.cache_info().currsize:
        await get_backend_service().aclose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Food ordering app shell gated by the signed-in session.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


def get_session_store(request: Request) -> SessionStore:
    """Session store created at startup."""
    return request.app.state.session_store


# =============================================================================
# TAB SHELL
# =============================================================================

def render_tab(request: Request, store: SessionStore, name: str) -> Response:
    """Apply the session gate, then render the shell with `name` active."""
    decision = decide_route(store)

    if decision is RouteDecision.LOADING:
        return HTMLResponse("")
    if decision is RouteDecision.REDIRECT_SIGN_IN:
        logger.debug(f"Redirecting /{name} to {settings.sign_in_route}")
        return RedirectResponse(settings.sign_in_route, status_code=303)

    return templates.TemplateResponse(
        request,
        "shell.html",
        {
            "app_name": settings.app_name,
            "active": TABS_BY_NAME[name],
            "tabs": tab_bar(name),
            "user": store.user or {},
        },
    )


@app.get("/", response_class=HTMLResponse, tags=["Tabs"])
async def home_tab(request: Request, store: SessionStore = Depends(get_session_store)):
    return render_tab(request, store, "index")


@app.get("/search", response_class=HTMLResponse, tags=["Tabs"])
async def search_tab(request: Request, store: SessionStore = Depends(get_session_store)):
    return render_tab(request, store, "search")


@app.get("/cart", response_class=HTMLResponse, tags=["Tabs"])
async def cart_tab(request: Request, store: SessionStore = Depends(get_session_store)):
    return render_tab(request, store, "cart")


@app.get("/profile", response_class=HTMLResponse, tags=["Tabs"])
async def profile_tab(request: Request, store: SessionStore = Depends(get_session_store)):
    return render_tab(request, store, "profile")


@app.get(settings.sign_in_route, response_class=HTMLResponse, tags=["Auth"])
async def sign_in_page(request: Request, store: SessionStore = Depends(get_session_store)):
    """Sign-in page; signed-in users go straight to the home tab."""
    if store.is_authenticated:
        return RedirectResponse("/", status_code=303)
    return templates.TemplateResponse(
        request, "sign_in.html", {"app_name": settings.app_name}
    )


# =============================================================================
# HEALTH
# =============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(store: SessionStore = Depends(get_session_store)) -> HealthResponse:
    """Verify the backend and session provider are reachable."""
    backend = get_backend_service()
    backend_status = "healthy" if await backend.health_check() else "unhealthy"
    session_status = "healthy" if await store.provider.health_check() else "unhealthy"

    overall = "operational" if all(
        s == "healthy" for s in [backend_status, session_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        backend=f"{backend.provider_name}: {backend_status}",
        session_provider=f"{store.provider.provider_name}: {session_status}",
        authenticated=store.is_authenticated,
        environment=settings.env_mode.value,
        timestamp=datetime.now(),
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )
