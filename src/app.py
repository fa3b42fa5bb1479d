"""HealthyAura FastAPI application.

Serves the review, moderation, points and recommendation endpoints. Commands
are processed synchronously; every request under a reviews-owned prefix is
wrapped in the reviews domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reviews.api.errors import install_error_handlers
from reviews.domain import reviews
from reviews.utils.logging import add_context, clear_context

reviews.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_DOMAIN_PREFIXES = (
    "/eateries",
    "/reviews",
    "/moderation",
    "/points",
    "/rewards",
    "/recommendations",
)


def _needs_domain(path: str) -> bool:
    return path.startswith(_DOMAIN_PREFIXES)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="HealthyAura API",
    description="Eatery reviews, moderation, points and recommendations",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the reviews domain context for domain-backed routes."""
    add_context(path=request.url.path, user_id=request.headers.get("x-user-id"))
    try:
        if _needs_domain(request.url.path):
            with reviews.domain_context():
                return await call_next(request)
        # Health check, docs, etc.
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
install_error_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from recommendations.api.routes import router as recommendations_router  # noqa: E402
from reviews.api.routes import (  # noqa: E402
    eatery_router,
    moderation_router,
    points_router,
    review_router,
    rewards_router,
)

app.include_router(eatery_router)
app.include_router(review_router)
app.include_router(moderation_router)
app.include_router(points_router)
app.include_router(rewards_router)
app.include_router(recommendations_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"reviews": {"name": reviews.name}},
        }
    )
