"""Storefront FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the log level and renderer (see ordering.utils.logging).
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shared.accounts import get_identity_provider, set_identity_provider
from shared.accounts.forwarded_adapter import ForwardedIdentityProvider
from ordering.domain import ordering
from ordering.products import get_catalog
from ordering.products.fake_adapter import InMemoryCatalog, load_demo_products
from ordering.utils.logging import add_context, clear_context, configure_logging
from reviews.domain import reviews
from shared.http import register_error_handlers

configure_logging(log_dir=os.getenv("LOG_DIR", "logs"))

ordering.init()
reviews.init()

# Customers are authenticated upstream; the gateway forwards who they are
set_identity_provider(ForwardedIdentityProvider())

if os.getenv("DEMO_CATALOG", "1") == "1" and isinstance(get_catalog(), InMemoryCatalog):
    load_demo_products(get_catalog())

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/cart": ordering,
    "/checkout": ordering,
    "/orders": ordering,
    "/reviews": reviews,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Cart, checkout, order lifecycle and order reviews",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context and caller identity for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is None:
        # No domain match: pass through (health check, docs, etc.)
        return await call_next(request)

    provider = get_identity_provider()
    token = provider.bind(request.headers) if isinstance(provider, ForwardedIdentityProvider) else None
    add_context(path=request.url.path, domain=domain.name)
    try:
        with domain.domain_context():
            return await call_next(request)
    finally:
        clear_context()
        if token is not None:
            provider.release(token)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import cart_router, checkout_router, fulfillment_router, order_router  # noqa: E402
from reviews.api.routes import review_router  # noqa: E402

app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(fulfillment_router)
app.include_router(review_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
                "reviews": {"name": reviews.name},
            },
        }
    )
