"""API v1 router aggregator.

All v1 endpoint routers are included here. create_app() mounts this router
at /v1 plus the configured base path.
"""

from fastapi import APIRouter

from bookstore.api.v1 import auth, books, orders

router = APIRouter()

# =============================================================================
# Authentication
# =============================================================================

router.include_router(auth.router, tags=["auth"])

# =============================================================================
# Catalog & Orders (bearer token required)
# =============================================================================

router.include_router(books.router, tags=["books"])
router.include_router(orders.router, tags=["orders"])
