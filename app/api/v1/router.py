"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, health, orders, products, seed, universities

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(
    universities.router, prefix="/universities", tags=["universities"]
)
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(seed.router, prefix="/seed", tags=["seed"])
