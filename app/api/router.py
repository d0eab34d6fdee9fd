from fastapi import APIRouter

from app.domains.orders.api import routes as orders

api_router = APIRouter()

# API routes (all have /api/v1 prefix from app_factory)
api_router.include_router(orders.router)
