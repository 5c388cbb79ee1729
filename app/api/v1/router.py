from fastapi import APIRouter

from app.api.v1.endpoints import (
    material_requests,
    orders,
    styles,
)

api_router = APIRouter()

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(styles.router, prefix="/styles", tags=["styles"])
api_router.include_router(material_requests.router, prefix="/material-requests", tags=["material-requests"])
