from fastapi import APIRouter

from order_console.api.routers import orders, specifications, templates

api_router = APIRouter()

api_router.include_router(specifications.router)
api_router.include_router(templates.router)
api_router.include_router(orders.router)
