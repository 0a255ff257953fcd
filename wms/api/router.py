"""
API Router - combines all routers
"""
from fastapi import APIRouter

from wms.api import (
    auth, users, inventory, transactions, exchange, bom, warehouse,
    work_diary, notifications, uploads, exports, files, system,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(inventory.router)
api_router.include_router(transactions.router)
api_router.include_router(exchange.router)
api_router.include_router(bom.router)
api_router.include_router(warehouse.router)
api_router.include_router(work_diary.router)
api_router.include_router(notifications.router)
api_router.include_router(uploads.router)
api_router.include_router(exports.router)
api_router.include_router(files.router)
api_router.include_router(system.router)
