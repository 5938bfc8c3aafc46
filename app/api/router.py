from fastapi import APIRouter

from app.api.routes import lottery

api_router = APIRouter()
api_router.include_router(lottery.router)
