from fastapi import APIRouter

from app.modules.schools import router as schools_router

api_router = APIRouter()

api_router.include_router(schools_router, tags=["Schools"])
