from fastapi import APIRouter

from .endpoints import gsm, hertzian, optical, umts

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(gsm.router, prefix="/gsm", tags=["gsm"])
api_router.include_router(umts.router, prefix="/umts", tags=["umts"])
api_router.include_router(hertzian.router, prefix="/hertzian", tags=["hertzian"])
api_router.include_router(optical.router, prefix="/optical", tags=["optical"])
