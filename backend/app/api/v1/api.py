from fastapi import APIRouter

from app.api.v1.endpoints import compare, contracts, versions

api_router = APIRouter()
api_router.include_router(contracts.router, prefix="/contracts", tags=["contracts"])
api_router.include_router(compare.router, prefix="/contracts", tags=["compare"])
api_router.include_router(versions.router, prefix="/versions", tags=["versions"])
