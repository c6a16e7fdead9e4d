from fastapi import APIRouter
from jiji.api.endpoints import jiji
from jiji.core.config import settings

api_router = APIRouter(prefix=f"/api/{settings.API_VERSION}")

# Combine all sub-routers into one
api_router.include_router(jiji.router)
