from homedash.web.routers.auth import router as auth_router
from homedash.web.routers.collections import collection_routers
from homedash.web.routers.health import router as health_router
from homedash.web.routers.me import router as me_router
from homedash.web.routers.weather import router as weather_router

__all__ = [
    "auth_router",
    "collection_routers",
    "health_router",
    "me_router",
    "weather_router",
]
