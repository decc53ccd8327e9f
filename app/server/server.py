from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from infrastructure.services import get_settings
from packages.geolocate.routes import router as geolocate_router
from server.lifespan import lifespan

settings = get_settings()

handler = FastAPI(lifespan=lifespan)


allow_origins = (
    ["*"]
    if settings.is_production
    else [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


handler.include_router(geolocate_router)
