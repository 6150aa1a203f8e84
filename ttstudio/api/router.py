from fastapi import APIRouter

from ttstudio.api.tts import router as tts_router
from ttstudio.api.voices import router as voices_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(voices_router, prefix="/api", tags=["voices"])
api_router.include_router(tts_router, prefix="/api", tags=["tts"])
