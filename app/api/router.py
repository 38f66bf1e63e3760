from __future__ import annotations

from fastapi import APIRouter

from app.api.contents_api import router as contents_router
from app.api.meta_api import router as meta_router

router = APIRouter()

router.include_router(meta_router, tags=["meta"])
router.include_router(contents_router, tags=["contents"])
