"""API router for v1 endpoints."""

from fastapi import APIRouter

from brandguide.api import guides, rewrite

router = APIRouter()

# Guide sections, editor merge, custom sections and guide rewrites
router.include_router(guides.router, tags=["guides"])

# Stateless rewrite
router.include_router(rewrite.router, tags=["rewrite"])
