"""
Mods Router

FastAPI router for workshop mod references:
- Resolve a single URL or mod id
- Bulk import from a list of URLs
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from reforger.config.models import (
    BulkModRequest,
    ModExtended,
    ModListResponse,
    ModReferenceRequest,
)
from reforger.core.mods import extended_mod_list_from_urls, mod_from_url


def create_router(verify_token_dependency: Callable[..., Any]) -> APIRouter:
    """Create and configure the mods router.

    Args:
        verify_token_dependency: Dependency function that verifies authentication

    Returns:
        Configured APIRouter instance
    """
    router = APIRouter(prefix="/mods", tags=["Mods"])

    @router.post("/parse", response_model=ModExtended)
    async def parse_mod(
        request: ModReferenceRequest,
        _auth: bool = Depends(verify_token_dependency),  # noqa: B008
    ) -> ModExtended:
        """Resolve a workshop URL or mod id"""
        mod = mod_from_url(request.reference)
        if mod is None:
            raise HTTPException(
                status_code=400, detail=f"Unrecognised mod reference: {request.reference}"
            )
        return mod

    @router.post("/from-urls", response_model=ModListResponse)
    async def mods_from_urls(
        request: BulkModRequest,
        _auth: bool = Depends(verify_token_dependency),  # noqa: B008
    ) -> ModListResponse:
        """Import mods from workshop URLs, skipping unrecognised entries"""
        mods = extended_mod_list_from_urls(request.urls)
        return ModListResponse(
            mods=mods,
            count=len(mods),
            skipped=len(request.urls) - len(mods),
        )

    return router
