import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from chartfeed.core.services.trendline_store_service import TrendlineStore

from .deps import get_trendline_store

router = APIRouter(prefix="/trendlines", tags=["trendlines"])


@router.get("")
def load_trendlines(
    store: TrendlineStore = Depends(get_trendline_store),
) -> List[Dict[str, Any]]:
    return store.load()


@router.put("")
def save_trendlines(
    trendlines: List[Dict[str, Any]] = Body(...),
    store: TrendlineStore = Depends(get_trendline_store),
) -> Dict[str, Any]:
    """
    Replace the whole stored set. Every record must be a valid trendline.
    """
    logger = logging.getLogger("SaveTrendlines")

    invalid = [i for i, t in enumerate(trendlines) if not store.validate(t)]
    if invalid:
        logger.warning("Rejected trendline set; invalid records at %s", invalid)
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid trendlines", "indexes": invalid},
        )

    if not store.save(trendlines):
        raise HTTPException(status_code=500, detail="Failed to persist trendlines")

    return {"saved": len(trendlines)}
