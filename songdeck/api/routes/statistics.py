"""Aggregate statistics endpoint."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from songdeck.api.state import AppState, get_state

router = APIRouter()


@router.get("")
def get_statistics(state: AppState = Depends(get_state)):
    """Counts by genre, artist and album, computed from the current catalog."""
    result = state.statistics_service.get_statistics()
    return JSONResponse(status_code=result.status_code, content=result.body)
