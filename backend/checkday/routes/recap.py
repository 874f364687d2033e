"""
Recap Routes
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ..config import settings
from ..core.dates import day_key
from ..core.export import recap_filename, recap_to_csv
from ..core.recap import is_recap_empty
from ..dependencies import get_recap_service
from ..models import User, RecapResponse
from ..services.auth import require_auth
from ..services.recap import RecapService

router = APIRouter(tags=["Recap"])


def _window(days: int = Query(settings.recap_default_days, ge=1, le=settings.recap_max_days)) -> int:
    return days


@router.get("/recap", response_model=RecapResponse)
async def get_recap(
    days: int = Depends(_window),
    user: User = Depends(require_auth),
    recap: RecapService = Depends(get_recap_service),
):
    """Per-day completion for the last N days, most recent first"""
    rows = await recap.compute_recap(user.id, days)
    return RecapResponse(
        days=days,
        rows=rows,
        empty=is_recap_empty(rows),
        streak=await recap.compute_streak(user.id),
    )


@router.get("/recap/export")
async def export_recap(
    days: int = Depends(_window),
    user: User = Depends(require_auth),
    recap: RecapService = Depends(get_recap_service),
):
    """Recap as a downloadable CSV file"""
    rows = await recap.compute_recap(user.id, days)
    filename = recap_filename(days, day_key(rows[0].date))
    return Response(
        content=recap_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/streak")
async def get_streak(
    user: User = Depends(require_auth),
    recap: RecapService = Depends(get_recap_service),
):
    """Fully completed days in a row, ending today"""
    return {"streak": await recap.compute_streak(user.id)}
