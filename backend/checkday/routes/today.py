"""
Today's Checklist Routes
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional
import logging

from ..core.priority import Priority
from ..core.recap import summarize
from ..core.views import StatusFilter, filter_tasks
from ..dependencies import get_daily_service, get_recap_service
from ..models import User, TaskItem, ItemWrite, ConfirmRequest, ConfirmationPrompt, DailyResponse
from ..services.auth import require_auth
from ..services.confirmation import (
    RESET_TODAY,
    PROMPTS,
    fingerprint,
    issue_confirmation,
    ttl_seconds,
    verify_confirmation,
)
from ..services.daily import DailyTaskService
from ..services.recap import RecapService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/today", tags=["Today"])


async def _respond(
    user: User,
    daily: DailyTaskService,
    recap: RecapService,
    tasks: List[TaskItem],
    view: Optional[List[TaskItem]] = None,
) -> DailyResponse:
    # The streak includes today, so it is recomputed after every change
    return DailyResponse(
        day=daily.today(),
        tasks=tasks if view is None else view,
        summary=summarize(tasks),
        streak=await recap.compute_streak(user.id),
    )


@router.get("", response_model=DailyResponse)
async def get_today(
    q: Optional[str] = Query(None, description="Case-insensitive title search"),
    status: StatusFilter = Query(StatusFilter.ALL),
    priority: Optional[Priority] = Query(None),
    undone_first: bool = Query(False, description="List undone tasks before done ones"),
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    """Today's tasks, seeded from the template on the first visit of the day"""
    tasks = await daily.get_today(user.id)
    view = filter_tasks(tasks, q, status, priority, undone_first)
    return await _respond(user, daily, recap, tasks, view)


@router.post("/items", response_model=DailyResponse)
async def add_task(
    item: ItemWrite,
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    """Add a task for today only"""
    return await _respond(user, daily, recap, await daily.add(user.id, item.title, item.priority))


@router.put("/items/{task_id}", response_model=DailyResponse)
async def edit_task(
    task_id: str,
    item: ItemWrite,
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    return await _respond(user, daily, recap, await daily.edit(user.id, task_id, item.title, item.priority))


@router.post("/items/{task_id}/toggle", response_model=DailyResponse)
async def toggle_task(
    task_id: str,
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    return await _respond(user, daily, recap, await daily.toggle(user.id, task_id))


@router.delete("/items/{task_id}", response_model=DailyResponse)
async def remove_task(
    task_id: str,
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    return await _respond(user, daily, recap, await daily.remove(user.id, task_id))


@router.post("/complete-all", response_model=DailyResponse)
async def complete_all(
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    return await _respond(user, daily, recap, await daily.mark_all_done(user.id))


@router.post("/clear-all", response_model=DailyResponse)
async def clear_all(
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    return await _respond(user, daily, recap, await daily.unmark_all(user.id))


@router.post("/reset", response_model=ConfirmationPrompt)
async def request_today_reset(
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
):
    """Ask for confirmation before refilling today's tasks from the template"""
    tasks = await daily.get_today(user.id)
    title, description = PROMPTS[RESET_TODAY]
    return ConfirmationPrompt(
        action=RESET_TODAY,
        title=title,
        description=description,
        confirm_token=issue_confirmation(user.id, RESET_TODAY, fingerprint(tasks), day=daily.today()),
        expires_in_seconds=ttl_seconds(),
    )


@router.post("/reset/confirm", response_model=DailyResponse)
async def confirm_today_reset(
    request: ConfirmRequest,
    user: User = Depends(require_auth),
    daily: DailyTaskService = Depends(get_daily_service),
    recap: RecapService = Depends(get_recap_service),
):
    """Refill today's tasks from the template, discarding today's progress"""
    current = await daily.get_today(user.id)
    if not verify_confirmation(request.token, user.id, RESET_TODAY, fingerprint(current), day=daily.today()):
        raise HTTPException(status_code=400, detail="Invalid or expired confirmation")

    logger.info(f"Resetting today's tasks for user {user.id}")
    return await _respond(user, daily, recap, await daily.reset_from_template(user.id))
