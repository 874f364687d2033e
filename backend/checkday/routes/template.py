"""
Template Routes
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional
import logging

from ..core.priority import Priority
from ..core.views import filter_template
from ..dependencies import get_template_service
from ..models import User, ItemWrite, ConfirmRequest, ConfirmationPrompt, TemplateResponse
from ..services.auth import require_auth
from ..services.confirmation import (
    RESET_TEMPLATE,
    PROMPTS,
    fingerprint,
    issue_confirmation,
    ttl_seconds,
    verify_confirmation,
)
from ..services.templates import TemplateService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/template", tags=["Template"])


@router.get("", response_model=TemplateResponse)
async def get_template(
    q: Optional[str] = Query(None, description="Case-insensitive title search"),
    priority: Optional[Priority] = Query(None),
    user: User = Depends(require_auth),
    templates: TemplateService = Depends(get_template_service),
):
    """Current template (the default one on first use)"""
    items = await templates.get_template(user.id)
    return TemplateResponse(items=filter_template(items, q, priority))


@router.post("/items", response_model=TemplateResponse)
async def add_template_item(
    item: ItemWrite,
    user: User = Depends(require_auth),
    templates: TemplateService = Depends(get_template_service),
):
    """Add an item at the top of the template"""
    return TemplateResponse(items=await templates.add_item(user.id, item.title, item.priority))


@router.put("/items/{item_id}", response_model=TemplateResponse)
async def edit_template_item(
    item_id: str,
    item: ItemWrite,
    user: User = Depends(require_auth),
    templates: TemplateService = Depends(get_template_service),
):
    """Change an item's title and priority"""
    return TemplateResponse(items=await templates.edit_item(user.id, item_id, item.title, item.priority))


@router.delete("/items/{item_id}", response_model=TemplateResponse)
async def remove_template_item(
    item_id: str,
    user: User = Depends(require_auth),
    templates: TemplateService = Depends(get_template_service),
):
    """Remove an item from the template"""
    return TemplateResponse(items=await templates.remove_item(user.id, item_id))


@router.post("/reset", response_model=ConfirmationPrompt)
async def request_template_reset(
    user: User = Depends(require_auth),
    templates: TemplateService = Depends(get_template_service),
):
    """Ask for confirmation before replacing the template with the default"""
    items = await templates.get_template(user.id)
    title, description = PROMPTS[RESET_TEMPLATE]
    return ConfirmationPrompt(
        action=RESET_TEMPLATE,
        title=title,
        description=description,
        confirm_token=issue_confirmation(user.id, RESET_TEMPLATE, fingerprint(items)),
        expires_in_seconds=ttl_seconds(),
    )


@router.post("/reset/confirm", response_model=TemplateResponse)
async def confirm_template_reset(
    request: ConfirmRequest,
    user: User = Depends(require_auth),
    templates: TemplateService = Depends(get_template_service),
):
    """Replace the template with the default one"""
    current = await templates.get_template(user.id)
    if not verify_confirmation(request.token, user.id, RESET_TEMPLATE, fingerprint(current)):
        raise HTTPException(status_code=400, detail="Invalid or expired confirmation")

    logger.info(f"Resetting template to default for user {user.id}")
    return TemplateResponse(items=await templates.reset_to_default(user.id))
