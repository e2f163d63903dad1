from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from impacts.database import get_db
from impacts.schemas.milestone import (
    MilestoneCategoryStatus,
    MilestoneToggleRequest,
    MilestoneNotesRequest,
    UserMilestoneResponse,
)
from impacts.services.milestone_service import milestone_service
from impacts.auth import get_current_user, UserPrincipal

router = APIRouter()


@router.get("", response_model=list[MilestoneCategoryStatus])
async def list_milestones(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    return await milestone_service.fetch_with_status(db, current_user.id)


@router.post("/{item_id}/toggle", response_model=UserMilestoneResponse)
async def toggle_milestone(
    item_id: int,
    data: Optional[MilestoneToggleRequest] = None,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    """
    Flip completion of a milestone item for the current user.
    Body: {"notes": "..."}; leaving "notes" out keeps the stored notes,
    sending null clears them.
    """
    data = data or MilestoneToggleRequest()
    milestone = await milestone_service.toggle(
        db,
        current_user.id,
        item_id,
        notes=data.notes,
        replace_notes="notes" in data.model_fields_set,
    )
    return UserMilestoneResponse.model_validate(milestone)


@router.put("/{item_id}/notes", response_model=UserMilestoneResponse)
async def update_milestone_notes(
    item_id: int,
    data: MilestoneNotesRequest,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    milestone = await milestone_service.update_notes(db, current_user.id, item_id, data.notes)
    return UserMilestoneResponse.model_validate(milestone)
