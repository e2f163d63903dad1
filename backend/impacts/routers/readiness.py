from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select
from impacts.database import get_db, upsert
from impacts.models.readiness import ReadinessAssessment
from impacts.auth import get_current_user, UserPrincipal

router = APIRouter()


@router.get("")
async def get_readiness_assessment(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    """Return the caller's assessment document, or {} if none has been saved."""
    document = await db.scalar(
        select(ReadinessAssessment.document).where(ReadinessAssessment.user_id == current_user.id)
    )
    return document or {}


@router.put("")
async def save_readiness_assessment(
    document: dict = Body(...),
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    """Replace the caller's assessment document. Stored opaquely, one per user."""
    stmt = upsert(db, ReadinessAssessment).values(user_id=current_user.id, document=document)
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id"],
        set_={"document": stmt.excluded.document, "updated_at": func.now()},
    )
    await db.execute(stmt)
    return document
