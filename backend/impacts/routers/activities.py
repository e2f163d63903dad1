from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from impacts.database import get_db
from impacts.models.activity import Activity
from impacts.models.lookup import ActivityCategory, SimulationType, FeedbackFormType
from impacts.schemas.activity import ActivityCreate, ActivityUpdate, ActivityResponse
from impacts.schemas.lookup import LookupResponse
from impacts.auth import get_current_user, UserPrincipal

router = APIRouter()


def _enriched_query(user_id: int):
    """Owner-scoped activities joined with the names of their lookup rows."""
    return (
        select(
            Activity,
            ActivityCategory.name.label("category_name"),
            SimulationType.name.label("simulation_type_name"),
            FeedbackFormType.name.label("feedback_form_type_name"),
        )
        .outerjoin(ActivityCategory, Activity.category_id == ActivityCategory.id)
        .outerjoin(SimulationType, Activity.simulation_type_id == SimulationType.id)
        .outerjoin(FeedbackFormType, Activity.feedback_forms_submitted_id == FeedbackFormType.id)
        .where(Activity.user_id == user_id)
        .execution_options(populate_existing=True)
    )


def _to_response(row) -> ActivityResponse:
    response = ActivityResponse.model_validate(row.Activity)
    response.category_name = row.category_name
    response.simulation_type_name = row.simulation_type_name
    response.feedback_form_type_name = row.feedback_form_type_name
    return response


async def _get_enriched(db: AsyncSession, activity_id: int, user_id: int) -> ActivityResponse:
    result = await db.execute(_enriched_query(user_id).where(Activity.id == activity_id))
    row = result.first()
    if row is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return _to_response(row)


async def _get_owned(db: AsyncSession, activity_id: int, user_id: int) -> Activity:
    result = await db.execute(
        select(Activity).where(Activity.id == activity_id, Activity.user_id == user_id)
    )
    activity = result.scalar_one_or_none()
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


@router.get("", response_model=list[ActivityResponse])
async def list_activities(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    query = _enriched_query(current_user.id).order_by(
        Activity.date.desc(), Activity.created_at.desc(), Activity.id.desc()
    )
    result = await db.execute(query)
    return [_to_response(row) for row in result.all()]


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_activity(
    data: ActivityCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    activity = Activity(user_id=current_user.id, **data.model_dump())
    db.add(activity)
    await db.flush()
    return await _get_enriched(db, activity.id, current_user.id)


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: int,
    data: ActivityUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    activity = await _get_owned(db, activity_id, current_user.id)

    # null means "not supplied", matching COALESCE-style partial updates
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(activity, key, value)

    await db.flush()
    return await _get_enriched(db, activity_id, current_user.id)


@router.delete("/{activity_id}")
async def delete_activity(
    activity_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    activity = await _get_owned(db, activity_id, current_user.id)
    await db.delete(activity)
    await db.flush()
    return {"message": "Activity removed"}


@router.get("/categories", response_model=list[LookupResponse])
async def list_categories(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    result = await db.execute(select(ActivityCategory).order_by(ActivityCategory.name))
    return result.scalars().all()


@router.get("/simulation-types", response_model=list[LookupResponse])
async def list_simulation_types(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    result = await db.execute(select(SimulationType).order_by(SimulationType.name))
    return result.scalars().all()


@router.get("/feedback-form-types", response_model=list[LookupResponse])
async def list_feedback_form_types(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    result = await db.execute(select(FeedbackFormType).order_by(FeedbackFormType.name))
    return result.scalars().all()
