from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from impacts.database import get_db
from impacts.models.lookup import ActivityCategory, SimulationType, FeedbackFormType
from impacts.schemas.lookup import LookupWrite, LookupResponse
from impacts.auth import require_admin, UserPrincipal

router = APIRouter()


def _register_lookup_routes(path: str, model, label: str) -> None:
    """Attach list/create/update/delete admin routes for one lookup table."""

    async def _get_or_404(db: AsyncSession, item_id: int):
        result = await db.execute(select(model).where(model.id == item_id))
        item = result.scalar_one_or_none()
        if not item:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    @router.get(path, response_model=list[LookupResponse], name=f"list_{model.__tablename__}")
    async def list_items(
        db: AsyncSession = Depends(get_db),
        admin: UserPrincipal = Depends(require_admin),
    ):
        result = await db.execute(select(model).order_by(model.name))
        return result.scalars().all()

    @router.post(path, response_model=LookupResponse, status_code=201, name=f"create_{model.__tablename__}")
    async def create_item(
        data: LookupWrite,
        db: AsyncSession = Depends(get_db),
        admin: UserPrincipal = Depends(require_admin),
    ):
        item = model(name=data.name)
        db.add(item)
        await db.flush()
        await db.refresh(item)
        return item

    @router.put(f"{path}/{{item_id}}", response_model=LookupResponse, name=f"update_{model.__tablename__}")
    async def update_item(
        item_id: int,
        data: LookupWrite,
        db: AsyncSession = Depends(get_db),
        admin: UserPrincipal = Depends(require_admin),
    ):
        item = await _get_or_404(db, item_id)
        item.name = data.name
        await db.flush()
        await db.refresh(item)
        return item

    @router.delete(f"{path}/{{item_id}}", name=f"delete_{model.__tablename__}")
    async def delete_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
        admin: UserPrincipal = Depends(require_admin),
    ):
        item = await _get_or_404(db, item_id)
        await db.delete(item)
        await db.flush()
        return {"message": f"{label} removed"}


_register_lookup_routes("/categories", ActivityCategory, "Category")
_register_lookup_routes("/simulation-types", SimulationType, "Simulation type")
_register_lookup_routes("/feedback-form-types", FeedbackFormType, "Feedback form type")
