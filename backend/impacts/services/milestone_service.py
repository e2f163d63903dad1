import logging
from typing import Iterable, Optional
from sqlalchemy import and_, case, false, func, not_, null, select
from sqlalchemy.ext.asyncio import AsyncSession
from impacts.database import upsert
from impacts.exceptions import NotFoundError
from impacts.models.milestone import MilestoneCategory, MilestoneItem, UserMilestone
from impacts.schemas.milestone import MilestoneCategoryStatus, MilestoneItemStatus

logger = logging.getLogger(__name__)

_USER_ITEM_KEY = ["user_id", "milestone_item_id"]


def fold_milestone_rows(rows: Iterable) -> list[MilestoneCategoryStatus]:
    """
    Reshape the flat category/item/completion join into nested categories.

    Rows must arrive ordered by category then item. A new category starts
    whenever category_id changes; rows without an item_id (a category with
    no items) add the category but no item.
    """
    categories: list[MilestoneCategoryStatus] = []
    current: Optional[MilestoneCategoryStatus] = None

    for row in rows:
        if current is None or current.id != row["category_id"]:
            current = MilestoneCategoryStatus(
                id=row["category_id"],
                name=row["category_name"],
                display_order=row["category_order"],
                items=[],
            )
            categories.append(current)

        if row["item_id"] is None:
            continue

        current.items.append(MilestoneItemStatus(
            id=row["item_id"],
            title=row["title"],
            description=row["description"],
            link_url=row["link_url"],
            link_text=row["link_text"],
            display_order=row["item_order"],
            completed=bool(row["completed"]),
            completed_at=row["completed_at"],
            notes=row["notes"],
        ))

    return categories


class MilestoneService:
    async def fetch_with_status(self, db: AsyncSession, user_id: int) -> list[MilestoneCategoryStatus]:
        query = (
            select(
                MilestoneCategory.id.label("category_id"),
                MilestoneCategory.name.label("category_name"),
                MilestoneCategory.display_order.label("category_order"),
                MilestoneItem.id.label("item_id"),
                MilestoneItem.title,
                MilestoneItem.description,
                MilestoneItem.link_url,
                MilestoneItem.link_text,
                MilestoneItem.display_order.label("item_order"),
                UserMilestone.completed,
                UserMilestone.completed_at,
                UserMilestone.notes,
            )
            .select_from(MilestoneCategory)
            .outerjoin(MilestoneItem, MilestoneItem.category_id == MilestoneCategory.id)
            .outerjoin(
                UserMilestone,
                and_(
                    UserMilestone.milestone_item_id == MilestoneItem.id,
                    UserMilestone.user_id == user_id,
                ),
            )
            # ids break display_order ties so a category's rows stay contiguous
            .order_by(
                MilestoneCategory.display_order,
                MilestoneCategory.id,
                MilestoneItem.display_order,
                MilestoneItem.id,
            )
        )
        result = await db.execute(query)
        return fold_milestone_rows(result.mappings().all())

    async def toggle(
        self,
        db: AsyncSession,
        user_id: int,
        item_id: int,
        notes: Optional[str] = None,
        replace_notes: bool = False,
    ) -> UserMilestone:
        """
        Flip completion for (user, item) in one INSERT ... ON CONFLICT statement.

        A missing row is created completed with completed_at=now. An existing
        row has completed inverted; completed_at becomes now when the new value
        is true and null otherwise. Notes are written only when replace_notes
        is set, so omitting them keeps whatever was stored.
        """
        await self._require_item(db, item_id)

        stmt = upsert(db, UserMilestone).values(
            user_id=user_id,
            milestone_item_id=item_id,
            completed=True,
            completed_at=func.now(),
            notes=notes if replace_notes else None,
        )
        was_completed = func.coalesce(UserMilestone.completed, false())
        changes = {
            "completed": not_(was_completed),
            "completed_at": case((was_completed, null()), else_=func.now()),
        }
        if replace_notes:
            changes["notes"] = stmt.excluded.notes
        stmt = stmt.on_conflict_do_update(index_elements=_USER_ITEM_KEY, set_=changes)

        result = await db.execute(
            stmt.returning(UserMilestone),
            execution_options={"populate_existing": True},
        )
        milestone = result.scalar_one()
        logger.debug("User %s toggled milestone item %s -> %s", user_id, item_id, milestone.completed)
        return milestone

    async def update_notes(
        self,
        db: AsyncSession,
        user_id: int,
        item_id: int,
        notes: Optional[str],
    ) -> UserMilestone:
        """Upsert notes for (user, item) without touching completion state."""
        await self._require_item(db, item_id)

        stmt = upsert(db, UserMilestone).values(
            user_id=user_id,
            milestone_item_id=item_id,
            completed=False,
            notes=notes,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=_USER_ITEM_KEY,
            set_={"notes": stmt.excluded.notes},
        )
        result = await db.execute(
            stmt.returning(UserMilestone),
            execution_options={"populate_existing": True},
        )
        return result.scalar_one()

    async def _require_item(self, db: AsyncSession, item_id: int) -> None:
        exists = await db.scalar(select(MilestoneItem.id).where(MilestoneItem.id == item_id))
        if exists is None:
            raise NotFoundError("Milestone item not found")


milestone_service = MilestoneService()
