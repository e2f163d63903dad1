from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression
from impacts.database import Base


class MilestoneCategory(Base):
    __tablename__ = "milestone_categories"

    id            = Column(Integer, primary_key=True, index=True)
    name          = Column(String(200), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)

    items = relationship(
        "MilestoneItem",
        back_populates="category",
        order_by="MilestoneItem.display_order",
        cascade="all, delete-orphan",
    )


class MilestoneItem(Base):
    __tablename__ = "milestone_items"

    id            = Column(Integer, primary_key=True, index=True)
    category_id   = Column(Integer, ForeignKey("milestone_categories.id", ondelete="CASCADE"), nullable=False, index=True)
    title         = Column(String(300), nullable=False)
    description   = Column(Text)
    link_url      = Column(String(500))
    link_text     = Column(String(200))
    display_order = Column(Integer, nullable=False, default=0)

    category = relationship("MilestoneCategory", back_populates="items")


class UserMilestone(Base):
    __tablename__ = "user_milestones"
    __table_args__ = (
        UniqueConstraint("user_id", "milestone_item_id", name="uq_user_milestones_user_item"),
    )

    id                = Column(Integer, primary_key=True, index=True)
    user_id           = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    milestone_item_id = Column(Integer, ForeignKey("milestone_items.id", ondelete="CASCADE"), nullable=False)
    completed         = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    completed_at      = Column(DateTime(timezone=True))   # only set while completed
    notes             = Column(Text)
