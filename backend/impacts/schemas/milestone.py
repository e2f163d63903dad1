from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class MilestoneItemStatus(BaseModel):
    id:            int
    title:         str
    description:   Optional[str] = None
    link_url:      Optional[str] = Field(default=None, alias="linkUrl")
    link_text:     Optional[str] = Field(default=None, alias="linkText")
    display_order: int = Field(alias="displayOrder")
    completed:     bool = False
    completed_at:  Optional[datetime] = Field(default=None, alias="completedAt")
    notes:         Optional[str] = None

    class Config:
        populate_by_name = True


class MilestoneCategoryStatus(BaseModel):
    id:            int
    name:          str
    display_order: int = Field(alias="displayOrder")
    items:         list[MilestoneItemStatus] = []

    class Config:
        populate_by_name = True


class MilestoneToggleRequest(BaseModel):
    notes: Optional[str] = None


class MilestoneNotesRequest(BaseModel):
    notes: Optional[str] = None


class UserMilestoneResponse(BaseModel):
    id:                int
    user_id:           int
    milestone_item_id: int
    completed:         bool
    completed_at:      Optional[datetime] = None
    notes:             Optional[str] = None

    class Config:
        from_attributes = True
