import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field


class ActivityCreate(BaseModel):
    date:                        dt.date
    activity_note:               str = Field(alias="activityNote", min_length=1)
    category_id:                 int = Field(alias="categoryId")
    hours:                       float = Field(ge=0, le=24)
    simulation_type_id:          Optional[int] = Field(default=None, alias="simulationTypeId")
    simulation_participants:     Optional[int] = Field(default=None, alias="simulationParticipants", ge=0, le=100)
    feedback_forms_submitted_id: Optional[int] = Field(default=None, alias="feedbackFormsSubmittedId")
    notes:                       Optional[str] = None

    class Config:
        populate_by_name = True


class ActivityUpdate(BaseModel):
    """Partial update: only supplied, non-null fields are written."""
    date:                        Optional[dt.date] = None
    activity_note:               Optional[str] = Field(default=None, alias="activityNote", min_length=1)
    category_id:                 Optional[int] = Field(default=None, alias="categoryId")
    hours:                       Optional[float] = Field(default=None, ge=0, le=24)
    simulation_type_id:          Optional[int] = Field(default=None, alias="simulationTypeId")
    simulation_participants:     Optional[int] = Field(default=None, alias="simulationParticipants", ge=0, le=100)
    feedback_forms_submitted_id: Optional[int] = Field(default=None, alias="feedbackFormsSubmittedId")
    notes:                       Optional[str] = None

    class Config:
        populate_by_name = True


class ActivityResponse(BaseModel):
    id: int
    user_id: int
    date: dt.date
    activity_note: str
    category_id: int
    hours: float
    simulation_type_id: Optional[int] = None
    simulation_participants: Optional[int] = None
    feedback_forms_submitted_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    category_name: Optional[str] = None
    simulation_type_name: Optional[str] = None
    feedback_form_type_name: Optional[str] = None

    class Config:
        from_attributes = True
