from sqlalchemy import Column, Integer, Date, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from impacts.database import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    activity_note = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("activity_categories.id"), nullable=False)
    hours = Column(Numeric(4, 2, asdecimal=False), nullable=False)
    simulation_type_id = Column(Integer, ForeignKey("simulation_types.id"))
    simulation_participants = Column(Integer)
    feedback_forms_submitted_id = Column(Integer, ForeignKey("feedback_form_types.id"))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
