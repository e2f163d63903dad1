from sqlalchemy import Column, Integer, String
from impacts.database import Base


class ActivityCategory(Base):
    __tablename__ = "activity_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)


class SimulationType(Base):
    __tablename__ = "simulation_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)


class FeedbackFormType(Base):
    __tablename__ = "feedback_form_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
