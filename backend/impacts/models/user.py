from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from impacts.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    hospital_name = Column(String(200))
    role = Column(String(20), nullable=False, default="normal", server_default="normal")  # "normal" | "admin"
    created_at = Column(DateTime(timezone=True), server_default=func.now())
