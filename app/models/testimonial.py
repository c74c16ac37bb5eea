"""Testimonial 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.sql import func
from app.database import Base


class Testimonial(Base):
    __tablename__ = "testimonials"

    testimonial_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    role = Column(String(100))
    company = Column(String(100))
    content = Column(Text, nullable=False)
    avatar = Column(String(500))
    rating = Column(Integer)
    is_visible = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
