"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from app.models.user import User
from app.models.project import Project
from app.models.blog import BlogPost
from app.models.testimonial import Testimonial
from app.models.about import Youtuber, Anime, Book, Game

__all__ = [
    "User",
    "Project",
    "BlogPost",
    "Testimonial",
    "Youtuber", "Anime", "Book", "Game",
]
