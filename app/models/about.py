"""About 페이지 컬렉션(유튜버, 애니, 책, 게임)의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base


class Youtuber(Base):
    __tablename__ = "youtubers"

    youtuber_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    channel_url = Column(String(500))
    profile_image = Column(String(500))
    description = Column(Text)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())


class Anime(Base):
    __tablename__ = "anime_list"

    anime_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    cover_image = Column(String(500))
    status = Column(String(20))  # watching/completed/planned
    rating = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())


class Book(Base):
    __tablename__ = "book_list"

    book_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    author = Column(String(100))
    cover_image = Column(String(500))
    status = Column(String(20))  # reading/completed/planned
    rating = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())


class Game(Base):
    __tablename__ = "games"

    game_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    platform = Column(String(50))
    cover_image = Column(String(500))
    rating = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())
