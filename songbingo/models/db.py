"""
SQLAlchemy ORM models for persistent storage.

Songs form the catalog; shared cards record images a guest has shared.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SongDB(Base):
    """A catalog song. Read-only for the lifetime of a session."""

    __tablename__ = "bingo_songs"

    song_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    short_title: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<SongDB(song_id={self.song_id}, title={self.title})>"


class SharedCardDB(Base):
    """
    A card image shared by a guest.

    The image itself lives in the image store; only its URL is kept here.
    """

    __tablename__ = "bingo_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guest_id: Mapped[str] = mapped_column(String(255), index=True)
    card_id: Mapped[str] = mapped_column(String(64), unique=True)
    image_url: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<SharedCardDB(guest_id={self.guest_id}, card_id={self.card_id})>"
