"""
SQLAlchemy ORM models.

Tables:
- users: one row per player (id is the JWT subject)
- games: one row per daily game
- guesses: one row per guess, ordered by position within its game

Letter results are stored as a JSON list of strings ("Correct", ...).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # No FK: games are wiped at rollover while users stay
    current_game_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class GameRow(Base):
    __tablename__ = "games"

    # UUIDs generated in code; stored as strings
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    word: Mapped[str] = mapped_column(String(32), nullable=False)
    max_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    guesses: Mapped[list["GuessRow"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="GuessRow.position",
    )


class GuessRow(Base):
    __tablename__ = "guesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(String(36), ForeignKey("games.id", ondelete="CASCADE"), index=True)
    game: Mapped[GameRow] = relationship(back_populates="guesses")

    position: Mapped[int] = mapped_column(Integer, nullable=False)
    word: Mapped[str] = mapped_column(String(32), nullable=False)
    results: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
