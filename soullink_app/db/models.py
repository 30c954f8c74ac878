from __future__ import annotations
from datetime import datetime
from sqlalchemy import Boolean, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

PLAYERS = ("player1", "player2", "player3")
LOCATIONS = ("party", "box", "graveyard")
ROUTE_STATUSES = ("caught", "failed", "empty", "skipped")

class Species(Base):
    __tablename__ = "species"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    base_hp: Mapped[int] = mapped_column(Integer)
    base_atk: Mapped[int] = mapped_column(Integer)
    base_def: Mapped[int] = mapped_column(Integer)
    base_spa: Mapped[int] = mapped_column(Integer)
    base_spd: Mapped[int] = mapped_column(Integer)
    base_spe: Mapped[int] = mapped_column(Integer)
    type1: Mapped[str | None] = mapped_column(String(16), nullable=True)
    type2: Mapped[str | None] = mapped_column(String(16), nullable=True)

    members: Mapped[list["RosterMember"]] = relationship(back_populates="species", cascade="all, delete-orphan")

class RosterMember(Base):
    __tablename__ = "roster_members"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    species_id: Mapped[int] = mapped_column(ForeignKey("species.id"), index=True)
    nickname: Mapped[str | None] = mapped_column(String(64), nullable=True)
    owner: Mapped[str] = mapped_column(String(16), default="player1", index=True)
    location: Mapped[str] = mapped_column(String(16), default="party", index=True)
    # compañeros enlazados comparten pair_id
    pair_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    route: Mapped[str | None] = mapped_column(String(64), nullable=True)
    level: Mapped[int] = mapped_column(Integer, default=50)
    moves_json: Mapped[str] = mapped_column(Text, default="[]")
    # registro de la muerte: jugador culpable y cómo pasó
    killed_by: Mapped[str | None] = mapped_column(String(16), nullable=True, index=True)
    incident: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    species: Mapped[Species] = relationship(back_populates="members")

class Route(Base):
    """Encuentro de una zona: una captura por jugador, o un fallo con culpables."""
    __tablename__ = "routes"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(128))
    status: Mapped[str] = mapped_column(String(16), default="empty", index=True)
    encounter_p1: Mapped[str | None] = mapped_column(String(64), nullable=True)
    encounter_p2: Mapped[str | None] = mapped_column(String(64), nullable=True)
    encounter_p3: Mapped[str | None] = mapped_column(String(64), nullable=True)
    failed_by_json: Mapped[str] = mapped_column(Text, default="[]")
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False)
