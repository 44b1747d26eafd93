"""Persisted advisory cache records, one per (vehicle, area)."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, Session, mapped_column, sessionmaker

from ..area import ServiceArea
from ..db import Base

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvisoryRecord:
    """A cached advisory payload, detached from any database session."""

    vehicle_id: int
    area: ServiceArea
    payload: str
    created_at: datetime
    expires_at: datetime


class AdvisoryStore(ABC):
    """Key-value store for advisory payloads keyed by (vehicle_id, area)."""

    @abstractmethod
    def find(self, vehicle_id: int, area: ServiceArea) -> Optional[AdvisoryRecord]:
        raise NotImplementedError

    @abstractmethod
    def upsert(
        self,
        vehicle_id: int,
        area: ServiceArea,
        payload: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> None:
        """Insert the record, or overwrite the existing one for the same key in place."""
        raise NotImplementedError


class AdvisoryCacheEntry(Base):
    """ORM row backing an AdvisoryRecord."""

    __tablename__ = "advisory_cache"
    __table_args__ = (
        UniqueConstraint("vehicle_id", "area", name="uq_advisory_cache_vehicle_area"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    vehicle_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    area: Mapped[str] = mapped_column(String(32), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAdvisoryStore(AdvisoryStore):
    """AdvisoryStore on a SQL database; uniqueness comes from the table constraint."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _select(self, session: Session, vehicle_id: int, area: ServiceArea):
        return session.scalar(
            select(AdvisoryCacheEntry)
            .where(AdvisoryCacheEntry.vehicle_id == vehicle_id)
            .where(AdvisoryCacheEntry.area == area.name)
        )

    def find(self, vehicle_id: int, area: ServiceArea) -> Optional[AdvisoryRecord]:
        with self._session_factory() as session:
            entry = self._select(session, vehicle_id, area)
            if entry is None:
                return None
            return AdvisoryRecord(
                vehicle_id=entry.vehicle_id,
                area=area,
                payload=entry.payload,
                created_at=_as_utc(entry.created_at),
                expires_at=_as_utc(entry.expires_at),
            )

    def upsert(
        self,
        vehicle_id: int,
        area: ServiceArea,
        payload: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> None:
        with self._session_factory() as session:
            entry = self._select(session, vehicle_id, area)
            if entry is None:
                session.add(
                    AdvisoryCacheEntry(
                        vehicle_id=vehicle_id,
                        area=area.name,
                        payload=payload,
                        created_at=created_at,
                        expires_at=expires_at,
                    )
                )
                try:
                    session.commit()
                    return
                except IntegrityError:
                    # Another request inserted the same key first; overwrite it
                    session.rollback()
                    logger.info(
                        "Concurrent insert for vehicle_id=%s area=%s, updating instead",
                        vehicle_id,
                        area.slug,
                    )
                    entry = self._select(session, vehicle_id, area)

            entry.payload = payload
            entry.created_at = created_at
            entry.expires_at = expires_at
            session.commit()
