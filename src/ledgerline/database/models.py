"""SQLAlchemy models for ledgerline database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Entity(Base):
    """Client or supplier model."""

    __tablename__ = "entities"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    opening_balance = Column(Numeric(14, 2), nullable=False, default=0)
    credit_limit = Column(Numeric(14, 2), nullable=True)
    status = Column(String, nullable=False, default="active")
    branch_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Names are unique per kind: a client and a supplier may share one
    __table_args__ = (UniqueConstraint("kind", "name", name="uq_entity_kind_name"),)

    # Relationships
    records = relationship("SourceRecord", back_populates="entity")


class SourceRecord(Base):
    """Raw financial record model.

    Date and amount are stored as the text received so that malformed upstream
    values reach the tolerant parsing in the domain layer unchanged.
    """

    __tablename__ = "source_records"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=True)
    branch_id = Column(Integer, nullable=True)
    date = Column(String, nullable=True)
    amount = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    description = Column(String, nullable=True)
    direction = Column(String, nullable=True)
    posted = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entity = relationship("Entity", back_populates="records")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
