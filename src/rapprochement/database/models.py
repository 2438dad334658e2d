"""SQLAlchemy models for the local upload registry."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Upload(Base):
    """Ingested file model."""

    __tablename__ = "uploads"

    id = Column(Integer, primary_key=True)
    upload_id = Column(String, unique=True, nullable=False)
    filename = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    rows_count = Column(Integer, nullable=False)
    # Decimal text, stored exactly
    reference_balance = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship(
        "UploadedTransaction",
        back_populates="upload",
        cascade="all, delete-orphan",
        order_by="UploadedTransaction.position",
    )


class UploadedTransaction(Base):
    """Transaction extracted from an ingested file."""

    __tablename__ = "uploaded_transactions"

    id = Column(Integer, primary_key=True)
    upload_pk = Column(Integer, ForeignKey("uploads.id"), nullable=False)
    position = Column(Integer, nullable=False)
    date = Column(String, nullable=False)
    label = Column(String, nullable=False)
    amount = Column(String, nullable=False)

    # Row order is part of the ingestion result
    __table_args__ = (UniqueConstraint("upload_pk", "position", name="uq_upload_position"),)

    # Relationships
    upload = relationship("Upload", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
