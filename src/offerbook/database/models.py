"""SQLAlchemy models for offerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Member(Base):
    """Donor model. Rows are deactivated, never deleted."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    member_no = Column(String, nullable=True)
    note = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    donations = relationship("Donation", back_populates="member")


class Code(Base):
    """Offering type model keyed by its code."""

    __tablename__ = "codes"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class Donation(Base):
    """Committed offering record with denormalized donor and code labels."""

    __tablename__ = "donations"

    id = Column(Integer, primary_key=True)
    donate_at = Column(Date, nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=True)
    member_no = Column(String, nullable=True)
    member_name = Column(String, nullable=False, default="")
    donation_code = Column(String, nullable=False)
    code_name = Column(String, nullable=False, default="")
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    member = relationship("Member", back_populates="donations")


class Budget(Base):
    """Budget line model."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    year = Column(Integer, nullable=False)
    code = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(String, nullable=True)

    # Unique constraint on year + code
    __table_args__ = (UniqueConstraint("year", "code", name="uq_budget_year_code"),)


class SystemSetting(Base):
    """Key/value application setting."""

    __tablename__ = "system_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
