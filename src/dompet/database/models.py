"""SQLAlchemy models for dompet database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Float,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model.

    ``linked_to`` holds the ``<kind>_<id>`` reference to a satellite row; it is
    not a foreign key because it can point at one of three tables.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False)
    fund_source = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    linked_to = Column(String, nullable=True, index=True)
    purpose = Column(String, nullable=False, default="ordinary")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    target_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Investment(Base):
    """Investment position model."""

    __tablename__ = "investments"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    initial_amount = Column(Float, nullable=False, default=0.0)
    current_value = Column(Float, nullable=False, default=0.0)
    purchase_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Debt(Base):
    """Debt/receivable model."""

    __tablename__ = "debts"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    person_name = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="unpaid")
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Category(Base):
    """Category model, typed as income or expense."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("name", "type", name="uq_category_name_type"),)


class FundSource(Base):
    """Fund source model."""

    __tablename__ = "fund_sources"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
