"""SQLAlchemy models for homeledger database."""

from datetime import datetime, UTC

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, relationship, sessionmaker

Base = declarative_base()


class Household(Base):
    """Household model."""

    __tablename__ = "households"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    categories = relationship("Category", back_populates="household", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="household", cascade="all, delete-orphan")


class Category(Base):
    """Top-level budget category, typed income or expense."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False, default="expense")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("household_id", "name", name="uq_household_category_name"),
        CheckConstraint("category_type IN ('expense', 'income')", name="ck_category_type"),
    )

    # Relationships
    household = relationship("Household", back_populates="categories")
    sub_categories = relationship("SubCategory", back_populates="category", cascade="all, delete-orphan")


class SubCategory(Base):
    """Leaf budget bucket."""

    __tablename__ = "sub_categories"

    id = Column(Integer, primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("category_id", "name", name="uq_category_sub_category_name"),)

    # Relationships
    category = relationship("Category", back_populates="sub_categories")
    transactions = relationship("Transaction", back_populates="sub_category")


class Transaction(Base):
    """Ledger transaction model. Amounts are positive; the type gives the direction."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    sub_category_id = Column(Integer, ForeignKey("sub_categories.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    transaction_type = Column(String, nullable=False)
    transaction_date = Column(Date, nullable=False)
    narration = Column(String, nullable=True)
    logged_by = Column(String, nullable=False)
    source = Column(String, nullable=False, default="manual")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
        CheckConstraint("transaction_type IN ('expense', 'income')", name="ck_transaction_type"),
    )

    # Relationships
    household = relationship("Household", back_populates="transactions")
    sub_category = relationship("SubCategory", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
