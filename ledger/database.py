"""Database layer — SQLAlchemy ORM with SQLite (or PostgreSQL)."""

from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, relationship


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./obotzap.db")


def get_engine(database_url: Optional[str] = None) -> Engine:
    return create_engine(database_url or DATABASE_URL, echo=False)


# ---------------------------------------------------------------------------
# ORM Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Users & companies
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)  # not unique: reseeding duplicates admins
    password = Column(String(255), nullable=False)
    # Plain column: the pointer may be set before the company row exists
    current_company_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    owned_companies = relationship(
        "Company",
        back_populates="owner",
        order_by="Company.id",
        cascade="all, delete-orphan",
    )


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    personal_company = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    owner = relationship("User", back_populates="owned_companies")
    profile = relationship("CompanyProfile", uselist=False, back_populates="company", cascade="all, delete-orphan")
    default = relationship("CompanyDefault", uselist=False, back_populates="company", cascade="all, delete-orphan")
    localization = relationship("Localization", uselist=False, back_populates="company", cascade="all, delete-orphan")
    currencies = relationship("Currency", back_populates="company", cascade="all, delete-orphan")
    document_defaults = relationship("DocumentDefault", back_populates="company", cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "personal_company": bool(self.personal_company),
            "country": self.profile.country_code if self.profile else None,
            "currency": self.default.currency_code if self.default else None,
            "locale": self.default.language if self.default else None,
            "created_at": self.created_at,
        }


class CompanyProfile(Base):
    __tablename__ = "company_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, unique=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    entity_type = Column(String(50), nullable=True)
    address_line_1 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    country_code = Column(String(2), nullable=False)

    company = relationship("Company", back_populates="profile")


class Currency(Base):
    __tablename__ = "currencies"
    __table_args__ = (UniqueConstraint("company_id", "code"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    code = Column(String(3), nullable=False)
    name = Column(String(100), nullable=False)
    symbol = Column(String(10), nullable=False)
    precision = Column(Integer, nullable=False, default=2)
    symbol_first = Column(Boolean, nullable=False, default=True)
    decimal_mark = Column(String(1), nullable=False, default=".")
    thousands_separator = Column(String(1), nullable=False, default=",")
    rate = Column(Float, nullable=False, default=1.0)
    enabled = Column(Boolean, nullable=False, default=True)

    company = relationship("Company", back_populates="currencies")


class Localization(Base):
    __tablename__ = "localizations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, unique=True)
    language = Column(String(10), nullable=False)
    timezone = Column(String(64), nullable=False)
    date_format = Column(String(32), nullable=False)
    number_format = Column(String(32), nullable=False)
    percentage_first = Column(Boolean, nullable=False, default=False)
    week_start = Column(Integer, nullable=False)  # 0 = Sunday … 6 = Saturday

    company = relationship("Company", back_populates="localization")


class CompanyDefault(Base):
    __tablename__ = "company_defaults"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, unique=True)
    currency_code = Column(String(3), nullable=False)
    language = Column(String(10), nullable=False)

    company = relationship("Company", back_populates="default")


class DocumentDefault(Base):
    __tablename__ = "document_defaults"
    __table_args__ = (UniqueConstraint("company_id", "type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    type = Column(String(32), nullable=False)
    header = Column(String(255), nullable=True)
    subheader = Column(String(255), nullable=True)
    number_prefix = Column(String(16), nullable=False)
    number_digits = Column(Integer, nullable=False, default=5)
    payment_terms = Column(String(32), nullable=True)
    accent_color = Column(String(16), nullable=True)
    footer = Column(Text, nullable=True)
    terms = Column(Text, nullable=True)

    company = relationship("Company", back_populates="document_defaults")


# ---------------------------------------------------------------------------
# Financial entities
# ---------------------------------------------------------------------------
class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # deposit | withdrawal
    description = Column(String(255), nullable=True)
    account_name = Column(String(100), nullable=False)
    amount = Column(Float, nullable=False)
    posted_at = Column(Date, nullable=False)
    reviewed = Column(Boolean, nullable=False, default=False)


class Offering(Base):
    __tablename__ = "offerings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)  # product | service
    price = Column(Float, nullable=False)
    sellable = Column(Boolean, nullable=False, default=True)
    purchasable = Column(Boolean, nullable=False, default=False)


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    currency_code = Column(String(3), nullable=False)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    currency_code = Column(String(3), nullable=False)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    invoice_number = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False)
    date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    currency_code = Column(String(3), nullable=False)
    subtotal = Column(Float, nullable=False, default=0.0)
    tax_total = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)
    amount_paid = Column(Float, nullable=False, default=0.0)


class RecurringInvoice(Base):
    __tablename__ = "recurring_invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    status = Column(String(20), nullable=False)
    frequency = Column(String(20), nullable=False)  # weekly | monthly | yearly
    interval_value = Column(Integer, nullable=False, default=1)
    start_date = Column(Date, nullable=False)
    next_date = Column(Date, nullable=True)
    currency_code = Column(String(3), nullable=False)
    subtotal = Column(Float, nullable=False, default=0.0)
    tax_total = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)


class Estimate(Base):
    __tablename__ = "estimates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    estimate_number = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False)
    date = Column(Date, nullable=False)
    expiration_date = Column(Date, nullable=False)
    currency_code = Column(String(3), nullable=False)
    subtotal = Column(Float, nullable=False, default=0.0)
    tax_total = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)


class Bill(Base):
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    bill_number = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False)
    date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    currency_code = Column(String(3), nullable=False)
    subtotal = Column(Float, nullable=False, default=0.0)
    tax_total = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)
    amount_paid = Column(Float, nullable=False, default=0.0)


class LineItem(Base):
    __tablename__ = "line_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    document_type = Column(String(32), nullable=False)
    document_id = Column(Integer, nullable=False)
    offering_id = Column(Integer, ForeignKey("offerings.id"), nullable=True)
    description = Column(String, nullable=True)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)


# ---------------------------------------------------------------------------
# DB lifecycle
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create tables if they don't exist."""
    Base.metadata.create_all(engine)


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
