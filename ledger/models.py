"""Pydantic models and enums describing what the factories should build."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .profiles import COUNTRY_PROFILES, CURRENCY_PROFILES, LOCALE_PROFILES


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class DocumentType(str, Enum):
    INVOICE = "invoice"
    ESTIMATE = "estimate"
    BILL = "bill"
    RECURRING_INVOICE = "recurring_invoice"


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class OfferingType(str, Enum):
    PRODUCT = "product"
    SERVICE = "service"


# ---------------------------------------------------------------------------
# Builder defaults
# ---------------------------------------------------------------------------
DEFAULT_COUNTRY = "US"
DEFAULT_CURRENCY = "USD"
DEFAULT_LOCALE = "en"

DEFAULT_TRANSACTIONS = 200
DEFAULT_OFFERINGS = 10
DEFAULT_CLIENTS = 8
DEFAULT_VENDORS = 8
DEFAULT_INVOICES = 10
DEFAULT_RECURRING_INVOICES = 5
DEFAULT_ESTIMATES = 10
DEFAULT_BILLS = 10


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class UserAttributes(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    password: str = Field(..., min_length=1, description="Plain text; hashed before it is stored")
    current_company_id: Optional[int] = None


# ---------------------------------------------------------------------------
# Company
# ---------------------------------------------------------------------------
class CompanySeedConfig(BaseModel):
    """Everything the company factory needs to build one company.

    Each volume field is the exact number of rows generated for that
    category; 0 skips it.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(None, description="Generated from the country profile when omitted")
    personal_company: bool = False
    country: str = DEFAULT_COUNTRY
    currency: str = DEFAULT_CURRENCY
    locale: str = DEFAULT_LOCALE

    transactions: int = Field(DEFAULT_TRANSACTIONS, ge=0)
    offerings: int = Field(DEFAULT_OFFERINGS, ge=0)
    clients: int = Field(DEFAULT_CLIENTS, ge=0)
    vendors: int = Field(DEFAULT_VENDORS, ge=0)
    invoices: int = Field(DEFAULT_INVOICES, ge=0)
    recurring_invoices: int = Field(DEFAULT_RECURRING_INVOICES, ge=0)
    estimates: int = Field(DEFAULT_ESTIMATES, ge=0)
    bills: int = Field(DEFAULT_BILLS, ge=0)

    @field_validator("country", "currency")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("locale")
    @classmethod
    def _lower(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _check_profile_and_parties(self) -> "CompanySeedConfig":
        if self.country not in COUNTRY_PROFILES:
            raise ValueError(f"Unsupported country code: {self.country}")
        if self.currency not in CURRENCY_PROFILES:
            raise ValueError(f"Unsupported currency code: {self.currency}")
        if self.locale not in LOCALE_PROFILES:
            raise ValueError(f"Unsupported locale: {self.locale}")

        if self.clients == 0 and (self.invoices or self.estimates or self.recurring_invoices):
            raise ValueError("invoices, estimates and recurring invoices need at least one client")
        if self.vendors == 0 and self.bills:
            raise ValueError("bills need at least one vendor")
        return self


class CompanyDescriptor(BaseModel):
    """Name plus locale/currency profile of a company seeded by name."""

    name: str
    country: str
    currency: str
    locale: str


# ---------------------------------------------------------------------------
# Document labels
# ---------------------------------------------------------------------------
class DocumentLabel(BaseModel):
    header: str
    number_prefix: str
