"""Document defaults, invoices, recurring invoices, estimates and bills.

Every document gets 1-4 line items priced from the company's offerings and is
numbered with the prefix of the company's DocumentDefault for its type.
"""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ledger.database import (
    Bill,
    Client,
    Company,
    DocumentDefault,
    Estimate,
    Invoice,
    LineItem,
    Offering,
    RecurringInvoice,
    Vendor,
)
from ledger.models import CompanySeedConfig, DocumentType
from ledger.profiles import COUNTRY_PROFILES

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Document defaults
# ---------------------------------------------------------------------------

DEFAULT_DOCUMENT_SETTINGS: dict[DocumentType, dict] = {
    DocumentType.INVOICE: {"header": "Invoice", "number_prefix": "INV-", "payment_terms": "due_upon_receipt"},
    DocumentType.ESTIMATE: {"header": "Estimate", "number_prefix": "EST-", "payment_terms": "due_upon_receipt"},
    DocumentType.BILL: {"header": "Bill", "number_prefix": "BILL-", "payment_terms": "net_30"},
    DocumentType.RECURRING_INVOICE: {"header": "Invoice", "number_prefix": "INV-", "payment_terms": "due_upon_receipt"},
}

DEFAULT_NUMBER_DIGITS = 5
DEFAULT_ACCENT_COLOR = "#4F46E5"

INVOICE_STATUSES = ["draft", "sent", "partial", "paid", "overdue"]
ESTIMATE_STATUSES = ["draft", "sent", "accepted", "declined", "expired"]
BILL_STATUSES = ["open", "partial", "paid"]
RECURRING_STATUSES = ["draft", "active", "ended"]
RECURRING_FREQUENCIES = {"weekly": 7, "monthly": 30, "yearly": 365}

_GENERIC_LINES = {
    "pt": ["Serviços prestados", "Horas de consultoria", "Despesas reembolsáveis"],
    "en": ["Professional services", "Consulting hours", "Reimbursable expenses"],
}


def create_document_defaults(session: Session, company: Company) -> list[DocumentDefault]:
    defaults = [
        DocumentDefault(
            company_id=company.id,
            type=document_type.value,
            header=settings["header"],
            number_prefix=settings["number_prefix"],
            number_digits=DEFAULT_NUMBER_DIGITS,
            payment_terms=settings["payment_terms"],
            accent_color=DEFAULT_ACCENT_COLOR,
        )
        for document_type, settings in DEFAULT_DOCUMENT_SETTINGS.items()
    ]
    session.add_all(defaults)
    session.flush()
    return defaults


def format_document_number(prefix: str, digits: int, sequence: int) -> str:
    return f"{prefix}{sequence:0{digits}d}"


def _numbering(session: Session, company: Company, document_type: DocumentType) -> tuple[str, int]:
    default = session.execute(
        select(DocumentDefault).where(
            DocumentDefault.company_id == company.id,
            DocumentDefault.type == document_type.value,
        )
    ).scalar_one_or_none()
    if default is None:
        settings = DEFAULT_DOCUMENT_SETTINGS[document_type]
        return settings["number_prefix"], DEFAULT_NUMBER_DIGITS
    return default.number_prefix, default.number_digits


def _next_sequence(session: Session, model, company: Company) -> int:
    count = session.execute(
        select(func.count()).select_from(model).where(model.company_id == company.id)
    ).scalar_one()
    return count + 1


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------

def _build_lines(config: CompanySeedConfig, offerings: Sequence[Offering],
                 rng: random.Random) -> list[dict]:
    lines = []
    for _ in range(rng.randint(1, 4)):
        if offerings:
            offering = rng.choice(offerings)
            quantity = float(rng.randint(1, 5))
            lines.append({
                "offering_id": offering.id,
                "description": offering.name,
                "quantity": quantity,
                "unit_price": offering.price,
                "total": round(quantity * offering.price, 2),
            })
        else:
            quantity = float(rng.randint(1, 10))
            unit_price = round(rng.uniform(50, 800), 2)
            lines.append({
                "offering_id": None,
                "description": rng.choice(_GENERIC_LINES[config.locale]),
                "quantity": quantity,
                "unit_price": unit_price,
                "total": round(quantity * unit_price, 2),
            })
    return lines


def _totals(lines: list[dict], tax_rate: float) -> dict:
    subtotal = round(sum(line["total"] for line in lines), 2)
    tax_total = round(subtotal * tax_rate, 2)
    return {"subtotal": subtotal, "tax_total": tax_total, "total": round(subtotal + tax_total, 2)}


def _amount_paid(status: str, total: float, rng: random.Random) -> float:
    if status == "paid":
        return total
    if status == "partial":
        return round(total * rng.uniform(0.2, 0.8), 2)
    return 0.0


def _attach_lines(session: Session, company: Company, document_type: DocumentType,
                  documents: list, lines_per_document: list[list[dict]]) -> None:
    session.add_all(documents)
    session.flush()
    items = [
        LineItem(company_id=company.id, document_type=document_type.value, document_id=document.id, **line)
        for document, lines in zip(documents, lines_per_document)
        for line in lines
    ]
    session.add_all(items)
    session.flush()


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def create_invoices(session: Session, company: Company, config: CompanySeedConfig,
                    clients: Sequence[Client], offerings: Sequence[Offering],
                    rng: random.Random, today: Optional[date] = None) -> list[Invoice]:
    today = today or date.today()
    tax_rate = COUNTRY_PROFILES[config.country]["sales_tax_rate"]
    prefix, digits = _numbering(session, company, DocumentType.INVOICE)
    sequence = _next_sequence(session, Invoice, company)
    sellable = [o for o in offerings if o.sellable]

    invoices, all_lines = [], []
    for i in range(config.invoices):
        lines = _build_lines(config, sellable, rng)
        totals = _totals(lines, tax_rate)
        status = rng.choice(INVOICE_STATUSES)
        issued = today - timedelta(days=rng.randint(0, 180))
        invoices.append(Invoice(
            company_id=company.id,
            client_id=rng.choice(clients).id,
            invoice_number=format_document_number(prefix, digits, sequence + i),
            status=status,
            date=issued,
            due_date=issued + timedelta(days=30),
            currency_code=config.currency,
            amount_paid=_amount_paid(status, totals["total"], rng),
            **totals,
        ))
        all_lines.append(lines)

    _attach_lines(session, company, DocumentType.INVOICE, invoices, all_lines)
    return invoices


def create_recurring_invoices(session: Session, company: Company, config: CompanySeedConfig,
                              clients: Sequence[Client], offerings: Sequence[Offering],
                              rng: random.Random, today: Optional[date] = None) -> list[RecurringInvoice]:
    today = today or date.today()
    tax_rate = COUNTRY_PROFILES[config.country]["sales_tax_rate"]
    sellable = [o for o in offerings if o.sellable]

    recurring, all_lines = [], []
    for _ in range(config.recurring_invoices):
        lines = _build_lines(config, sellable, rng)
        status = rng.choice(RECURRING_STATUSES)
        frequency = rng.choice(list(RECURRING_FREQUENCIES))
        start = today - timedelta(days=rng.randint(0, 120))
        recurring.append(RecurringInvoice(
            company_id=company.id,
            client_id=rng.choice(clients).id,
            status=status,
            frequency=frequency,
            interval_value=1,
            start_date=start,
            next_date=start + timedelta(days=RECURRING_FREQUENCIES[frequency]) if status == "active" else None,
            currency_code=config.currency,
            **_totals(lines, tax_rate),
        ))
        all_lines.append(lines)

    _attach_lines(session, company, DocumentType.RECURRING_INVOICE, recurring, all_lines)
    return recurring


def create_estimates(session: Session, company: Company, config: CompanySeedConfig,
                     clients: Sequence[Client], offerings: Sequence[Offering],
                     rng: random.Random, today: Optional[date] = None) -> list[Estimate]:
    today = today or date.today()
    tax_rate = COUNTRY_PROFILES[config.country]["sales_tax_rate"]
    prefix, digits = _numbering(session, company, DocumentType.ESTIMATE)
    sequence = _next_sequence(session, Estimate, company)
    sellable = [o for o in offerings if o.sellable]

    estimates, all_lines = [], []
    for i in range(config.estimates):
        lines = _build_lines(config, sellable, rng)
        issued = today - timedelta(days=rng.randint(0, 180))
        estimates.append(Estimate(
            company_id=company.id,
            client_id=rng.choice(clients).id,
            estimate_number=format_document_number(prefix, digits, sequence + i),
            status=rng.choice(ESTIMATE_STATUSES),
            date=issued,
            expiration_date=issued + timedelta(days=30),
            currency_code=config.currency,
            **_totals(lines, tax_rate),
        ))
        all_lines.append(lines)

    _attach_lines(session, company, DocumentType.ESTIMATE, estimates, all_lines)
    return estimates


def create_bills(session: Session, company: Company, config: CompanySeedConfig,
                 vendors: Sequence[Vendor], offerings: Sequence[Offering],
                 rng: random.Random, today: Optional[date] = None) -> list[Bill]:
    today = today or date.today()
    prefix, digits = _numbering(session, company, DocumentType.BILL)
    sequence = _next_sequence(session, Bill, company)
    purchasable = [o for o in offerings if o.purchasable]

    bills, all_lines = [], []
    for i in range(config.bills):
        lines = _build_lines(config, purchasable, rng)
        totals = _totals(lines, 0.0)  # vendor prices already include tax
        status = rng.choice(BILL_STATUSES)
        issued = today - timedelta(days=rng.randint(0, 180))
        bills.append(Bill(
            company_id=company.id,
            vendor_id=rng.choice(vendors).id,
            bill_number=format_document_number(prefix, digits, sequence + i),
            status=status,
            date=issued,
            due_date=issued + timedelta(days=30),
            currency_code=config.currency,
            amount_paid=_amount_paid(status, totals["total"], rng),
            **totals,
        ))
        all_lines.append(lines)

    _attach_lines(session, company, DocumentType.BILL, bills, all_lines)
    logger.debug("Company %s: %d bills", company.id, len(bills))
    return bills
