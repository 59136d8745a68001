"""Tests for the company, entity and document factories."""

import random
import re
from datetime import date

import pytest
from sqlalchemy import func, select, update

from factories.company_factory import create_company
from factories.document_factory import create_invoices, format_document_number
from factories.user_factory import create_user
from ledger.database import (
    Bill,
    Client,
    DocumentDefault,
    Estimate,
    Invoice,
    LineItem,
    Offering,
    RecurringInvoice,
    Transaction,
    Vendor,
    get_engine,
    get_session,
    init_db,
)
from ledger.models import (
    DEFAULT_BILLS,
    DEFAULT_CLIENTS,
    DEFAULT_ESTIMATES,
    DEFAULT_INVOICES,
    DEFAULT_OFFERINGS,
    DEFAULT_RECURRING_INVOICES,
    DEFAULT_TRANSACTIONS,
    DEFAULT_VENDORS,
    CompanySeedConfig,
    DocumentType,
    UserAttributes,
)
from ledger.profiles import COUNTRY_PROFILES

TODAY = date(2025, 6, 30)

EMPTY = dict(
    transactions=0, offerings=0, clients=0, vendors=0,
    invoices=0, recurring_invoices=0, estimates=0, bills=0,
)


def _count(session, model, company_id):
    return session.execute(
        select(func.count()).select_from(model).where(model.company_id == company_id)
    ).scalar_one()


@pytest.fixture
def session(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'test_factory.db'}")
    init_db(engine)
    with get_session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def owner(session):
    return create_user(session, UserAttributes(name="Owner", email="owner@example.com", password="pw"))


class TestCompanyVolumes:
    def test_builder_defaults(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(), rng=random.Random(0), today=TODAY)

        assert _count(session, Transaction, company.id) == DEFAULT_TRANSACTIONS
        assert _count(session, Offering, company.id) == DEFAULT_OFFERINGS
        assert _count(session, Client, company.id) == DEFAULT_CLIENTS
        assert _count(session, Vendor, company.id) == DEFAULT_VENDORS
        assert _count(session, Invoice, company.id) == DEFAULT_INVOICES
        assert _count(session, RecurringInvoice, company.id) == DEFAULT_RECURRING_INVOICES
        assert _count(session, Estimate, company.id) == DEFAULT_ESTIMATES
        assert _count(session, Bill, company.id) == DEFAULT_BILLS

    def test_zero_volumes_only_builds_settings(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(name="Empty", **EMPTY), rng=random.Random(0))

        for model in (Transaction, Offering, Client, Vendor, Invoice, RecurringInvoice, Estimate, Bill, LineItem):
            assert _count(session, model, company.id) == 0
        assert company.profile is not None
        assert company.default.currency_code == "USD"
        assert _count(session, DocumentDefault, company.id) == len(DocumentType)

    def test_generated_name_when_omitted(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(**EMPTY), rng=random.Random(0))
        assert company.name
        assert company.personal_company is False


class TestProfiles:
    def test_brazilian_profile(self, session, owner):
        config = CompanySeedConfig(name="Empresa", country="BR", currency="BRL", locale="pt", **EMPTY)
        company = create_company(session, owner, config, rng=random.Random(5))

        assert company.profile.country_code == "BR"
        assert re.fullmatch(r"\d{5}-\d{3}", company.profile.postal_code)
        assert re.fullmatch(r"\+55 \(\d{2}\) 9\d{4}-\d{4}", company.profile.phone_number)
        assert company.profile.email.endswith(".com.br")
        assert company.localization.language == "pt"
        assert company.localization.week_start == 0

    def test_us_profile(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(name="Acme", **EMPTY), rng=random.Random(5))

        assert company.profile.country_code == "US"
        assert company.currencies[0].symbol == "$"
        assert company.localization.date_format == "%m/%d/%Y"
        assert company.localization.timezone == "America/New_York"


class TestDocuments:
    def test_invoice_numbers_use_default_prefix(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(invoices=3), rng=random.Random(1), today=TODAY)
        numbers = session.execute(
            select(Invoice.invoice_number).where(Invoice.company_id == company.id).order_by(Invoice.id)
        ).scalars().all()
        assert numbers == ["INV-00001", "INV-00002", "INV-00003"]

    def test_numbering_follows_changed_prefix(self, session, owner):
        config = CompanySeedConfig(invoices=2)
        company = create_company(session, owner, config, rng=random.Random(1), today=TODAY)
        session.execute(
            update(DocumentDefault)
            .where(DocumentDefault.company_id == company.id, DocumentDefault.type == DocumentType.INVOICE.value)
            .values(number_prefix="FAT")
        )
        clients = session.execute(select(Client).where(Client.company_id == company.id)).scalars().all()

        more = create_invoices(session, company, config, clients, [], random.Random(2), TODAY)

        assert [i.invoice_number for i in more] == ["FAT00003", "FAT00004"]

    def test_totals_match_line_items(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(), rng=random.Random(9), today=TODAY)
        invoices = session.execute(select(Invoice).where(Invoice.company_id == company.id)).scalars().all()

        for invoice in invoices:
            lines = session.execute(
                select(LineItem).where(
                    LineItem.document_type == DocumentType.INVOICE.value,
                    LineItem.document_id == invoice.id,
                )
            ).scalars().all()
            assert 1 <= len(lines) <= 4
            assert invoice.subtotal == pytest.approx(sum(line.total for line in lines))
            assert invoice.total == pytest.approx(invoice.subtotal + invoice.tax_total)
            assert invoice.due_date > invoice.date
            if invoice.status == "paid":
                assert invoice.amount_paid == invoice.total
            elif invoice.status in ("draft", "sent", "overdue"):
                assert invoice.amount_paid == 0.0

    def test_generic_lines_without_offerings(self, session, owner):
        config = CompanySeedConfig(offerings=0, invoices=2, estimates=0, bills=0, recurring_invoices=0)
        company = create_company(session, owner, config, rng=random.Random(4), today=TODAY)
        offering_ids = session.execute(
            select(LineItem.offering_id).where(LineItem.company_id == company.id)
        ).scalars().all()
        assert offering_ids
        assert all(offering_id is None for offering_id in offering_ids)

    def test_bills_reference_company_vendors(self, session, owner):
        company = create_company(session, owner, CompanySeedConfig(), rng=random.Random(2), today=TODAY)
        vendor_ids = set(session.execute(select(Vendor.id).where(Vendor.company_id == company.id)).scalars())
        bills = session.execute(select(Bill).where(Bill.company_id == company.id)).scalars().all()
        assert bills
        assert {b.vendor_id for b in bills} <= vendor_ids
        assert all(b.bill_number.startswith("BILL-") for b in bills)

    def test_parties_have_contact_names(self, session, owner):
        config = CompanySeedConfig(name="Empresa", country="BR", currency="BRL", locale="pt")
        company = create_company(session, owner, config, rng=random.Random(6), today=TODAY)
        contacts = session.execute(
            select(Client.contact_name).where(Client.company_id == company.id)
        ).scalars().all()
        contacts += session.execute(
            select(Vendor.contact_name).where(Vendor.company_id == company.id)
        ).scalars().all()

        brazilian = COUNTRY_PROFILES["BR"]
        for contact in contacts:
            first, last = contact.split(" ", 1)
            assert first in brazilian["first_names"]
            assert last in brazilian["last_names"]

    def test_format_document_number(self):
        assert format_document_number("ORC", 5, 42) == "ORC00042"
        assert format_document_number("INV-", 3, 1234) == "INV-1234"


class TestReproducibility:
    def test_same_seed_same_data(self, session, owner):
        config = CompanySeedConfig(name="Seeded", transactions=20, **{k: v for k, v in EMPTY.items() if k != "transactions"})
        first = create_company(session, owner, config, rng=random.Random(11), today=TODAY)
        second = create_company(session, owner, config, rng=random.Random(11), today=TODAY)

        def amounts(company):
            return session.execute(
                select(Transaction.amount).where(Transaction.company_id == company.id).order_by(Transaction.id)
            ).scalars().all()

        assert amounts(first) == amounts(second)
        assert first.profile.postal_code == second.profile.postal_code
