"""Tests for the admin user / company seeder."""

import logging
import random

import pytest
from sqlalchemy import delete, func, select

from factories.company_factory import create_company
from factories.user_factory import create_user
from ledger.database import (
    Bill,
    Company,
    DocumentDefault,
    Estimate,
    Invoice,
    Transaction,
    User,
    get_engine,
    get_session,
    init_db,
)
from ledger.models import CompanySeedConfig, DocumentType, UserAttributes
from ledger.security import verify_password
from seeders.user_company_seeder import UserCompanySeeder


def _count(session, model, **filters):
    stmt = select(func.count()).select_from(model)
    for column, value in filters.items():
        stmt = stmt.where(getattr(model, column) == value)
    return session.execute(stmt).scalar_one()


def _document_default(session, company_id, document_type):
    return session.execute(
        select(DocumentDefault).where(
            DocumentDefault.company_id == company_id,
            DocumentDefault.type == document_type.value,
        )
    ).scalar_one()


@pytest.fixture
def engine(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'test_seed.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with get_session(engine) as session:
        yield session


@pytest.fixture
def seeded(session):
    UserCompanySeeder(rng=random.Random(7)).run(session)
    session.flush()
    return session


def _admin(session):
    return session.execute(select(User).where(User.email == "admin@obotzap.com")).scalar_one()


class TestAdminUser:
    def test_single_admin_created(self, seeded):
        assert _count(seeded, User, email="admin@obotzap.com") == 1

    def test_admin_attributes(self, seeded):
        admin = _admin(seeded)
        assert admin.name == "Admin"
        assert admin.current_company_id == 1
        assert admin.password != "password!"
        assert verify_password("password!", admin.password)

    def test_current_company_is_personal_company_on_fresh_db(self, seeded):
        admin = _admin(seeded)
        personal = next(c for c in admin.owned_companies if c.personal_company)
        assert personal.id == admin.current_company_id


class TestCompanies:
    def test_four_companies_one_personal(self, seeded):
        admin = _admin(seeded)
        companies = admin.owned_companies
        assert len(companies) == 4
        assert sum(1 for c in companies if c.personal_company) == 1
        assert all(c.user_id == admin.id for c in companies)

    def test_personal_company_profile_and_volumes(self, seeded):
        admin = _admin(seeded)
        personal = next(c for c in admin.owned_companies if c.personal_company)

        assert personal.name == "FinObotZap"
        assert personal.to_dict()["country"] == "BR"
        assert personal.to_dict()["currency"] == "BRL"
        assert personal.to_dict()["locale"] == "pt"
        assert _count(seeded, Transaction, company_id=personal.id) == 250
        assert _count(seeded, Invoice, company_id=personal.id) == 30
        assert _count(seeded, Estimate, company_id=personal.id) == 30
        assert _count(seeded, Bill, company_id=personal.id) == 30

    def test_personal_company_brazilian_formatting(self, seeded):
        personal = next(c for c in _admin(seeded).owned_companies if c.personal_company)
        currency = personal.currencies[0]
        assert currency.symbol == "R$"
        assert currency.decimal_mark == ","
        assert currency.thousands_separator == "."
        assert personal.localization.date_format == "%d/%m/%Y"
        assert personal.localization.timezone == "America/Sao_Paulo"
        assert personal.profile.phone_number.startswith("+55 (")

    def test_additional_companies(self, seeded):
        admin = _admin(seeded)
        additional = [c for c in admin.owned_companies if not c.personal_company]

        assert [c.name for c in additional] == [
            "São Paulo Tech Ltda",
            "Rio Analytics Serviços",
            "Curitiba Data Studio",
        ]
        for company in additional:
            info = company.to_dict()
            assert (info["country"], info["currency"], info["locale"]) == ("BR", "BRL", "pt")
            assert _count(seeded, Transaction, company_id=company.id) >= 50


class TestDocumentLabels:
    def test_first_company_labels_localized(self, seeded):
        company = UserCompanySeeder.first_owned_company(seeded, _admin(seeded))

        expected = {
            DocumentType.INVOICE: ("Fatura", "FAT"),
            DocumentType.ESTIMATE: ("Proposta", "ORC"),
            DocumentType.BILL: ("Conta a Pagar", "CPG"),
        }
        for document_type, (header, prefix) in expected.items():
            default = _document_default(seeded, company.id, document_type)
            assert (default.header, default.number_prefix) == (header, prefix)

    def test_other_types_untouched(self, seeded):
        company = UserCompanySeeder.first_owned_company(seeded, _admin(seeded))
        recurring = _document_default(seeded, company.id, DocumentType.RECURRING_INVOICE)
        assert (recurring.header, recurring.number_prefix) == ("Invoice", "INV-")

    def test_other_companies_untouched(self, seeded):
        admin = _admin(seeded)
        for company in admin.owned_companies:
            if company.personal_company:
                continue
            default = _document_default(seeded, company.id, DocumentType.INVOICE)
            assert (default.header, default.number_prefix) == ("Invoice", "INV-")

    def test_missing_default_is_skipped(self, session, caplog):
        user = create_user(
            session,
            UserAttributes(name="Test", email="test@example.com", password="secret"),
            personal_company=CompanySeedConfig(transactions=0, invoices=0, estimates=0, bills=0),
            rng=random.Random(1),
        )
        company = user.owned_companies[0]
        session.execute(
            delete(DocumentDefault).where(
                DocumentDefault.company_id == company.id,
                DocumentDefault.type == DocumentType.BILL.value,
            )
        )

        with caplog.at_level(logging.WARNING):
            UserCompanySeeder().localize_document_defaults(session, user)

        assert _document_default(session, company.id, DocumentType.INVOICE).header == "Fatura"
        assert "No bill document default" in caplog.text


class TestFirstOwnedCompany:
    def test_prefers_personal_company(self, session):
        rng = random.Random(3)
        user = create_user(session, UserAttributes(name="U", email="u@example.com", password="x"), rng=rng)
        empty = dict(transactions=0, invoices=0, estimates=0, bills=0, recurring_invoices=0)
        create_company(session, user, CompanySeedConfig(name="Older", **empty), rng=rng)
        personal = create_company(
            session, user, CompanySeedConfig(name="Mine", personal_company=True, **empty), rng=rng
        )

        assert UserCompanySeeder.first_owned_company(session, user).id == personal.id

    def test_falls_back_to_creation_order(self, session):
        rng = random.Random(3)
        user = create_user(session, UserAttributes(name="U", email="u@example.com", password="x"), rng=rng)
        empty = dict(transactions=0, invoices=0, estimates=0, bills=0, recurring_invoices=0)
        first = create_company(session, user, CompanySeedConfig(name="First", **empty), rng=rng)
        create_company(session, user, CompanySeedConfig(name="Second", **empty), rng=rng)

        assert UserCompanySeeder.first_owned_company(session, user).id == first.id

    def test_no_company(self, session):
        user = create_user(session, UserAttributes(name="U", email="u@example.com", password="x"))
        assert UserCompanySeeder.first_owned_company(session, user) is None

    def test_localize_without_company(self, session, caplog):
        user = create_user(session, UserAttributes(name="U", email="u@example.com", password="x"))

        with caplog.at_level(logging.WARNING):
            UserCompanySeeder().localize_document_defaults(session, user)

        assert "owns no company" in caplog.text
        assert _count(session, DocumentDefault) == 0


class TestRerun:
    def test_second_run_duplicates_admin(self, session):
        UserCompanySeeder(rng=random.Random(1)).run(session)
        UserCompanySeeder(rng=random.Random(2)).run(session)
        session.flush()

        assert _count(session, User, email="admin@obotzap.com") == 2
        assert _count(session, Company) == 8
