"""Admin user, their Brazilian companies and pt-BR document labels.

Not idempotent: every run inserts a new admin user and four new companies.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from factories.company_factory import create_company, default_rng
from factories.user_factory import create_user
from ledger.database import Company, DocumentDefault, User
from ledger.models import (
    CompanyDescriptor,
    CompanySeedConfig,
    DocumentLabel,
    DocumentType,
    UserAttributes,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

ADMIN_USER = UserAttributes(
    name="Admin",
    email="admin@obotzap.com",
    password="password!",
    current_company_id=1,
)

# Personal company: BR address/phone, BRL currency, pt number/percent/week formats
PERSONAL_COMPANY = CompanySeedConfig(
    name="FinObotZap",
    country="BR",
    currency="BRL",
    locale="pt",
    transactions=250,
    invoices=30,
    estimates=30,
    bills=30,
)

ADDITIONAL_COMPANIES = [
    CompanyDescriptor(name="São Paulo Tech Ltda", country="BR", currency="BRL", locale="pt"),
    CompanyDescriptor(name="Rio Analytics Serviços", country="BR", currency="BRL", locale="pt"),
    CompanyDescriptor(name="Curitiba Data Studio", country="BR", currency="BRL", locale="pt"),
]

ADDITIONAL_COMPANY_TRANSACTIONS = 50

PT_BR_DOCUMENT_LABELS: dict[DocumentType, DocumentLabel] = {
    DocumentType.INVOICE: DocumentLabel(header="Fatura", number_prefix="FAT"),
    DocumentType.ESTIMATE: DocumentLabel(header="Proposta", number_prefix="ORC"),
    DocumentType.BILL: DocumentLabel(header="Conta a Pagar", number_prefix="CPG"),
}


# ---------------------------------------------------------------------------
# Seeder
# ---------------------------------------------------------------------------

class UserCompanySeeder:
    """Seeds the admin user, four BR companies and localized document labels."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or default_rng()

    def run(self, session: Session) -> None:
        user = create_user(session, ADMIN_USER, personal_company=PERSONAL_COMPANY, rng=self.rng)

        for descriptor in ADDITIONAL_COMPANIES:
            config = CompanySeedConfig(
                **descriptor.model_dump(),
                personal_company=False,
                transactions=ADDITIONAL_COMPANY_TRANSACTIONS,
            )
            create_company(session, user, config, rng=self.rng)

        self.localize_document_defaults(session, user)

    @staticmethod
    def first_owned_company(session: Session, user: User) -> Optional[Company]:
        """The user's personal company, else their oldest owned company."""
        return session.execute(
            select(Company)
            .where(Company.user_id == user.id)
            .order_by(Company.personal_company.desc(), Company.id)
            .limit(1)
        ).scalar_one_or_none()

    def localize_document_defaults(self, session: Session, user: User) -> None:
        company = self.first_owned_company(session, user)
        if company is None:
            logger.warning("User %s owns no company; document labels left as-is", user.id)
            return

        for document_type, label in PT_BR_DOCUMENT_LABELS.items():
            result = session.execute(
                update(DocumentDefault)
                .where(
                    DocumentDefault.company_id == company.id,
                    DocumentDefault.type == document_type.value,
                )
                .values(header=label.header, number_prefix=label.number_prefix)
                .execution_options(synchronize_session="fetch")
            )
            if result.rowcount == 0:
                logger.warning(
                    "No %s document default for company %s; label not localized",
                    document_type.value, company.id,
                )

        logger.info("Localized document labels to pt-BR for company %s", company.id)
