"""Company factory — builds a company with its profile, defaults and synthetic data."""

from __future__ import annotations

import logging
import os
import random
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ledger.database import Company, CompanyDefault, CompanyProfile, Currency, Localization, User
from ledger.models import CompanySeedConfig
from ledger.profiles import COUNTRY_PROFILES, CURRENCY_PROFILES, localization_for

from .document_factory import (
    create_bills,
    create_document_defaults,
    create_estimates,
    create_invoices,
    create_recurring_invoices,
)
from .entity_factory import create_clients, create_offerings, create_transactions, create_vendors
from .profiles import fake_address, fake_company_name, fake_email, fake_phone, slugify

logger = logging.getLogger(__name__)

SEED_RANDOM_SEED = os.getenv("SEED_RANDOM_SEED")


def default_rng() -> random.Random:
    """Random source for the factories; reproducible when SEED_RANDOM_SEED is set."""
    return random.Random(int(SEED_RANDOM_SEED)) if SEED_RANDOM_SEED else random.Random()


# ---------------------------------------------------------------------------
# Profile & defaults
# ---------------------------------------------------------------------------

def _create_profile(session: Session, company: Company, country: str, rng: random.Random) -> CompanyProfile:
    address = fake_address(country, rng)
    profile = CompanyProfile(
        company_id=company.id,
        email=fake_email("contato" if country == "BR" else "hello", country, domain=slugify(company.name).replace(".", "")),
        phone_number=fake_phone(country, rng, address.pop("area_code")),
        entity_type=rng.choice(COUNTRY_PROFILES[country]["entity_types"]),
        **address,
    )
    session.add(profile)
    return profile


def _create_defaults(session: Session, company: Company, config: CompanySeedConfig) -> CompanyDefault:
    session.add(Currency(company_id=company.id, code=config.currency, enabled=True,
                         **CURRENCY_PROFILES[config.currency]))
    session.add(Localization(company_id=company.id, **localization_for(config.locale, config.country)))
    default = CompanyDefault(company_id=company.id, currency_code=config.currency, language=config.locale)
    session.add(default)
    return default


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def create_company(session: Session, owner: User, config: CompanySeedConfig,
                   rng: Optional[random.Random] = None, today: Optional[date] = None) -> Company:
    """Create a company owned by `owner` and everything `config` asks for.

    Categories are generated in dependency order: offerings, clients and
    vendors first so documents can reference them.
    """
    rng = rng or default_rng()
    today = today or date.today()

    company = Company(
        user_id=owner.id,
        name=config.name or fake_company_name(config.country, rng),
        personal_company=config.personal_company,
    )
    session.add(company)
    session.flush()

    _create_profile(session, company, config.country, rng)
    _create_defaults(session, company, config)
    create_document_defaults(session, company)

    offerings = create_offerings(session, company, config, rng)
    clients = create_clients(session, company, config, rng)
    vendors = create_vendors(session, company, config, rng)
    create_transactions(session, company, config, rng, today)
    create_invoices(session, company, config, clients, offerings, rng, today)
    create_recurring_invoices(session, company, config, clients, offerings, rng, today)
    create_estimates(session, company, config, clients, offerings, rng, today)
    create_bills(session, company, config, vendors, offerings, rng, today)

    logger.info(
        "Created company %s (%s) for user %s: %s/%s/%s, %d transactions, %d invoices, %d estimates, %d bills",
        company.id, company.name, owner.id, config.country, config.currency, config.locale,
        config.transactions, config.invoices, config.estimates, config.bills,
    )
    return company
