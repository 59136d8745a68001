"""Synthetic transactions, offerings, clients and vendors for a company."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from sqlalchemy.orm import Session

from ledger.database import Client, Company, Offering, Transaction, Vendor
from ledger.models import CompanySeedConfig, OfferingType, TransactionType

from .profiles import fake_address, fake_company_name, fake_email, fake_person_name, fake_phone, slugify

logger = logging.getLogger(__name__)


# Labels per locale: (name, type, base price)
_OFFERING_CATALOG: dict[str, list[tuple[str, OfferingType, float]]] = {
    "pt": [
        ("Consultoria Financeira", OfferingType.SERVICE, 350.0),
        ("Licença de Software", OfferingType.PRODUCT, 1200.0),
        ("Suporte Técnico Mensal", OfferingType.SERVICE, 890.0),
        ("Treinamento de Equipe", OfferingType.SERVICE, 2400.0),
        ("Auditoria Contábil", OfferingType.SERVICE, 4500.0),
        ("Hospedagem de Site", OfferingType.SERVICE, 79.9),
        ("Notebook Corporativo", OfferingType.PRODUCT, 5600.0),
        ("Monitor 27 polegadas", OfferingType.PRODUCT, 1450.0),
        ("Cadeira Ergonômica", OfferingType.PRODUCT, 1890.0),
        ("Impressora Multifuncional", OfferingType.PRODUCT, 1290.0),
    ],
    "en": [
        ("Financial Consulting", OfferingType.SERVICE, 150.0),
        ("Software License", OfferingType.PRODUCT, 499.0),
        ("Monthly Support Plan", OfferingType.SERVICE, 299.0),
        ("Team Training", OfferingType.SERVICE, 900.0),
        ("Bookkeeping Review", OfferingType.SERVICE, 1200.0),
        ("Website Hosting", OfferingType.SERVICE, 19.9),
        ("Business Laptop", OfferingType.PRODUCT, 1350.0),
        ("27-inch Monitor", OfferingType.PRODUCT, 320.0),
        ("Ergonomic Chair", OfferingType.PRODUCT, 420.0),
        ("Multifunction Printer", OfferingType.PRODUCT, 280.0),
    ],
}

# Ledger account names and bank memo lines per locale
_TRANSACTION_LABELS: dict[str, dict[str, list[str]]] = {
    "pt": {
        "deposit_accounts": ["Receita de Serviços", "Vendas de Produtos", "Juros Recebidos"],
        "withdrawal_accounts": ["Aluguel", "Salários", "Energia Elétrica", "Internet e Telefonia", "Material de Escritório"],
        "deposit_descriptions": ["Recebimento de cliente", "Depósito via PIX", "Transferência recebida"],
        "withdrawal_descriptions": ["Pagamento de fornecedor", "Boleto pago", "Débito automático", "Tarifa bancária"],
    },
    "en": {
        "deposit_accounts": ["Service Revenue", "Product Sales", "Interest Income"],
        "withdrawal_accounts": ["Rent Expense", "Payroll", "Utilities", "Telephone & Internet", "Office Supplies"],
        "deposit_descriptions": ["Customer payment", "Wire transfer received", "ACH deposit"],
        "withdrawal_descriptions": ["Vendor payment", "Card purchase", "Automatic debit", "Bank fee"],
    },
}


def create_offerings(session: Session, company: Company, config: CompanySeedConfig,
                     rng: random.Random) -> list[Offering]:
    catalog = _OFFERING_CATALOG[config.locale]
    offerings = []
    for i in range(config.offerings):
        name, offering_type, base_price = catalog[i % len(catalog)]
        if i >= len(catalog):
            name = f"{name} {i // len(catalog) + 1}"
        offerings.append(Offering(
            company_id=company.id,
            name=name,
            type=offering_type.value,
            price=round(base_price * rng.uniform(0.8, 1.2), 2),
            sellable=True,
            purchasable=offering_type == OfferingType.PRODUCT,
        ))
    session.add_all(offerings)
    session.flush()
    return offerings


def _party_kwargs(company: Company, config: CompanySeedConfig, rng: random.Random) -> dict:
    name = fake_company_name(config.country, rng)
    address = fake_address(config.country, rng)
    return {
        "company_id": company.id,
        "name": name,
        "contact_name": fake_person_name(config.country, rng),
        "email": fake_email("financeiro" if config.locale == "pt" else "billing", config.country, domain=_domain(name)),
        "phone_number": fake_phone(config.country, rng, address["area_code"]),
        "currency_code": config.currency,
        "city": address["city"],
        "state": address["state"],
    }


def _domain(name: str) -> str:
    return slugify(name).replace(".", "")


def create_clients(session: Session, company: Company, config: CompanySeedConfig,
                   rng: random.Random) -> list[Client]:
    clients = [Client(**_party_kwargs(company, config, rng)) for _ in range(config.clients)]
    session.add_all(clients)
    session.flush()
    return clients


def create_vendors(session: Session, company: Company, config: CompanySeedConfig,
                   rng: random.Random) -> list[Vendor]:
    vendors = [Vendor(**_party_kwargs(company, config, rng)) for _ in range(config.vendors)]
    session.add_all(vendors)
    session.flush()
    return vendors


def create_transactions(session: Session, company: Company, config: CompanySeedConfig,
                        rng: random.Random, today: date | None = None) -> list[Transaction]:
    """Spread `config.transactions` deposits and withdrawals over the last year."""
    today = today or date.today()
    labels = _TRANSACTION_LABELS[config.locale]
    transactions = []
    for _ in range(config.transactions):
        if rng.random() < 0.45:
            kind = TransactionType.DEPOSIT
            account = rng.choice(labels["deposit_accounts"])
            description = rng.choice(labels["deposit_descriptions"])
            amount = rng.uniform(100, 5000)
        else:
            kind = TransactionType.WITHDRAWAL
            account = rng.choice(labels["withdrawal_accounts"])
            description = rng.choice(labels["withdrawal_descriptions"])
            amount = rng.uniform(50, 3000)
        transactions.append(Transaction(
            company_id=company.id,
            type=kind.value,
            description=description,
            account_name=account,
            amount=round(amount, 2),
            posted_at=today - timedelta(days=rng.randint(0, 364)),
            reviewed=rng.random() < 0.6,
        ))
    session.add_all(transactions)
    session.flush()
    logger.debug("Company %s: %d transactions", company.id, len(transactions))
    return transactions
