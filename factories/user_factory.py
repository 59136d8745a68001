"""User factory — a user plus, optionally, their personal company."""

from __future__ import annotations

import logging
import random
from typing import Optional

from sqlalchemy.orm import Session

from ledger.database import User
from ledger.models import CompanySeedConfig, UserAttributes
from ledger.security import hash_password

from .company_factory import create_company, default_rng

logger = logging.getLogger(__name__)


def create_user(session: Session, attributes: UserAttributes,
                personal_company: Optional[CompanySeedConfig] = None,
                rng: Optional[random.Random] = None) -> User:
    """Insert a user and build their personal company from `personal_company`.

    The company is always flagged personal, whatever the config says.
    """
    user = User(
        name=attributes.name,
        email=attributes.email,
        password=hash_password(attributes.password),
        current_company_id=attributes.current_company_id,
    )
    session.add(user)
    session.flush()
    logger.info("Created user %s <%s>", user.id, user.email)

    if personal_company is not None:
        config = personal_company.model_copy(update={"personal_company": True})
        create_company(session, user, config, rng=rng or default_rng())
    return user
