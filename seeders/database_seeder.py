"""Runs the demo seeders, in order, inside one session."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from .user_company_seeder import UserCompanySeeder

logger = logging.getLogger(__name__)


class DatabaseSeeder:
    def __init__(self, seeders=None):
        self.seeders = seeders if seeders is not None else [UserCompanySeeder()]

    def run(self, session: Session) -> None:
        for seeder in self.seeders:
            name = type(seeder).__name__
            logger.info("Seeding: %s", name)
            seeder.run(session)
            session.flush()
            logger.info("Seeded: %s", name)
