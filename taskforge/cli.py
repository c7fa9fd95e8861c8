#!/usr/bin/env python3
"""CLI for TaskForge management tasks.

Usage:
    python -m taskforge.cli <command>

Commands:
    init-db       Create all database tables
    create-admin  Create the admin account from settings
    seed          Insert demo statuses, priorities, users, companies, projects and tasks
"""

import argparse
import asyncio
import logging
import sys
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskforge.core.config import settings
from taskforge.core.database import async_session_factory, init_db
from taskforge.core.logging_config import configure_logging
from taskforge.models.priority import Priority
from taskforge.models.status import Status
from taskforge.models.user import User
from taskforge.schemas.company import CompanyCreateRequest
from taskforge.schemas.project import ProjectCreateRequest
from taskforge.schemas.task import TaskCreateRequest
from taskforge.services.company_service import CompanyService
from taskforge.services.project_service import ProjectService
from taskforge.services.task_service import TaskService
from taskforge.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_STATUSES = ("In Progress", "Completed", "Todo")
DEMO_PRIORITIES = ("High", "Medium", "Low")
DEMO_USERS = (
    ("alice@example.com", "Alice Cooper"),
    ("bob@example.com", "Bob Stone"),
    ("carol@example.com", "Carol Reed"),
)
DEMO_PASSWORD = "password123"

LookupT = TypeVar("LookupT", Status, Priority)


async def create_admin(session_factory: async_sessionmaker[AsyncSession] = async_session_factory) -> bool:
    """Create the admin user unless the email is already registered."""
    async with session_factory() as session:
        users = UserService(session)
        if await users.get_by_email(settings.ADMIN_EMAIL) is not None:
            logger.info("Admin %s already exists, skipping", settings.ADMIN_EMAIL)
            return False
        await users.create(
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            name=settings.ADMIN_NAME,
            is_admin=True,
        )
        await session.commit()
    logger.info("Admin %s created", settings.ADMIN_EMAIL)
    return True


async def _get_or_create_lookup(session: AsyncSession, model: type[LookupT], name: str) -> LookupT:
    result = await session.execute(select(model).where(model.name == name))
    item = result.scalars().first()
    if item is None:
        item = model(name=name)
        session.add(item)
        await session.flush()
    return item


async def seed(session_factory: async_sessionmaker[AsyncSession] = async_session_factory) -> None:
    """Insert demo data. Existing statuses, priorities and users are reused."""
    async with session_factory() as session:
        statuses = [await _get_or_create_lookup(session, Status, name) for name in DEMO_STATUSES]
        priorities = [await _get_or_create_lookup(session, Priority, name) for name in DEMO_PRIORITIES]

        users = UserService(session)
        companies = CompanyService(session)
        projects = ProjectService(session)
        tasks = TaskService(session)

        for index, (email, name) in enumerate(DEMO_USERS):
            if await users.get_by_email(email) is not None:
                logger.info("Demo user %s already exists, skipping", email)
                continue

            user: User = await users.create(email=email, password=DEMO_PASSWORD, name=name)
            first_name = name.split()[0]

            company = await companies.create_company(
                CompanyCreateRequest(name=f"{first_name}'s Company"), user
            )
            await projects.create_project(
                ProjectCreateRequest(name=f"{first_name}'s Project", company_id=company.id), user
            )
            await tasks.create_task(
                TaskCreateRequest(
                    name=f"Onboard {first_name}",
                    description="Read the handbook and set up the development environment.",
                    status_id=statuses[index % len(statuses)].id,
                    priority_id=priorities[index % len(priorities)].id,
                    assignee_id=user.id,
                ),
                user,
            )
            logger.info("Seeded demo data for %s", email)

        await session.commit()


def cmd_init_db() -> int:
    """Create all database tables."""
    logger.info("Creating database tables...")
    asyncio.run(init_db())
    logger.info("Tables created")
    return 0


def cmd_create_admin() -> int:
    """Create the admin account from settings."""
    asyncio.run(create_admin())
    return 0


def cmd_seed() -> int:
    """Insert demo data."""
    logger.info("Seeding demo data...")
    asyncio.run(seed())
    logger.info("Seeding complete")
    return 0


def main() -> int:
    configure_logging(settings.LOG_LEVEL)

    parser = argparse.ArgumentParser(
        description="TaskForge API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create all database tables")
    subparsers.add_parser("create-admin", help="Create the admin account from settings")
    subparsers.add_parser("seed", help="Insert demo data")

    args = parser.parse_args()

    if args.command == "init-db":
        return cmd_init_db()
    elif args.command == "create-admin":
        return cmd_create_admin()
    elif args.command == "seed":
        return cmd_seed()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
