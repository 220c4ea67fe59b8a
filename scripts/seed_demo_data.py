#!/usr/bin/env python3
"""Seed demo data for local development.

Creates a dedicated demo user with a handful of tasks in every status.
Re-running the script clears the demo user's tasks and re-creates them.

Usage:
    # From project root:
    python scripts/seed_demo_data.py

    # Against another database:
    DATABASE_URL=postgresql://tasks:tasks@db:5432/tasktracker python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tasktracker.database import SessionLocal, init_db
from tasktracker.errors import DuplicateIdentity
from tasktracker.models.enums import TaskStatus
from tasktracker.services.credentials import CredentialStore
from tasktracker.services.tasks import TaskRepository
from tasktracker.services.tokens import TokenService

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "Demopass1"
DEMO_NAME = "Demo User"

DEMO_TASKS = [
    ("Buy milk", "", TaskStatus.COMPLETED),
    ("Book dentist appointment", "Ask for a morning slot", TaskStatus.PENDING),
    ("Renew passport", "Photos are in the top drawer", TaskStatus.IN_PROGRESS),
    ("Plan weekend hike", "", TaskStatus.PENDING),
]


def seed_demo_data():
    """Seed the database with a demo user and tasks."""
    init_db()
    session = SessionLocal()

    try:
        store = CredentialStore(session)
        try:
            print("Creating demo user...")
            user = store.register(DEMO_EMAIL, DEMO_PASSWORD, DEMO_NAME)
        except DuplicateIdentity:
            print("Demo user already exists. Clearing its tasks and re-seeding...")
            user = store.verify(DEMO_EMAIL, DEMO_PASSWORD)

        tasks = TaskRepository(session)
        for task in tasks.list(user.id):
            tasks.delete(user.id, task.id)

        print("Creating tasks...")
        for title, description, status in DEMO_TASKS:
            tasks.create(user.id, title, description=description, status=status.value)

        token = TokenService.from_settings().issue(user)
        print(f"\nDemo user: {DEMO_EMAIL} / {DEMO_PASSWORD}")
        print(f"Bearer token (valid 24h): {token}")
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
