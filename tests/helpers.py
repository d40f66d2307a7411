# tests/helpers.py
import os

# The package builds its engine at import time; point it at SQLite before that happens.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentor_network.database import Base
from mentor_network.core.entity_store import EntityStore
from mentor_network.models import FollowRequest, Role
from mentor_network.schemas import AuthContext


class StoreTestCase(unittest.TestCase):
    """Fresh in-memory database and entity store per test."""

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.db = self.Session()
        self.store = EntityStore(self.db)
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._counter = 0

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def make_user(self, role: Role, name: str = None, **fields):
        """Creates a user; each call is one minute newer than the previous one."""
        self._counter += 1
        self._clock += timedelta(minutes=1)
        name = name or f"{role.value.lower()}-{self._counter}"
        return self.store.create_user(
            name=name,
            email=fields.pop("email", f"{name.lower()}-{self._counter}@example.com"),
            hashed_password="not-a-real-hash",
            image_url="/images/placeholder-avatar.svg",
            role=role,
            created_at=self._clock,
            **fields,
        )

    def make_mentor(self, name: str = None, **fields):
        return self.make_user(Role.MENTOR, name, **fields)

    def make_mentee(self, name: str = None, **fields):
        return self.make_user(Role.MENTEE, name, **fields)

    @staticmethod
    def auth(user) -> AuthContext:
        return AuthContext(user_id=user.id)

    def count_follow_requests(self, mentor_id: str, mentee_id: str) -> int:
        return self.db.query(FollowRequest).filter(
            FollowRequest.mentor_id == mentor_id,
            FollowRequest.mentee_id == mentee_id,
        ).count()
