# tests/test_follow_request_service.py
from tests.helpers import StoreTestCase

import os
import shutil
import tempfile
import threading
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mentor_network.core.entity_store import EntityStore
from mentor_network.database import Base
from mentor_network.exceptions import (
    ForbiddenError,
    InvalidOperationError,
    InvalidStatusTransitionError,
    NotFoundError,
    UnauthorizedError,
)
from mentor_network.models import FollowRequest, RequestAction, RequestStatus, Role
from mentor_network.schemas import AuthContext
from mentor_network.services import FollowRequestService


class TestSendFollowRequest(StoreTestCase):

    def setUp(self):
        super().setUp()
        self.service = FollowRequestService(self.store)
        self.mentor = self.make_mentor()
        self.mentee = self.make_mentee()

    def test_creates_pending_request(self):
        request = self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        self.assertEqual(request.status, RequestStatus.PENDING)
        self.assertEqual(request.mentor_id, self.mentor.id)
        self.assertEqual(request.mentee_id, self.mentee.id)

    def test_sending_twice_keeps_one_pending_row(self):
        self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        request = self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        self.assertEqual(request.status, RequestStatus.PENDING)
        self.assertEqual(self.count_follow_requests(self.mentor.id, self.mentee.id), 1)

    def test_resend_after_rejection_returns_to_pending(self):
        self.store.upsert_follow_request(self.mentor.id, self.mentee.id, RequestStatus.REJECTED)
        request = self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        self.assertEqual(request.status, RequestStatus.PENDING)
        self.assertEqual(self.count_follow_requests(self.mentor.id, self.mentee.id), 1)

    def test_resend_after_acceptance_returns_to_pending(self):
        self.store.upsert_follow_request(self.mentor.id, self.mentee.id, RequestStatus.ACCEPTED)
        request = self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        self.assertEqual(request.status, RequestStatus.PENDING)

    def test_resend_keeps_created_at(self):
        first = datetime(2024, 5, 1, tzinfo=timezone.utc)
        later = datetime(2024, 6, 1, tzinfo=timezone.utc)
        with patch("mentor_network.core.entity_store.utcnow", return_value=first):
            self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        with patch("mentor_network.core.entity_store.utcnow", return_value=later):
            request = self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        self.assertEqual(request.created_at.replace(tzinfo=None), first.replace(tzinfo=None))
        self.assertEqual(request.updated_at.replace(tzinfo=None), later.replace(tzinfo=None))

    def test_self_follow_is_invalid(self):
        with self.assertRaises(InvalidOperationError):
            self.service.send_follow_request(self.auth(self.mentee), self.mentee.id)
        self.assertEqual(self.count_follow_requests(self.mentee.id, self.mentee.id), 0)

    def test_target_must_be_a_mentor(self):
        other = self.make_mentee()
        with self.assertRaises(InvalidOperationError):
            self.service.send_follow_request(self.auth(self.mentee), other.id)
        self.assertEqual(self.count_follow_requests(other.id, self.mentee.id), 0)

    def test_unknown_target_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.send_follow_request(self.auth(self.mentee), "missing-mentor")

    def test_mentor_cannot_send(self):
        other_mentor = self.make_mentor()
        with self.assertRaises(ForbiddenError):
            self.service.send_follow_request(self.auth(self.mentor), other_mentor.id)

    def test_anonymous_is_unauthorized(self):
        with self.assertRaises(UnauthorizedError):
            self.service.send_follow_request(AuthContext(), self.mentor.id)


class TestRespondFollowRequest(StoreTestCase):

    def setUp(self):
        super().setUp()
        self.service = FollowRequestService(self.store)
        self.mentor = self.make_mentor()
        self.mentee = self.make_mentee()
        self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)

    def test_accept(self):
        request = self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, RequestAction.ACCEPT)
        self.assertEqual(request.status, RequestStatus.ACCEPTED)

    def test_reject_accepts_plain_string_action(self):
        request = self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, "REJECT")
        self.assertEqual(request.status, RequestStatus.REJECTED)

    def test_other_mentor_gets_not_found(self):
        stranger = self.make_mentor()
        with self.assertRaises(NotFoundError):
            self.service.respond_follow_request(self.auth(stranger), self.mentee.id, RequestAction.ACCEPT)
        row = self.store.get_follow_request(self.mentor.id, self.mentee.id)
        self.assertEqual(row.status, RequestStatus.PENDING)

    def test_no_request_is_not_found(self):
        other = self.make_mentee()
        with self.assertRaises(NotFoundError):
            self.service.respond_follow_request(self.auth(self.mentor), other.id, RequestAction.REJECT)

    def test_cannot_answer_twice(self):
        self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, RequestAction.ACCEPT)
        with self.assertRaises(InvalidStatusTransitionError):
            self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, RequestAction.REJECT)
        row = self.store.get_follow_request(self.mentor.id, self.mentee.id)
        self.assertEqual(row.status, RequestStatus.ACCEPTED)

    def test_can_answer_again_after_resend(self):
        self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, RequestAction.REJECT)
        self.service.send_follow_request(self.auth(self.mentee), self.mentor.id)
        request = self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, RequestAction.ACCEPT)
        self.assertEqual(request.status, RequestStatus.ACCEPTED)

    def test_malformed_action_is_invalid(self):
        with self.assertRaises(InvalidOperationError):
            self.service.respond_follow_request(self.auth(self.mentor), self.mentee.id, "MAYBE")

    def test_mentee_cannot_respond(self):
        with self.assertRaises(ForbiddenError):
            self.service.respond_follow_request(self.auth(self.mentee), self.mentee.id, RequestAction.ACCEPT)

    def test_anonymous_is_unauthorized(self):
        with self.assertRaises(UnauthorizedError):
            self.service.respond_follow_request(AuthContext(), self.mentee.id, RequestAction.ACCEPT)


class TestConcurrentSends(unittest.TestCase):
    """Parallel sends for one pair, each on its own connection to a shared database file."""

    WORKERS = 12

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.engine = create_engine(
            f"sqlite:///{os.path.join(self.tmpdir, 'follow.db')}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        with self.Session() as db:
            store = EntityStore(db)
            self.mentor_id = store.create_user(
                name="Mentor", email="mentor@example.com", hashed_password="x",
                image_url="/img.png", role=Role.MENTOR,
            ).id
            self.mentee_id = store.create_user(
                name="Mentee", email="mentee@example.com", hashed_password="x",
                image_url="/img.png", role=Role.MENTEE,
            ).id

    def tearDown(self):
        self.engine.dispose()
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_parallel_sends_leave_one_pending_row(self):
        barrier = threading.Barrier(self.WORKERS)
        errors = []

        def send():
            with self.Session() as db:
                service = FollowRequestService(EntityStore(db))
                barrier.wait()
                try:
                    service.send_follow_request(AuthContext(user_id=self.mentee_id), self.mentor_id)
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=send) for _ in range(self.WORKERS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        with self.Session() as db:
            rows = db.query(FollowRequest).filter(
                FollowRequest.mentor_id == self.mentor_id,
                FollowRequest.mentee_id == self.mentee_id,
            ).all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].status, RequestStatus.PENDING)


if __name__ == "__main__":
    unittest.main()
