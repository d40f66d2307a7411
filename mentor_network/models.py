# mentor_network/models.py
import uuid
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship, validates

from .database import Base


class Role(str, Enum):
    MENTOR = "MENTOR"
    MENTEE = "MENTEE"

class Domain(str, Enum):
    SOFTWARE = "SOFTWARE"
    MANAGEMENT = "MANAGEMENT"
    MARKETING = "MARKETING"
    ANALYST = "ANALYST"
    OTHER = "OTHER"

class Branch(str, Enum):
    CSE = "CSE"
    ECE = "ECE"
    ICE = "ICE"
    MME = "MME"
    EEE = "EEE"
    OTHER = "OTHER"

class RequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

class RequestAction(str, Enum):
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"

class CompanyKind(str, Enum):
    CURRENT = "CURRENT" # mentor is at / from this company
    INTERESTED = "INTERESTED" # mentee wants an introduction


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def new_user_id() -> str:
    return uuid.uuid4().hex

def normalize_email(email: str) -> str:
    return email.strip().casefold()


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_user_id)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False)
    # Case-folded copy of email; uniqueness and lookups go through this column
    email_key = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    role = Column(SAEnum(Role, name="role"), nullable=False, index=True)
    year_of_study = Column(Integer, nullable=True)
    domain = Column(SAEnum(Domain, name="domain"), nullable=True)
    branch = Column(SAEnum(Branch, name="branch"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    company_links = relationship(
        "UserCompany", back_populates="user", cascade="all, delete-orphan", lazy="selectin"
    )
    # Requests where this user is the mentor / the mentee
    mentor_requests = relationship(
        "FollowRequest", foreign_keys="FollowRequest.mentor_id", back_populates="mentor"
    )
    mentee_requests = relationship(
        "FollowRequest", foreign_keys="FollowRequest.mentee_id", back_populates="mentee"
    )

    @validates("email")
    def _fill_email_key(self, key, value):
        self.email_key = normalize_email(value)
        return value

    def _company_names(self, kind: CompanyKind) -> list[str]:
        return sorted(link.name for link in self.company_links if link.kind == kind)

    def _set_company_names(self, kind: CompanyKind, names) -> None:
        wanted = {n.strip() for n in (names or []) if n and n.strip()}
        # Keep surviving rows in place so the (user_id, kind, name) key is never re-inserted
        kept = [link for link in self.company_links if link.kind != kind or link.name in wanted]
        existing = {link.name for link in kept if link.kind == kind}
        self.company_links = kept + [
            UserCompany(kind=kind, name=name) for name in sorted(wanted - existing)
        ]

    @property
    def companies(self) -> list[str]:
        return self._company_names(CompanyKind.CURRENT)

    @companies.setter
    def companies(self, names) -> None:
        self._set_company_names(CompanyKind.CURRENT, names)

    @property
    def companies_interested(self) -> list[str]:
        return self._company_names(CompanyKind.INTERESTED)

    @companies_interested.setter
    def companies_interested(self, names) -> None:
        self._set_company_names(CompanyKind.INTERESTED, names)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"


class UserCompany(Base):
    __tablename__ = "user_companies"
    __table_args__ = (
        UniqueConstraint("user_id", "kind", "name", name="uq_user_company"),
        Index("ix_user_companies_kind_name", "kind", "name"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    kind = Column(SAEnum(CompanyKind, name="company_kind"), nullable=False)
    name = Column(String, nullable=False)

    user = relationship("User", back_populates="company_links")

    def __repr__(self):
        return f"<UserCompany(user_id={self.user_id}, kind={self.kind}, name='{self.name}')>"


class FollowRequest(Base):
    __tablename__ = "follow_requests"

    # The composite primary key is the uniqueness guarantee for a mentor/mentee pair
    mentor_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    mentee_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)

    status = Column(SAEnum(RequestStatus, name="request_status"), default=RequestStatus.PENDING, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    mentor = relationship("User", foreign_keys=[mentor_id], back_populates="mentor_requests")
    mentee = relationship("User", foreign_keys=[mentee_id], back_populates="mentee_requests")

    def __repr__(self):
        return f"<FollowRequest(mentor_id={self.mentor_id}, mentee_id={self.mentee_id}, status={self.status})>"
