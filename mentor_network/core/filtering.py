# mentor_network/core/filtering.py
"""
Predicate builders for user queries.

Everything here returns a SQLAlchemy boolean expression to hand to
``EntityStore.query_users``; nothing touches the session.
"""
from typing import Iterable

from sqlalchemy import and_, true

from ..models import CompanyKind, FollowRequest, RequestStatus, User, UserCompany
from ..schemas import UserFilter


def works_at_any(companies: Iterable[str]):
    """The user's ``companies`` set shares at least one element with ``companies``."""
    names = sorted(set(companies))
    return User.company_links.any(
        and_(UserCompany.kind == CompanyKind.CURRENT, UserCompany.name.in_(names))
    )


def not_matched_with(mentee_id: str):
    """No ACCEPTED follow request exists between the user (as mentor) and ``mentee_id``."""
    return ~User.mentor_requests.any(
        and_(FollowRequest.mentee_id == mentee_id, FollowRequest.status == RequestStatus.ACCEPTED)
    )


def build_predicate(user_filter: UserFilter):
    """AND of every field present on the filter; an empty filter matches everyone."""
    clauses = []
    if user_filter.role is not None:
        clauses.append(User.role == user_filter.role)
    if user_filter.name:
        clauses.append(User.name.icontains(user_filter.name, autoescape=True))
    if user_filter.domain is not None:
        clauses.append(User.domain == user_filter.domain)
    if user_filter.branch is not None:
        clauses.append(User.branch == user_filter.branch)
    if user_filter.year_of_study is not None:
        clauses.append(User.year_of_study == user_filter.year_of_study)
    company = (user_filter.company or "").strip()
    if company:
        # Stored company names are stripped, so the search term is too
        clauses.append(works_at_any([company]))
    return and_(true(), *clauses)
