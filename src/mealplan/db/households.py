"""Household membership and join-code persistence helpers."""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from mealplan.models.household import Household

from .models import HouseholdJoinCodeORM, HouseholdMemberORM, HouseholdORM
from .repository import session_scope

logger = logging.getLogger(__name__)

JOIN_CODE_LENGTH = 8
_JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits


def _utcnow() -> datetime:
    # SQLite stores naive timestamps; keep everything in UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _household_name(user_id: str, name: Optional[str], email: Optional[str]) -> str:
    label = (name or "").strip() or (email or "").split("@", 1)[0].strip() or user_id
    return f"{label} Household"


def _create_household(
    session: Session,
    user_id: str,
    *,
    email: Optional[str] = None,
    name: Optional[str] = None,
) -> HouseholdORM:
    household = HouseholdORM(name=_household_name(user_id, name, email))
    session.add(household)
    session.flush()
    session.add(HouseholdMemberORM(user_id=user_id, household_id=household.id, email=email))
    session.flush()
    logger.info("Created household %s for user %s", household.id, user_id)
    return household


def _to_model(session: Session, household: HouseholdORM) -> Household:
    members = session.execute(
        select(HouseholdMemberORM)
        .where(HouseholdMemberORM.household_id == household.id)
        .order_by(HouseholdMemberORM.user_id.asc())
    ).scalars()
    return Household.model_validate(
        {
            "id": household.id,
            "name": household.name,
            "members": [
                {"household_id": member.household_id, "user_id": member.user_id, "email": member.email}
                for member in members
            ],
        }
    )


def ensure_household(
    user_id: str,
    *,
    email: Optional[str] = None,
    name: Optional[str] = None,
) -> int:
    """Return the user's household id, creating a household on first use."""

    with session_scope() as session:
        member = session.get(HouseholdMemberORM, user_id)
        if member is not None:
            if email and member.email != email:
                member.email = email
            return member.household_id
        return _create_household(session, user_id, email=email, name=name).id


def get_household(
    user_id: str,
    *,
    email: Optional[str] = None,
    name: Optional[str] = None,
) -> Household:
    household_id = ensure_household(user_id, email=email, name=name)
    with session_scope() as session:
        household = session.get(HouseholdORM, household_id)
        if household is None:
            raise ValueError(f"Household {household_id} not found")
        return _to_model(session, household)


def list_household_members(household_id: int) -> List[str]:
    with session_scope() as session:
        rows = session.execute(
            select(HouseholdMemberORM.user_id)
            .where(HouseholdMemberORM.household_id == household_id)
            .order_by(HouseholdMemberORM.user_id.asc())
        ).scalars()
        return list(rows)


def generate_join_code(household_id: int, ttl_minutes: int = 60) -> str:
    """Create an upper-case alphanumeric invitation code valid for ``ttl_minutes``."""

    code = "".join(secrets.choice(_JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))
    with session_scope() as session:
        session.add(
            HouseholdJoinCodeORM(
                code=code,
                household_id=household_id,
                expires_at=_utcnow() + timedelta(minutes=ttl_minutes),
            )
        )
    logger.info("Issued join code for household %s", household_id)
    return code


def join_household_by_code(user_id: str, code: str, *, email: Optional[str] = None) -> int:
    """Move the user into the household that issued ``code``.

    Raises:
        ValueError: When the code is unknown or expired.
    """

    with session_scope() as session:
        join_code = session.execute(
            select(HouseholdJoinCodeORM).where(
                HouseholdJoinCodeORM.code == code.strip().upper(),
                HouseholdJoinCodeORM.expires_at > _utcnow(),
            )
        ).scalar_one_or_none()
        if join_code is None:
            raise ValueError("invalid or expired code")

        member = session.get(HouseholdMemberORM, user_id)
        if member is None:
            session.add(
                HouseholdMemberORM(user_id=user_id, household_id=join_code.household_id, email=email)
            )
        else:
            member.household_id = join_code.household_id
            if email:
                member.email = email
        logger.info("User %s joined household %s", user_id, join_code.household_id)
        return join_code.household_id


def leave_household(
    user_id: str,
    *,
    email: Optional[str] = None,
    name: Optional[str] = None,
) -> Household:
    """Remove the user from their household and give them a fresh one."""

    with session_scope() as session:
        session.execute(delete(HouseholdMemberORM).where(HouseholdMemberORM.user_id == user_id))
        household = _create_household(session, user_id, email=email, name=name)
        return _to_model(session, household)


def remove_household_member(household_id: int, actor_user_id: str, target_user_id: str) -> None:
    """Move ``target_user_id`` out of ``household_id`` into a household of their own."""

    if actor_user_id == target_user_id:
        raise ValueError("cannot remove yourself")
    with session_scope() as session:
        member = session.get(HouseholdMemberORM, target_user_id)
        if member is None or member.household_id != household_id:
            raise ValueError(f"User {target_user_id} is not a member of this household")
        email = member.email
        session.delete(member)
        session.flush()
        _create_household(session, target_user_id, email=email)


def purge_expired_join_codes(now: Optional[datetime] = None) -> int:
    """Delete join codes whose expiry has passed; returns the number removed."""

    cutoff = now or _utcnow()
    with session_scope() as session:
        result = session.execute(
            delete(HouseholdJoinCodeORM).where(HouseholdJoinCodeORM.expires_at <= cutoff)
        )
        removed = result.rowcount or 0
    if removed:
        logger.info("Purged %s expired join codes", removed)
    return removed


__all__ = [
    "JOIN_CODE_LENGTH",
    "ensure_household",
    "get_household",
    "list_household_members",
    "generate_join_code",
    "join_household_by_code",
    "leave_household",
    "remove_household_member",
    "purge_expired_join_codes",
]
