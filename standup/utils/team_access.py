from datetime import datetime, timezone
from typing import List

from standup.constants.role import RoleName
from standup.models.user import UserMembershipModel, UserModel


def normalize_user(user: UserModel) -> UserModel:
    """
    Returns a copy of the user with memberships and active team filled in.

    Records written before multi-team support only carry `team_id`/`role`; those
    are turned into a single membership here.
    """
    normalized = user.model_copy(deep=True)
    memberships = [membership for membership in normalized.memberships if membership.team_id]

    if not memberships and normalized.team_id:
        memberships.append(
            UserMembershipModel(
                team_id=normalized.team_id,
                role=normalized.role or RoleName.MEMBER,
                joined_at=normalized.created_at or datetime.now(timezone.utc),
            )
        )

    normalized.memberships = memberships
    normalized.active_team_id = (
        normalized.active_team_id or normalized.team_id or (memberships[0].team_id if memberships else "")
    )
    return normalized


def user_team_ids(user: UserModel) -> List[str]:
    return [membership.team_id for membership in normalize_user(user).memberships]


def get_membership(user: UserModel, team_id: str) -> UserMembershipModel | None:
    return next((m for m in normalize_user(user).memberships if m.team_id == team_id), None)


def get_role_for_team(user: UserModel, team_id: str) -> RoleName:
    membership = get_membership(user, team_id)
    return membership.role if membership else RoleName.MEMBER


def is_manager_for_team(user: UserModel, team_id: str) -> bool:
    return get_role_for_team(user, team_id) == RoleName.MANAGER


def set_membership_role(user: UserModel, team_id: str, role: RoleName) -> UserModel:
    """Adds the membership if missing, otherwise changes its role."""
    normalized = normalize_user(user)
    membership = next((m for m in normalized.memberships if m.team_id == team_id), None)
    if membership:
        membership.role = role
    else:
        normalized.memberships.append(UserMembershipModel(team_id=team_id, role=role))
    return normalized


def sync_legacy_fields(user: UserModel) -> UserModel:
    normalized = normalize_user(user)
    normalized.team_id = normalized.active_team_id
    normalized.role = get_role_for_team(normalized, normalized.active_team_id)
    return normalized
