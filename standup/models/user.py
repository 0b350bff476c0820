from datetime import datetime, timezone
from typing import List

from pydantic import Field

from standup.constants.role import RoleName
from standup.models.common.document import Document


class UserMembershipModel(Document):
    team_id: str
    role: RoleName = RoleName.MEMBER
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserModel(Document):
    """
    A person who can sign in and take part in standups.

    `memberships` and `active_team_id` are authoritative. `team_id` and `role`
    are the single-team fields older records carry; they are rewritten from the
    memberships on every save and only read to migrate such records.
    """

    id: str
    email: str
    name: str
    team_id: str | None = None
    role: RoleName | None = None
    memberships: List[UserMembershipModel] = Field(default_factory=list)
    active_team_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EmailMappingModel(Document):
    user_id: str
