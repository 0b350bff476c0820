from typing import List

from pydantic import BaseModel

from standup.constants.role import RoleName
from standup.dto.base_dto import CamelCaseDTO


class MembershipDTO(CamelCaseDTO):
    team_id: str
    role: RoleName


class ViewerDTO(BaseModel):
    """
    The signed-in user as seen by one request. Built from storage on every
    request, so role changes apply immediately.
    """

    user_id: str
    email: str
    name: str
    active_team_id: str
    role: RoleName
    memberships: List[MembershipDTO] = []

    def role_for_team(self, team_id: str) -> RoleName:
        membership = next((m for m in self.memberships if m.team_id == team_id), None)
        return membership.role if membership else RoleName.MEMBER

    def is_manager_for_team(self, team_id: str) -> bool:
        return self.role_for_team(team_id) == RoleName.MANAGER

    @property
    def is_manager(self) -> bool:
        return self.role == RoleName.MANAGER


class UserProfileDTO(CamelCaseDTO):
    user_id: str
    name: str
    email: str


class UpdateUserResponse(CamelCaseDTO):
    user: UserProfileDTO


class SessionUserDTO(CamelCaseDTO):
    id: str
    email: str
    name: str
    role: RoleName
    team_id: str
    active_team_id: str
    memberships: List[MembershipDTO] = []


class SessionResponse(CamelCaseDTO):
    user: SessionUserDTO | None = None
