from typing import List

from standup.constants.role import RoleName
from standup.dto.base_dto import CamelCaseDTO


class TeamSummaryDTO(CamelCaseDTO):
    id: str
    name: str
    standup_cutoff_time: str
    member_count: int
    team_code: str | None = None


class GetUserTeamsResponse(CamelCaseDTO):
    active_team_id: str
    teams: List[TeamSummaryDTO] = []


class TeamMemberDTO(CamelCaseDTO):
    user_id: str
    name: str
    email: str
    role: RoleName


class TeamMembersResponse(CamelCaseDTO):
    team_id: str
    team_name: str
    standup_cutoff_time: str
    members: List[TeamMemberDTO] = []


class SelectTeamResponse(CamelCaseDTO):
    ok: bool = True
    active_team_id: str
