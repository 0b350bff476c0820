from typing import List

from standup.dto.base_dto import CamelCaseDTO


class UserKpiDTO(CamelCaseDTO):
    user_id: str
    name: str
    prepared: int = 0
    partial: int = 0
    missing: int = 0
    weekly_average_percent: float = 0
    missing_streak: int = 0


class TeamKpiResponse(CamelCaseDTO):
    team_name: str
    team_compliance_percent: float = 0
    users: List[UserKpiDTO] = []


class UserKpiResponse(CamelCaseDTO):
    team_name: str
    user: UserKpiDTO
