from datetime import datetime
from typing import List

from standup.constants.role import RoleName
from standup.constants.standup import StandupStatus
from standup.dto.base_dto import CamelCaseDTO


class StandupRowDTO(CamelCaseDTO):
    user_id: str
    name: str
    yesterday: str
    today: str
    blockers: str
    status: StandupStatus
    version: int = 0
    overridden_by: str | None = None


class StandupViewerDTO(CamelCaseDTO):
    user_id: str
    role: RoleName


class StandupDayResponse(CamelCaseDTO):
    date: str
    cutoff_at: datetime
    editable: bool
    etag: str
    team_name: str
    viewer: StandupViewerDTO
    rows: List[StandupRowDTO] = []


class HistoryRowDTO(CamelCaseDTO):
    user_id: str
    name: str
    status: StandupStatus


class HistoryDayDTO(CamelCaseDTO):
    date: str
    rows: List[HistoryRowDTO] = []


class GetStandupHistoryResponse(CamelCaseDTO):
    days: List[HistoryDayDTO] = []


class CreateStandupResponse(CamelCaseDTO):
    ok: bool = True
    date: str
    etag: str
    message: str
