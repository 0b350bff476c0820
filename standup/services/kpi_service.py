from datetime import timedelta
from typing import List

from django.conf import settings

from standup.constants.standup import STATUS_SCORES, StandupStatus
from standup.dto.kpi_dto import TeamKpiResponse, UserKpiDTO, UserKpiResponse
from standup.exceptions.user_exceptions import UserNotFoundException
from standup.models.standup import StandupDocumentModel
from standup.models.team import TeamModel
from standup.models.user import UserModel
from standup.repositories.standup_repository import StandupRepository
from standup.repositories.user_repository import UserRepository
from standup.utils import cutoff_utils


class KpiService:
    @classmethod
    def _load_window(cls, team: TeamModel) -> List[StandupDocumentModel]:
        """Documents dated within the KPI window, newest first."""
        window_start = cutoff_utils.parse_date(cutoff_utils.today()) - timedelta(
            days=settings.STANDUP["KPI_WINDOW_DAYS"]
        )
        documents = []
        for date in StandupRepository.list_dates(team.id):
            try:
                if cutoff_utils.parse_date(date) <= window_start:
                    continue
            except ValueError:
                continue
            document = StandupRepository.get(team.id, date)
            if document:
                documents.append(document)
        return documents

    @classmethod
    def _user_kpi(cls, user: UserModel, documents: List[StandupDocumentModel]) -> UserKpiDTO:
        statuses = [row.status for row in (document.find_row(user.id) for document in documents) if row]

        recent = statuses[: settings.STANDUP["KPI_RECENT_DAYS"]]
        weekly_average = sum(STATUS_SCORES[status] for status in recent) / len(recent) if recent else 0

        missing_streak = 0
        for status in statuses:
            if status != StandupStatus.MISSING:
                break
            missing_streak += 1

        return UserKpiDTO(
            user_id=user.id,
            name=user.name,
            prepared=statuses.count(StandupStatus.PREPARED),
            partial=statuses.count(StandupStatus.PARTIAL),
            missing=statuses.count(StandupStatus.MISSING),
            weekly_average_percent=weekly_average,
            missing_streak=missing_streak,
        )

    @classmethod
    def get_team_kpi(cls, team: TeamModel) -> TeamKpiResponse:
        """
        Per-member compliance over the KPI window.

        Scores are 100 for prepared, 50 for partial and 0 for missing; the
        weekly average covers the member's most recent KPI_RECENT_DAYS entries
        and the team figure is the mean of the members' weekly averages.
        """
        documents = cls._load_window(team)
        users = [cls._user_kpi(user, documents) for user in UserRepository.get_by_ids(team.member_user_ids)]
        users.sort(key=lambda user: (user.name or "").casefold())

        compliance = sum(user.weekly_average_percent for user in users) / len(users) if users else 0
        return TeamKpiResponse(team_name=team.name, team_compliance_percent=compliance, users=users)

    @classmethod
    def get_user_kpi(cls, team: TeamModel, user_id: str) -> UserKpiResponse:
        if user_id not in team.member_user_ids:
            raise UserNotFoundException(user_id)
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)

        return UserKpiResponse(team_name=team.name, user=cls._user_kpi(user, cls._load_window(team)))
