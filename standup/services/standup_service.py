import logging
from datetime import datetime, timezone
from typing import Dict, List

from django.conf import settings

from standup.constants.messages import AppMessages
from standup.dto.standup_dto import (
    CreateStandupResponse,
    GetStandupHistoryResponse,
    HistoryDayDTO,
    HistoryRowDTO,
    StandupDayResponse,
    StandupRowDTO,
    StandupViewerDTO,
)
from standup.dto.user_dto import ViewerDTO
from standup.exceptions.standup_exceptions import (
    StandupBadRequestException,
    StandupConflictException,
    StandupForbiddenException,
    StandupNotFoundException,
)
from standup.models.standup import StandupDocumentModel, StandupRowModel
from standup.models.team import TeamModel
from standup.repositories.standup_repository import StandupRepository
from standup.repositories.user_repository import UserRepository
from standup.utils import cutoff_utils
from standup.utils.concurrency_utils import parse_concurrency_token
from standup.utils.standup_status import calculate_status

logger = logging.getLogger(__name__)


class StandupService:
    @classmethod
    def get_or_create(cls, team: TeamModel, date: str) -> StandupDocumentModel:
        """
        Returns the team's document for `date` with one row per current member.

        A missing document is created at version 0 and stored. An existing one
        has its rows matched against the team: rows of current members are kept
        as stored, new members get an empty row and former members are left out.
        That reconciliation is not written back; it is stored together with the
        next accepted update.
        """
        document = StandupRepository.get(team.id, date)
        if document is None:
            document = StandupDocumentModel(team_id=team.id, date=date, rows=cls._build_rows(team, {}))
            StandupRepository.save(document)
            logger.info(f"Standup created for team {team.id} on {date} with {len(document.rows)} rows")
            return document

        document.rows = cls._build_rows(team, {row.user_id: row for row in document.rows})
        return document

    @classmethod
    def _build_rows(cls, team: TeamModel, existing_rows: Dict[str, StandupRowModel]) -> List[StandupRowModel]:
        rows = []
        seen = set()
        for user_id in team.member_user_ids:
            if user_id in seen:
                continue
            seen.add(user_id)

            row = existing_rows.get(user_id)
            if row:
                rows.append(row)
                continue

            user = UserRepository.get_by_id(user_id)
            if not user:
                logger.warning(f"Team {team.id} lists member {user_id} with no user record; skipping row")
                continue
            rows.append(StandupRowModel(user_id=user.id, name=user.name))
        return rows

    @classmethod
    def get_existing(cls, team: TeamModel, date: str) -> StandupDocumentModel:
        document = StandupRepository.get(team.id, date)
        if document is None:
            raise StandupNotFoundException()
        return document

    @classmethod
    def create_today(cls, team: TeamModel) -> CreateStandupResponse:
        document = cls.get_or_create(team, cutoff_utils.today())
        return CreateStandupResponse(date=document.date, etag=document.etag, message=AppMessages.STANDUP_CREATED)

    @classmethod
    def update_entry(
        cls,
        team: TeamModel,
        date: str,
        viewer: ViewerDTO,
        user_id: str,
        yesterday: str,
        today: str,
        blockers: str,
        if_match: str | None,
    ) -> StandupDocumentModel:
        """
        Applies one member's entry to the day's document.

        The whole document is versioned: a token naming any other version than
        the stored one is rejected, even when another row was edited. A missing
        or non-numeric token skips that check. The write itself only lands if the
        stored version is still the one read here, so two writers racing with
        the same token cannot both succeed. Cutoff is enforced by the caller.

        Raises:
            StandupForbiddenException: If a non-manager edits someone else's row
            StandupBadRequestException: If the target user has no row on the team
            StandupConflictException: If the token names a stale version
        """
        if not viewer.is_manager_for_team(team.id) and viewer.user_id != user_id:
            raise StandupForbiddenException()

        document = cls.get_or_create(team, date)
        row = document.find_row(user_id)
        if row is None:
            raise StandupBadRequestException()

        row.yesterday = yesterday
        row.today = today
        row.blockers = blockers
        row.status = calculate_status(yesterday, today, blockers)
        row.version += 1

        expected_version = parse_concurrency_token(if_match)
        if expected_version is not None and expected_version != document.version:
            logger.info(
                f"Rejected stale update for team {team.id} on {date}: token {expected_version}, "
                f"current {document.version}"
            )
            raise StandupConflictException(document.version)

        stored_version = document.version
        document.version += 1
        document.updated_at = datetime.now(timezone.utc)
        if not StandupRepository.save_if_version(document, stored_version):
            current = StandupRepository.get(team.id, date)
            current_version = current.version if current else stored_version
            logger.info(
                f"Lost write race for team {team.id} on {date}: read {stored_version}, current {current_version}"
            )
            raise StandupConflictException(current_version)

        logger.info(f"Standup updated for team {team.id} on {date} by {viewer.user_id}: version {document.version}")
        return document

    @classmethod
    def to_day_response(
        cls, team: TeamModel, document: StandupDocumentModel, viewer: ViewerDTO, editable: bool
    ) -> StandupDayResponse:
        rows = sorted(document.rows, key=lambda row: (row.name or "").casefold())
        return StandupDayResponse(
            date=document.date,
            cutoff_at=cutoff_utils.cutoff_at(document.date, team.standup_cutoff_time),
            editable=editable,
            etag=document.etag,
            team_name=team.name,
            viewer=StandupViewerDTO(user_id=viewer.user_id, role=viewer.role_for_team(team.id)),
            rows=[StandupRowDTO.model_validate(row.model_dump()) for row in rows],
        )

    @classmethod
    def get_history(cls, team: TeamModel, limit: int | None = None) -> GetStandupHistoryResponse:
        limit = min(limit or settings.STANDUP["HISTORY_DEFAULT_LIMIT"], settings.STANDUP["HISTORY_MAX_LIMIT"])

        days = []
        for date in StandupRepository.list_dates(team.id)[:limit]:
            document = StandupRepository.get(team.id, date)
            if document is None:
                continue
            rows = sorted(document.rows, key=lambda row: (row.name or "").casefold())
            days.append(
                HistoryDayDTO(
                    date=document.date,
                    rows=[HistoryRowDTO(user_id=row.user_id, name=row.name, status=row.status) for row in rows],
                )
            )

        if not days:
            days.append(HistoryDayDTO(date=cutoff_utils.today(), rows=[]))
        return GetStandupHistoryResponse(days=days)
