from datetime import datetime, timezone
from typing import List, Optional

from django.conf import settings

from standup.models.team import TeamModel
from standup.repositories.document_repository import DocumentRepository
from standup.utils.keys import team_key, teams_prefix


class TeamRepository:
    @classmethod
    def get_by_id(cls, team_id: str) -> Optional[TeamModel]:
        if not team_id:
            return None
        data = DocumentRepository.get(team_key(team_id))
        return TeamModel.from_document(data) if data else None

    @classmethod
    def save(cls, team: TeamModel) -> TeamModel:
        team.updated_at = datetime.now(timezone.utc)
        DocumentRepository.put(team_key(team.id), team.to_document())
        return team

    @classmethod
    def list_all(cls) -> List[TeamModel]:
        teams = []
        for key in DocumentRepository.list_keys_by_prefix(teams_prefix(), limit=settings.STANDUP["SCAN_LIMIT"]):
            data = DocumentRepository.get(key)
            if data:
                teams.append(TeamModel.from_document(data))
        return teams

    @classmethod
    def get_by_code(cls, team_code: str) -> Optional[TeamModel]:
        code = (team_code or "").strip()
        if not code:
            return None
        return next((team for team in cls.list_all() if (team.team_code or "").strip() == code), None)
