from typing import List, Optional

from standup.models.standup import StandupDocumentModel
from standup.repositories.document_repository import DocumentRepository
from standup.utils.keys import date_from_standup_key, standup_key, standups_prefix


class StandupRepository:
    @classmethod
    def get(cls, team_id: str, date: str) -> Optional[StandupDocumentModel]:
        data = DocumentRepository.get(standup_key(team_id, date))
        return StandupDocumentModel.from_document(data) if data else None

    @classmethod
    def save(cls, document: StandupDocumentModel) -> StandupDocumentModel:
        DocumentRepository.put(standup_key(document.team_id, document.date), document.to_document())
        return document

    @classmethod
    def save_if_version(cls, document: StandupDocumentModel, expected_version: int) -> bool:
        return DocumentRepository.replace_if_version(
            standup_key(document.team_id, document.date), document.to_document(), expected_version
        )

    @classmethod
    def list_dates(cls, team_id: str) -> List[str]:
        """All dates with a stored document for the team, newest first."""
        keys = DocumentRepository.list_keys_by_prefix(standups_prefix(team_id))
        dates = [date_from_standup_key(team_id, key) for key in keys]
        return sorted((date for date in dates if date), reverse=True)
