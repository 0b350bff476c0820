import logging
from datetime import datetime, timezone
from typing import List, Optional

from django.conf import settings

from standup.models.user import EmailMappingModel, UserModel
from standup.repositories.document_repository import DocumentRepository
from standup.utils.keys import email_key, users_key, users_prefix
from standup.utils.team_access import normalize_user, sync_legacy_fields

logger = logging.getLogger(__name__)


class UserRepository:
    @classmethod
    def get_by_id(cls, user_id: str) -> Optional[UserModel]:
        if not user_id:
            return None
        data = DocumentRepository.get(users_key(user_id))
        return normalize_user(UserModel.from_document(data)) if data else None

    @classmethod
    def get_by_email(cls, email: str) -> Optional[UserModel]:
        """
        Resolves an email through its mapping document. A mapping left behind by
        an email change points at a user whose email has moved on and is ignored.
        """
        if not email:
            return None
        mapping = DocumentRepository.get(email_key(email))
        if not mapping:
            return None
        user = cls.get_by_id(EmailMappingModel.from_document(mapping).user_id)
        if user and user.email.strip().lower() != email.strip().lower():
            return None
        return user

    @classmethod
    def find_by_email_scan(cls, email: str) -> Optional[UserModel]:
        """
        Looks through the stored users for a matching email. Used to repair a
        missing email mapping document.
        """
        target = (email or "").strip().lower()
        for key in DocumentRepository.list_keys_by_prefix(users_prefix(), limit=settings.STANDUP["SCAN_LIMIT"]):
            data = DocumentRepository.get(key)
            if data and (data.get("email") or "").lower() == target:
                return normalize_user(UserModel.from_document(data))
        return None

    @classmethod
    def has_any_users(cls) -> bool:
        return bool(DocumentRepository.list_keys_by_prefix(users_prefix(), limit=1))

    @classmethod
    def upsert(cls, user: UserModel) -> UserModel:
        """
        Saves the user and its email mapping. The legacy team/role fields are
        rewritten from the memberships and the active team.
        """
        user = sync_legacy_fields(user)
        user.email = user.email.strip().lower()
        user.updated_at = datetime.now(timezone.utc)

        DocumentRepository.put(users_key(user.id), user.to_document())
        cls.save_email_mapping(user.email, user.id)
        return user

    @classmethod
    def save_email_mapping(cls, email: str, user_id: str) -> None:
        DocumentRepository.put(email_key(email), EmailMappingModel(user_id=user_id).to_document())

    @classmethod
    def get_by_ids(cls, user_ids: List[str]) -> List[UserModel]:
        users = []
        for user_id in user_ids:
            user = cls.get_by_id(user_id)
            if user:
                users.append(user)
        return users
