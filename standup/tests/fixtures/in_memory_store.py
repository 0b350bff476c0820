import copy
from unittest.mock import patch

from standup.constants.role import RoleName
from standup.models.team import TeamModel
from standup.models.user import UserMembershipModel, UserModel
from standup.repositories.document_repository import DocumentRepository
from standup.repositories.team_repository import TeamRepository
from standup.repositories.user_repository import UserRepository


class InMemoryDocumentStore:
    """Dictionary-backed stand-in for DocumentRepository used by service tests."""

    def __init__(self):
        self.documents = {}
        self.writes = []

    def get(self, key):
        document = self.documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    def put(self, key, document):
        self.documents[key] = copy.deepcopy(document)
        self.writes.append(key)

    def replace_if_version(self, key, document, expected_version):
        stored = self.documents.get(key)
        if stored is None or stored.get("version") != expected_version:
            return False
        self.put(key, document)
        return True

    def list_keys_by_prefix(self, prefix, limit=None):
        keys = [key for key in self.documents if key.startswith(prefix)]
        return keys[:limit] if limit else keys

    def delete(self, key):
        self.documents.pop(key, None)


class InMemoryStoreMixin:
    """Patches DocumentRepository onto an InMemoryDocumentStore for each test."""

    def setUp(self):
        super().setUp()
        self.store = InMemoryDocumentStore()
        for name in ("get", "put", "replace_if_version", "list_keys_by_prefix"):
            patcher = patch.object(DocumentRepository, name, side_effect=getattr(self.store, name))
            patcher.start()
            self.addCleanup(patcher.stop)

    def create_user(self, user_id, name, email=None, memberships=None, active_team_id=None):
        user = UserModel(
            id=user_id,
            email=email or f"{user_id}@example.com",
            name=name,
            memberships=[
                UserMembershipModel(team_id=team_id, role=role) for team_id, role in (memberships or {}).items()
            ],
            active_team_id=active_team_id,
        )
        return UserRepository.upsert(user)

    def create_team(self, team_id, members, name="Engineering", cutoff="09:30", team_code=None):
        """
        Stores a team plus its members. `members` maps user id to (name, role).
        """
        team = TeamModel(
            id=team_id,
            name=name,
            standup_cutoff_time=cutoff,
            member_user_ids=list(members),
            team_code=team_code,
        )
        TeamRepository.save(team)
        for user_id, (user_name, role) in members.items():
            existing = UserRepository.get_by_id(user_id)
            memberships = {m.team_id: m.role for m in existing.memberships} if existing else {}
            memberships[team_id] = role
            self.create_user(
                user_id,
                user_name,
                memberships=memberships,
                active_team_id=existing.active_team_id if existing else team_id,
            )
        return team


MANAGER = RoleName.MANAGER
MEMBER = RoleName.MEMBER
