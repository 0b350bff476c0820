import logging
import uuid
from typing import List

from django.conf import settings

from standup.constants.messages import ApiErrors
from standup.constants.role import RoleName
from standup.dto.team_dto import GetUserTeamsResponse, TeamMemberDTO, TeamMembersResponse, TeamSummaryDTO
from standup.dto.user_dto import ViewerDTO
from standup.exceptions.team_exceptions import (
    NotTeamManagerException,
    TeamNotFoundException,
    TeamOperationNotAllowedException,
)
from standup.exceptions.user_exceptions import UserNotFoundException
from standup.models.team import TeamModel
from standup.models.user import UserMembershipModel, UserModel
from standup.repositories.team_repository import TeamRepository
from standup.repositories.user_repository import UserRepository
from standup.services.user_service import UserService
from standup.utils.allowlist_utils import is_email_allowed
from standup.utils.invite_code_utils import generate_team_code
from standup.utils.team_access import get_role_for_team, is_manager_for_team, normalize_user, set_membership_role

logger = logging.getLogger(__name__)


class TeamService:
    @classmethod
    def _new_team(cls, name: str, created_by_user_id: str, standup_cutoff_time: str | None = None) -> TeamModel:
        team = TeamModel(
            id=str(uuid.uuid4()),
            name=name.strip(),
            standup_cutoff_time=(standup_cutoff_time or settings.STANDUP["DEFAULT_CUTOFF_TIME"]).strip(),
            member_user_ids=[created_by_user_id],
            created_by_user_id=created_by_user_id,
            team_code=generate_team_code(name),
        )
        return TeamRepository.save(team)

    @classmethod
    def create_team(cls, name: str, created_by_user_id: str, standup_cutoff_time: str | None = None) -> TeamModel:
        """
        Create a team with the creator as its manager and make it the creator's
        active team.
        """
        team = cls._new_team(name, created_by_user_id, standup_cutoff_time)
        cls.add_user_to_team(team.id, created_by_user_id, RoleName.MANAGER)
        UserService.set_active_team(created_by_user_id, team.id)
        logger.info(f"Team {team.id} created by {created_by_user_id}")
        return team

    @classmethod
    def get_team(cls, team_id: str) -> TeamModel:
        team = TeamRepository.get_by_id(team_id)
        if not team:
            raise TeamNotFoundException(team_id)
        return team

    @classmethod
    def add_user_to_team(cls, team_id: str, user_id: str, role: RoleName) -> tuple[TeamModel, UserModel]:
        team = cls.get_team(team_id)
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)

        user = set_membership_role(user, team_id, role)
        if not user.active_team_id:
            user.active_team_id = team_id
        if user_id not in team.member_user_ids:
            team.member_user_ids.append(user_id)

        user = UserRepository.upsert(user)
        team = TeamRepository.save(team)
        return team, user

    @classmethod
    def remove_user_from_team(cls, team_id: str, user_id: str) -> tuple[TeamModel, UserModel]:
        """
        Drops the membership on both sides. A user whose active team was this
        one falls back to their next remaining membership.
        """
        team = cls.get_team(team_id)
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)

        user = normalize_user(user)
        user.memberships = [m for m in user.memberships if m.team_id != team_id]
        if user.active_team_id == team_id:
            user.active_team_id = user.memberships[0].team_id if user.memberships else ""
        team.member_user_ids = [member_id for member_id in team.member_user_ids if member_id != user_id]

        user = UserRepository.upsert(user)
        team = TeamRepository.save(team)
        return team, user

    @classmethod
    def set_user_role_for_team(cls, team_id: str, user_id: str, role: RoleName) -> UserModel:
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return UserRepository.upsert(set_membership_role(user, team_id, role))

    @classmethod
    def list_teams_for_user(cls, user_id: str) -> List[TeamModel]:
        user = UserRepository.get_by_id(user_id)
        if not user:
            return []

        teams = []
        for membership in user.memberships:
            team = TeamRepository.get_by_id(membership.team_id)
            if team:
                teams.append(team)
        teams.sort(key=lambda team: (team.name or "").casefold())
        return teams

    @classmethod
    def get_user_teams(cls, user_id: str) -> GetUserTeamsResponse:
        user = UserRepository.get_by_id(user_id)
        teams = cls.list_teams_for_user(user_id)
        return GetUserTeamsResponse(
            active_team_id=user.active_team_id if user else "",
            teams=[
                TeamSummaryDTO(
                    id=team.id,
                    name=team.name,
                    standup_cutoff_time=team.standup_cutoff_time,
                    member_count=len(team.member_user_ids),
                    team_code=team.team_code,
                )
                for team in teams
            ],
        )

    @classmethod
    def get_team_by_code(cls, team_code: str) -> TeamModel:
        team = TeamRepository.get_by_code(team_code)
        if not team:
            raise TeamNotFoundException()
        return team

    @classmethod
    def update_team_settings(
        cls, team: TeamModel, name: str | None = None, standup_cutoff_time: str | None = None
    ) -> TeamModel:
        if name is not None:
            team.name = name.strip()
        if standup_cutoff_time is not None:
            team.standup_cutoff_time = standup_cutoff_time.strip()
        return TeamRepository.save(team)

    @classmethod
    def get_team_members(cls, team: TeamModel) -> TeamMembersResponse:
        members = []
        for user in UserRepository.get_by_ids(team.member_user_ids):
            members.append(
                TeamMemberDTO(
                    user_id=user.id,
                    name=user.name,
                    email=user.email,
                    role=get_role_for_team(user, team.id),
                )
            )
        members.sort(key=lambda member: (member.name or "").casefold())
        return TeamMembersResponse(
            team_id=team.id,
            team_name=team.name,
            standup_cutoff_time=team.standup_cutoff_time,
            members=members,
        )

    @classmethod
    def add_member_by_email(
        cls, team: TeamModel, email: str, name: str, role: RoleName = RoleName.MEMBER
    ) -> TeamMembersResponse:
        user = UserService.get_or_create_by_email(email, name)
        team, _ = cls.add_user_to_team(team.id, user.id, role)
        return cls.get_team_members(team)

    @classmethod
    def change_member_role(
        cls, team: TeamModel, viewer: ViewerDTO, user_id: str, role: RoleName
    ) -> TeamMembersResponse:
        if user_id == viewer.user_id and role != RoleName.MANAGER:
            raise TeamOperationNotAllowedException(ApiErrors.CANNOT_DEMOTE_SELF)
        if user_id not in team.member_user_ids:
            raise TeamOperationNotAllowedException(ApiErrors.USER_NOT_ON_TEAM)

        cls.set_user_role_for_team(team.id, user_id, role)
        return cls.get_team_members(cls.get_team(team.id))

    @classmethod
    def remove_member(cls, team: TeamModel, viewer: ViewerDTO, user_id: str) -> TeamMembersResponse:
        if user_id == viewer.user_id:
            raise TeamOperationNotAllowedException(ApiErrors.CANNOT_REMOVE_SELF)

        team, _ = cls.remove_user_from_team(team.id, user_id)
        return cls.get_team_members(team)

    @classmethod
    def subscribe_by_code(cls, viewer: ViewerDTO, team_code: str) -> GetUserTeamsResponse:
        """
        Join another team as its manager using the team's shareable code, and
        switch to it.
        """
        if not viewer.is_manager:
            raise NotTeamManagerException()

        team = cls.get_team_by_code(team_code)
        cls.add_user_to_team(team.id, viewer.user_id, RoleName.MANAGER)
        UserService.set_active_team(viewer.user_id, team.id)
        return cls.get_user_teams(viewer.user_id)

    @classmethod
    def ensure_team_for_viewer(cls, viewer: ViewerDTO) -> TeamModel | None:
        """
        Returns the viewer's active team, repairing a dangling reference.

        Returns None when the user record itself is gone, or when the team is
        missing and self-healing is switched off.
        """
        team = TeamRepository.get_by_id(viewer.active_team_id)
        if team:
            return team

        user = UserRepository.get_by_id(viewer.user_id)
        if not user:
            return None
        return cls.ensure_team_for_user(user)

    @classmethod
    def ensure_team_for_user(cls, user: UserModel) -> TeamModel | None:
        """
        Makes sure the user's active team exists.

        When it does not, a new team with default settings is created with the
        user as its only member and manager. The membership pointing at the
        missing team is dropped. Other members of the missing team are not
        carried over.
        """
        user = normalize_user(user)
        team = TeamRepository.get_by_id(user.active_team_id)
        if team:
            return team

        dangling_team_id = user.active_team_id
        if not settings.STANDUP["SELF_HEAL_ENABLED"]:
            logger.warning(f"User {user.id} references missing team {dangling_team_id!r}; self-heal is disabled")
            return None

        team = cls._new_team(settings.STANDUP["DEFAULT_TEAM_NAME"], user.id)
        user.memberships = [m for m in user.memberships if m.team_id != dangling_team_id]
        user.memberships.append(UserMembershipModel(team_id=team.id, role=RoleName.MANAGER))
        user.active_team_id = team.id
        UserRepository.upsert(user)

        logger.warning(
            f"Self-heal: user {user.id} referenced missing team {dangling_team_id!r}; created team {team.id}"
        )
        return team

    @classmethod
    def ensure_bootstrap_team_and_manager(cls, email: str | None = None, name: str | None = None) -> UserModel | None:
        """
        Creates the first team and its manager, or repairs the configured manager.

        The manager email comes from BOOTSTRAP_MANAGER_EMAIL, then
        INITIAL_MANAGER_EMAIL, then the `email` argument. A configured email must
        pass the allowlist. Without a configured email a user is only created
        when no users exist yet.

        Returns:
            The manager's user record, or None when nothing applies
        """
        bootstrap_email = settings.BOOTSTRAP["MANAGER_EMAIL"]
        initial_email = settings.BOOTSTRAP["INITIAL_MANAGER_EMAIL"]
        email = (bootstrap_email or initial_email or email or "").strip().lower()
        if not email:
            return None

        is_configured_manager = email in (bootstrap_email, initial_email)
        if is_configured_manager and not is_email_allowed(email):
            logger.warning(f"Bootstrap manager {email} is not in ALLOWED_EMAILS; skipping bootstrap")
            return None

        user = UserRepository.get_by_email(email)
        if not user:
            user = UserRepository.find_by_email_scan(email)
            if user:
                logger.info(f"Repairing email mapping for user {user.id}")
                UserRepository.save_email_mapping(email, user.id)

        if not user:
            if not bootstrap_email and not initial_email and UserRepository.has_any_users():
                return None
            return cls._create_bootstrap_manager(email, settings.BOOTSTRAP["MANAGER_NAME"] or name or "Manager")

        if is_configured_manager:
            team = cls.ensure_team_for_user(user)
            user = UserRepository.get_by_id(user.id)
            if team and not is_manager_for_team(user, team.id):
                logger.info(f"Promoting bootstrap manager {user.id} on team {team.id}")
                user = UserRepository.upsert(set_membership_role(user, team.id, RoleName.MANAGER))
        return user

    @classmethod
    def _create_bootstrap_manager(cls, email: str, name: str) -> UserModel:
        manager_id = str(uuid.uuid4())
        team = cls._new_team(settings.STANDUP["DEFAULT_TEAM_NAME"], manager_id)
        user = UserModel(
            id=manager_id,
            email=email,
            name=name,
            memberships=[UserMembershipModel(team_id=team.id, role=RoleName.MANAGER)],
            active_team_id=team.id,
        )
        user = UserRepository.upsert(user)
        logger.info(f"Bootstrap team {team.id} created with manager {user.id}")
        return user
