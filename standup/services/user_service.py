import logging
import uuid

from standup.constants.messages import ApiErrors
from standup.dto.user_dto import (
    MembershipDTO,
    SessionUserDTO,
    UpdateUserResponse,
    UserProfileDTO,
    ViewerDTO,
)
from standup.dto.team_dto import SelectTeamResponse
from standup.exceptions.standup_exceptions import StandupForbiddenException
from standup.exceptions.team_exceptions import NotTeamMemberException, TeamOperationNotAllowedException
from standup.exceptions.user_exceptions import UserNotFoundException
from standup.models.user import UserModel
from standup.repositories.user_repository import UserRepository
from standup.utils.team_access import get_role_for_team, is_manager_for_team, normalize_user, user_team_ids

logger = logging.getLogger(__name__)


class UserService:
    @classmethod
    def get_viewer(cls, user_id: str) -> ViewerDTO:
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return cls._to_viewer(user)

    @classmethod
    def _to_viewer(cls, user: UserModel) -> ViewerDTO:
        user = normalize_user(user)
        return ViewerDTO(
            user_id=user.id,
            email=user.email,
            name=user.name,
            active_team_id=user.active_team_id or "",
            role=get_role_for_team(user, user.active_team_id),
            memberships=[MembershipDTO(team_id=m.team_id, role=m.role) for m in user.memberships],
        )

    @classmethod
    def get_session_user(cls, user_id: str) -> SessionUserDTO | None:
        user = UserRepository.get_by_id(user_id)
        if not user:
            return None
        viewer = cls._to_viewer(user)
        return SessionUserDTO(
            id=viewer.user_id,
            email=viewer.email,
            name=viewer.name,
            role=viewer.role,
            team_id=viewer.active_team_id,
            active_team_id=viewer.active_team_id,
            memberships=viewer.memberships,
        )

    @classmethod
    def get_or_create_by_email(cls, email: str, name: str) -> UserModel:
        """
        Returns the user with this email, renamed to `name`, or a new user with
        no memberships. The caller decides which team the user joins.
        """
        email = email.strip().lower()
        user = UserRepository.get_by_email(email)
        if user:
            user.name = name
            return UserRepository.upsert(user)

        user = UserModel(id=str(uuid.uuid4()), email=email, name=name)
        logger.info(f"Creating user {user.id} for {email}")
        return UserRepository.upsert(user)

    @classmethod
    def update_user_profile(
        cls, viewer_id: str, target_user_id: str, name: str | None = None, email: str | None = None
    ) -> UpdateUserResponse:
        """
        Changes a user's name and/or email.

        Only a manager of at least one team shared with the target may do this.

        Raises:
            UserNotFoundException: If the target or the viewer does not exist
            StandupForbiddenException: If the viewer manages no team the target belongs to
            TeamOperationNotAllowedException: If the new email belongs to another user
        """
        target = UserRepository.get_by_id(target_user_id)
        if not target:
            raise UserNotFoundException(target_user_id)

        viewer = UserRepository.get_by_id(viewer_id)
        if not viewer:
            raise UserNotFoundException(viewer_id)

        target_team_ids = set(user_team_ids(target))
        shared_team_ids = [team_id for team_id in user_team_ids(viewer) if team_id in target_team_ids]
        if not any(is_manager_for_team(viewer, team_id) for team_id in shared_team_ids):
            raise StandupForbiddenException()

        if name is not None:
            target.name = name
        if email is not None:
            email = email.strip().lower()
            owner = UserRepository.get_by_email(email)
            if owner and owner.id != target.id:
                raise TeamOperationNotAllowedException(ApiErrors.EMAIL_IN_USE)
            target.email = email

        updated = UserRepository.upsert(target)
        return UpdateUserResponse(user=UserProfileDTO(user_id=updated.id, name=updated.name, email=updated.email))

    @classmethod
    def set_active_team(cls, user_id: str, team_id: str) -> SelectTeamResponse:
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        if team_id not in user_team_ids(user):
            raise NotTeamMemberException()

        user.active_team_id = team_id
        UserRepository.upsert(user)
        return SelectTeamResponse(active_team_id=team_id)
