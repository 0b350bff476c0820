from standup.dto.user_dto import ViewerDTO
from standup.exceptions.team_exceptions import NotTeamManagerException, TeamNotFoundException
from standup.models.team import TeamModel
from standup.services.team_service import TeamService
from standup.services.user_service import UserService


class ViewerService:
    @classmethod
    def resolve_active_team(cls, user_id: str) -> tuple[ViewerDTO, TeamModel]:
        """
        Loads the viewer and their active team, self-healing a missing team.

        Raises:
            UserNotFoundException: If the user record does not exist
            TeamNotFoundException: If no team could be found or repaired
        """
        viewer = UserService.get_viewer(user_id)
        team = TeamService.ensure_team_for_viewer(viewer)
        if team is None:
            raise TeamNotFoundException(viewer.active_team_id or None)
        if team.id != viewer.active_team_id:
            viewer = UserService.get_viewer(user_id)
        return viewer, team

    @classmethod
    def resolve_managed_team(cls, user_id: str) -> tuple[ViewerDTO, TeamModel]:
        viewer, team = cls.resolve_active_team(user_id)
        if not viewer.is_manager_for_team(team.id):
            raise NotTeamManagerException()
        return viewer, team
