from standup.constants.messages import ApiErrors


class BaseTeamException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class TeamNotFoundException(BaseTeamException):
    def __init__(self, team_id: str | None = None):
        self.team_id = team_id
        message = ApiErrors.TEAM_NOT_FOUND_WITH_ID.format(team_id) if team_id else ApiErrors.TEAM_NOT_FOUND
        super().__init__(message)


class NotTeamManagerException(BaseTeamException):
    def __init__(self, message: str = ApiErrors.MANAGER_ONLY):
        super().__init__(message)


class NotTeamMemberException(BaseTeamException):
    def __init__(self, message: str = ApiErrors.NOT_TEAM_MEMBER):
        super().__init__(message)


class TeamOperationNotAllowedException(BaseTeamException):
    def __init__(self, message: str):
        super().__init__(message)
