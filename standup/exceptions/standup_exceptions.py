from standup.constants.messages import ApiErrors


class BaseStandupException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class StandupNotFoundException(BaseStandupException):
    def __init__(self, message: str = ApiErrors.STANDUP_NOT_FOUND):
        super().__init__(message)


class StandupForbiddenException(BaseStandupException):
    def __init__(self, message: str = ApiErrors.STANDUP_FORBIDDEN):
        super().__init__(message)


class StandupLockedException(StandupForbiddenException):
    def __init__(self, message: str = ApiErrors.STANDUP_LOCKED):
        super().__init__(message)


class StandupBadRequestException(BaseStandupException):
    def __init__(self, message: str = ApiErrors.USER_NOT_ON_TEAM):
        super().__init__(message)


class StandupConflictException(BaseStandupException):
    def __init__(self, current_version: int, message: str = ApiErrors.STANDUP_CONFLICT):
        self.current_version = current_version
        super().__init__(message)


class ConcurrencyTokenMissingException(BaseStandupException):
    def __init__(self, message: str = ApiErrors.MISSING_IF_MATCH):
        super().__init__(message)
