from standup.constants.messages import ApiErrors


class UserNotFoundException(Exception):
    def __init__(self, user_id: str | None = None):
        self.user_id = user_id
        self.message = ApiErrors.USER_NOT_FOUND_WITH_ID.format(user_id) if user_id else ApiErrors.USER_NOT_FOUND
        super().__init__(self.message)


class EmailNotAllowedException(Exception):
    def __init__(self, message: str = ApiErrors.EMAIL_NOT_ALLOWED):
        self.message = message
        super().__init__(self.message)
