import logging
from urllib.parse import urlencode

from django.conf import settings

from standup.constants.messages import ApiErrors
from standup.exceptions.user_exceptions import EmailNotAllowedException
from standup.models.user import UserModel
from standup.repositories.user_repository import UserRepository
from standup.services.team_service import TeamService
from standup.utils.allowlist_utils import is_email_allowed
from standup.utils.jwt_utils import generate_magic_token, generate_session_token, validate_magic_token

logger = logging.getLogger(__name__)


class AuthService:
    @classmethod
    def build_magic_link(cls, email: str, redirect_to: str | None = None) -> str:
        email = email.strip().lower()
        if not is_email_allowed(email):
            raise EmailNotAllowedException()
        token = generate_magic_token(email)
        base = redirect_to or f"{settings.FRONTEND_URL.rstrip('/')}/auth/verify"
        separator = "&" if "?" in base else "?"
        return f"{base}{separator}{urlencode({'token': token})}"

    @classmethod
    def request_magic_link(cls, email: str, redirect_to: str | None = None) -> str:
        """
        Starts a sign-in for an existing user and logs the link. Sending it by
        email is left to whoever reads the logs.

        Raises:
            EmailNotAllowedException: If the email is outside the allowlist or has no account
        """
        TeamService.ensure_bootstrap_team_and_manager()

        email = email.strip().lower()
        if not is_email_allowed(email):
            raise EmailNotAllowedException()
        if not UserRepository.get_by_email(email):
            raise EmailNotAllowedException(ApiErrors.USER_NOT_INVITED_ASK_MANAGER)

        link = cls.build_magic_link(email, redirect_to)
        logger.info(f"Magic link for {email}: {link}")
        return link

    @classmethod
    def verify_magic_token(cls, token: str) -> tuple[UserModel, str]:
        """
        Exchanges a magic-link token for a session token.

        Returns:
            The signed-in user and their session token

        Raises:
            TokenExpiredError / TokenInvalidError: If the link is unusable
            EmailNotAllowedException: If the email is not allowed or has no account
        """
        email = validate_magic_token(token)["email"]
        if not is_email_allowed(email):
            raise EmailNotAllowedException()

        TeamService.ensure_bootstrap_team_and_manager(email=email, name=email.split("@")[0])

        user = UserRepository.get_by_email(email)
        if not user:
            raise EmailNotAllowedException(ApiErrors.USER_NOT_INVITED)

        logger.info(f"User {user.id} signed in")
        return user, generate_session_token(user.id, user.email)
