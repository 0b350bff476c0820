import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status

from standup.constants.messages import ApiErrors, AuthErrorMessages
from standup.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse
from standup.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError
from standup.repositories.user_repository import UserRepository
from standup.utils.jwt_utils import validate_session_token

logger = logging.getLogger(__name__)


class JWTAuthenticationMiddleware:
    def __init__(self, get_response) -> None:
        self.get_response = get_response

    def __call__(self, request):
        if self._is_public_path(request.path) or request.method == "OPTIONS":
            return self.get_response(request)

        try:
            self._authenticate(request)
        except (TokenMissingError, TokenExpiredError, TokenInvalidError) as e:
            return self._handle_auth_error(e)

        return self.get_response(request)

    def _authenticate(self, request) -> None:
        session_token = request.COOKIES.get(settings.COOKIE_SETTINGS.get("SESSION_COOKIE_NAME"))
        if not session_token:
            raise TokenMissingError()

        payload = validate_session_token(session_token)
        self._set_user_data(request, payload)

    def _set_user_data(self, request, payload):
        """Set user data on request with database verification"""
        user = UserRepository.get_by_id(payload["user_id"])
        if not user:
            raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)

        request.user_id = user.id
        request.user_email = user.email

    def _is_public_path(self, path: str) -> bool:
        return any(path.startswith(public_path) for public_path in settings.PUBLIC_PATHS)

    def _handle_auth_error(self, exception):
        error_response = ApiErrorResponse(
            statusCode=status.HTTP_401_UNAUTHORIZED,
            message=str(exception),
            errors=[ApiErrorDetail(title=ApiErrors.AUTHENTICATION_FAILED, detail=str(exception))],
        )
        return JsonResponse(
            data=error_response.model_dump(mode="json", exclude_none=True),
            status=status.HTTP_401_UNAUTHORIZED,
        )
