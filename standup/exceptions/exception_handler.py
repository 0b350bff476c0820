import logging
from typing import List

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException as DRFAPIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.utils.serializer_helpers import ReturnDict
from rest_framework.views import exception_handler as drf_exception_handler

from standup.constants.messages import ApiErrors, AuthErrorMessages
from standup.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse, ApiErrorSource
from standup.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError
from standup.exceptions.standup_exceptions import (
    ConcurrencyTokenMissingException,
    StandupBadRequestException,
    StandupConflictException,
    StandupForbiddenException,
    StandupLockedException,
    StandupNotFoundException,
)
from standup.exceptions.team_exceptions import (
    NotTeamManagerException,
    NotTeamMemberException,
    TeamNotFoundException,
    TeamOperationNotAllowedException,
)
from standup.exceptions.user_exceptions import EmailNotAllowedException, UserNotFoundException

logger = logging.getLogger(__name__)

NOT_FOUND_EXCEPTIONS = (StandupNotFoundException, TeamNotFoundException, UserNotFoundException)
FORBIDDEN_EXCEPTIONS = (
    StandupForbiddenException,
    NotTeamManagerException,
    NotTeamMemberException,
    EmailNotAllowedException,
)
BAD_REQUEST_EXCEPTIONS = (StandupBadRequestException, TeamOperationNotAllowedException)
AUTH_EXCEPTIONS = (TokenMissingError, TokenExpiredError, TokenInvalidError)


def format_validation_errors(errors) -> List[ApiErrorDetail]:
    formatted_errors = []
    if isinstance(errors, ReturnDict | dict):
        for field, messages in errors.items():
            details = messages if isinstance(messages, list) else [messages]
            for message_detail in details:
                if isinstance(message_detail, dict):
                    nested_errors = format_validation_errors(message_detail)
                    formatted_errors.extend(nested_errors)
                else:
                    formatted_errors.append(
                        ApiErrorDetail(detail=str(message_detail), source={ApiErrorSource.PARAMETER: field})
                    )
    elif isinstance(errors, list):
        for message_detail in errors:
            formatted_errors.append(ApiErrorDetail(detail=str(message_detail)))
    return formatted_errors


def handle_exception(exc, context):
    response = drf_exception_handler(exc, context)

    error_list = []
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, AUTH_EXCEPTIONS):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Cookie"},
                title=AuthErrorMessages.AUTHENTICATION_REQUIRED,
                detail=str(exc),
            )
        )
    elif isinstance(exc, NOT_FOUND_EXCEPTIONS):
        status_code = status.HTTP_404_NOT_FOUND
        error_list.append(ApiErrorDetail(title=ApiErrors.RESOURCE_NOT_FOUND_TITLE, detail=str(exc)))
    elif isinstance(exc, StandupLockedException):
        status_code = status.HTTP_403_FORBIDDEN
        error_list.append(
            ApiErrorDetail(source={ApiErrorSource.PARAMETER: "date"}, title=ApiErrors.FORBIDDEN_TITLE, detail=str(exc))
        )
    elif isinstance(exc, FORBIDDEN_EXCEPTIONS):
        status_code = status.HTTP_403_FORBIDDEN
        error_list.append(ApiErrorDetail(title=ApiErrors.FORBIDDEN_TITLE, detail=str(exc)))
    elif isinstance(exc, StandupBadRequestException):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PARAMETER: "userId"}, title=ApiErrors.VALIDATION_ERROR, detail=str(exc)
            )
        )
    elif isinstance(exc, BAD_REQUEST_EXCEPTIONS):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(ApiErrorDetail(title=ApiErrors.VALIDATION_ERROR, detail=str(exc)))
    elif isinstance(exc, StandupConflictException):
        status_code = status.HTTP_409_CONFLICT
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "If-Match"},
                title=ApiErrors.CONFLICT_TITLE,
                detail=ApiErrors.STANDUP_CONFLICT_DETAIL,
            )
        )
    elif isinstance(exc, ConcurrencyTokenMissingException):
        status_code = status.HTTP_428_PRECONDITION_REQUIRED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "If-Match"},
                title=ApiErrors.PRECONDITION_REQUIRED_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, DRFValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list = format_validation_errors(exc.detail)
        if not error_list and exc.detail:
            error_list.append(ApiErrorDetail(detail=str(exc.detail), title=ApiErrors.VALIDATION_ERROR))
    elif isinstance(exc, DRFAPIException) and response is not None:
        status_code = response.status_code
        error_list.append(ApiErrorDetail(detail=str(exc.detail), title=str(exc.default_detail)))
    else:
        logger.exception(f"Unhandled exception: {exc}")
        default_detail_str = str(exc) if settings.DEBUG else ApiErrors.INTERNAL_SERVER_ERROR
        error_list.append(ApiErrorDetail(detail=default_detail_str, title=str(exc)))

    final_response_data = ApiErrorResponse(
        statusCode=status_code,
        message=str(exc) if not error_list else error_list[0].detail,
        errors=error_list,
    )
    return Response(data=final_response_data.model_dump(mode="json", exclude_none=True), status=status_code)
