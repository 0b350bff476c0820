from unittest import TestCase
from unittest.mock import Mock, patch

from django.test import override_settings
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import APIView

from standup.constants.messages import ApiErrors, AuthErrorMessages
from standup.dto.responses.error_response import ApiErrorDetail, ApiErrorSource
from standup.exceptions.auth_exceptions import TokenExpiredError
from standup.exceptions.exception_handler import format_validation_errors, handle_exception
from standup.exceptions.standup_exceptions import (
    ConcurrencyTokenMissingException,
    StandupBadRequestException,
    StandupConflictException,
    StandupForbiddenException,
    StandupLockedException,
    StandupNotFoundException,
)
from standup.exceptions.team_exceptions import NotTeamManagerException, TeamNotFoundException
from standup.exceptions.user_exceptions import EmailNotAllowedException


class ExceptionHandlerTests(TestCase):
    def setUp(self):
        self.context = {"request": Mock(), "view": APIView()}

    def test_returns_400_for_validation_error(self):
        error_detail = {"field": ["error message"]}
        exception = DRFValidationError(detail=error_detail)

        with patch("standup.exceptions.exception_handler.format_validation_errors") as mock_format:
            mock_format.return_value = [
                ApiErrorDetail(detail="error message", source={ApiErrorSource.PARAMETER: "field"})
            ]
            response = handle_exception(exception, self.context)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertDictEqual(
            response.data,
            {
                "statusCode": 400,
                "message": "error message",
                "errors": [{"source": {"parameter": "field"}, "detail": "error message"}],
            },
        )
        mock_format.assert_called_once_with(error_detail)

    def test_not_found_exceptions(self):
        for exception in (StandupNotFoundException(), TeamNotFoundException("t1")):
            response = handle_exception(exception, self.context)

            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertEqual(response.data["errors"][0]["title"], ApiErrors.RESOURCE_NOT_FOUND_TITLE)
            self.assertEqual(response.data["message"], exception.message)

    def test_forbidden_exceptions(self):
        for exception in (StandupForbiddenException(), NotTeamManagerException(), EmailNotAllowedException()):
            response = handle_exception(exception, self.context)

            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_locked_points_at_date(self):
        response = handle_exception(StandupLockedException(), self.context)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], ApiErrors.STANDUP_LOCKED)
        self.assertEqual(response.data["errors"][0]["source"], {"parameter": "date"})

    def test_bad_request_points_at_user_id(self):
        response = handle_exception(StandupBadRequestException(), self.context)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["source"], {"parameter": "userId"})

    def test_conflict(self):
        response = handle_exception(StandupConflictException(current_version=3), self.context)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], ApiErrors.STANDUP_CONFLICT_DETAIL)
        self.assertEqual(response.data["errors"][0]["source"], {"header": "If-Match"})

    def test_missing_concurrency_token(self):
        response = handle_exception(ConcurrencyTokenMissingException(), self.context)

        self.assertEqual(response.status_code, status.HTTP_428_PRECONDITION_REQUIRED)
        self.assertEqual(response.data["message"], ApiErrors.MISSING_IF_MATCH)

    def test_auth_errors(self):
        response = handle_exception(TokenExpiredError(), self.context)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["errors"][0]["title"], AuthErrorMessages.AUTHENTICATION_REQUIRED)

    def test_drf_api_exception_keeps_status(self):
        response = handle_exception(NotFound(), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    @override_settings(DEBUG=False)
    def test_unexpected_exception_hides_detail(self):
        response = handle_exception(Exception("database exploded"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], ApiErrors.INTERNAL_SERVER_ERROR)

    @override_settings(DEBUG=True)
    def test_unexpected_exception_shows_detail_in_debug(self):
        response = handle_exception(Exception("database exploded"), self.context)

        self.assertEqual(response.data["message"], "database exploded")


class FormatValidationErrorsTests(TestCase):
    def test_field_errors(self):
        errors = format_validation_errors({"date": ["bad"], "userId": ["short", "missing"]})

        self.assertEqual([error.detail for error in errors], ["bad", "short", "missing"])
        self.assertEqual(errors[1].source, {ApiErrorSource.PARAMETER: "userId"})

    def test_non_field_errors_list(self):
        errors = format_validation_errors(["Provide either teamName or standupCutoffTime."])

        self.assertEqual(len(errors), 1)
        self.assertIsNone(errors[0].source)
