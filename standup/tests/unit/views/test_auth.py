from unittest.mock import patch

from django.conf import settings
from django.test import override_settings
from rest_framework import status
from rest_framework.reverse import reverse
from rest_framework.test import APIClient, APITestCase

from standup.constants.messages import ApiErrors
from standup.tests.fixtures.in_memory_store import MANAGER, InMemoryStoreMixin
from standup.utils.jwt_utils import generate_magic_token, generate_session_token

COOKIE_NAME = settings.COOKIE_SETTINGS["SESSION_COOKIE_NAME"]
NO_BOOTSTRAP = {"MANAGER_EMAIL": "", "INITIAL_MANAGER_EMAIL": "", "MANAGER_NAME": ""}


@override_settings(ALLOWED_EMAILS=[], BOOTSTRAP=NO_BOOTSTRAP)
class RequestMagicLinkViewTests(InMemoryStoreMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.create_team("team-1", {"alice": ("Alice", MANAGER)})

    def test_known_user_gets_ok_without_the_link(self):
        response = self.client.post(
            reverse("auth_request_link"),
            {"email": "alice@example.com", "redirectTo": "https://app.example.com/verify"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"ok": True})

    def test_unknown_user_is_forbidden(self):
        response = self.client.post(reverse("auth_request_link"), {"email": "stranger@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], ApiErrors.USER_NOT_INVITED_ASK_MANAGER)

    @override_settings(ALLOWED_EMAILS=["bob@example.com"])
    def test_email_not_allowed(self):
        response = self.client.post(reverse("auth_request_link"), {"email": "alice@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], ApiErrors.EMAIL_NOT_ALLOWED)

    def test_invalid_body(self):
        response = self.client.post(
            reverse("auth_request_link"), {"email": "not-an-email", "redirectTo": "nowhere"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


@override_settings(ALLOWED_EMAILS=[], BOOTSTRAP=NO_BOOTSTRAP)
class VerifyMagicLinkViewTests(InMemoryStoreMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.create_team("team-1", {"alice": ("Alice", MANAGER)})

    def test_verify_sets_session_cookie(self):
        response = self.client.post(
            reverse("auth_verify"), {"token": generate_magic_token("alice@example.com")}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], "alice")
        self.assertEqual(response.data["user"]["role"], "manager")
        self.assertEqual(response.data["user"]["activeTeamId"], "team-1")
        self.assertIn(COOKIE_NAME, response.cookies)
        self.assertTrue(response.cookies[COOKIE_NAME]["httponly"])

    def test_session_cookie_grants_access(self):
        self.client.post(reverse("auth_verify"), {"token": generate_magic_token("alice@example.com")}, format="json")

        response = self.client.get(reverse("standup_history"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_expired_or_garbage_token(self):
        response = self.client.post(reverse("auth_verify"), {"token": "not-a-real-token"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotIn(COOKIE_NAME, response.cookies)

    def test_uninvited_email(self):
        response = self.client.post(
            reverse("auth_verify"), {"token": generate_magic_token("stranger@example.com")}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], ApiErrors.USER_NOT_INVITED)

    @override_settings(ALLOWED_EMAILS=["bob@example.com"])
    def test_email_not_allowed(self):
        response = self.client.post(
            reverse("auth_verify"), {"token": generate_magic_token("alice@example.com")}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], ApiErrors.EMAIL_NOT_ALLOWED)


class SessionViewTests(InMemoryStoreMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.create_team("team-1", {"alice": ("Alice", MANAGER)})

    def test_without_cookie(self):
        response = self.client.get(reverse("auth_session"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"user": None})

    def test_with_valid_cookie(self):
        self.client.cookies[COOKIE_NAME] = generate_session_token("alice", "alice@example.com")

        response = self.client.get(reverse("auth_session"))

        self.assertEqual(response.data["user"]["email"], "alice@example.com")
        self.assertEqual(response.data["user"]["memberships"], [{"teamId": "team-1", "role": "manager"}])

    def test_with_invalid_cookie(self):
        self.client.cookies[COOKIE_NAME] = "garbage"

        response = self.client.get(reverse("auth_session"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data["user"])

    def test_logout_clears_cookie(self):
        self.client.cookies[COOKIE_NAME] = generate_session_token("alice", "alice@example.com")

        response = self.client.post(reverse("auth_logout"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies[COOKIE_NAME].value, "")


class HealthViewTests(APITestCase):
    @patch("standup.views.health.DatabaseManager")
    def test_healthy(self, mock_db_manager):
        mock_db_manager.return_value.check_database_health.return_value = True

        response = self.client.get(reverse("health"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "UP", "components": {"mongodb": {"status": "UP"}}})

    @patch("standup.views.health.DatabaseManager")
    def test_database_down(self, mock_db_manager):
        mock_db_manager.return_value.check_database_health.return_value = False

        response = self.client.get(reverse("health"))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["components"]["mongodb"]["status"], "DOWN")


class DebugTeamViewTests(InMemoryStoreMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.create_team("team-1", {"alice": ("Alice", MANAGER)})
        self.client.cookies[COOKIE_NAME] = generate_session_token("alice", "alice@example.com")

    @override_settings(DEBUG=False)
    def test_hidden_without_debug(self):
        response = self.client.get(reverse("debug_team"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    @override_settings(DEBUG=True)
    def test_reports_lookups(self):
        response = self.client.get(reverse("debug_team"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["found"], {"team": True, "user": True})
        self.assertEqual(response.data["team"]["id"], "team-1")
