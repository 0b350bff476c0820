from datetime import datetime
from unittest import TestCase
from unittest.mock import patch
from zoneinfo import ZoneInfo

from django.conf import settings
from django.test import override_settings

from standup.constants.standup import StandupStatus
from standup.exceptions.standup_exceptions import (
    StandupBadRequestException,
    StandupConflictException,
    StandupForbiddenException,
    StandupNotFoundException,
)
from standup.repositories.standup_repository import StandupRepository
from standup.repositories.team_repository import TeamRepository
from standup.services.standup_service import StandupService
from standup.services.user_service import UserService
from standup.tests.fixtures.in_memory_store import MANAGER, MEMBER, InMemoryStoreMixin
from standup.utils.keys import standup_key

DATE = "2024-01-15"


class StandupServiceTests(InMemoryStoreMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.team = self.create_team("team-1", {"alice": ("Alice", MANAGER), "bob": ("Bob", MEMBER)})
        self.alice = UserService.get_viewer("alice")
        self.bob = UserService.get_viewer("bob")

    def update(self, viewer, user_id, if_match, yesterday="y", today="t", blockers="b"):
        return StandupService.update_entry(self.team, DATE, viewer, user_id, yesterday, today, blockers, if_match)

    def test_get_or_create_creates_version_zero_with_missing_rows(self):
        document = StandupService.get_or_create(self.team, DATE)

        self.assertEqual(document.version, 0)
        self.assertEqual([row.user_id for row in document.rows], ["alice", "bob"])
        self.assertTrue(all(row.status == StandupStatus.MISSING for row in document.rows))
        self.assertIsNotNone(StandupRepository.get("team-1", DATE))

    def test_get_or_create_keeps_existing_rows(self):
        self.update(self.bob, "bob", "0")

        document = StandupService.get_or_create(self.team, DATE)

        self.assertEqual(document.version, 1)
        self.assertEqual(document.find_row("bob").status, StandupStatus.PREPARED)

    def test_reconciliation_adds_and_removes_rows_without_writing(self):
        self.update(self.bob, "bob", "0", yesterday="shipped X", today="ship Y", blockers="None")
        self.create_team("team-1", {"bob": ("Bob", MEMBER), "carol": ("Carol", MEMBER)})
        team = TeamRepository.get_by_id("team-1")
        writes_before = len(self.store.writes)

        document = StandupService.get_or_create(team, DATE)

        self.assertEqual([row.user_id for row in document.rows], ["bob", "carol"])
        bob_row = document.find_row("bob")
        self.assertEqual((bob_row.yesterday, bob_row.today, bob_row.blockers), ("shipped X", "ship Y", "None"))
        self.assertEqual(bob_row.status, StandupStatus.PREPARED)
        self.assertEqual(bob_row.version, 1)
        carol_row = document.find_row("carol")
        self.assertEqual((carol_row.yesterday, carol_row.today, carol_row.blockers), ("", "", ""))
        self.assertEqual(carol_row.status, StandupStatus.MISSING)
        self.assertIsNone(document.find_row("alice"))
        self.assertEqual(document.version, 1)
        self.assertEqual(len(self.store.writes), writes_before)
        stored = StandupRepository.get("team-1", DATE)
        self.assertEqual([row.user_id for row in stored.rows], ["alice", "bob"])

    def test_member_without_user_record_gets_no_row(self):
        self.team.member_user_ids.append("ghost")

        document = StandupService.get_or_create(self.team, DATE)

        self.assertIsNone(document.find_row("ghost"))
        self.assertEqual(len(document.rows), 2)

    def test_duplicate_member_ids_give_one_row(self):
        self.team.member_user_ids.append("bob")

        document = StandupService.get_or_create(self.team, DATE)

        self.assertEqual([row.user_id for row in document.rows], ["alice", "bob"])

    def test_get_existing_raises_when_missing(self):
        with self.assertRaises(StandupNotFoundException):
            StandupService.get_existing(self.team, DATE)

    def test_member_cannot_edit_another_row(self):
        with self.assertRaises(StandupForbiddenException):
            self.update(self.bob, "alice", "0")

    def test_manager_can_edit_another_row(self):
        document = self.update(self.alice, "bob", "0", blockers="")

        self.assertEqual(document.find_row("bob").status, StandupStatus.PARTIAL)

    def test_target_not_on_team_is_bad_request(self):
        with self.assertRaises(StandupBadRequestException):
            self.update(self.alice, "someone-else", "0")

    def test_stale_token_conflicts_and_nothing_is_stored(self):
        self.update(self.bob, "bob", "0")
        stored_before = self.store.get(standup_key("team-1", DATE))

        with self.assertRaises(StandupConflictException) as context:
            self.update(self.alice, "alice", "0")

        self.assertEqual(context.exception.current_version, 1)
        self.assertEqual(self.store.get(standup_key("team-1", DATE)), stored_before)

    def test_missing_or_non_numeric_token_skips_check(self):
        self.update(self.bob, "bob", "0")

        document = self.update(self.alice, "alice", None)
        document = self.update(self.alice, "alice", "*")

        self.assertEqual(document.version, 3)

    def test_row_version_only_counts_that_row(self):
        self.update(self.bob, "bob", "0")
        document = self.update(self.bob, "bob", "1")

        self.assertEqual(document.find_row("bob").version, 2)
        self.assertEqual(document.find_row("alice").version, 0)
        self.assertEqual(document.version, 2)

    def test_update_stores_reconciled_rows(self):
        StandupService.get_or_create(self.team, DATE)
        self.create_team("team-1", {"alice": ("Alice", MANAGER), "carol": ("Carol", MEMBER)})
        team = TeamRepository.get_by_id("team-1")

        StandupService.update_entry(team, DATE, self.alice, "carol", "y", "", "", "0")

        stored = StandupRepository.get("team-1", DATE)
        self.assertEqual([row.user_id for row in stored.rows], ["alice", "carol"])
        self.assertEqual(stored.find_row("carol").status, StandupStatus.PARTIAL)

    def test_two_editors_with_same_token(self):
        document = StandupService.get_or_create(self.team, DATE)
        self.assertEqual(document.etag, "0")
        self.assertEqual([row.status for row in document.rows], [StandupStatus.MISSING, StandupStatus.MISSING])

        document = self.update(self.bob, "bob", "0", yesterday="shipped X", today="ship Y", blockers="None")
        self.assertEqual(document.etag, "1")
        self.assertEqual(document.find_row("bob").status, StandupStatus.PREPARED)
        alice_row = document.find_row("alice")
        self.assertEqual(alice_row.status, StandupStatus.MISSING)
        self.assertEqual((alice_row.yesterday, alice_row.today, alice_row.blockers, alice_row.version), ("", "", "", 0))

        with self.assertRaises(StandupConflictException) as context:
            self.update(self.alice, "bob", "0", yesterday="shipped X", today="ship Y", blockers="Waiting on review")
        self.assertEqual(context.exception.current_version, 1)
        self.assertEqual(StandupRepository.get("team-1", DATE).find_row("bob").blockers, "None")

        document = self.update(self.alice, "bob", "1", yesterday="shipped X", today="ship Y", blockers="Waiting on review")
        self.assertEqual(document.etag, "2")
        self.assertEqual(document.find_row("bob").blockers, "Waiting on review")
        self.assertEqual(document.find_row("alice").status, StandupStatus.MISSING)

    def test_non_integer_token_is_compared_as_a_number(self):
        self.update(self.bob, "bob", "0")

        with self.assertRaises(StandupConflictException):
            self.update(self.bob, "bob", "0.0")

        self.assertEqual(self.update(self.bob, "bob", "1.0").version, 2)

    def test_write_lost_to_a_concurrent_update_conflicts(self):
        StandupService.get_or_create(self.team, DATE)
        key = standup_key("team-1", DATE)
        save_if_version = StandupRepository.save_if_version

        def interleaved(document, expected_version):
            concurrent = self.store.get(key)
            concurrent["version"] = expected_version + 1
            self.store.put(key, concurrent)
            return save_if_version(document, expected_version)

        with patch.object(StandupRepository, "save_if_version", side_effect=interleaved):
            with self.assertRaises(StandupConflictException) as context:
                self.update(self.bob, "bob", "0")

        self.assertEqual(context.exception.current_version, 1)
        self.assertEqual(StandupRepository.get("team-1", DATE).find_row("bob").status, StandupStatus.MISSING)

    @override_settings(STANDUP={**settings.STANDUP, "TIMEZONE": "UTC"})
    @patch("standup.utils.cutoff_utils.current_time")
    def test_create_today(self, mock_current_time):
        mock_current_time.return_value = datetime(2024, 1, 15, 8, 0, tzinfo=ZoneInfo("UTC"))

        response = StandupService.create_today(self.team)

        self.assertEqual(response.date, DATE)
        self.assertEqual(response.etag, "0")
        self.assertTrue(response.ok)

    def test_day_response_sorts_rows_and_reports_viewer_role(self):
        self.create_team(
            "team-1", {"alice": ("alice", MANAGER), "bob": ("Bob", MEMBER), "carol": ("Aaron", MEMBER)}
        )
        team = TeamRepository.get_by_id("team-1")
        document = StandupService.get_or_create(team, DATE)

        response = StandupService.to_day_response(team, document, self.bob, editable=True)

        self.assertEqual([row.name for row in response.rows], ["Aaron", "alice", "Bob"])
        self.assertEqual(response.viewer.role, MEMBER)
        self.assertEqual(response.etag, "0")
        self.assertEqual(response.team_name, "Engineering")


class StandupHistoryTests(InMemoryStoreMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.team = self.create_team("team-1", {"alice": ("Alice", MANAGER)})

    def test_history_is_newest_first_and_limited(self):
        for date in ("2024-01-12", "2024-01-15", "2024-01-13", "2024-01-14"):
            StandupService.get_or_create(self.team, date)

        response = StandupService.get_history(self.team, limit=3)

        self.assertEqual([day.date for day in response.days], ["2024-01-15", "2024-01-14", "2024-01-13"])
        self.assertEqual(response.days[0].rows[0].status, StandupStatus.MISSING)

    def test_history_limit_is_clamped(self):
        for day in range(1, 29):
            StandupService.get_or_create(self.team, f"2024-02-{day:02d}")

        with override_settings(STANDUP={**settings.STANDUP, "HISTORY_MAX_LIMIT": 5}):
            response = StandupService.get_history(self.team, limit=100)

        self.assertEqual(len(response.days), 5)

    def test_history_without_documents_returns_today(self):
        with patch("standup.utils.cutoff_utils.today", return_value="2024-01-15"):
            response = StandupService.get_history(self.team)

        self.assertEqual(len(response.days), 1)
        self.assertEqual(response.days[0].date, "2024-01-15")
        self.assertEqual(response.days[0].rows, [])
