from unittest import TestCase

from django.conf import settings

from standup.constants.messages import ValidationErrors
from standup.serializers.standup_serializer import (
    StandupDayQuerySerializer,
    StandupHistoryQuerySerializer,
    UpdateStandupEntrySerializer,
)


class UpdateStandupEntrySerializerTests(TestCase):
    def setUp(self):
        self.valid_data = {
            "date": "2024-01-15",
            "userId": "user-123",
            "yesterday": "  shipped X",
            "today": "",
            "blockers": "none",
        }

    def test_valid_entry_keeps_text_as_sent(self):
        serializer = UpdateStandupEntrySerializer(data=self.valid_data)

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["user_id"], "user-123")
        self.assertEqual(serializer.validated_data["yesterday"], "  shipped X")
        self.assertEqual(serializer.validated_data["today"], "")

    def test_rejects_impossible_date(self):
        serializer = UpdateStandupEntrySerializer(data={**self.valid_data, "date": "2024-13-01"})

        self.assertFalse(serializer.is_valid())
        self.assertEqual(str(serializer.errors["date"][0]), ValidationErrors.INVALID_DATE)

    def test_rejects_badly_formatted_date(self):
        serializer = UpdateStandupEntrySerializer(data={**self.valid_data, "date": "15/01/2024"})

        self.assertFalse(serializer.is_valid())
        self.assertIn("date", serializer.errors)

    def test_rejects_short_user_id(self):
        serializer = UpdateStandupEntrySerializer(data={**self.valid_data, "userId": "u1"})

        self.assertFalse(serializer.is_valid())
        self.assertIn("userId", serializer.errors)

    def test_fields_are_required(self):
        serializer = UpdateStandupEntrySerializer(data={"date": "2024-01-15", "userId": "user-123"})

        self.assertFalse(serializer.is_valid())
        self.assertEqual(set(serializer.errors), {"yesterday", "today", "blockers"})


class StandupQuerySerializerTests(TestCase):
    def test_day_query_create_flag(self):
        serializer = StandupDayQuerySerializer(data={"date": "2024-01-15", "create": "true"})

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["create"], "true")

    def test_day_query_requires_date(self):
        self.assertFalse(StandupDayQuerySerializer(data={}).is_valid())

    def test_history_limit_is_clamped(self):
        serializer = StandupHistoryQuerySerializer(data={"limit": "500"})

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["limit"], settings.STANDUP["HISTORY_MAX_LIMIT"])

    def test_history_limit_is_optional(self):
        serializer = StandupHistoryQuerySerializer(data={})

        self.assertTrue(serializer.is_valid())
        self.assertNotIn("limit", serializer.validated_data)
