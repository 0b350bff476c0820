from django.conf import settings
from rest_framework import serializers

from standup.constants.messages import ValidationErrors
from standup.constants.standup import DATE_REGEX
from standup.utils.cutoff_utils import parse_date


def validate_calendar_date(value: str) -> str:
    try:
        parse_date(value)
    except ValueError:
        raise serializers.ValidationError(ValidationErrors.INVALID_DATE)
    return value


class UpdateStandupEntrySerializer(serializers.Serializer):
    date = serializers.RegexField(
        DATE_REGEX, validators=[validate_calendar_date], error_messages={"invalid": ValidationErrors.INVALID_DATE}
    )
    userId = serializers.CharField(min_length=5, source="user_id")
    yesterday = serializers.CharField(allow_blank=True, trim_whitespace=False)
    today = serializers.CharField(allow_blank=True, trim_whitespace=False)
    blockers = serializers.CharField(allow_blank=True, trim_whitespace=False)


class StandupDayQuerySerializer(serializers.Serializer):
    date = serializers.RegexField(
        DATE_REGEX, validators=[validate_calendar_date], error_messages={"invalid": ValidationErrors.INVALID_DATE}
    )
    create = serializers.ChoiceField(choices=["1", "true"], required=False)


class StandupHistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1)

    def validate_limit(self, value):
        return min(value, settings.STANDUP["HISTORY_MAX_LIMIT"])
