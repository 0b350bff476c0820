from rest_framework import serializers

from standup.constants.messages import ValidationErrors
from standup.constants.role import ROLE_CHOICES
from standup.constants.standup import CUTOFF_TIME_REGEX
from standup.utils.cutoff_utils import is_valid_cutoff_time


def validate_cutoff_time(value: str) -> str:
    if not is_valid_cutoff_time(value):
        raise serializers.ValidationError(ValidationErrors.INVALID_CUTOFF_TIME)
    return value


def validate_team_name(value: str) -> str:
    if not value.strip():
        raise serializers.ValidationError(ValidationErrors.BLANK_TEAM_NAME)
    return value


cutoff_time_field_kwargs = {
    "validators": [validate_cutoff_time],
    "error_messages": {"invalid": ValidationErrors.INVALID_CUTOFF_TIME},
}


class CreateTeamSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=80, validators=[validate_team_name])
    standupCutoffTime = serializers.RegexField(
        CUTOFF_TIME_REGEX, required=False, source="standup_cutoff_time", **cutoff_time_field_kwargs
    )


class UpdateTeamSerializer(serializers.Serializer):
    teamName = serializers.CharField(max_length=80, required=False, source="name", validators=[validate_team_name])
    standupCutoffTime = serializers.RegexField(
        CUTOFF_TIME_REGEX, required=False, source="standup_cutoff_time", **cutoff_time_field_kwargs
    )

    def validate(self, data):
        if not data.get("name") and not data.get("standup_cutoff_time"):
            raise serializers.ValidationError(ValidationErrors.TEAM_UPDATE_EMPTY)
        return data


class AddTeamMemberSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=100)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)


class RemoveTeamMemberSerializer(serializers.Serializer):
    userId = serializers.CharField(min_length=5, source="user_id")


class UpdateMemberRoleSerializer(serializers.Serializer):
    userId = serializers.CharField(min_length=5, source="user_id")
    role = serializers.ChoiceField(choices=ROLE_CHOICES)


class SubscribeTeamSerializer(serializers.Serializer):
    teamCode = serializers.CharField(min_length=4, source="team_code")


class SelectTeamSerializer(serializers.Serializer):
    teamId = serializers.CharField(min_length=5, source="team_id")
