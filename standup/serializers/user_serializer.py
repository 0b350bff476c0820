from rest_framework import serializers


class UpdateUserProfileSerializer(serializers.Serializer):
    userId = serializers.CharField(min_length=5, source="user_id")
    name = serializers.CharField(max_length=100, required=False)
    email = serializers.EmailField(required=False)


class VerifyMagicLinkSerializer(serializers.Serializer):
    token = serializers.CharField(min_length=10)


class RequestMagicLinkSerializer(serializers.Serializer):
    email = serializers.EmailField()
    redirectTo = serializers.URLField(required=False, source="redirect_to")
