from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from standup.constants.messages import AppMessages
from standup.dto.user_dto import SessionResponse
from standup.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError
from standup.serializers.user_serializer import RequestMagicLinkSerializer, VerifyMagicLinkSerializer
from standup.services.auth_service import AuthService
from standup.services.user_service import UserService
from standup.utils.cookie_utils import clear_session_cookie, set_session_cookie
from standup.utils.jwt_utils import validate_session_token


class RequestMagicLinkView(APIView):
    @extend_schema(
        operation_id="request_magic_link",
        summary="Request a magic link",
        description="Start a sign-in for an existing user. The link is written to the server log.",
        tags=["auth"],
        request=RequestMagicLinkSerializer,
        responses={
            200: OpenApiResponse(description="Link issued"),
            400: OpenApiResponse(description="Invalid request body"),
            403: OpenApiResponse(description="Email not allowed or not invited"),
        },
    )
    def post(self, request: Request):
        serializer = RequestMagicLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AuthService.request_magic_link(
            serializer.validated_data["email"], serializer.validated_data.get("redirect_to")
        )
        return Response(data={"ok": True}, status=status.HTTP_200_OK)


class VerifyMagicLinkView(APIView):
    @extend_schema(
        operation_id="verify_magic_link",
        summary="Sign in with a magic link",
        description="Exchange a magic-link token for a session cookie.",
        tags=["auth"],
        request=VerifyMagicLinkSerializer,
        responses={
            200: OpenApiResponse(response=SessionResponse, description="Signed in"),
            400: OpenApiResponse(description="Invalid request body"),
            401: OpenApiResponse(description="Invalid or expired token"),
            403: OpenApiResponse(description="Email not allowed"),
        },
    )
    def post(self, request: Request):
        serializer = VerifyMagicLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, session_token = AuthService.verify_magic_token(serializer.validated_data["token"])
        response = Response(
            data=SessionResponse(user=UserService.get_session_user(user.id)).to_response(),
            status=status.HTTP_200_OK,
        )
        return set_session_cookie(response, session_token)


class SessionView(APIView):
    @extend_schema(
        operation_id="get_session",
        summary="Current session",
        description="The signed-in user, or null when there is no valid session.",
        tags=["auth"],
        responses={200: OpenApiResponse(response=SessionResponse)},
    )
    def get(self, request: Request):
        user = None
        session_token = request.COOKIES.get(settings.COOKIE_SETTINGS.get("SESSION_COOKIE_NAME"))
        if session_token:
            try:
                payload = validate_session_token(session_token)
                user = UserService.get_session_user(payload["user_id"])
            except (TokenExpiredError, TokenInvalidError):
                user = None
        return Response(data=SessionResponse(user=user).to_response(), status=status.HTTP_200_OK)


class LogoutView(APIView):
    @extend_schema(
        operation_id="logout",
        summary="Sign out",
        description="Clear the session cookie.",
        tags=["auth"],
        request=None,
        responses={200: OpenApiResponse(description="Logged out")},
    )
    def post(self, request: Request):
        response = Response(data={"ok": True, "message": AppMessages.LOGGED_OUT}, status=status.HTTP_200_OK)
        return clear_session_cookie(response)
