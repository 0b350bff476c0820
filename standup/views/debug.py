from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from standup.repositories.document_repository import DocumentRepository
from standup.repositories.team_repository import TeamRepository
from standup.services.user_service import UserService
from standup.utils.keys import team_key, users_key


class DebugTeamView(APIView):
    @extend_schema(
        operation_id="debug_team",
        summary="Team lookup diagnostics",
        description="Storage keys and lookups behind the viewer's active team. Only served when DEBUG is on.",
        tags=["health"],
        responses={200: OpenApiResponse(description="Diagnostics"), 404: OpenApiResponse(description="Disabled")},
    )
    def get(self, request: Request):
        if not settings.DEBUG:
            raise NotFound()

        viewer = UserService.get_viewer(request.user_id)
        team = TeamRepository.get_by_id(viewer.active_team_id)
        data = {
            "ok": True,
            "viewer": viewer.model_dump(mode="json"),
            "keys": {
                "teamKey": team_key(viewer.active_team_id),
                "userKey": users_key(viewer.user_id),
            },
            "found": {
                "team": DocumentRepository.get(team_key(viewer.active_team_id)) is not None,
                "user": DocumentRepository.get(users_key(viewer.user_id)) is not None,
            },
            "team": team.to_document() if team else None,
        }
        return Response(data=data, status=status.HTTP_200_OK)
