from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from standup.dto.team_dto import SelectTeamResponse
from standup.serializers.team_serializer import SelectTeamSerializer
from standup.services.user_service import UserService
from standup.services.viewer_service import ViewerService


class SelectTeamView(APIView):
    @extend_schema(
        operation_id="select_active_team",
        summary="Switch active team",
        description="Make one of the viewer's teams the active one.",
        tags=["standup"],
        request=SelectTeamSerializer,
        responses={
            200: OpenApiResponse(response=SelectTeamResponse, description="Active team changed"),
            400: OpenApiResponse(description="Invalid request body"),
            403: OpenApiResponse(description="Not a member of that team"),
        },
    )
    def post(self, request: Request):
        ViewerService.resolve_active_team(request.user_id)

        serializer = SelectTeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = UserService.set_active_team(request.user_id, serializer.validated_data["team_id"])
        return Response(data=response.to_response(), status=status.HTTP_200_OK)
