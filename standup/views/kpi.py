from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from standup.dto.kpi_dto import TeamKpiResponse, UserKpiResponse
from standup.services.kpi_service import KpiService
from standup.services.viewer_service import ViewerService


class TeamKpiView(APIView):
    @extend_schema(
        operation_id="get_team_kpi",
        summary="Team compliance",
        description="Per-member prepared/partial/missing counts over the last 30 days, "
        "weekly average score, missing streak and the team compliance percentage.",
        tags=["kpi"],
        responses={
            200: OpenApiResponse(response=TeamKpiResponse, description="Team KPI"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def get(self, request: Request):
        _, team = ViewerService.resolve_active_team(request.user_id)
        response = KpiService.get_team_kpi(team)
        return Response(data=response.to_response(), status=status.HTTP_200_OK)


class UserKpiView(APIView):
    @extend_schema(
        operation_id="get_user_kpi",
        summary="Member compliance",
        description="The KPI figures of one member of the active team.",
        tags=["kpi"],
        parameters=[
            OpenApiParameter(name="user_id", type=OpenApiTypes.STR, location=OpenApiParameter.PATH),
        ],
        responses={
            200: OpenApiResponse(response=UserKpiResponse, description="Member KPI"),
            404: OpenApiResponse(description="Team or member not found"),
        },
    )
    def get(self, request: Request, user_id: str):
        _, team = ViewerService.resolve_active_team(request.user_id)
        response = KpiService.get_user_kpi(team, user_id)
        return Response(data=response.to_response(), status=status.HTTP_200_OK)
