from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from standup.dto.standup_dto import (
    CreateStandupResponse,
    GetStandupHistoryResponse,
    StandupDayResponse,
)
from standup.exceptions.standup_exceptions import ConcurrencyTokenMissingException, StandupLockedException
from standup.serializers.standup_serializer import (
    StandupDayQuerySerializer,
    StandupHistoryQuerySerializer,
    UpdateStandupEntrySerializer,
)
from standup.services.standup_service import StandupService
from standup.services.viewer_service import ViewerService
from standup.utils import cutoff_utils


def day_response(day: StandupDayResponse) -> Response:
    return Response(data=day.to_response(), status=status.HTTP_200_OK, headers={"ETag": f'"{day.etag}"'})


class StandupTodayView(APIView):
    @extend_schema(
        operation_id="get_today_standup",
        summary="Get today's standup",
        description="Return today's standup for the active team, creating it on first access. "
        "Rows follow the team's current members. `editable` is false once the cutoff has passed.",
        tags=["standup"],
        responses={
            200: OpenApiResponse(response=StandupDayResponse, description="Today's standup"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def get(self, request: Request):
        viewer, team = ViewerService.resolve_active_team(request.user_id)
        date = cutoff_utils.today()

        document = StandupService.get_or_create(team, date)
        editable = not cutoff_utils.is_locked(date, team.standup_cutoff_time)
        return day_response(StandupService.to_day_response(team, document, viewer, editable))


class StandupDayView(APIView):
    @extend_schema(
        operation_id="get_standup_day",
        summary="Get a past or future standup",
        description="Read-only view of one day. Returns 404 when the day has no standup unless `create` is set.",
        tags=["standup"],
        parameters=[
            OpenApiParameter(name="date", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=True),
            OpenApiParameter(
                name="create",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="`1` or `true` to create the day when it does not exist",
            ),
        ],
        responses={
            200: OpenApiResponse(response=StandupDayResponse, description="The day's standup"),
            400: OpenApiResponse(description="Invalid query"),
            404: OpenApiResponse(description="Standup or team not found"),
        },
    )
    def get(self, request: Request):
        viewer, team = ViewerService.resolve_active_team(request.user_id)

        query = StandupDayQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        date = query.validated_data["date"]

        if query.validated_data.get("create"):
            document = StandupService.get_or_create(team, date)
        else:
            document = StandupService.get_existing(team, date)
        return day_response(StandupService.to_day_response(team, document, viewer, editable=False))


class StandupUpdateView(APIView):
    @extend_schema(
        operation_id="update_standup_entry",
        summary="Update a standup entry",
        description="Save one member's yesterday/today/blockers. Members edit their own row, managers any row. "
        "The If-Match header must carry the etag last read; a stale etag is rejected with 409.",
        tags=["standup"],
        request=UpdateStandupEntrySerializer,
        parameters=[
            OpenApiParameter(
                name="If-Match",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Etag of the standup version being edited",
            ),
        ],
        responses={
            200: OpenApiResponse(response=StandupDayResponse, description="Entry saved"),
            400: OpenApiResponse(description="Invalid body or user not on team"),
            403: OpenApiResponse(description="Not allowed, or locked after cutoff"),
            409: OpenApiResponse(description="Someone else updated this standup"),
            428: OpenApiResponse(description="Missing If-Match header"),
        },
    )
    def put(self, request: Request):
        viewer, team = ViewerService.resolve_active_team(request.user_id)

        serializer = UpdateStandupEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if cutoff_utils.is_locked(data["date"], team.standup_cutoff_time):
            raise StandupLockedException()

        if_match = request.headers.get("If-Match", "").strip()
        if not if_match:
            raise ConcurrencyTokenMissingException()

        document = StandupService.update_entry(
            team=team,
            date=data["date"],
            viewer=viewer,
            user_id=data["user_id"],
            yesterday=data["yesterday"],
            today=data["today"],
            blockers=data["blockers"],
            if_match=if_match,
        )
        return day_response(StandupService.to_day_response(team, document, viewer, editable=True))


class StandupCreateView(APIView):
    @extend_schema(
        operation_id="create_today_standup",
        summary="Create today's standup",
        description="Create today's standup for the active team ahead of first access. Does nothing if it exists.",
        tags=["standup"],
        request=None,
        responses={
            200: OpenApiResponse(response=CreateStandupResponse, description="Standup ready"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def post(self, request: Request):
        _, team = ViewerService.resolve_active_team(request.user_id)
        response = StandupService.create_today(team)
        return Response(data=response.to_response(), status=status.HTTP_200_OK)


class StandupHistoryView(APIView):
    @extend_schema(
        operation_id="get_standup_history",
        summary="Get standup history",
        description="Statuses per member for the team's most recent standups, newest first.",
        tags=["standup"],
        parameters=[
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Number of days (default 14, at most 60)",
            ),
        ],
        responses={
            200: OpenApiResponse(response=GetStandupHistoryResponse, description="Standup history"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def get(self, request: Request):
        _, team = ViewerService.resolve_active_team(request.user_id)

        query = StandupHistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        response = StandupService.get_history(team, query.validated_data.get("limit"))
        return Response(data=response.to_response(), status=status.HTTP_200_OK)
