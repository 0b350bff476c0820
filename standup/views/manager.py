from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from standup.constants.role import RoleName
from standup.dto.team_dto import GetUserTeamsResponse, TeamMembersResponse
from standup.dto.user_dto import UpdateUserResponse
from standup.serializers.team_serializer import (
    AddTeamMemberSerializer,
    CreateTeamSerializer,
    RemoveTeamMemberSerializer,
    SubscribeTeamSerializer,
    UpdateMemberRoleSerializer,
    UpdateTeamSerializer,
)
from standup.serializers.user_serializer import UpdateUserProfileSerializer
from standup.services.team_service import TeamService
from standup.services.user_service import UserService
from standup.services.viewer_service import ViewerService

MANAGER_ERROR_RESPONSES = {
    400: OpenApiResponse(description="Invalid request body"),
    403: OpenApiResponse(description="Manager only"),
    404: OpenApiResponse(description="Team not found"),
}


def members_response(response: TeamMembersResponse) -> Response:
    return Response(data=response.to_response(), status=status.HTTP_200_OK)


def add_member(request: Request) -> Response:
    _, team = ViewerService.resolve_managed_team(request.user_id)

    serializer = AddTeamMemberSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    response = TeamService.add_member_by_email(
        team, data["email"], data["name"], RoleName(data.get("role", RoleName.MEMBER.value))
    )
    return members_response(response)


def remove_member(request: Request) -> Response:
    viewer, team = ViewerService.resolve_managed_team(request.user_id)

    serializer = RemoveTeamMemberSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    return members_response(TeamService.remove_member(team, viewer, serializer.validated_data["user_id"]))


class ManagerTeamView(APIView):
    @extend_schema(
        operation_id="get_managed_team",
        summary="Get the active team",
        description="Settings and members of the viewer's active team.",
        tags=["manager"],
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def get(self, request: Request):
        _, team = ViewerService.resolve_managed_team(request.user_id)
        return members_response(TeamService.get_team_members(team))

    @extend_schema(
        operation_id="update_managed_team",
        summary="Update team settings",
        description="Rename the active team and/or change its standup cutoff time (HH:MM).",
        tags=["manager"],
        request=UpdateTeamSerializer,
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def put(self, request: Request):
        _, team = ViewerService.resolve_managed_team(request.user_id)

        serializer = UpdateTeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.update_team_settings(team, **serializer.validated_data)
        return members_response(TeamService.get_team_members(team))

    @extend_schema(
        operation_id="add_managed_team_member",
        summary="Add a member",
        description="Add a member by email. Unknown emails get a new user account.",
        tags=["manager"],
        request=AddTeamMemberSerializer,
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def post(self, request: Request):
        return add_member(request)

    @extend_schema(
        operation_id="remove_managed_team_member",
        summary="Remove a member",
        description="Remove a member from the active team. Managers cannot remove themselves.",
        tags=["manager"],
        request=RemoveTeamMemberSerializer,
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def delete(self, request: Request):
        return remove_member(request)


class ManagerTeamMembersView(APIView):
    @extend_schema(
        operation_id="list_team_members",
        summary="List members",
        description="Members of the active team with their roles, sorted by name.",
        tags=["manager"],
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def get(self, request: Request):
        _, team = ViewerService.resolve_managed_team(request.user_id)
        return members_response(TeamService.get_team_members(team))

    @extend_schema(
        operation_id="add_team_member",
        summary="Add a member with a role",
        description="Add a member by email, optionally as a manager. Unknown emails get a new user account.",
        tags=["manager"],
        request=AddTeamMemberSerializer,
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def post(self, request: Request):
        return add_member(request)

    @extend_schema(
        operation_id="remove_team_member",
        summary="Remove a member",
        description="Remove a member from the active team. Managers cannot remove themselves.",
        tags=["manager"],
        request=RemoveTeamMemberSerializer,
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def delete(self, request: Request):
        return remove_member(request)

    @extend_schema(
        operation_id="update_managed_team_member_role",
        summary="Change a member's role",
        description="Make a member a manager or a member of the active team. "
        "Managers cannot remove their own manager access.",
        tags=["manager"],
        request=UpdateMemberRoleSerializer,
        responses={200: OpenApiResponse(response=TeamMembersResponse), **MANAGER_ERROR_RESPONSES},
    )
    def put(self, request: Request):
        viewer, team = ViewerService.resolve_managed_team(request.user_id)

        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        return members_response(TeamService.change_member_role(team, viewer, data["user_id"], RoleName(data["role"])))


class ManagerTeamsView(APIView):
    @extend_schema(
        operation_id="list_managed_teams",
        summary="List the viewer's teams",
        tags=["manager"],
        responses={200: OpenApiResponse(response=GetUserTeamsResponse), **MANAGER_ERROR_RESPONSES},
    )
    def get(self, request: Request):
        viewer, _ = ViewerService.resolve_managed_team(request.user_id)
        response = TeamService.get_user_teams(viewer.user_id)
        return Response(data=response.to_response(), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_team",
        summary="Create a team",
        description="Create a team managed by the viewer and switch to it.",
        tags=["manager"],
        request=CreateTeamSerializer,
        responses={200: OpenApiResponse(response=GetUserTeamsResponse), **MANAGER_ERROR_RESPONSES},
    )
    def post(self, request: Request):
        viewer, _ = ViewerService.resolve_managed_team(request.user_id)

        serializer = CreateTeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        TeamService.create_team(created_by_user_id=viewer.user_id, **serializer.validated_data)
        response = TeamService.get_user_teams(viewer.user_id)
        return Response(data=response.to_response(), status=status.HTTP_200_OK)


class ManagerSubscribeView(APIView):
    @extend_schema(
        operation_id="subscribe_to_team",
        summary="Join a team by code",
        description="Join another team as a manager using its team code, and switch to it.",
        tags=["manager"],
        request=SubscribeTeamSerializer,
        responses={200: OpenApiResponse(response=GetUserTeamsResponse), **MANAGER_ERROR_RESPONSES},
    )
    def post(self, request: Request):
        viewer, _ = ViewerService.resolve_managed_team(request.user_id)

        serializer = SubscribeTeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = TeamService.subscribe_by_code(viewer, serializer.validated_data["team_code"])
        return Response(data=response.to_response(), status=status.HTTP_200_OK)


class ManagerUsersView(APIView):
    @extend_schema(
        operation_id="update_user_profile",
        summary="Edit a user",
        description="Change a user's name or email. The viewer must manage a team the user belongs to.",
        tags=["manager"],
        request=UpdateUserProfileSerializer,
        responses={200: OpenApiResponse(response=UpdateUserResponse), **MANAGER_ERROR_RESPONSES},
    )
    def patch(self, request: Request):
        viewer, _ = ViewerService.resolve_managed_team(request.user_id)

        serializer = UpdateUserProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        response = UserService.update_user_profile(
            viewer.user_id, data["user_id"], name=data.get("name"), email=data.get("email")
        )
        return Response(data=response.to_response(), status=status.HTTP_200_OK)
