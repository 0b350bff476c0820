from django.urls import path

from standup.views.auth import LogoutView, RequestMagicLinkView, SessionView, VerifyMagicLinkView
from standup.views.debug import DebugTeamView
from standup.views.health import HealthView
from standup.views.kpi import TeamKpiView, UserKpiView
from standup.views.manager import (
    ManagerSubscribeView,
    ManagerTeamMembersView,
    ManagerTeamsView,
    ManagerTeamView,
    ManagerUsersView,
)
from standup.views.standup import (
    StandupCreateView,
    StandupDayView,
    StandupHistoryView,
    StandupTodayView,
    StandupUpdateView,
)
from standup.views.team import SelectTeamView

urlpatterns = [
    path("standup/today", StandupTodayView.as_view(), name="standup_today"),
    path("standup/day", StandupDayView.as_view(), name="standup_day"),
    path("standup/update", StandupUpdateView.as_view(), name="standup_update"),
    path("standup/create", StandupCreateView.as_view(), name="standup_create"),
    path("standup/history", StandupHistoryView.as_view(), name="standup_history"),
    path("kpi/team", TeamKpiView.as_view(), name="kpi_team"),
    path("kpi/users/<str:user_id>", UserKpiView.as_view(), name="kpi_user"),
    path("manager/team", ManagerTeamView.as_view(), name="manager_team"),
    path("manager/team-members", ManagerTeamMembersView.as_view(), name="manager_team_members"),
    path("manager/teams", ManagerTeamsView.as_view(), name="manager_teams"),
    path("manager/subscribe", ManagerSubscribeView.as_view(), name="manager_subscribe"),
    path("manager/users", ManagerUsersView.as_view(), name="manager_users"),
    path("teams/select", SelectTeamView.as_view(), name="select_team"),
    path("auth/request-link", RequestMagicLinkView.as_view(), name="auth_request_link"),
    path("auth/verify", VerifyMagicLinkView.as_view(), name="auth_verify"),
    path("auth/session", SessionView.as_view(), name="auth_session"),
    path("auth/logout", LogoutView.as_view(), name="auth_logout"),
    path("health", HealthView.as_view(), name="health"),
    path("debug/team", DebugTeamView.as_view(), name="debug_team"),
]
