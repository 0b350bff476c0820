from enum import Enum


class RoleName(Enum):
    MANAGER = "manager"
    MEMBER = "member"


TEAM_ROLES = [RoleName.MANAGER.value, RoleName.MEMBER.value]

DEFAULT_TEAM_ROLE = RoleName.MEMBER.value

ROLE_CHOICES = [
    (RoleName.MANAGER.value, "Manager"),
    (RoleName.MEMBER.value, "Member"),
]
