from datetime import datetime, timezone
from typing import List

from pydantic import Field

from standup.models.common.document import Document


class TeamModel(Document):
    """
    Model for teams.
    """

    id: str
    name: str = Field(..., min_length=1, max_length=100)
    standup_cutoff_time: str
    member_user_ids: List[str] = Field(default_factory=list)
    created_by_user_id: str | None = None
    team_code: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
