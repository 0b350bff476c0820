from datetime import datetime, timezone
from typing import List

from pydantic import Field

from standup.constants.standup import StandupStatus
from standup.models.common.document import Document


class StandupRowModel(Document):
    """
    One member's entry for the day.

    `name` is copied from the user record when the row is created and is not
    refreshed afterwards. `version` counts edits to this row only.
    """

    user_id: str
    name: str
    yesterday: str = ""
    today: str = ""
    blockers: str = ""
    status: StandupStatus = StandupStatus.MISSING
    version: int = 0
    overridden_by: str | None = None


class StandupOverrideModel(Document):
    at: datetime
    by_user_id: str
    user_id: str
    status: StandupStatus
    reason: str | None = None


class StandupDocumentModel(Document):
    """
    A team's standup for one calendar date. `version` is the concurrency token.
    """

    team_id: str
    date: str
    version: int = 0
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    rows: List[StandupRowModel] = Field(default_factory=list)
    overrides: List[StandupOverrideModel] = Field(default_factory=list)

    def find_row(self, user_id: str) -> StandupRowModel | None:
        return next((row for row in self.rows if row.user_id == user_id), None)

    @property
    def etag(self) -> str:
        return str(self.version)
