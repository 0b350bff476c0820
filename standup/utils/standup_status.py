from standup.constants.standup import StandupStatus


def calculate_status(yesterday: str, today: str, blockers: str) -> StandupStatus:
    filled = sum(1 for value in (yesterday, today, blockers) if (value or "").strip())
    if filled == 0:
        return StandupStatus.MISSING
    if filled == 3:
        return StandupStatus.PREPARED
    return StandupStatus.PARTIAL
