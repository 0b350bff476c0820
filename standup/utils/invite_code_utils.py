import hashlib
import secrets
from datetime import datetime, timezone

CHARACTERS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def generate_team_code(team_name: str, length: int = 10) -> str:
    """
    Generate a shareable code managers use to subscribe to a team.

    Args:
        team_name: The name of the team
        length: Number of characters in the code

    Returns:
        An uppercase alphanumeric code
    """
    now = datetime.now(timezone.utc).isoformat()
    seed = f"{team_name}_{now}_{secrets.token_hex(8)}"

    hash_int = int(hashlib.sha256(seed.encode()).hexdigest(), 16)
    code = ""

    while len(code) < length:
        hash_int, i = divmod(hash_int, 36)
        code = CHARACTERS[i] + code

    return code
