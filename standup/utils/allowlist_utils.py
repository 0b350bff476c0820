from django.conf import settings


def is_email_allowed(email: str) -> bool:
    """An empty ALLOWED_EMAILS setting lets every address in."""
    allowed = settings.ALLOWED_EMAILS
    if not allowed:
        return True
    return (email or "").strip().lower() in allowed
