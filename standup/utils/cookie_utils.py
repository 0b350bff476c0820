from django.conf import settings


def _cookie_config() -> dict:
    return {
        "path": settings.COOKIE_SETTINGS.get("COOKIE_PATH"),
        "domain": settings.COOKIE_SETTINGS.get("COOKIE_DOMAIN"),
        "secure": settings.COOKIE_SETTINGS.get("COOKIE_SECURE"),
        "httponly": settings.COOKIE_SETTINGS.get("COOKIE_HTTPONLY"),
        "samesite": settings.COOKIE_SETTINGS.get("COOKIE_SAMESITE"),
    }


def set_session_cookie(response, session_token: str):
    response.set_cookie(
        settings.COOKIE_SETTINGS.get("SESSION_COOKIE_NAME"),
        session_token,
        max_age=settings.AUTH_CONFIG.get("SESSION_LIFETIME"),
        **_cookie_config(),
    )
    return response


def clear_session_cookie(response):
    config = _cookie_config()
    response.delete_cookie(
        settings.COOKIE_SETTINGS.get("SESSION_COOKIE_NAME"),
        path=config["path"],
        domain=config["domain"],
        samesite=config["samesite"],
    )
    return response
