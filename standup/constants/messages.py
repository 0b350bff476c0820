# Application Messages
class AppMessages:
    STANDUP_CREATED = "Standup document created"
    TEAM_CREATED = "Team created successfully"
    LOGGED_OUT = "Logged out"


# Repository error messages
class RepositoryErrors:
    DOCUMENT_WRITE_FAILED = "Failed to write document {0}: {1}"
    DB_INIT_FAILED = "Failed to initialize database: {0}"


# API error messages
class ApiErrors:
    INTERNAL_SERVER_ERROR = "Internal server error"
    UNEXPECTED_ERROR_OCCURRED = "An unexpected error occurred"
    VALIDATION_ERROR = "Validation Error"
    INVALID_REQUEST_BODY = "Invalid request body"
    INVALID_QUERY = "Invalid query"
    RESOURCE_NOT_FOUND_TITLE = "Resource Not Found"
    FORBIDDEN_TITLE = "Forbidden"
    CONFLICT_TITLE = "Conflict"
    PRECONDITION_REQUIRED_TITLE = "Precondition Required"
    AUTHENTICATION_FAILED = "Authentication Failed"

    STANDUP_NOT_FOUND = "Standup not found"
    STANDUP_FORBIDDEN = "Forbidden"
    STANDUP_LOCKED = "Standup locked after cutoff"
    STANDUP_CONFLICT = "Conflict"
    STANDUP_CONFLICT_DETAIL = "Someone else updated this standup. Reload and try again."
    USER_NOT_ON_TEAM = "User not on team"
    MISSING_IF_MATCH = "Missing If-Match header"

    TEAM_NOT_FOUND = "Team not found"
    TEAM_NOT_FOUND_WITH_ID = "Team {0} not found"
    MANAGER_ONLY = "Manager only"
    NOT_TEAM_MEMBER = "Not a member of that team"
    CANNOT_REMOVE_SELF = "You can't remove yourself from the active team"
    CANNOT_DEMOTE_SELF = "You can't remove your own manager access"

    USER_NOT_FOUND = "User not found"
    USER_NOT_FOUND_WITH_ID = "User {0} not found"
    EMAIL_NOT_ALLOWED = "Not authorized"
    USER_NOT_INVITED = "User not found"
    USER_NOT_INVITED_ASK_MANAGER = "Not authorized (ask your manager to add you)"
    EMAIL_IN_USE = "That email already belongs to another user"


# Validation error messages
class ValidationErrors:
    INVALID_DATE = "Date must be in YYYY-MM-DD format."
    INVALID_CUTOFF_TIME = "Cutoff time must be in HH:MM format."
    BLANK_TEAM_NAME = "Team name must not be blank."
    TEAM_UPDATE_EMPTY = "Provide either teamName or standupCutoffTime."


# Auth error messages
class AuthErrorMessages:
    TOKEN_MISSING = "Authentication token is required"
    TOKEN_EXPIRED = "Token has expired"
    TOKEN_INVALID = "Invalid token"
    MAGIC_LINK_EXPIRED = "Token expired"
    AUTHENTICATION_REQUIRED = "Unauthorized"
    MISSING_AUTH_SECRET = "Missing AUTH_SECRET"
