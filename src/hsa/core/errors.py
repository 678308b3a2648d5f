"""Error codes and user-facing messages.

Each error has:
- code: Unique identifier, returned to clients as ``error_code``
- message: Technical description (for logs)
- user_message: Text returned to clients as ``error``
- retry_allowed: Whether the request can succeed if repeated unchanged
"""

ERROR_CATALOG: dict[str, dict] = {
    # Validation (400)
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request failed schema validation",
        "user_message": "Invalid request",
        "retry_allowed": False,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "Amount must be greater than zero",
        "user_message": "Valid amount is required",
        "retry_allowed": False,
    },
    "VAL_003": {
        "code": "VAL_003",
        "message": "Password shorter than configured minimum",
        "user_message": "Password is too short",
        "retry_allowed": False,
    },
    "CARD_001": {
        "code": "CARD_001",
        "message": "Expense attempted without an active virtual card",
        "user_message": "No active virtual card found",
        "retry_allowed": False,
    },
    # Auth (401)
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Login failed: unknown email or wrong password",
        "user_message": "Invalid email or password",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Bearer token invalid, expired, or references a missing user",
        "user_message": "Could not validate credentials",
        "retry_allowed": False,
    },
    # Not found (404)
    "NF_001": {
        "code": "NF_001",
        "message": "No HSA account for user",
        "user_message": "HSA account not found",
        "retry_allowed": False,
    },
    "NF_002": {
        "code": "NF_002",
        "message": "User not found",
        "user_message": "User not found",
        "retry_allowed": False,
    },
    # Conflict (409)
    "CONF_001": {
        "code": "CONF_001",
        "message": "Registration attempted with an email already in use",
        "user_message": "Email already exists",
        "retry_allowed": False,
    },
    "CONF_002": {
        "code": "CONF_002",
        "message": "Card issue attempted while an active card exists",
        "user_message": "User already has an active virtual card",
        "retry_allowed": False,
    },
    # Store (500)
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "Database error",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Unique constraint violated",
        "user_message": "This record already exists",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Unhandled exception",
        "user_message": "An unexpected error occurred",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]
