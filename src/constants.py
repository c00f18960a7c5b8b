"""Shared constants for userdesk."""

USERDESK_VERSION = "0.3.0"

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0
USERS_PATH = "/api/v1/users"

# Environment overrides for settings
ENV_API_URL = "USERDESK_API_URL"
ENV_TIMEOUT = "USERDESK_TIMEOUT"

# Table caption shown while a fetch is outstanding
FETCHING_CAPTION = "Fetching Please Wait..."

# Initial values of the create form
NEW_USER_DEFAULTS = {
    "id": 0,
    "first_name": "",
    "last_name": "",
    "gender": "MALE",
    "date_of_birth": "2024-02-10",
    "bio": None,
}
