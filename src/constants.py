"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NO_PROJECT_FOUND = 3
    SETUP_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Safety bound against a listing API that never returns an empty page
    MAX_PAGES = 10000

    COMPOSER_JSON_FILE = "composer.json"
    DEFAULT_OUTPUT_FILE = "satis.json"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Repository API constants
    GITLAB_API_PATH = "/api/v4"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    ENV_LOG_LEVEL = "SATIS_GITLAB_LOG_LEVEL"
    REPO_API_PER_PAGE = 100
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
