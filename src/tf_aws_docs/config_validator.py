"""
Configuration validation utilities.
"""
import os
import re
from typing import Optional, Sequence

from .exceptions import ConfigurationError

GITHUB_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN")
GITHUB_TOKEN_PATTERN = re.compile(r"^(gh[a-z]_[A-Za-z0-9_]{16,})$|^[a-f0-9]{40}$")


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set or blank
    :return: Environment variable value or default
    """
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_int_env(key: str, default: int, minimum: Optional[int] = None) -> int:
    raw = get_optional_env(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from None
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def get_float_env(key: str, default: float) -> float:
    raw = get_optional_env(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got '{raw}'") from None
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}")
    return value


def get_choice_env(key: str, default: str, choices: Sequence[str]) -> str:
    value = (get_optional_env(key) or default).lower()
    if value not in choices:
        raise ConfigurationError(f"{key} must be one of {list(choices)}, got '{value}'")
    return value


def validate_github_token(token: Optional[str]) -> str:
    """
    Validate GitHub personal access token format.

    :param token: Token to validate
    :return: Validated token
    :raises: ConfigurationError if missing or malformed
    """
    if not token:
        raise ConfigurationError(
            "GitHub token is not set in the environment "
            f"({' or '.join(GITHUB_TOKEN_ENV_VARS)})"
        )

    if not GITHUB_TOKEN_PATTERN.match(token):
        raise ConfigurationError(
            "The GitHub token must be a valid GitHub Personal Access Token "
            f"(got {_mask_secret(token)})."
        )

    return token


def get_github_token() -> str:
    """
    Read the GitHub token from the first set of GITHUB_TOKEN, GH_TOKEN,
    GITHUB_PERSONAL_ACCESS_TOKEN and validate it.
    """
    token = next((os.getenv(name) for name in GITHUB_TOKEN_ENV_VARS if os.getenv(name)), None)
    return validate_github_token(token)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages.

    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file/directory path.

    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")

    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Please check the path and ensure the directory exists."
        )

    return path
