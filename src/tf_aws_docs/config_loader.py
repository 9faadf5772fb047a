"""
Configuration loader with validation.
"""
import os

from dotenv import load_dotenv

from .config import DocsServerConfig
from .config_validator import (
    get_choice_env,
    get_float_env,
    get_int_env,
    get_optional_env,
)
from .constants import DEFAULT_FUZZY_SCORER, DEFAULT_FUZZY_THRESHOLD, GITHUB_API_URL
from .resolution.edit_distance import SCORERS


def load_config_from_env(load_env_file: bool = True) -> DocsServerConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        server = DocsServer(config)

    :param load_env_file: Load a .env file first (local development)
    :return: Validated DocsServerConfig instance
    :raises: ConfigurationError if a value is invalid
    """
    if load_env_file:
        load_dotenv()

    docs_dir = get_optional_env("TF_AWS_DOCS_DIR", default="data/remote-docs")

    return DocsServerConfig(
        resource_docs_dir=get_optional_env(
            "TF_AWS_RESOURCE_DOCS_DIR",
            default=os.path.join(docs_dir, "tf-aws-resources"),
        ),
        datasource_docs_dir=get_optional_env(
            "TF_AWS_DATASOURCE_DOCS_DIR",
            default=os.path.join(docs_dir, "tf-aws-datasources"),
        ),
        docs_source=get_choice_env("DOCS_SOURCE", "local", ("local", "github")),
        fuzzy_threshold=get_int_env("FUZZY_THRESHOLD", DEFAULT_FUZZY_THRESHOLD, minimum=0),
        fuzzy_scorer=get_choice_env("FUZZY_SCORER", DEFAULT_FUZZY_SCORER, tuple(SCORERS)),
        github_api_url=get_optional_env("GITHUB_API_URL", default=GITHUB_API_URL),
        github_timeout=get_float_env("GITHUB_TIMEOUT", 30.0),
        log_level=(get_optional_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )
