from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_FUZZY_SCORER,
    DEFAULT_FUZZY_THRESHOLD,
    GITHUB_API_URL,
    TERRAFORM_AWS_PROVIDER_REPOSITORY_URI,
)


@dataclass
class DocsServerConfig:
    # Local document store
    resource_docs_dir: str = "data/remote-docs/tf-aws-resources"
    datasource_docs_dir: str = "data/remote-docs/tf-aws-datasources"

    # Where full page content is read from: "local" or "github"
    docs_source: str = "local"

    # Fuzzy resolution
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD
    fuzzy_scorer: str = DEFAULT_FUZZY_SCORER

    # GitHub
    repository: str = TERRAFORM_AWS_PROVIDER_REPOSITORY_URI
    github_api_url: str = GITHUB_API_URL
    github_timeout: float = 30.0
    github_token: Optional[str] = None

    # Logging
    log_level: str = "INFO"
