"""
Static identifiers for the Terraform AWS provider documentation server.
"""

MCP_SERVER_NAME = "mcp-terraform-aws-provider-docs"
MCP_SERVER_VERSION = "0.1.0"

# owner/repo form, used for GitHub API calls
TERRAFORM_AWS_PROVIDER_REPOSITORY_URI = "hashicorp/terraform-provider-aws"
# Used for hyperlinks in formatted output
TERRAFORM_AWS_PROVIDER_REPOSITORY_URL = "https://github.com/hashicorp/terraform-provider-aws"
TERRAFORM_AWS_PROVIDER_REGISTRY_URL = "https://registry.terraform.io/providers/hashicorp/aws/latest"

RESOURCE_DOCS_REMOTE_PATH = "website/docs/r/"
DATASOURCE_DOCS_REMOTE_PATH = "website/docs/d/"

DOC_FILE_EXTENSION = ".html.markdown"

MISSING_PLACEHOLDER = "(missing)"
MALFORMED_PLACEHOLDER = "(malformed)"
PLACEHOLDER_VALUES = (MISSING_PLACEHOLDER, MALFORMED_PLACEHOLDER)

DEFAULT_VENDOR_PREFIXES = ("aws", "amazon")
DEFAULT_FUZZY_THRESHOLD = 3
DEFAULT_FUZZY_SCORER = "levenshtein"

GITHUB_API_URL = "https://api.github.com"
GITHUB_PAGE_SIZE = 100
MAX_GITHUB_ISSUES_PAGES = 12

SEPARATOR = "-" * 40
