"""
Static MCP resources advertised by the server.
"""
from dataclasses import dataclass
from typing import List, Optional

from mcp.types import Resource

from .constants import TERRAFORM_AWS_PROVIDER_REGISTRY_URL, TERRAFORM_AWS_PROVIDER_REPOSITORY_URI


@dataclass(frozen=True)
class StaticResource:
    name: str
    uri: str
    text: str
    mime_type: str = "text/plain"

    def to_mcp(self) -> Resource:
        return Resource(name=self.name, uri=self.uri, mimeType=self.mime_type)


RESOURCES: List[StaticResource] = [
    StaticResource(
        name="terraform-aws-provider-repo",
        uri="config://repo",
        text=TERRAFORM_AWS_PROVIDER_REPOSITORY_URI,
    ),
    StaticResource(
        name="terraform-aws-provider-registry",
        uri="config://registry",
        text=TERRAFORM_AWS_PROVIDER_REGISTRY_URL,
    ),
]


def get_resource_by_uri(uri: str) -> Optional[StaticResource]:
    """
    Lookup a resource by its URI.

    :param uri: Resource URI, e.g. "config://repo"
    :return: The resource, or None if unknown
    """
    wanted = uri.rstrip("/")
    return next((resource for resource in RESOURCES if resource.uri == wanted), None)
