"""
MCP server for Terraform AWS provider documentation.

Exposes resource/datasource documentation lookups (with fuzzy name
resolution), issues and releases of the provider repository.
"""
from .config import DocsServerConfig
from .config_loader import load_config_from_env
from .models import DocKind, Document
from .resolution import DocumentResolver, ResolutionResult, create_document_resolver

__all__ = [
    "DocsServerConfig",
    "load_config_from_env",
    "DocKind",
    "Document",
    "DocumentResolver",
    "ResolutionResult",
    "create_document_resolver",
]

__version__ = "0.1.0"
