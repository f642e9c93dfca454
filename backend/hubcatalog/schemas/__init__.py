"""
Catalog API request/response schemas
"""

from .catalog_schemas import (  # noqa: F401
    FaqCreate,
    FaqCreated,
    IssueCreate,
    IssueCreated,
    PluginCreate,
    PluginCreated,
    describe_errors,
    parse_payload,
)
