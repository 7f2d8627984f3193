"""Component catalog: schemas, checks and generator prompts."""

from .models import ActionDefinition, ComponentDefinition, SchemaError, SchemaIssue
from .catalog import Catalog, create_catalog
from .prompt import describe_props, generate_catalog_prompt, generate_system_prompt

__all__ = [
    "ActionDefinition",
    "ComponentDefinition",
    "SchemaError",
    "SchemaIssue",
    "Catalog",
    "create_catalog",
    "describe_props",
    "generate_catalog_prompt",
    "generate_system_prompt",
]
