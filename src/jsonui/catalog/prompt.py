"""
Catalog Prompts
Markdown descriptions of a catalog for the upstream UI generator.
"""

from typing import Any

from pydantic import TypeAdapter
from pydantic.errors import PydanticInvalidForJsonSchema

from ..core.logging_config import get_logger
from ..validation.functions import BUILTIN_FUNCTIONS
from .catalog import Catalog
from .models import ComponentDefinition

logger = get_logger(__name__)

VISIBILITY_DOCUMENTATION = """## Visibility Conditions

Components can have a `visible` property:
- `true` / `false` - Always visible/hidden
- `{ "path": "/data/path" }` - Visible when path is truthy
- `{ "auth": "signedIn" }` / `{ "auth": "signedOut" }` - Visible by sign-in state
- `{ "and": [...] }` - All conditions must be true
- `{ "or": [...] }` - Any condition must be true
- `{ "not": {...} }` - Negates a condition
- `{ "eq": [a, b] }` / `{ "neq": [a, b] }` - Equality check
- `{ "gt": [a, b] }`, `gte`, `lt`, `lte` - Numeric comparison

Operands may be literals or `{ "path": "/data/path" }` references."""

OUTPUT_FORMAT = """## Output Format
Always output as JSONL (JSON Lines) patches, one per line:
{"op":"set","path":"/root","value":"root-element-key"}
{"op":"add","path":"/elements/root-element-key","value":{"key":"root-element-key","type":"<Component>","props":{...},"children":["child1","child2"]}}
{"op":"add","path":"/elements/child1","value":{"key":"child1","type":"<Component>","props":{...}}}
{"op":"remove","path":"/elements/child1"}"""

DEFAULT_RULES = (
    "Output MUST be valid JSONL (JSON Lines)",
    "Each line MUST be a valid JSON patch",
    "First line MUST set /root to the root element key",
    "Element keys MUST be unique and descriptive (e.g., \"email-input\", \"submit-btn\")",
    "Parent elements MUST be added before their children",
    "Children array MUST contain string keys, not objects",
    "All components MUST be from the available components list",
    "All props MUST match the component schema",
    "Only components that accept children may declare children",
)


def _describe_type(schema: dict[str, Any]) -> str:
    if "const" in schema:
        return repr(schema["const"])
    if "enum" in schema:
        return " | ".join(repr(value) for value in schema["enum"])
    if "anyOf" in schema:
        return " | ".join(_describe_type(option) for option in schema["anyOf"])
    if "$ref" in schema:
        return "object"
    if schema.get("type") == "array" and "items" in schema:
        return f"array of {_describe_type(schema['items'])}"
    return str(schema.get("type", "any"))


def describe_props(definition: ComponentDefinition) -> list[str]:
    """One markdown bullet per prop with its JSON type."""
    try:
        schema = TypeAdapter(definition.props).json_schema()
    except PydanticInvalidForJsonSchema as e:
        logger.debug("props_schema_unavailable", error=str(e))
        return ["- props: any"]

    properties = schema.get("properties")
    if not properties:
        return ["- props: any object"]

    required = set(schema.get("required", ()))
    lines = []
    for name, prop in properties.items():
        suffix = "" if name in required else " (optional)"
        description = f" - {prop['description']}" if prop.get("description") else ""
        lines.append(f"- `{name}`: {_describe_type(prop)}{suffix}{description}")
    return lines


def generate_catalog_prompt(catalog: Catalog) -> str:
    """
    Describe a catalog in markdown.

    Args:
        catalog: Compiled catalog

    Returns:
        Prompt listing components, actions, visibility and validation vocabulary
    """
    lines = [f"# {catalog.name} Component Catalog", "", "## Available Components", ""]

    for name, definition in catalog.components.items():
        lines.append(f"### {name}")
        if definition.description:
            lines.append(definition.description)
        lines.extend(describe_props(definition))
        lines.append("- accepts children" if definition.has_children else "- no children")
        lines.append("")

    if catalog.actions:
        lines.extend(["## Available Actions", ""])
        for name, action in catalog.actions.items():
            lines.append(f"- `{name}`" + (f": {action.description}" if action.description else ""))
        lines.append("")

    lines.extend([VISIBILITY_DOCUMENTATION, ""])

    lines.extend(["## Validation Functions", ""])
    lines.append("Built-in: " + ", ".join(f"`{name}`" for name in BUILTIN_FUNCTIONS))
    if catalog.functions:
        lines.append("Custom: " + ", ".join(f"`{name}`" for name in catalog.functions))
    lines.append("")

    return "\n".join(lines)


def generate_system_prompt(catalog: Catalog, rules: list[str] | tuple[str, ...] | None = None) -> str:
    """
    Full system prompt: catalog, strict rules and the patch output contract.

    Args:
        catalog: Compiled catalog
        rules: Extra rules appended after the defaults
    """
    all_rules = list(DEFAULT_RULES) + list(rules or ())
    numbered = "\n".join(f"{index}. {rule}" for index, rule in enumerate(all_rules, start=1))
    return "\n\n".join(
        [generate_catalog_prompt(catalog).rstrip(), f"## Strict Rules\n{numbered}", OUTPUT_FORMAT]
    )
