"""
jsonui
Interpreter core for AI-generated, catalog-constrained JSON user interfaces.
"""

from .actions import Action, ActionRunner, execute_action, resolve_action
from .catalog import (
    ActionDefinition,
    Catalog,
    ComponentDefinition,
    create_catalog,
    generate_catalog_prompt,
    generate_system_prompt,
)
from .core import JsonUIError, Settings, configure_logging, get_logger, get_settings
from .data import DataStore, get_by_path, resolve_dynamic_value, set_by_path
from .logic import AuthState, VisibilityContext, evaluate_logic_expression, evaluate_visibility, visibility
from .render import is_element_visible, resolve_element_props, visible_children
from .streaming import Element, TreeBuilder, UIStream, UITree, apply_patch, parse_patch_line
from .validation import FormValidator, ValidationContext, check, run_validation

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionRunner",
    "execute_action",
    "resolve_action",
    "ActionDefinition",
    "Catalog",
    "ComponentDefinition",
    "create_catalog",
    "generate_catalog_prompt",
    "generate_system_prompt",
    "JsonUIError",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "DataStore",
    "get_by_path",
    "resolve_dynamic_value",
    "set_by_path",
    "AuthState",
    "VisibilityContext",
    "evaluate_logic_expression",
    "evaluate_visibility",
    "visibility",
    "is_element_visible",
    "resolve_element_props",
    "visible_children",
    "Element",
    "TreeBuilder",
    "UIStream",
    "UITree",
    "apply_patch",
    "parse_patch_line",
    "FormValidator",
    "ValidationContext",
    "check",
    "run_validation",
]
