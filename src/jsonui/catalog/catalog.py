"""
Component catalog.

Compiles component and action declarations into pydantic schemas and checks
generated elements, trees and actions against them. Checks return
``returns`` results and never raise.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, create_model, field_validator
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from ..actions.models import Action
from ..core.config import get_settings
from ..core.logging_config import get_logger
from ..data.dynamic import is_path_ref, resolve_dynamic_value
from ..logic.models import VisibilityCondition
from ..streaming.tree import Element, UITree
from ..validation.models import ValidationFunction
from .models import ActionDefinition, ComponentDefinition, SchemaError, SchemaIssue, loc_to_path

logger = get_logger(__name__)

_TAG_ERRORS = frozenset({"union_tag_invalid", "union_tag_not_found"})


class _ElementBase(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class _PermissiveElement(_ElementBase):
    key: str
    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    children: list[str] | None = None
    parent_key: str | None = Field(default=None, alias="parentKey")
    visible: VisibilityCondition | None = None


def _children_check(component: str, has_children: bool):
    def check(cls, value: list[str] | None) -> list[str] | None:
        if value and not has_children:
            raise ValueError(f"{component} does not accept children")
        return value

    return field_validator("children")(check)


def _component_model(name: str, definition: ComponentDefinition) -> type[BaseModel]:
    return create_model(
        f"{name}Element",
        __base__=_ElementBase,
        __validators__={"check_children": _children_check(name, definition.has_children)},
        key=(str, ...),
        type=(Literal[name], ...),
        props=(definition.props, ...),
        children=(list[str] | None, None),
        parent_key=(str | None, Field(default=None, alias="parentKey")),
        visible=(VisibilityCondition | None, None),
    )


def _issues(error: PydanticValidationError, strip_tag) -> SchemaError:
    issues = []
    for detail in error.errors(include_url=False):
        loc = strip_tag(tuple(detail["loc"]))
        if detail["type"] in _TAG_ERRORS:
            loc = loc + ("type",)
        issues.append(SchemaIssue(loc_to_path(loc), detail["msg"]))
    return SchemaError(issues=tuple(issues))


def _as_wire(value: Any) -> Any:
    if isinstance(value, (Element, UITree)):
        return value.to_dict()
    return value


class Catalog:
    """
    Compiled catalog.

    Attributes:
        name: Catalog name used in prompts
        components: Component declarations by type name
        actions: Action declarations by name
        functions: Custom validation functions by name
        element_schema: TypeAdapter for one element
        tree_schema: TypeAdapter for a whole tree
    """

    def __init__(
        self,
        components: Mapping[str, ComponentDefinition],
        actions: Mapping[str, ActionDefinition] | None = None,
        functions: Mapping[str, ValidationFunction] | None = None,
        name: str | None = None,
    ):
        self.name = name or get_settings().catalog_name
        self.components = MappingProxyType(dict(components))
        self.actions = MappingProxyType(dict(actions or {}))
        self.functions = MappingProxyType(dict(functions or {}))

        models = [_component_model(key, definition) for key, definition in self.components.items()]
        match models:
            case []:
                element_type: Any = _PermissiveElement
            case [model]:
                element_type = model
            case _:
                element_type = Annotated[Union[tuple(models)], Field(discriminator="type")]
        self._tagged = len(models) > 1

        self.element_schema: TypeAdapter[Any] = TypeAdapter(element_type)
        self.tree_schema: TypeAdapter[Any] = TypeAdapter(
            create_model("CatalogTree", root=(str, ...), elements=(dict[str, element_type], ...))
        )
        self._param_schemas = {
            key: TypeAdapter(definition.params)
            for key, definition in self.actions.items()
            if definition.params is not None
        }

        logger.debug(
            "catalog_created",
            catalog=name,
            components=len(self.components),
            actions=len(self.actions),
            functions=len(self.functions),
        )

    @property
    def component_names(self) -> list[str]:
        return list(self.components)

    @property
    def action_names(self) -> list[str]:
        return list(self.actions)

    @property
    def function_names(self) -> list[str]:
        return list(self.functions)

    def has_component(self, type_name: str) -> bool:
        return type_name in self.components

    def has_action(self, name: str) -> bool:
        return name in self.actions

    def has_function(self, name: str) -> bool:
        return name in self.functions

    def _strip_element_tag(self, loc: tuple[Any, ...]) -> tuple[Any, ...]:
        # Discriminated unions report the matched tag as the first location part
        if self._tagged and loc and loc[0] in self.components:
            return loc[1:]
        return loc

    def _strip_tree_tag(self, loc: tuple[Any, ...]) -> tuple[Any, ...]:
        if loc[:1] == ("elements",) and len(loc) > 2:
            return loc[:2] + self._strip_element_tag(loc[2:])
        return loc

    def validate_element(self, element: Any) -> Result[Element, SchemaError]:
        """
        Check one element against the component schemas.

        Returns:
            Success with the normalized Element, or Failure listing every issue
        """
        try:
            validated = self.element_schema.validate_python(_as_wire(element))
        except PydanticValidationError as e:
            return Failure(_issues(e, self._strip_element_tag))
        return Success(Element.model_validate(validated.model_dump(mode="json", by_alias=True)))

    def validate_tree(self, tree: Any, complete: bool = False) -> Result[UITree, SchemaError]:
        """
        Check a whole tree against the catalog.

        Args:
            tree: Wire dict or UITree snapshot
            complete: Also require the root and every child reference to resolve

        Returns:
            Success with the normalized UITree, or Failure listing every issue
        """
        try:
            validated = self.tree_schema.validate_python(_as_wire(tree))
        except PydanticValidationError as e:
            return Failure(_issues(e, self._strip_tree_tag))

        snapshot = UITree.from_dict(validated.model_dump(mode="json", by_alias=True))
        if complete:
            issues = []
            if snapshot.root not in snapshot.elements:
                issues.append(SchemaIssue("/root", f"Root element not found: {snapshot.root!r}"))
            for key, element in snapshot.elements.items():
                for index, child in enumerate(element.children or ()):
                    if child not in snapshot.elements:
                        issues.append(
                            SchemaIssue(f"/elements/{key}/children/{index}", f"Unknown child: {child!r}")
                        )
            if issues:
                return Failure(SchemaError(issues=tuple(issues)))
        return Success(snapshot)

    def validate_params(self, name: str, params: Mapping[str, Any] | None) -> Result[Any, SchemaError]:
        """Check resolved action params against the declared params schema."""
        if name not in self.actions:
            return Failure(SchemaError.single("/name", f"Unknown action: {name}"))
        schema = self._param_schemas.get(name)
        if schema is None:
            return Success(dict(params or {}))
        try:
            return Success(schema.validate_python(dict(params or {})))
        except PydanticValidationError as e:
            return Failure(_issues(e, lambda loc: ("params",) + loc))

    def validate_action(self, action: Any, data_model: Any = None) -> Result[Action, SchemaError]:
        """
        Check a declared action against the catalog.

        Params holding path references are only checked against the params
        schema when ``data_model`` is given to resolve them.

        Returns:
            Success with the parsed Action, or Failure listing every issue
        """
        if not isinstance(action, Action):
            try:
                action = Action.model_validate(action)
            except PydanticValidationError as e:
                return Failure(_issues(e, lambda loc: loc))

        if action.name not in self.actions:
            return Failure(SchemaError.single("/name", f"Unknown action: {action.name}"))

        params = action.params or {}
        if data_model is None and any(is_path_ref(value) for value in params.values()):
            return Success(action)

        resolved = {key: resolve_dynamic_value(value, data_model) for key, value in params.items()}
        return self.validate_params(action.name, resolved).map(lambda _: action)


def create_catalog(
    components: Mapping[str, ComponentDefinition],
    actions: Mapping[str, ActionDefinition] | None = None,
    functions: Mapping[str, ValidationFunction] | None = None,
    name: str | None = None,
) -> Catalog:
    """Compile declarations into a Catalog; ``name`` defaults to the configured catalog name."""
    return Catalog(components, actions=actions, functions=functions, name=name)
