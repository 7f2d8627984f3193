"""End-to-end flow: stream, check, render, act."""

import pytest
from pydantic import BaseModel
from returns.result import Success

from jsonui.actions import ActionRunner
from jsonui.catalog import ActionDefinition, ComponentDefinition, create_catalog
from jsonui.data import DataStore
from jsonui.logic import VisibilityContext
from jsonui.render import resolve_element_props, visible_children
from jsonui.streaming import TreeBuilder
from jsonui.validation import FormValidator


class SubmitParams(BaseModel):
    form_id: str


@pytest.mark.integration
@pytest.mark.asyncio
async def test_generated_form_flow():
    """A streamed form validates, renders and submits."""
    catalog = create_catalog(
        {
            "Form": ComponentDefinition(has_children=True),
            "Hint": ComponentDefinition(),
            "Button": ComponentDefinition(),
        },
        actions={"submit": ActionDefinition(params=SubmitParams)},
    )
    stream = "\n".join(
        [
            '{"op":"set","path":"/root","value":"form"}',
            '{"op":"add","path":"/elements/form","value":{"type":"Form","props":{},"children":["hint","send"]}}',
            '{"op":"add","path":"/elements/hint","value":{"type":"Hint","props":{"text":{"path":"/form/hint"}},'
            '"visible":{"not":{"path":"/form/sent"}}}}',
            '{"op":"add","path":"/elements/send","value":{"type":"Button","props":{"label":"Send"}}}',
        ]
    )
    tree = TreeBuilder().feed_all([stream])

    checked = catalog.validate_tree(tree, complete=True)
    assert isinstance(checked, Success)
    assert checked.unwrap() == tree

    store = DataStore({"form": {"hint": "Use your work email", "email": "bad"}})
    children = list(visible_children(tree, tree.root, VisibilityContext(data_model=store.data)))
    assert [child.key for child in children] == ["hint", "send"]
    assert resolve_element_props(children[0], store.data) == {"text": "Use your work email"}

    form = FormValidator(store)
    form.register("/form/email", {"checks": [{"fn": "email", "message": "Invalid email"}]})
    assert form.validate_all() is False

    store.set("/form/email", "ada@example.com")
    assert form.validate_all() is True

    runner = ActionRunner(store, handlers={"submit": lambda params: None}, catalog=catalog)
    await runner.execute(
        {"name": "submit", "params": {"form_id": "signup"}, "onSuccess": {"set": {"/form/sent": True}}}
    )

    assert store.get("/form/sent") is True
    visible = visible_children(tree, tree.root, VisibilityContext(data_model=store.data))
    assert [child.key for child in visible] == ["send"]
