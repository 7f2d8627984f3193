"""Helpers producing wire-shaped visibility conditions."""

from typing import Any


class Visibility:
    """Condition builders."""

    always = True
    never = False
    signed_in = {"auth": "signedIn"}
    signed_out = {"auth": "signedOut"}

    @staticmethod
    def when(path: str) -> dict[str, Any]:
        """Visible when the path is truthy."""
        return {"path": path}

    @staticmethod
    def and_(*conditions: Any) -> dict[str, Any]:
        return {"and": list(conditions)}

    @staticmethod
    def or_(*conditions: Any) -> dict[str, Any]:
        return {"or": list(conditions)}

    @staticmethod
    def not_(condition: Any) -> dict[str, Any]:
        return {"not": condition}

    @staticmethod
    def eq(left: Any, right: Any) -> dict[str, Any]:
        return {"eq": [left, right]}

    @staticmethod
    def neq(left: Any, right: Any) -> dict[str, Any]:
        return {"neq": [left, right]}

    @staticmethod
    def gt(left: Any, right: Any) -> dict[str, Any]:
        return {"gt": [left, right]}

    @staticmethod
    def gte(left: Any, right: Any) -> dict[str, Any]:
        return {"gte": [left, right]}

    @staticmethod
    def lt(left: Any, right: Any) -> dict[str, Any]:
        return {"lt": [left, right]}

    @staticmethod
    def lte(left: Any, right: Any) -> dict[str, Any]:
        return {"lte": [left, right]}


visibility = Visibility()
