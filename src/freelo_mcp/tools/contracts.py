"""Output contracts — what shape a tool's structured content takes.

A contract is either an OBJECT (the payload itself is the structured
content) or a COLLECTION (the payload is a list, advertised and returned
as ``{"items": [...]}`` because MCP structured content must be an object).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

ITEMS_KEY = "items"


class ContractKind(enum.Enum):
    OBJECT = "object"
    COLLECTION = "collection"


@dataclass(frozen=True)
class OutputContract:
    """Declared output shape of a tool."""

    kind: ContractKind
    element_schema: dict[str, Any] = field(default_factory=dict)

    def json_schema(self) -> dict[str, Any]:
        """JSON schema advertised to MCP clients as the tool's outputSchema."""
        element = dict(self.element_schema)
        defs = element.pop("$defs", None)

        match self.kind:
            case ContractKind.COLLECTION:
                schema: dict[str, Any] = {
                    "type": "object",
                    "properties": {ITEMS_KEY: {"type": "array", "items": element}},
                    "required": [ITEMS_KEY],
                }
            case ContractKind.OBJECT:
                schema = {"type": "object", **element}
                schema["type"] = "object"

        if defs:
            schema["$defs"] = defs
        return schema


def _schema_of(element: type[BaseModel] | dict[str, Any] | None) -> dict[str, Any]:
    if element is None:
        return {}
    if isinstance(element, dict):
        return element
    return element.model_json_schema()


def object_of(model: type[BaseModel] | dict[str, Any] | None = None) -> OutputContract:
    """Contract for a tool returning a single object."""
    return OutputContract(ContractKind.OBJECT, _schema_of(model))


def collection_of(element: type[BaseModel] | dict[str, Any] | None = None) -> OutputContract:
    """Contract for a tool returning a list of ``element``."""
    return OutputContract(ContractKind.COLLECTION, _schema_of(element))
