"""Conversion of draft-03 schemas into their draft-07 equivalent.

Draft-03 marks mandatory properties with a boolean ``required`` flag on the
property schema itself; later drafts list them on the enclosing object. The
converter hoists those flags into ``required`` lists (in property order, after
any names already listed) and rewrites the handful of other keywords whose
meaning changed between drafts:

* ``divisibleBy`` becomes ``multipleOf``;
* boolean ``exclusiveMinimum``/``exclusiveMaximum`` become numeric bounds;
* ``extends`` becomes ``allOf``;
* ``disallow`` becomes ``not``;
* ``type: "any"`` is dropped and type unions holding schemas become ``anyOf``;
* string ``dependencies`` become one-element lists;
* the ``format`` names ``ip-address`` and ``host-name`` become ``ipv4`` and
  ``hostname``.

A boolean ``required`` anywhere other than directly on a property schema has
no draft-07 meaning and is rejected with the location it was found at. Property
order and keywords the converter does not know about (``description``,
``sortable``, ``filterable``, ``readOnly``, ``restdocs``, ...) are preserved.
The input is never mutated.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .schema_errors import DraftConversionError

DRAFT7_SCHEMA_URI = "http://json-schema.org/draft-07/schema#"

_LOGGER = logging.getLogger(__name__)

_SINGLE_SCHEMA_KEYWORDS: tuple[str, ...] = (
    "additionalProperties",
    "additionalItems",
    "not",
    "propertyNames",
    "contains",
    "if",
    "then",
    "else",
)
_SCHEMA_LIST_KEYWORDS: tuple[str, ...] = ("allOf", "anyOf", "oneOf")
_SCHEMA_MAP_KEYWORDS: Mapping[str, str] = {
    "patternProperties": "in pattern property",
    "definitions": "in definition",
}
_RENAMED_FORMATS: Mapping[str, str] = {
    "ip-address": "ipv4",
    "host-name": "hostname",
}

Context = tuple[str, ...]


def convert_draft3_schema(root: Mapping[str, Any]) -> dict[str, Any]:
    """Return a draft-07 copy of a draft-03 schema.

    Raises:
      DraftConversionError: If the schema holds a construct without a draft-07 form.
    """
    if not isinstance(root, Mapping):
        raise DraftConversionError("Schema root must be a JSON object.")
    converted = _convert_node(root, context=(), as_property=False)
    assert isinstance(converted, dict)
    if "$schema" not in converted:
        converted = {"$schema": DRAFT7_SCHEMA_URI, **converted}
    _LOGGER.debug("Converted draft-03 schema with %d top-level keywords", len(converted))
    return converted


def _convert_node(node: Any, *, context: Context, as_property: bool) -> dict[str, Any] | bool:
    if isinstance(node, bool):
        return node
    if not isinstance(node, Mapping):
        raise DraftConversionError(f"Schema nodes must be objects {_describe(context)}.")
    if isinstance(node.get("required"), bool) and not as_property:
        raise DraftConversionError(f'found illegal "required" annotation {_describe(context)}')

    required_names = _merged_required_names(node, context)
    result: dict[str, Any] = {}
    for key, value in node.items():
        if key == "required":
            if not isinstance(value, bool):
                result["required"] = list(required_names)
        elif key == "properties":
            result["properties"] = _convert_properties(value, context)
            if required_names and not isinstance(node.get("required"), list):
                result["required"] = list(required_names)
        elif key == "items":
            result["items"] = _convert_items(value, context)
        elif key in _SINGLE_SCHEMA_KEYWORDS:
            _assign_single_schema(result, key, value, context)
        elif key in _SCHEMA_LIST_KEYWORDS:
            result.setdefault(key, []).extend(
                _convert_schema_list(value, context + (f"in '{key}'",))
            )
        elif key in _SCHEMA_MAP_KEYWORDS:
            result[key] = _convert_schema_map(value, context, key)
        elif key == "extends":
            result.setdefault("allOf", []).extend(
                _convert_schema_list(_as_list(value), context + ("in 'extends'",))
            )
        elif key == "disallow":
            _assign_disallow(result, value, context)
        elif key == "type":
            _assign_type(result, node, value, context)
        elif key == "divisibleBy":
            result["multipleOf"] = value
        elif key in ("minimum", "maximum"):
            if node.get(_exclusive_keyword(key)) is not True:
                result[key] = value
        elif key in ("exclusiveMinimum", "exclusiveMaximum"):
            _assign_exclusive_bound(result, node, key, value)
        elif key == "dependencies":
            result["dependencies"] = _convert_dependencies(value, context)
        elif key == "format":
            result["format"] = _convert_format(value)
        elif key == "$schema":
            result["$schema"] = DRAFT7_SCHEMA_URI
        else:
            result[key] = copy.deepcopy(value)
    return result


def _merged_required_names(node: Mapping[str, Any], context: Context) -> list[str]:
    listed = node.get("required")
    names: list[str] = []
    if isinstance(listed, list):
        for name in listed:
            if not isinstance(name, str):
                raise DraftConversionError(
                    f"Required property names must be strings {_describe(context)}."
                )
            if name not in names:
                names.append(name)
    properties = node.get("properties")
    if isinstance(properties, Mapping):
        for name, child in properties.items():
            if isinstance(child, Mapping) and child.get("required") is True and name not in names:
                names.append(name)
    return names


def _convert_properties(value: Any, context: Context) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise DraftConversionError(f"'properties' must be an object {_describe(context)}.")
    return {
        name: _convert_node(child, context=context + (f"in field '{name}'",), as_property=True)
        for name, child in value.items()
    }


def _convert_items(value: Any, context: Context) -> Any:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [
            _convert_node(child, context=context + (f"in items[{index}]",), as_property=False)
            for index, child in enumerate(value)
        ]
    return _convert_node(value, context=context + ("in items",), as_property=False)


def _assign_single_schema(result: dict[str, Any], key: str, value: Any, context: Context) -> None:
    if key == "not" and "not" in result:
        raise DraftConversionError(
            f"'disallow' cannot be combined with 'not' {_describe(context)}."
        )
    result[key] = _convert_node(value, context=context + (f"in '{key}'",), as_property=False)


def _convert_schema_list(value: Any, context: Context) -> list[Any]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise DraftConversionError(f"Expected a list of schemas {_describe(context)}.")
    return [
        _convert_node(child, context=context[:-1] + (f"{context[-1]}[{index}]",), as_property=False)
        for index, child in enumerate(value)
    ]


def _convert_schema_map(value: Any, context: Context, key: str) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise DraftConversionError(f"'{key}' must be an object {_describe(context)}.")
    label = _SCHEMA_MAP_KEYWORDS[key]
    return {
        name: _convert_node(child, context=context + (f"{label} '{name}'",), as_property=False)
        for name, child in value.items()
    }


def _assign_disallow(result: dict[str, Any], value: Any, context: Context) -> None:
    if "not" in result:
        raise DraftConversionError(
            f"'disallow' cannot be combined with 'not' {_describe(context)}."
        )
    entries = [
        _type_entry(entry, context + ("in 'disallow'",)) for entry in _as_list(value)
    ]
    result["not"] = entries[0] if len(entries) == 1 else {"anyOf": entries}


def _assign_type(
    result: dict[str, Any], node: Mapping[str, Any], value: Any, context: Context
) -> None:
    if isinstance(value, str):
        if value != "any":
            result["type"] = value
        return
    if not isinstance(value, Sequence):
        raise DraftConversionError(f"'type' must be a string or a list {_describe(context)}.")
    if "any" in value:
        return
    if all(isinstance(entry, str) for entry in value):
        result["type"] = list(value)
        return
    alternatives = [_type_entry(entry, context + ("in 'type'",)) for entry in value]
    if "anyOf" in node:
        result.setdefault("allOf", []).append({"anyOf": alternatives})
    else:
        result["anyOf"] = alternatives


def _type_entry(entry: Any, context: Context) -> Any:
    if isinstance(entry, str):
        return {} if entry == "any" else {"type": entry}
    return _convert_node(entry, context=context, as_property=False)


def _assign_exclusive_bound(
    result: dict[str, Any], node: Mapping[str, Any], key: str, value: Any
) -> None:
    if isinstance(value, bool):
        bound = _bound_keyword(key)
        if value and bound in node:
            result[key] = node[bound]
        return
    result[key] = value


def _convert_dependencies(value: Any, context: Context) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise DraftConversionError(f"'dependencies' must be an object {_describe(context)}.")
    converted: dict[str, Any] = {}
    for name, dependency in value.items():
        if isinstance(dependency, str):
            converted[name] = [dependency]
        elif isinstance(dependency, Mapping):
            converted[name] = _convert_node(
                dependency, context=context + (f"in dependency '{name}'",), as_property=False
            )
        else:
            converted[name] = copy.deepcopy(dependency)
    return converted


def _convert_format(value: Any) -> Any:
    if isinstance(value, str):
        return _RENAMED_FORMATS.get(value, value)
    return copy.deepcopy(value)


def _exclusive_keyword(bound: str) -> str:
    return "exclusiveMinimum" if bound == "minimum" else "exclusiveMaximum"


def _bound_keyword(exclusive: str) -> str:
    return "minimum" if exclusive == "exclusiveMinimum" else "maximum"


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return list(value)
    return [value]


def _describe(context: Context) -> str:
    if not context:
        return "at the schema root"
    return " > ".join(context)
