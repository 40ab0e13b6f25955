# chat_tokens/engine/functions.py
"""
Schema Formatter — renders function definitions the way the hosted model sees them.

The API never sends the JSON schema itself to the model. The prompt
constructor rewrites the function list into a TypeScript-like namespace and
injects it into the system message:

    namespace functions {

    // Get the weather
    type get_weather = (_: {
    // City name
    city: string,
    unit?: "c" | "f",
    }) => any;

    } // namespace functions

The exact text was reconstructed by matching token counts against the live
API, so several details (descriptions dropped below the top level, nested
objects indented only on their first line) look odd but are load-bearing.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..exceptions import UnsupportedSchemaError
from ..models import FunctionDefinition, parse_function


def render_function_definitions(functions: Iterable[FunctionDefinition | dict[str, Any]]) -> str:
    """
    Render an ordered list of function definitions as one namespace block.

    Order matters: functions and their properties are rendered in the order
    given, so reordering them can change the token count.
    """
    lines = ["namespace functions {", ""]
    for function in functions:
        definition = parse_function(function)
        if definition.description:
            lines.append(f"// {definition.description}")
        if definition.parameters.get("properties"):
            lines.append(f"type {definition.name} = (_: {{")
            lines.append(_format_object_properties(definition.parameters, 0))
            lines.append("}) => any;")
        else:
            lines.append(f"type {definition.name} = () => any;")
        lines.append("")
    lines.append("} // namespace functions")
    return "\n".join(lines)


def _format_object_properties(schema: dict[str, Any], indent: int) -> str:
    required = schema.get("required") or []
    lines: list[str] = []
    for name, prop in (schema.get("properties") or {}).items():
        if not isinstance(prop, dict):
            raise UnsupportedSchemaError(f"Property '{name}' must be a schema object, got {prop!r}")
        # Nested property descriptions are not injected.
        if prop.get("description") and indent < 2:
            lines.append(f"// {prop['description']}")
        optional = "" if name in required else "?"
        lines.append(f"{name}{optional}: {_format_type(prop, indent)},")
    # Multi-line entries (nested objects) are only prefixed on their first line.
    return "\n".join(" " * indent + line for line in lines)


def _format_type(prop: dict[str, Any], indent: int) -> str:
    if "anyOf" in prop:
        return " | ".join(_format_type(variant, indent) for variant in prop["anyOf"])

    kind = prop.get("type")
    enum = prop.get("enum")
    if kind == "string":
        if enum is not None:
            return " | ".join(f'"{_literal(value)}"' for value in enum)
        return "string"
    if kind in ("number", "integer"):
        if enum is not None:
            return " | ".join(_literal(value) for value in enum)
        return kind
    if kind == "array":
        items = prop.get("items")
        if items:
            return f"{_format_type(items, indent)}[]"
        return "any[]"
    if kind == "boolean":
        return "boolean"
    if kind == "null":
        return "null"
    if kind == "object":
        return "\n".join(["{", _format_object_properties(prop, indent + 2), "}"])
    raise UnsupportedSchemaError(f"Unsupported type: {kind!r}")


def _literal(value: Any) -> str:
    """Enum value as it appears in the rendered text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
