"""Expression tree serialization: JSON round-trip for Plumas nodes.

Trees do not have to come from Python source. Any producer that can write
the JSON form below can hand an expression to the engine:

    {"_type": "Call", "head": "p",
     "args": [{"_type": "Literal", "value": "Hello"}],
     "named": [["class_", {"_type": "Literal", "value": "intro"}]]}

Output is deterministic (sorted keys). Locations are included when known.

Example:
    from plumas import capture
    from plumas.serialization import to_json, from_json

    tree = capture("frac(a, b)")
    assert from_json(to_json(tree)) == tree

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from typing import Any

from plumas.location import SourceLocation
from plumas.nodes import Call, Literal, Node, Symbol


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict with a ``_type`` discriminator."""
    match node:
        case Literal(value=value):
            result: dict[str, Any] = {
                "_type": "Literal",
                "value": list(value) if isinstance(value, tuple) else value,
            }
        case Symbol(name=name):
            result = {"_type": "Symbol", "name": name}
        case Call():
            result = {
                "_type": "Call",
                "head": node.head,
                "args": [to_dict(arg) for arg in node.args],
                "named": [[name, to_dict(value)] for name, value in node.named],
            }
        case _:
            msg = f"Unknown node type: {type(node).__name__}"
            raise ValueError(msg)

    if node.location is not None:
        result["location"] = _location_to_dict(node.location)
    return result


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a node from a dict produced by to_dict().

    Raises:
        ValueError: If ``_type`` is missing or unknown, or a field is missing
        MalformedExpression: If the data describes an invalid node
    """
    if not isinstance(data, dict):
        msg = f"Expected a dict, got {type(data).__name__}"
        raise ValueError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    raw_location = data.get("location")
    location = _location_from_dict(raw_location) if raw_location else None

    try:
        match type_name:
            case "Literal":
                value = data["value"]
                if isinstance(value, list):
                    value = tuple(value)
                return Literal(value, location=location)
            case "Symbol":
                return Symbol(data["name"], location=location)
            case "Call":
                return Call.build(
                    data["head"],
                    (from_dict(arg) for arg in data.get("args", ())),
                    ((name, from_dict(value)) for name, value in data.get("named", ())),
                    location=location,
                )
    except KeyError as exc:
        msg = f"Missing field {exc.args[0]!r} in serialized {type_name}"
        raise ValueError(msg) from exc

    msg = f"Unknown node type: {type_name!r}"
    raise ValueError(msg)


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize an expression tree to a JSON string."""
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> Node:
    """Deserialize an expression tree from a JSON string."""
    return from_dict(json.loads(data))


def _location_to_dict(location: SourceLocation) -> dict[str, Any]:
    return {
        "lineno": location.lineno,
        "col_offset": location.col_offset,
        "end_lineno": location.end_lineno,
        "end_col_offset": location.end_col_offset,
        "source_file": location.source_file,
    }


def _location_from_dict(value: dict[str, Any]) -> SourceLocation:
    return SourceLocation(
        lineno=value["lineno"],
        col_offset=value["col_offset"],
        end_lineno=value.get("end_lineno"),
        end_col_offset=value.get("end_col_offset"),
        source_file=value.get("source_file"),
    )
