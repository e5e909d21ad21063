"""Generate JSON Schema and docs for the fact document YAML format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from factalgebra.loader import FactDocument


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _collect_refs(obj: object) -> set[str]:
    """Return all ``$defs`` names referenced via ``$ref`` inside *obj*."""
    refs: set[str] = set()
    if isinstance(obj, dict):
        if "$ref" in obj:
            ref = obj["$ref"]
            if ref.startswith("#/$defs/"):
                refs.add(ref.removeprefix("#/$defs/"))
        for v in obj.values():
            refs |= _collect_refs(v)
    elif isinstance(obj, list):
        for v in obj:
            refs |= _collect_refs(v)
    return refs


def _order_defs(defs: dict) -> dict:
    """Topologically sort ``$defs`` so referenced types precede referencing types.

    Fact nodes are recursive, so cycles are cut at the first revisit.
    """
    ordered: dict[str, dict] = {}
    visited: set[str] = set()

    def _visit(name: str) -> None:
        if name in visited or name not in defs:
            return
        visited.add(name)
        for dep in sorted(_collect_refs(defs[name])):
            _visit(dep)
        ordered[name] = defs[name]

    for name in defs:
        _visit(name)
    return ordered


def generate_json_schema() -> dict:
    schema = FactDocument.model_json_schema()
    if "$defs" in schema:
        schema["$defs"] = _order_defs(schema["$defs"])
    return schema


def write_json_schema(path: Path) -> None:
    _ensure_parent(path)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")


def _format_fields(fields: Iterable[str]) -> str:
    return ", ".join(fields)


def generate_schema_doc() -> str:
    schema = generate_json_schema()
    defs = schema.get("$defs", {})
    leaf_fields = defs.get("LeafSpec", {}).get("properties", {}).keys()

    lines: list[str] = []
    lines.append("# factalgebra YAML Schema")
    lines.append("")
    lines.append("This doc is generated from the Pydantic models.")
    lines.append("")
    lines.append("## Top-level keys")
    lines.append("- `fact`: a single fact node.")
    lines.append("- `facts`: mapping of fact names to fact nodes.")
    lines.append("")
    lines.append("## Fact nodes")
    lines.append(f"- `leaf`: {{ {_format_fields(leaf_fields)} }}")
    lines.append("- `and`: array of two or more fact nodes")
    lines.append("- `or`: array of two or more fact nodes")
    lines.append("- `not`: a fact node")
    lines.append("")
    return "\n".join(lines)


def write_schema_doc(path: Path) -> None:
    _ensure_parent(path)
    path.write_text(generate_schema_doc())
