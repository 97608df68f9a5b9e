"""Load scope dumps produced by an external JavaScript scope resolver.

A dump is one JSON document per analyzed file::

    {
      "source": "src/app.js",
      "ast": {"type": "Program", "range": [0, 18], "body": [...]},
      "scopes": {
        "id": 0,
        "type": "global",
        "block": {"type": "Program", "range": [0, 18]},
        "variables": [
          {
            "name": "err",
            "identifiers": [{"type": "Identifier", "range": [11, 14]}],
            "defs": [{"type": "CatchClause", "name": {"type": "Identifier", "range": [11, 14]}}],
            "references": [
              {"identifier": {"type": "Identifier", "range": [16, 19]},
               "read": true, "write": false, "from": 2}
            ]
          }
        ],
        "childScopes": [...]
      }
    }

Nodes inside ``scopes`` are referenced by their ``type`` and ``range`` and
resolved against ``ast``. Anything that cannot be resolved is skipped with a
warning; a document without a usable AST or root scope is rejected.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from catchlint.errors import ScopeDumpError
from catchlint.models.scope import (
    Definition,
    DefinitionType,
    Reference,
    Scope,
    ScopeKind,
    Variable,
)
from catchlint.models.syntax import Node, Position, SourceLocation, link_parents

logger = logging.getLogger(__name__)

# Keys of an ESTree object that are not child fields
NODE_META_KEYS = frozenset({"type", "range", "loc", "start", "end"})

NodeKey = tuple[str, int, int]


@dataclass
class ScopeDump:
    """A deserialized syntax tree with its resolved scope tree."""

    program: Node
    global_scope: Scope
    source: str | None = None
    skipped: list[str] = field(default_factory=list)


def load_dump(path: Path) -> ScopeDump:
    """Load a scope dump from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ScopeDumpError(f"cannot read file: {e}", str(path)) from e
    except UnicodeDecodeError as e:
        raise ScopeDumpError(f"not valid UTF-8: {e}", str(path)) from e
    except json.JSONDecodeError as e:
        raise ScopeDumpError(f"invalid JSON: {e}", str(path)) from e

    dump = parse_dump(data, source=str(path))
    if dump.skipped:
        logger.warning("%s: skipped %d unresolvable entries", path, len(dump.skipped))
    return dump


def parse_dump(data: Any, source: str | None = None) -> ScopeDump:
    """Build the syntax and scope model from a decoded dump document."""
    if not isinstance(data, dict):
        raise ScopeDumpError("dump must be a JSON object", source)

    source = data.get("source") or source
    if "ast" not in data or "scopes" not in data:
        raise ScopeDumpError("dump needs both 'ast' and 'scopes'", source)

    try:
        program = link_parents(build_node(data["ast"], source))
        builder = _ScopeBuilder(program, source)
        global_scope = builder.build(data["scopes"])
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ScopeDumpError(f"malformed dump: {e!r}", source) from e

    return ScopeDump(
        program=program,
        global_scope=global_scope,
        source=source,
        skipped=builder.skipped,
    )


def build_node(data: dict[str, Any], source: str | None = None) -> Node:
    """Convert an ESTree JSON object into a :class:`Node` tree."""
    if not isinstance(data, dict) or "type" not in data:
        raise ScopeDumpError("syntax node without a 'type'", source)

    node = Node(
        type=data["type"],
        range=_parse_range(data, source),
        loc=_parse_loc(data.get("loc")),
    )
    for key, value in data.items():
        if key in NODE_META_KEYS:
            continue
        node.fields[key] = _build_value(value, source)
    return node


def _build_value(value: Any, source: str | None) -> Any:
    if isinstance(value, dict) and "type" in value:
        return build_node(value, source)
    if isinstance(value, list):
        return [_build_value(item, source) for item in value]
    return value


def _parse_range(data: dict[str, Any], source: str | None) -> tuple[int, int]:
    if "range" in data:
        start, end = data["range"]
        return (int(start), int(end))
    # acorn-style offsets
    if "start" in data and "end" in data:
        return (int(data["start"]), int(data["end"]))
    raise ScopeDumpError(f"{data['type']} node without a range", source)


def _parse_loc(data: dict[str, Any] | None) -> SourceLocation | None:
    if not data:
        return None
    return SourceLocation(
        start=Position(line=data["start"]["line"], column=data["start"]["column"]),
        end=Position(line=data["end"]["line"], column=data["end"]["column"]),
    )


def node_key(node: Node) -> NodeKey:
    return (node.type, node.range[0], node.range[1])


def _is_shorthand_key(node: Node) -> bool:
    parent = node.parent
    return (
        parent is not None
        and parent.type == "Property"
        and bool(parent.get("shorthand"))
        and parent.get("key") is node
    )


class _ScopeBuilder:
    """Two-pass construction: scopes first, then variables and references."""

    def __init__(self, program: Node, source: str | None) -> None:
        self.source = source
        self.skipped: list[str] = []
        self._nodes: dict[NodeKey, Node] = {}
        for node in program.walk():
            # Outermost node wins when wrappers share a type and range, except
            # that a shorthand property key gives way to its value
            key = node_key(node)
            existing = self._nodes.get(key)
            if existing is None or _is_shorthand_key(existing):
                self._nodes[key] = node
        self._scopes_by_id: dict[Any, Scope] = {}

    def build(self, root_data: Any) -> Scope:
        if not isinstance(root_data, dict):
            raise ScopeDumpError("'scopes' must be the root scope object", self.source)

        root_block = self._resolve(root_data.get("block"))
        if root_block is None:
            raise ScopeDumpError("root scope block does not match the AST", self.source)

        root = Scope(self._parse_kind(root_data.get("type")), root_block)
        pending: list[tuple[Scope, dict]] = [(root, root_data)]
        self._register(root, root_data)

        stack: list[tuple[Scope, dict]] = [(root, root_data)]
        while stack:
            scope, scope_data = stack.pop()
            children: list[tuple[Scope, dict]] = []
            for child_data in scope_data.get("childScopes", []):
                block = self._resolve(child_data.get("block"))
                if block is None:
                    self._skip(f"scope {child_data.get('id')!r} with unresolvable block")
                    continue
                child = Scope(self._parse_kind(child_data.get("type")), block, upper=scope)
                self._register(child, child_data)
                children.append((child, child_data))
            pending.extend(children)
            stack.extend(reversed(children))

        for scope, scope_data in pending:
            for var_data in scope_data.get("variables", []):
                self._build_variable(scope, var_data)

        return root

    def _register(self, scope: Scope, data: dict) -> None:
        if "id" in data:
            self._scopes_by_id[data["id"]] = scope

    def _parse_kind(self, value: Any) -> ScopeKind:
        try:
            return ScopeKind(value)
        except ValueError:
            self._skip(f"unknown scope type {value!r}, treated as block")
            return ScopeKind.BLOCK

    def _resolve(self, ref: Any) -> Node | None:
        if not isinstance(ref, dict) or "type" not in ref or "range" not in ref:
            return None
        start, end = ref["range"]
        return self._nodes.get((ref["type"], int(start), int(end)))

    def _skip(self, what: str) -> None:
        logger.debug("%s: skipping %s", self.source or "<dump>", what)
        self.skipped.append(what)

    def _build_variable(self, scope: Scope, data: dict) -> None:
        name = data.get("name")
        if not isinstance(name, str):
            self._skip("variable without a name")
            return

        variable = scope.add_variable(name)

        for ident_ref in data.get("identifiers", []):
            identifier = self._resolve(ident_ref)
            if identifier is None:
                self._skip(f"identifier of {name!r}")
                continue
            variable.identifiers.append(identifier)

        for def_data in data.get("defs", []):
            definition = self._build_definition(name, def_data)
            if definition is not None:
                variable.defs.append(definition)

        for ref_data in data.get("references", []):
            reference = self._build_reference(variable, ref_data)
            if reference is not None:
                variable.references.append(reference)

    def _build_definition(self, name: str, data: dict) -> Definition | None:
        try:
            def_type = DefinitionType(data.get("type"))
        except ValueError:
            self._skip(f"definition of {name!r} with type {data.get('type')!r}")
            return None

        name_node = self._resolve(data.get("name"))
        if name_node is None:
            self._skip(f"definition of {name!r} with unresolvable name")
            return None

        return Definition(type=def_type, name=name_node, node=self._resolve(data.get("node")))

    def _build_reference(self, variable: Variable, data: dict) -> Reference | None:
        identifier = self._resolve(data.get("identifier"))
        from_scope = self._scopes_by_id.get(data.get("from"))
        if identifier is None or from_scope is None:
            self._skip(f"reference to {variable.name!r}")
            return None

        return Reference(
            identifier=identifier,
            from_scope=from_scope,
            read=bool(data.get("read", False)),
            write=bool(data.get("write", False)),
            resolved=variable,
        )
