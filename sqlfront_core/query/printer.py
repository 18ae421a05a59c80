"""SQLFront tree printer - text dump, dict rendering and traversal.

Each function here is a single visitor that switches on the node variant,
so adding a node type means touching this module only. None of them modify
the tree.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence

from sqlfront_core.query.ast import (
    ASTNode,
    BinaryExpression,
    BooleanLiteral,
    DeleteStatement,
    FunctionCall,
    Identifier,
    InsertStatement,
    Literal,
    NullLiteral,
    Root,
    SelectStatement,
    UpdateStatement,
    UseStatement,
)

DEFAULT_INDENT = "    "


# =============================================================================
# Text dump
# =============================================================================


def dump(node: ASTNode, indent: str = DEFAULT_INDENT) -> str:
    """Render a tree as indented text.

    Args:
        node: Root or any other node
        indent: One level of indentation

    Returns:
        Multi-line description of every node and every populated field
    """
    lines: List[str] = []
    label = "Sql Root Node:" if isinstance(node, Root) else None
    _dump_node(node, label, "", indent, lines)
    return "\n".join(lines)


def _dump_list(items: Optional[Sequence[ASTNode]], label: str, prefix: str, indent: str, lines: List[str]) -> None:
    lines.append(prefix + label)
    for item in items or ():
        _dump_node(item, None, prefix, indent, lines)


def _format_literal(node: Literal) -> str:
    if isinstance(node, NullLiteral):
        return "NULL"
    if isinstance(node, BooleanLiteral):
        return "TRUE" if node.value else "FALSE"
    return str(node.value)


def _dump_node(node: ASTNode, label: Optional[str], prefix: str, indent: str, lines: List[str]) -> None:
    if label is not None:
        lines.append(prefix + label)
    inner = prefix + indent
    nested = inner + indent

    if isinstance(node, Root):
        lines.append("")
        for statement in node.statements:
            _dump_node(statement, statement.node_type.value, prefix, indent, lines)
            lines.append("")

    elif isinstance(node, UseStatement):
        lines.append(f"{inner}Use: {node.database}")

    elif isinstance(node, SelectStatement):
        _dump_list(node.columns, "Select", inner, indent, lines)
        if node.distinct:
            lines.append(inner + "Distinct")
        _dump_list(node.from_clause, "From", inner, indent, lines)
        if node.where is not None:
            _dump_node(node.where, "Where", inner, indent, lines)
        if node.group_by is not None:
            _dump_list(node.group_by, "Group by", inner, indent, lines)
        if node.having is not None:
            _dump_node(node.having, "Having", inner, indent, lines)
        if node.order_by is not None:
            _dump_list(node.order_by, "Order by", inner, indent, lines)
        if node.limit is not None:
            _dump_node(node.limit, "Limit", inner, indent, lines)

    elif isinstance(node, InsertStatement):
        _dump_list(node.columns, f"Insert into: {node.table.name}", inner, indent, lines)
        _dump_list(node.values, "Values", inner, indent, lines)

    elif isinstance(node, DeleteStatement):
        _dump_node(node.table, "Name", inner, indent, lines)
        if node.where is not None:
            _dump_node(node.where, "Condition", inner, indent, lines)

    elif isinstance(node, UpdateStatement):
        lines.append(inner + "Update (not supported)")

    elif isinstance(node, BinaryExpression):
        if node.is_unary:
            lines.append(f"{inner}Unary operator: {node.op.upper()}")
            _dump_node(node.left, "Expression:", nested, indent, lines)
        else:
            lines.append(f"{inner}Binary operator: {node.op.upper()}")
            _dump_node(node.left, "Left:", nested, indent, lines)
            _dump_node(node.right, "Right:", nested, indent, lines)

    elif isinstance(node, FunctionCall):
        lines.append(f"{inner}Function - name: {node.name}, number of arguments: {len(node.args)}")
        for i, arg in enumerate(node.args):
            _dump_node(arg, f"Arg {i}:", nested, indent, lines)

    elif isinstance(node, Literal):
        lines.append(f"{inner}Literal {node.type_name}, value: {_format_literal(node)}")

    elif isinstance(node, Identifier):
        lines.append(f"{inner}Identifier: {node.name}")

    else:
        raise TypeError(f"Unknown AST node: {type(node).__name__}")


# =============================================================================
# Dict rendering
# =============================================================================


def _list_to_dict(items: Optional[Sequence[ASTNode]]) -> Optional[List[Dict[str, Any]]]:
    if items is None:
        return None
    return [to_dict(item) for item in items]


def _optional_to_dict(node: Optional[ASTNode]) -> Optional[Dict[str, Any]]:
    return None if node is None else to_dict(node)


def to_dict(node: ASTNode) -> Dict[str, Any]:
    """Render a tree as JSON-compatible dictionaries."""
    data: Dict[str, Any] = {"type": node.node_type.value}

    if isinstance(node, Root):
        data["statements"] = _list_to_dict(node.statements)
    elif isinstance(node, UseStatement):
        data["database"] = node.database
    elif isinstance(node, SelectStatement):
        data.update({
            "distinct": node.distinct,
            "columns": _list_to_dict(node.columns),
            "from": _list_to_dict(node.from_clause),
            "where": _optional_to_dict(node.where),
            "group_by": _list_to_dict(node.group_by),
            "having": _optional_to_dict(node.having),
            "order_by": _list_to_dict(node.order_by),
            "limit": _optional_to_dict(node.limit),
        })
    elif isinstance(node, InsertStatement):
        data.update({
            "table": to_dict(node.table),
            "columns": _list_to_dict(node.columns),
            "values": _list_to_dict(node.values),
        })
    elif isinstance(node, DeleteStatement):
        data.update({
            "table": to_dict(node.table),
            "where": _optional_to_dict(node.where),
        })
    elif isinstance(node, UpdateStatement):
        pass
    elif isinstance(node, BinaryExpression):
        data.update({
            "op": node.op,
            "left": to_dict(node.left),
            "right": _optional_to_dict(node.right),
        })
    elif isinstance(node, FunctionCall):
        data.update({"name": node.name, "args": _list_to_dict(node.args)})
    elif isinstance(node, Literal):
        data.update({"data_type": node.type_name, "value": node.value})
    elif isinstance(node, Identifier):
        data["name"] = node.name
    else:
        raise TypeError(f"Unknown AST node: {type(node).__name__}")

    return data


# =============================================================================
# Traversal
# =============================================================================


def children(node: ASTNode) -> List[ASTNode]:
    """Direct child nodes in source order."""
    if isinstance(node, Root):
        return list(node.statements)
    if isinstance(node, SelectStatement):
        result: List[ASTNode] = [*node.columns, *node.from_clause]
        if node.where is not None:
            result.append(node.where)
        result.extend(node.group_by or ())
        if node.having is not None:
            result.append(node.having)
        result.extend(node.order_by or ())
        if node.limit is not None:
            result.append(node.limit)
        return result
    if isinstance(node, InsertStatement):
        return [node.table, *(node.columns or ()), *(node.values or ())]
    if isinstance(node, DeleteStatement):
        return [node.table] if node.where is None else [node.table, node.where]
    if isinstance(node, BinaryExpression):
        return [node.left] if node.right is None else [node.left, node.right]
    if isinstance(node, FunctionCall):
        return list(node.args)
    return []


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield ``node`` and all of its descendants depth-first."""
    yield node
    for child in children(node):
        yield from walk(child)


__all__ = ["DEFAULT_INDENT", "dump", "to_dict", "children", "walk"]
