import json

import pytest

from sqlfront_core.query.ast import Expression, Identifier
from sqlfront_core.query.parser import parse
from sqlfront_core.query.printer import children, dump, to_dict, walk


def test_dump_simple_select():
	root = parse("SELECT * FROM t WHERE x = 1;")
	assert dump(root) == "\n".join([
		"Sql Root Node:",
		"",
		"SelectStatement",
		"    Select",
		"        Identifier: *",
		"    From",
		"        Identifier: t",
		"    Where",
		"        Binary operator: =",
		"            Left:",
		"                Identifier: x",
		"            Right:",
		"                Literal integer, value: 1",
		"",
	])


def test_dump_insert_and_delete():
	root = parse("INSERT INTO t (a) VALUES ('x'); DELETE FROM t WHERE flag = TRUE;")
	text = dump(root)
	assert "InsertStatement\n    Insert into: t\n        Identifier: a\n    Values\n" in text
	assert "        Literal string, value: x" in text
	assert "DeleteStatement\n    Name\n        Identifier: t\n    Condition\n" in text
	assert "Literal boolean, value: TRUE" in text


def test_dump_unary_and_function():
	root = parse("SELECT COUNT(DISTINCT a) FROM t ORDER BY a DESC;")
	lines = dump(root).splitlines()
	assert "        Function - name: COUNT, number of arguments: 1" in lines
	assert "            Arg 0:" in lines
	assert "                Unary operator: DISTINCT" in lines
	order = lines.index("    Order by")
	assert lines[order + 1:order + 4] == [
		"        Unary operator: DESC",
		"            Expression:",
		"                Identifier: a",
	]


def test_dump_null_and_use():
	text = dump(parse("USE db; SELECT NULL FROM t;"))
	assert "UseStatement\n    Use: db\n" in text
	assert "Literal null, value: NULL" in text


def test_dump_custom_indent():
	lines = dump(parse("SELECT a FROM t;"), indent="  ").splitlines()
	assert lines[3:5] == ["  Select", "    Identifier: a"]


def test_dump_single_node():
	assert dump(Identifier("x")) == "    Identifier: x"


def test_dump_rejects_unknown_nodes():
	with pytest.raises(TypeError):
		dump(Expression())


def test_to_dict_is_json_ready():
	data = to_dict(parse("SELECT a FROM t WHERE b > 1.5;"))
	assert data["type"] == "RootQueries"
	select = data["statements"][0]
	assert select["type"] == "SelectStatement"
	assert select["distinct"] is False
	assert select["columns"] == [{"type": "Identifier", "name": "a"}]
	assert select["where"] == {
		"type": "BinaryExpression",
		"op": ">",
		"left": {"type": "Identifier", "name": "b"},
		"right": {"type": "Literal", "data_type": "float", "value": 1.5},
	}
	assert select["group_by"] is None
	assert json.loads(json.dumps(data)) == data


def test_walk_is_depth_first_in_source_order():
	root = parse("SELECT a FROM t WHERE b = 1;")
	names = [node.name for node in walk(root) if isinstance(node, Identifier)]
	assert names == ["a", "t", "b"]


def test_children_of_leaf_is_empty():
	assert children(Identifier("a")) == []


def test_printing_does_not_mutate_tree():
	root = parse("SELECT DISTINCT a, -b FROM t GROUP BY a HAVING f(a) > 1 ORDER BY a;")
	snapshot = repr(root)
	dump(root)
	to_dict(root)
	list(walk(root))
	assert repr(root) == snapshot
	assert root == parse("SELECT DISTINCT a, -b FROM t GROUP BY a HAVING f(a) > 1 ORDER BY a;")
