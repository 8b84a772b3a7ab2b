"""End-to-end tests for to_hast and the command-line entry point.

These run the grid-table handler inside a real BasicState, so paragraph
unwrapping, code preservation and provenance are checked against the
built-in mdast handlers rather than a stub.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest

from gridtable_html.convert import main, to_hast
from gridtable_html.errors import UnknownNodeTypeError
from gridtable_html.state import element, text


def txt(value: str) -> dict:
    return {"type": "text", "value": value}


def cell(*children: dict, **props) -> dict:
    return {"type": "gtCell", "children": list(children), **props}


def row(*cells: dict) -> dict:
    return {"type": "gtRow", "children": list(cells)}


def document(*children: dict) -> dict:
    return {"type": "root", "children": list(children)}


def grid_table(*children: dict) -> dict:
    return {"type": "gridTable", "children": list(children)}


SAMPLE = document(
    {"type": "heading", "depth": 1, "children": [txt("Prices")]},
    grid_table(
        {"type": "gtHeader", "children": [row(cell({"type": "paragraph", "children": [txt("Fruit")]}, align="left"), cell(txt("Price")))]},
        {
            "type": "gtBody",
            "children": [
                row(
                    cell({"type": "paragraph", "children": [txt("Apple\nred")]}),
                    cell({"type": "paragraph", "children": [{"type": "inlineCode", "value": "1\n2"}]}),
                )
            ],
        },
    ),
)


class TestToHast:

    def test_document_structure(self):
        result = to_hast(SAMPLE)
        assert result["type"] == "root"
        assert [c["tagName"] for c in result["children"]] == ["h1", "table"]

    def test_table_content(self):
        table = to_hast(SAMPLE)["children"][1]
        thead, tbody = table["children"]
        header_cells = thead["children"][0]["children"]
        assert header_cells[0] == element("th", [text("Fruit")], {"align": "left"})
        assert header_cells[1] == element("th", [text("Price")])
        body_cells = tbody["children"][0]["children"]
        assert body_cells[0]["children"] == [text("Apple red")]
        assert body_cells[1]["children"] == [element("code", [text("1\n2")])]

    def test_fenced_code_in_cell_preserved(self):
        tree = document(grid_table(row(cell({"type": "code", "value": "a\nb"}, {"type": "paragraph", "children": [txt("c\nd")]}))))
        td = to_hast(tree)["children"][0]["children"][0]["children"][0]["children"][0]
        pre, para = td["children"]
        assert pre["children"][0]["children"] == [text("a\nb\n")]
        assert para["children"] == [text("c d")]

    def test_no_header_option(self):
        table = to_hast(SAMPLE, {"noHeader": True})["children"][1]
        assert [c["tagName"] for c in table["children"]] == ["tr", "tr"]

    def test_grid_table_nested_in_cell(self):
        inner = grid_table(row(cell(txt("inner"))))
        tree = document(grid_table(row(cell(inner))))
        outer = to_hast(tree)["children"][0]
        td = outer["children"][0]["children"][0]["children"][0]
        assert td["children"][0]["tagName"] == "table"

    def test_positions_carried(self):
        position = {"start": {"line": 4, "column": 1}, "end": {"line": 4, "column": 9}}
        tree = document(grid_table(row(cell(txt("x"), position=position))))
        td = to_hast(tree)["children"][0]["children"][0]["children"][0]["children"][0]
        assert td["position"] == position

    def test_unknown_content_propagates(self):
        tree = document(grid_table(row(cell({"type": "mystery"}))))
        with pytest.raises(UnknownNodeTypeError):
            to_hast(tree)

    def test_extra_handlers(self):
        tree = document({"type": "html", "value": "<hr>"})
        result = to_hast(tree, handlers={"html": lambda state, node: {"type": "raw", "value": node["value"]}})
        assert result["children"] == [{"type": "raw", "value": "<hr>"}]

    def test_input_not_mutated(self):
        before = json.dumps(SAMPLE, sort_keys=True)
        to_hast(SAMPLE)
        assert json.dumps(SAMPLE, sort_keys=True) == before


class TestMain:

    def test_writes_output_file(self, tmp_path):
        source = tmp_path / "doc.json"
        source.write_text(json.dumps(SAMPLE), encoding="utf-8")
        output = tmp_path / "out" / "doc.hast.json"
        assert main([str(source), "-o", str(output)]) == 0
        result = json.loads(output.read_text(encoding="utf-8"))
        assert result["children"][1]["tagName"] == "table"

    def test_prints_to_stdout(self, tmp_path, capsys):
        source = tmp_path / "doc.json"
        source.write_text(json.dumps(SAMPLE), encoding="utf-8")
        assert main([str(source), "--no-header"]) == 0
        result = json.loads(capsys.readouterr().out)
        assert [c["tagName"] for c in result["children"][1]["children"]] == ["tr", "tr"]

    def test_env_enables_no_header(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("GRIDTABLE_NO_HEADER", "true")
        source = tmp_path / "doc.json"
        source.write_text(json.dumps(SAMPLE), encoding="utf-8")
        assert main([str(source)]) == 0
        result = json.loads(capsys.readouterr().out)
        assert [c["tagName"] for c in result["children"][1]["children"]] == ["tr", "tr"]

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "absent.json")]) == 1

    def test_invalid_json(self, tmp_path):
        source = tmp_path / "doc.json"
        source.write_text("{not json", encoding="utf-8")
        assert main([str(source)]) == 1

    def test_unknown_node_type(self, tmp_path):
        source = tmp_path / "doc.json"
        source.write_text(json.dumps(document({"type": "mystery"})), encoding="utf-8")
        assert main([str(source)]) == 1

    def test_top_level_array(self, tmp_path, caplog):
        source = tmp_path / "doc.json"
        source.write_text(json.dumps([{"type": "root"}]), encoding="utf-8")
        assert main([str(source)]) == 1
        assert "expected an mdast node object" in caplog.text

    def test_string_child(self, tmp_path):
        source = tmp_path / "doc.json"
        source.write_text(json.dumps({"type": "root", "children": ["x"]}), encoding="utf-8")
        assert main([str(source)]) == 1

