"""Smoke tests: imports work, CLI parses input in both output formats."""

import json

from click.testing import CliRunner

from mermaid_syntax.__main__ import main

FLOWCHART = "flowchart LR\n    A[Start] --> B{Ok?}\n"


def test_import():
    import mermaid_syntax

    assert mermaid_syntax.parse_flowchart is not None
    assert mermaid_syntax.parse_class_diagram is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Mermaid flowchart" in result.output


def test_summary_from_stdin():
    runner = CliRunner()
    result = runner.invoke(main, [], input=FLOWCHART)
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[:5] == ["flowchart LR", "nodes: 2", "edges: 1", "subgraphs: 0", "acyclic: yes"]
    assert "  node A Rectangle 'Start'" in lines
    assert "  node B Rhombus 'Ok?'" in lines
    assert "  edge A -> B Solid/Normal" in lines
    assert lines[-1] == "errors: 0"


def test_json_output(tmp_path):
    src = tmp_path / "chart.mmd"
    src.write_text(FLOWCHART)
    runner = CliRunner()
    result = runner.invoke(main, [str(src), "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["direction"] == "LR"
    assert list(data["nodes"]) == ["A", "B"]
    assert data["nodes"]["B"]["shape"] == "Rhombus"
    assert data["edges"][0]["from_id"] == "A"
    assert data["errors"] == []


def test_output_file(tmp_path):
    out = tmp_path / "summary.txt"
    runner = CliRunner()
    result = runner.invoke(main, ["-o", str(out)], input=FLOWCHART)
    assert result.exit_code == 0
    assert out.read_text().startswith("flowchart LR\n")


def test_class_diagram_summary():
    runner = CliRunner()
    result = runner.invoke(main, ["--type", "class"], input="classDiagram\nAnimal <|-- Dog : extends\n")
    assert result.exit_code == 0
    assert "classes: 2" in result.output
    assert "relations: 1" in result.output
    assert "  relation Animal -> Dog Inheritance 'extends'" in result.output


def test_errors_reported_without_strict():
    runner = CliRunner()
    result = runner.invoke(main, [], input="flowchart TD\nA[Broken\nB --> C\n")
    assert result.exit_code == 0
    assert "parse error: line 2, column 9: Expected ']'" in result.output
    assert "errors: 1" in result.output


def test_strict_exits_on_errors():
    runner = CliRunner()
    result = runner.invoke(main, ["--strict"], input="flowchart TD\nA[Broken\n")
    assert result.exit_code == 1


def test_strict_passes_clean_input():
    runner = CliRunner()
    result = runner.invoke(main, ["--strict"], input=FLOWCHART)
    assert result.exit_code == 0


def test_unknown_type_rejected():
    runner = CliRunner()
    result = runner.invoke(main, ["--type", "sequence"], input=FLOWCHART)
    assert result.exit_code == 2
