"""CLI entry point for mermaid-syntax."""

import json
import logging
import sys

import click

from mermaid_syntax.config import ParseConfig
from mermaid_syntax.ir.class_diagram import MermaidClassDiagram
from mermaid_syntax.ir.flowchart import MermaidFlowchart
from mermaid_syntax.ir.graph import DiagramGraph
from mermaid_syntax.parsers import PARSERS, parse


def summarize_flowchart(diagram: MermaidFlowchart) -> list[str]:
    graph = DiagramGraph.from_flowchart(diagram)
    lines = [
        f"flowchart {diagram.direction.name}",
        f"nodes: {graph.node_count()}",
        f"edges: {graph.edge_count()}",
        f"subgraphs: {len(graph.subgraph_members)}",
        f"acyclic: {'yes' if graph.is_dag() else 'no'}",
    ]
    for node in diagram.nodes.values():
        lines.append(f"  node {node.id} {node.shape.name} {node.text!r}")
    for edge in diagram.edges:
        line = f"  edge {edge.from_id} -> {edge.to_id} {edge.edge_style.name}/{edge.arrowhead.name}"
        if edge.label:
            line += f" {edge.label!r}"
        lines.append(line)
    for sg_id, members in graph.subgraph_members:
        lines.append(f"  subgraph {sg_id}: {', '.join(members)}")
    return lines


def summarize_class_diagram(diagram: MermaidClassDiagram) -> list[str]:
    graph = DiagramGraph.from_class_diagram(diagram)
    lines = ["classDiagram"]
    if diagram.title:
        lines.append(f"title: {diagram.title}")
    lines.append(f"classes: {graph.node_count()}")
    lines.append(f"relations: {graph.edge_count()}")
    for mclass in diagram.classes.values():
        lines.append(f"  class {mclass.name} ({len(mclass.attributes)} attributes, {len(mclass.methods)} methods)")
    for relation in diagram.relations:
        line = f"  relation {relation.from_name} -> {relation.to_name} {relation.relation_type.name}"
        if relation.label:
            line += f" {relation.label!r}"
        lines.append(line)
    return lines


def render_output(diagram: MermaidFlowchart | MermaidClassDiagram, config: ParseConfig) -> str:
    if config.output_format == "json":
        return json.dumps(diagram.to_dict(), indent=2) + "\n"
    if isinstance(diagram, MermaidFlowchart):
        lines = summarize_flowchart(diagram)
    else:
        lines = summarize_class_diagram(diagram)
    lines.append(f"errors: {len(diagram.errors)}")
    return "\n".join(lines) + "\n"


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--type", "-t", "diagram_type", type=click.Choice(sorted(PARSERS)), default="flowchart", help="Diagram grammar"
)
@click.option(
    "--format", "-f", "output_format", type=click.Choice(["summary", "json"]), default="summary", help="Output format"
)
@click.option("--strict", is_flag=True, help="Exit with status 1 if the diagram has parse errors")
@click.option("--verbose", "-v", is_flag=True, help="Log parser recovery details to stderr")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def main(
    input: str | None,
    diagram_type: str,
    output_format: str,
    strict: bool,
    verbose: bool,
    output: str | None,
) -> None:
    """Parse a Mermaid flowchart or class diagram and print its model."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = ParseConfig(diagram_type=diagram_type, output_format=output_format, strict=strict)

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    diagram = parse(text, config.diagram_type)
    for error in diagram.errors:
        click.echo(f"parse error: {error}", err=True)

    rendered = render_output(diagram, config)
    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)

    if config.strict and diagram.errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
