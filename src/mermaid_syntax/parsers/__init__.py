"""Parser registry: dispatch source text to the parser for a diagram type."""

from __future__ import annotations

from mermaid_syntax.ir.class_diagram import MermaidClassDiagram
from mermaid_syntax.ir.flowchart import MermaidFlowchart
from mermaid_syntax.parsers.base import Parser
from mermaid_syntax.parsers.class_diagram import ClassDiagramParser
from mermaid_syntax.parsers.flowchart import FlowchartParser

PARSERS: dict[str, type[Parser]] = {
    "flowchart": FlowchartParser,
    "class": ClassDiagramParser,
}


def parse(src: str, diagram_type: str = "flowchart") -> MermaidFlowchart | MermaidClassDiagram:
    """Parse ``src`` with the parser registered for ``diagram_type``.

    Raises:
        ValueError: If no parser is registered for ``diagram_type``.
    """
    parser_cls = PARSERS.get(diagram_type)
    if parser_cls is None:
        raise ValueError(f"Unsupported diagram type: {diagram_type}")
    return parser_cls().parse(src)


__all__ = [
    "PARSERS",
    "ClassDiagramParser",
    "FlowchartParser",
    "Parser",
    "parse",
]
