"""mermaid-syntax: Mermaid flowchart and class diagram source to diagram models."""

from mermaid_syntax.errors import ParseError
from mermaid_syntax.ir.class_diagram import MermaidClass, MermaidClassDiagram, MermaidClassMember, MermaidRelation
from mermaid_syntax.ir.flowchart import (
    FlowchartEdge,
    FlowchartNode,
    FlowchartStyle,
    FlowchartSubgraph,
    MermaidFlowchart,
)
from mermaid_syntax.ir.graph import DiagramGraph
from mermaid_syntax.parsers import ClassDiagramParser, FlowchartParser, parse
from mermaid_syntax.types import ArrowHead, Direction, EdgeStyle, NodeShape, RelationType, Visibility


def parse_flowchart(src: str) -> MermaidFlowchart:
    """Parse a Mermaid flowchart/graph definition.

    Args:
        src: Mermaid DSL source string.

    Returns:
        The flowchart model. Malformed statements are reported in its
        ``errors`` list; this function does not raise for bad input.
    """
    return FlowchartParser().parse(src)


def parse_class_diagram(src: str) -> MermaidClassDiagram:
    """Parse a Mermaid classDiagram definition.

    Args:
        src: Mermaid DSL source string.

    Returns:
        The class diagram model, with any diagnostics in ``errors``.
    """
    return ClassDiagramParser().parse(src)


__all__ = [
    "ArrowHead",
    "ClassDiagramParser",
    "DiagramGraph",
    "Direction",
    "EdgeStyle",
    "FlowchartEdge",
    "FlowchartNode",
    "FlowchartParser",
    "FlowchartStyle",
    "FlowchartSubgraph",
    "MermaidClass",
    "MermaidClassDiagram",
    "MermaidClassMember",
    "MermaidFlowchart",
    "MermaidRelation",
    "NodeShape",
    "ParseError",
    "RelationType",
    "Visibility",
    "parse",
    "parse_class_diagram",
    "parse_flowchart",
]
