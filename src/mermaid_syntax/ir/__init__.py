"""Diagram models and the networkx graph view."""

from mermaid_syntax.ir.class_diagram import MermaidClass, MermaidClassDiagram, MermaidClassMember, MermaidRelation
from mermaid_syntax.ir.flowchart import (
    FlowchartEdge,
    FlowchartNode,
    FlowchartStyle,
    FlowchartSubgraph,
    MermaidFlowchart,
)
from mermaid_syntax.ir.graph import DiagramGraph

__all__ = [
    "DiagramGraph",
    "FlowchartEdge",
    "FlowchartNode",
    "FlowchartStyle",
    "FlowchartSubgraph",
    "MermaidClass",
    "MermaidClassDiagram",
    "MermaidClassMember",
    "MermaidFlowchart",
    "MermaidRelation",
]
