"""Flowchart diagram model.

Nodes are owned by the diagram in an insertion-ordered mapping keyed by id.
Edges and subgraphs refer to nodes by id and resolve them through the
diagram at read time, so an edge endpoint can never dangle.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import asdict, dataclass, field

from mermaid_syntax.errors import ParseError
from mermaid_syntax.types import ArrowHead, Direction, EdgeStyle, NodeShape, enum_dict_factory


@dataclass
class FlowchartNode:
    id: str
    text: str
    shape: NodeShape = field(default_factory=NodeShape.default)
    source_line: int = 0
    classes: list[str] = field(default_factory=list)

    @classmethod
    def new(cls, id: str, text: str, shape: NodeShape, source_line: int = 0) -> FlowchartNode:
        return cls(id=id, text=text, shape=shape, source_line=source_line)

    @classmethod
    def bare(cls, id: str, source_line: int = 0) -> FlowchartNode:
        """Create a bare node (text = id, default Rectangle shape)."""
        return cls(id=id, text=id, shape=NodeShape.Rectangle, source_line=source_line)


@dataclass
class FlowchartEdge:
    from_id: str
    to_id: str
    edge_style: EdgeStyle = EdgeStyle.Solid
    arrowhead: ArrowHead = ArrowHead.Normal
    label: str | None = None
    min_length: int = 1


@dataclass
class FlowchartSubgraph:
    id: str
    title: str | None = None
    direction: Direction | None = None
    has_custom_direction: bool = False
    node_ids: list[str] = field(default_factory=list)
    subgraphs: list[FlowchartSubgraph] = field(default_factory=list)

    def add_node(self, node_id: str) -> None:
        """Add a member node, keeping first-seen order without duplicates."""
        if node_id not in self.node_ids:
            self.node_ids.append(node_id)


@dataclass
class FlowchartStyle:
    """A classDef declaration. The style body is kept as raw text only."""

    class_name: str
    properties: str = ""


@dataclass
class MermaidFlowchart:
    direction: Direction = field(default_factory=Direction.default)
    nodes: dict[str, FlowchartNode] = field(default_factory=dict)
    edges: list[FlowchartEdge] = field(default_factory=list)
    subgraphs: list[FlowchartSubgraph] = field(default_factory=list)
    styles: list[FlowchartStyle] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)

    def find_node(self, node_id: str) -> FlowchartNode | None:
        return self.nodes.get(node_id)

    def get_or_create_node(self, node_id: str, source_line: int = 0) -> FlowchartNode:
        """Return the node registered under node_id, creating a bare one if absent."""
        node = self.nodes.get(node_id)
        if node is None:
            node = FlowchartNode.bare(node_id, source_line)
            self.nodes[node_id] = node
        return node

    def define_node(self, node_id: str, text: str, shape: NodeShape, source_line: int = 0) -> FlowchartNode:
        """Register a shaped node definition.

        The node keeps its identity and position in ``nodes``; text, shape
        and source line are taken from the latest shaped definition.
        """
        node = self.nodes.get(node_id)
        if node is None:
            node = FlowchartNode.new(node_id, text, shape, source_line)
            self.nodes[node_id] = node
        else:
            node.text = text
            node.shape = shape
            node.source_line = source_line
        return node

    def add_edge(self, edge: FlowchartEdge) -> None:
        self.get_or_create_node(edge.from_id)
        self.get_or_create_node(edge.to_id)
        self.edges.append(edge)

    def endpoints(self, edge: FlowchartEdge) -> tuple[FlowchartNode, FlowchartNode]:
        """Resolve an edge's endpoint ids to the nodes they refer to."""
        return self.nodes[edge.from_id], self.nodes[edge.to_id]

    def iter_subgraphs(self) -> Iterator[FlowchartSubgraph]:
        """Yield every subgraph, parents before their nested subgraphs."""
        stack = list(reversed(self.subgraphs))
        while stack:
            sg = stack.pop()
            yield sg
            stack.extend(reversed(sg.subgraphs))

    def to_dict(self) -> dict[str, object]:
        return asdict(self, dict_factory=enum_dict_factory)
