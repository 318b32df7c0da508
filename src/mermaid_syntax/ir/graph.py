"""Graph view: exposes a parsed diagram as a networkx MultiDiGraph.

Downstream layout consumes diagrams read-only; this module gives it the
topology (nodes in source order, one graph edge per diagram edge or
relation) together with subgraph membership.
"""

from __future__ import annotations

import networkx as nx

from mermaid_syntax.ir.class_diagram import MermaidClassDiagram
from mermaid_syntax.ir.flowchart import MermaidFlowchart
from mermaid_syntax.types import Direction


class DiagramGraph:
    """A networkx graph built from a flowchart or class diagram model.

    Node attribute ``data`` holds the model node/class; edge attribute
    ``data`` holds the model edge/relation.
    """

    def __init__(
        self,
        digraph: nx.MultiDiGraph,
        direction: Direction | None,
        subgraph_members: list[tuple[str, list[str]]],
    ) -> None:
        self.digraph = digraph
        self.direction = direction
        self.subgraph_members = subgraph_members

    @classmethod
    def from_flowchart(cls, diagram: MermaidFlowchart) -> DiagramGraph:
        digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        for node in diagram.nodes.values():
            digraph.add_node(node.id, data=node, subgraph=None)

        subgraph_members: list[tuple[str, list[str]]] = []
        for sg in diagram.iter_subgraphs():
            subgraph_members.append((sg.id, list(sg.node_ids)))
            for node_id in sg.node_ids:
                digraph.nodes[node_id]["subgraph"] = sg.id

        for edge in diagram.edges:
            digraph.add_edge(edge.from_id, edge.to_id, data=edge)

        return cls(digraph=digraph, direction=diagram.direction, subgraph_members=subgraph_members)

    @classmethod
    def from_class_diagram(cls, diagram: MermaidClassDiagram) -> DiagramGraph:
        digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        for mclass in diagram.classes.values():
            digraph.add_node(mclass.name, data=mclass, subgraph=None)
        for relation in diagram.relations:
            digraph.add_edge(relation.from_name, relation.to_name, data=relation)
        return cls(digraph=digraph, direction=None, subgraph_members=[])

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def topological_order(self) -> list[str] | None:
        try:
            return list(nx.topological_sort(self.digraph))
        except nx.NetworkXUnfeasible:
            return None

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def in_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.in_degree(node_id)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.out_degree(node_id)

    def adjacency_list(self) -> list[tuple[str, list[str]]]:
        """(node, sorted distinct successors) pairs, ordered by node id."""
        return sorted((node_id, sorted(set(self.digraph.successors(node_id)))) for node_id in self.digraph)
