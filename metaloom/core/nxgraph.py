"""
This module provides the graph visualization of generated metadata.

`HierarchyGraph` draws a class together with its ancestors and the members
each of them contributes, using the `networkx` library for the graph structure
and `graphviz` for rendering. It reads the cache artifacts of a
`MetadataService` (generating them if needed), so the picture shows exactly
what the serializer will load:

- class nodes, linked parent -> child along the inheritance chain,
- property nodes and virtual property nodes hanging off the class that
  declares them, labelled with their serialized name and type.
"""

import graphviz
from networkx import DiGraph

from metaloom._utils import _class_hierarchy_graph, _fully_qualified_name, _resolve_class

from .service import MetadataService


class HierarchyGraph:
    """Generates and visualizes the metadata of a class hierarchy.

    Attributes:
        service (MetadataService): Service providing the cache artifacts.
        cls (type): The class whose hierarchy is drawn.
        graph (DiGraph): The networkx graph, filled by `build`.
    """

    def __init__(self, service: MetadataService, cls: type | str):
        self.service = service
        self.cls = _resolve_class(cls)
        self.graph = DiGraph()

    @property
    def _node_styles(self) -> dict:
        """Return the node style dictionary (shapes and colors)."""
        return {
            "class": ("box", "#9999ff"),
            "property": ("box", "#99ff99"),
            "virtual": ("box", "#fbec5d"),
        }

    @property
    def _legend_details(self) -> tuple[list[str], list[str]]:
        """Return the names and colors for the legend."""
        names = ["Classes", "Properties", "Virtual Properties"]
        colors = [self._node_styles[t][1] for t in self._node_styles]
        return names, colors

    @staticmethod
    def _member_label(member: str, record: dict) -> str:
        label = record.get("serialized_name") or member
        if record.get("type"):
            label = f"{label}: {record['type']}"
        return label

    def _setup(self, members: bool) -> None:
        """Builds the internal networkx graph from the cache artifacts."""
        self.service.generate_for(self.cls)

        hierarchy = _class_hierarchy_graph(self.cls)
        for cls in hierarchy.nodes:
            self.graph.add_node(_fully_qualified_name(cls), type="class", label=cls.__qualname__)
        self.graph.add_edges_from(
            (_fully_qualified_name(parent), _fully_qualified_name(child))
            for parent, child in hierarchy.edges
        )

        if not members:
            return

        for cls in hierarchy.nodes:
            class_name = _fully_qualified_name(cls)
            metadata = self.service.read(cls) or {}
            for section, kind in (("properties", "property"), ("virtual_properties", "virtual")):
                for member, record in (metadata.get(section) or {}).items():
                    node = f"{class_name}#{member}"
                    self.graph.add_node(node, type=kind, label=self._member_label(member, record or {}))
                    self.graph.add_edge(class_name, node)

    def build(
        self,
        graph: graphviz.Digraph | None = None,
        additional_graph_attr: dict[str, str] | None = None,
        size: int = 12,
        members: bool = True,
        legend: bool = True,
    ) -> graphviz.Digraph:
        """Builds and returns the Graphviz Digraph object.

        Args:
            graph (graphviz.Digraph | None, optional): An existing graphviz
                graph to add nodes and edges to. If None, a new graph is created.
                Defaults to None.
            additional_graph_attr (dict[str, str] | None, optional): Additional
                attributes to add to the graph. Defaults to None.
            size (int, optional): The size of the graph in inches. Defaults to 12.
            members (bool, optional): If True, draws property and virtual
                property nodes. Defaults to True.
            legend (bool, optional): If True, includes a color-coded legend.
                Defaults to True.

        Returns:
            graphviz.Digraph: A Graphviz Digraph object. It can be rendered to
                various image formats (e.g., PNG, SVG) using its `.render()`
                method.
        """
        self.graph = DiGraph()
        self._setup(members)

        graph_attr = {
            "rankdir": "TB",
            "nodesep": "0.2",
            "ranksep": "0.6",
            "fontname": "Helvetica",
            "fontsize": "10",
            "size": f"{size},{size}!",
            "label": f"<<b>{self.__class__.__name__} for {self.cls.__qualname__!r}</b>>",
            "labelloc": "t",
        }
        if isinstance(additional_graph_attr, dict):
            graph_attr.update(additional_graph_attr)

        g = graph or graphviz.Digraph(graph_attr=graph_attr)

        for node, attrs in self.graph.nodes.items():
            shape, color = self._node_styles[attrs["type"]]
            g.node(
                node,
                label=attrs["label"],
                shape=shape,
                style="filled",
                fillcolor=color,
                height="0.35",
            )

        for n1, n2 in self.graph.edges():
            if self.graph.nodes[n2]["type"] == "class":
                g.edge(n1, n2, arrowhead="empty")
            else:
                g.edge(n1, n2, style="dashed", arrowhead="none")

        if legend:
            names, colors = self._legend_details
            with g.subgraph(name="cluster_legend") as c:
                c.attr(label="<<b>Legend</b>>", fontsize="12", style="rounded")
                for name, color in zip(names, colors, strict=False):
                    c.node(name, shape="box", style="filled", fillcolor=color, fontsize="10")

        return g
