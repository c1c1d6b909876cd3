import graphviz
import pandas as pd
import pytest

from metaloom import HierarchyGraph, MetadataMatrix
from metaloom.core._matrix import COLUMNS
from tests.data.models import Product, Review

CLASS_METADATA = {
    "blog.AbstractContent": {
        "properties": {"title": {"serialized_name": "headline"}},
        "virtual_properties": {},
    },
    "blog.Article": {
        "properties": {"rating": {"type": "float", "groups": ["list", "detail"]}},
        "virtual_properties": {
            "isActive": {"name": "active", "serialized_name": "active", "type": "bool"}
        },
    },
}


class TestMetadataMatrix:
    def test_build(self):
        df = MetadataMatrix(CLASS_METADATA).build()

        assert list(df.columns) == COLUMNS
        assert df.index.names == ["class", "member"]
        assert list(df.index) == [
            ("blog.AbstractContent", "title"),
            ("blog.Article", "rating"),
            ("blog.Article", "isActive"),
        ]

    def test_cells(self):
        df = MetadataMatrix(CLASS_METADATA).build()

        rating = df.loc[("blog.Article", "rating")]
        assert rating["kind"] == "property"
        assert rating["type"] == "float"
        assert rating["groups"] == "list, detail"
        assert rating["read_only"] is None

        active = df.loc[("blog.Article", "isActive")]
        assert active["kind"] == "virtual"
        assert active["name"] == "active"

    def test_empty(self):
        df = MetadataMatrix({}).build()
        assert df.empty
        assert list(df.columns) == COLUMNS

    def test_missing_sections(self):
        df = MetadataMatrix({"blog.Tag": {}}).build()
        assert df.empty

    @pytest.mark.parametrize("value", [[("a", {})], {"blog.Tag": ["x"]}])
    def test_invalid_input(self, value):
        with pytest.raises(TypeError):
            MetadataMatrix(value)

    def test_product_view(self, service):
        service.generate_for(Product)
        df = MetadataMatrix({"Product": service.read(Product)}).build()

        assert df.loc[("Product", "sku"), "groups"] == "list, detail"
        assert df.loc[("Product", "sku"), "read_only"] == True  # noqa: E712
        assert df.loc[("Product", "notes"), "serialized_name"] == "remarks"
        assert df.loc[("Product", "price"), "max_depth"] == 2


class TestHierarchyGraph:
    def test_build_returns_digraph(self, service):
        g = HierarchyGraph(service, Review).build()
        assert isinstance(g, graphviz.Digraph)

    def test_class_nodes_and_edges(self, service):
        hierarchy = HierarchyGraph(service, "tests.data.models.Review")
        hierarchy.build(members=False, legend=False)

        assert set(hierarchy.graph.nodes) == {
            "tests.data.models.AbstractContent",
            "tests.data.models.Article",
            "tests.data.models.Review",
        }
        assert set(hierarchy.graph.edges) == {
            ("tests.data.models.AbstractContent", "tests.data.models.Article"),
            ("tests.data.models.Article", "tests.data.models.Review"),
        }

    def test_member_nodes(self, service):
        hierarchy = HierarchyGraph(service, Review)
        hierarchy.build()

        nodes = hierarchy.graph.nodes
        assert nodes["tests.data.models.AbstractContent#title"] == {
            "type": "property",
            "label": "headline",
        }
        assert nodes["tests.data.models.Article#rating"]["label"] == "rating: float"
        assert nodes["tests.data.models.Review#get_score"] == {
            "type": "virtual",
            "label": "score: int",
        }
        assert ("tests.data.models.Review", "tests.data.models.Review#verdict") in hierarchy.graph.edges

    def test_build_generates_artifacts(self, service):
        HierarchyGraph(service, Review).build()
        assert service.is_generated(Review)

    def test_source(self, service):
        g = HierarchyGraph(service, Review).build(additional_graph_attr={"bgcolor": "white"})

        assert "bgcolor=white" in g.source
        assert "cluster_legend" in g.source
        assert "arrowhead=empty" in g.source
        assert "HierarchyGraph for 'Review'" in g.source

    def test_without_legend(self, service):
        g = HierarchyGraph(service, Review).build(legend=False)
        assert "cluster_legend" not in g.source

    def test_existing_graph(self, service):
        existing = graphviz.Digraph(name="existing")
        g = HierarchyGraph(service, Review).build(graph=existing, legend=False)
        assert g is existing
        assert "tests.data.models.Review" in existing.source
