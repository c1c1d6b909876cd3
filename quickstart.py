import datetime
import logging
from pathlib import Path
from typing import Annotated, Any, ClassVar

import pandas as pd

import metaloom as ml
from metaloom.options import set_metaloom_option

# Set the cache directory and the directories holding overlay files
set_metaloom_option(
    ["cache_dir", "metadata_dirs"],
    [Path(__file__).parent / "assets/cache", Path(__file__).parent / "assets/metadata"],
)


class Tag:
    name: str


class AbstractContent:
    """Base class of all published content.

    Attributes:
        tags (list[Tag]): Tags shown next to the headline.
    """

    title: Annotated[Any, ml.SerializedName("headline"), ml.Groups(["list", "detail"])]
    published: datetime.datetime
    tags: Any


class Article(AbstractContent):
    registry: ClassVar[dict] = {}

    rating: float
    uri: Annotated[str, ml.Type("RecordUri", ["tx_news[item]", {"absolute": True}])]
    body: Annotated[str, ml.Groups("detail"), ml.Exclude("obj.isDraft()")]
    imported: Annotated[pd.Timestamp, ml.ReadOnly()]

    @ml.virtual_property()
    @ml.annotate(ml.Groups("list"))
    def isDraft(self) -> bool:
        return self.published > datetime.datetime.now()

    @ml.virtual_property("teaser")
    def get_summary(self) -> str:
        return self.body[:120]


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    service = ml.MetadataService()
    for path in service.generate_for(Article):
        print(f"Wrote {path}")

    matrix: pd.DataFrame = service.describe(Article)
    matrix.to_csv("assets/output/matrix/metadata_matrix.csv")

    g = ml.HierarchyGraph(service, Article).build(size=10)
    g.render("assets/output/graphs/hierarchy_graph", format="png", cleanup=True)
