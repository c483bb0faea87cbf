"""
Structural classification of shapes.

Shapes carry no stored type flag. Their role is inferred from naming and
row conventions:

- a shape whose id starts with ``startingpoint:`` or contains
  ``startingpoint`` (case-insensitive) is starting-point metadata; the
  fixed id ``startingpoint:index`` is the index shape;
- any other shape with ``dcterms:hasPart`` rows labelled ``Has Shape``
  and a non-empty valueShape is a profile container whose links are the
  referenced shape ids;
- everything else is a plain shape.

Classification runs once over a shape list so importers and exporters
agree on the result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional

from ...constants import ShapeConventions
from ..utilities.multivalue import decode
from .dctap import Shape, StatementRow


class ShapeKind(Enum):
    """Structural role of a shape."""
    PLAIN = "plain"
    PROFILE_CONTAINER = "profileContainer"
    STARTING_POINT_GROUP = "startingPointGroup"
    STARTING_POINT_INDEX = "startingPointIndex"


@dataclass
class ClassifiedShape:
    """
    A shape together with its inferred role.

    Attributes:
        shape: The classified shape.
        kind: Inferred ShapeKind.
        links: Linked resource-template ids, in link order (profile containers only).
        in_starting_point_folder: True if the shape sits in the reserved folder.
    """
    shape: Shape
    kind: ShapeKind
    links: List[str] = field(default_factory=list)
    in_starting_point_folder: bool = False

    @property
    def shape_id(self) -> str:
        return self.shape.shape_id

    @property
    def is_starting_point(self) -> bool:
        return self.kind in (ShapeKind.STARTING_POINT_GROUP, ShapeKind.STARTING_POINT_INDEX)

    @property
    def is_profile_content(self) -> bool:
        """True for shapes the Marva exporter may emit."""
        return not self.is_starting_point and not self.in_starting_point_folder


def is_starting_point_shape(shape_id: Optional[str]) -> bool:
    """Check whether a shape id follows the starting-point naming convention."""
    if not shape_id:
        return False
    lowered = shape_id.lower()
    return (
        lowered.startswith(ShapeConventions.STARTING_POINT_PREFIX)
        or ShapeConventions.STARTING_POINT_MARKER in lowered
    )


def is_profile_link(row: StatementRow) -> bool:
    """Check whether a row is a profile-to-resource-template link."""
    return (
        row.property_id == ShapeConventions.HAS_PART_PROPERTY
        and row.property_label == ShapeConventions.HAS_SHAPE_LABEL
        and bool(row.value_shape)
    )


def profile_links(rows: Iterable[StatementRow]) -> List[str]:
    """Collect linked shape ids from a shape's rows, in row order.

    Multi-valued valueShape cells are flattened; starting-point ids are
    dropped and duplicates keep their first position.
    """
    links: List[str] = []
    for row in rows:
        if not is_profile_link(row):
            continue
        for ref in decode(row.value_shape):
            if is_starting_point_shape(ref) or ref in links:
                continue
            links.append(ref)
    return links


def classify_shape(
    shape: Shape,
    rows: Optional[Iterable[StatementRow]] = None,
    starting_point_folder_id: Optional[str] = None,
) -> ClassifiedShape:
    """Classify a single shape; ``rows`` are only needed for profile detection."""
    in_folder = bool(starting_point_folder_id) and shape.folder_id == starting_point_folder_id
    if shape.shape_id == ShapeConventions.STARTING_POINT_INDEX_ID:
        return ClassifiedShape(shape, ShapeKind.STARTING_POINT_INDEX, in_starting_point_folder=in_folder)
    if is_starting_point_shape(shape.shape_id):
        return ClassifiedShape(shape, ShapeKind.STARTING_POINT_GROUP, in_starting_point_folder=in_folder)
    links = profile_links(rows or [])
    if links:
        return ClassifiedShape(shape, ShapeKind.PROFILE_CONTAINER, links, in_folder)
    return ClassifiedShape(shape, ShapeKind.PLAIN, in_starting_point_folder=in_folder)


def classify_shapes(
    shapes: Iterable[Shape],
    rows_for: Callable[[str], List[StatementRow]],
    starting_point_folder_id: Optional[str] = None,
) -> List[ClassifiedShape]:
    """
    Classify every shape of a workspace, preserving input order.

    Args:
        shapes: Shapes in store order.
        rows_for: Callback returning the ordered rows of a shape id. It is
            only called for shapes that could be profile containers.
        starting_point_folder_id: Id of the reserved folder, if it exists.

    Returns:
        One ClassifiedShape per input shape.
    """
    classified: List[ClassifiedShape] = []
    for shape in shapes:
        if is_starting_point_shape(shape.shape_id):
            classified.append(classify_shape(shape, None, starting_point_folder_id))
        else:
            classified.append(classify_shape(shape, rows_for(shape.shape_id), starting_point_folder_id))
    return classified
