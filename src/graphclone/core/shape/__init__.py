"""Shape classification: tags, allow-lists and the classification function."""

from graphclone.core.shape.models import (
    ALLOWED_KEY_TYPES,
    LEAF_TYPES,
    NodeKind,
    Shape,
)
from graphclone.core.shape.operations import (
    abstract_capability,
    classify,
    is_allowed_key,
    is_leaf_type,
    is_one_shot_iterator,
    type_name,
)

__all__ = [
    # Models
    "Shape",
    "NodeKind",
    "LEAF_TYPES",
    "ALLOWED_KEY_TYPES",
    # Operations
    "classify",
    "is_leaf_type",
    "is_allowed_key",
    "is_one_shot_iterator",
    "abstract_capability",
    "type_name",
]
