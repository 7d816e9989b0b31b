"""Recursive copying: the graph walker and one copier per shape."""

from graphclone.copying.context import CopyContext, DepthGuard
from graphclone.copying.walker import GraphWalker, deep_copy_and_apply

__all__ = [
    "CopyContext",
    "DepthGuard",
    "GraphWalker",
    "deep_copy_and_apply",
]
