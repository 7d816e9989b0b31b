"""Breadcrumb paths used in every diagnostic."""

from graphclone.core.path.models import PathTracker

__all__ = ["PathTracker"]
