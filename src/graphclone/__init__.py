"""graphclone: deep copy arbitrary object graphs, transforming every node.

Usage:
    from dataclasses import dataclass
    from graphclone import deep_copy_and_apply, InMemoryAdvisorySink
    from graphclone.transforms import redact

    @dataclass
    class Database:
        host: str
        password: str

    @dataclass
    class AppConfig:
        name: str
        databases: list[Database]

    config = AppConfig("api", [Database("db1", "s3cret"), Database("db2", "hunter2")])
    sink = InMemoryAdvisorySink()
    snapshot = deep_copy_and_apply(config, redact("password"), sink=sink)

    snapshot.databases[0].password   # '***'
    config.databases[0].password     # 's3cret', the source is never touched
"""

__version__ = "0.1.0"

# Configuration
from graphclone.config import CopySettings

# Copying
from graphclone.copying import GraphWalker, deep_copy_and_apply

# Core primitives
from graphclone.core import (
    ArgumentError,
    ConstructionFailureError,
    Copy,
    DeepCopyError,
    FieldDescriptor,
    FieldIntrospector,
    IntrospectorRegistry,
    Maybe,
    NotSupportedKindError,
    PathTracker,
    RecursionLimitExceededError,
    Shape,
    Transformer,
    TransformerFailureError,
    UnsafeMutationDetectedError,
    get_registry,
)

# Tracing
from graphclone.tracing import (
    Advisory,
    AdvisoryKind,
    AdvisorySink,
    InMemoryAdvisorySink,
    LoggingAdvisorySink,
)

__all__ = [
    # Version
    "__version__",
    # Copying
    "deep_copy_and_apply",
    "GraphWalker",
    # Core
    "Copy",
    "Transformer",
    "Maybe",
    "Shape",
    "PathTracker",
    "FieldDescriptor",
    "FieldIntrospector",
    "IntrospectorRegistry",
    "get_registry",
    # Errors
    "DeepCopyError",
    "NotSupportedKindError",
    "RecursionLimitExceededError",
    "TransformerFailureError",
    "UnsafeMutationDetectedError",
    "ArgumentError",
    "ConstructionFailureError",
    # Tracing
    "Advisory",
    "AdvisoryKind",
    "AdvisorySink",
    "InMemoryAdvisorySink",
    "LoggingAdvisorySink",
    # Config
    "CopySettings",
]
