"""Tests for composite copying.

Why these tests exist:
- Composites are rebuilt through the introspector for their family
- Members that cannot be copied are reported, never silently dropped
"""

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, computed_field

from graphclone import TransformerFailureError, deep_copy_and_apply
from graphclone.tracing import AdvisoryKind
from graphclone.transforms import identity


class Credentials(BaseModel):
    user: str
    password: str
    port: int = 5432

    @computed_field
    @property
    def dsn(self) -> str:
        return f"{self.user}@:{self.port}"


class Service(BaseModel):
    name: str
    credentials: Credentials
    replicas: list[int] = []


@dataclass
class Rectangle:
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass
class Counter:
    hits: int
    history: list[int] = field(default_factory=list)


class Matrix:
    def __init__(self, rows):
        self.rows = rows

    def __getitem__(self, index):
        return self.rows[index]


class Legacy:
    __slots__ = ("a", "b")

    def __init__(self, a, b):
        self.a = a
        self.b = b


def redact_password(field, value):
    if field is not None and field.name == "password":
        return "***"
    return value


def test_dataclass_fields_are_copied_in_order():
    order = []

    def record(field, value):
        if field is not None:
            order.append(field.name)
        return value

    deep_copy_and_apply(Counter(1, [2]), record)
    assert order == ["hits", "history", "history"]


def test_pydantic_model_is_rebuilt_without_validation():
    source = Service(name="api", credentials=Credentials(user="u", password="p"))

    def mangle_port(field, value):
        if field is not None and field.name == "port":
            return "redacted"
        return value

    copy = deep_copy_and_apply(source, mangle_port)
    assert copy.credentials.port == "redacted"
    assert source.credentials.port == 5432
    assert copy.credentials is not source.credentials


def test_pydantic_fields_set_is_preserved():
    source = Credentials(user="u", password="p")
    copy = deep_copy_and_apply(source, redact_password)
    assert copy.password == "***"
    assert copy.model_fields_set == {"user", "password"}


def test_computed_field_is_reported(sink):
    copy = deep_copy_and_apply(Credentials(user="u", password="p"), identity, sink=sink)
    assert copy.dsn == "u@:5432"
    (advisory,) = sink.of_kind(AdvisoryKind.READ_ONLY_PROPERTY_LOST)
    assert advisory.tags["propertyName"] == "dsn"
    assert advisory.tags["path"] == "root"


def test_property_without_setter_is_reported(sink):
    copy = deep_copy_and_apply(Rectangle(2, 3), identity, sink=sink)
    assert copy.area == 6
    (advisory,) = sink.of_kind(AdvisoryKind.READ_ONLY_PROPERTY_LOST)
    assert advisory.tags["propertyName"] == "area"
    assert advisory.tags["propertyType"] == "int"


def test_indexer_is_reported_and_data_copied(sink):
    source = Matrix([[1, 2], [3, 4]])
    copy = deep_copy_and_apply(source, identity, sink=sink)
    assert copy.rows == source.rows
    assert copy.rows is not source.rows
    (advisory,) = sink.of_kind(AdvisoryKind.INDEXED_PROPERTY_SKIPPED)
    assert advisory.tags["propertyName"] == "__getitem__"


def test_slotted_class_is_copied():
    source = Legacy([1], "b")
    copy = deep_copy_and_apply(source, identity)
    assert type(copy) is Legacy
    assert copy.a == [1]
    assert copy.a is not source.a


def test_nested_field_paths():
    def explode(field, value):
        if field is not None and field.name == "user":
            raise KeyError("user")
        return value

    source = Service(name="api", credentials=Credentials(user="u", password="p"))
    with pytest.raises(TransformerFailureError) as exc_info:
        deep_copy_and_apply(source, explode)
    assert exc_info.value.path == "root.credentials.user"


@dataclass(init=False)
class Endpoint:
    url: str
    retries: int = 3

    def __init__(self, url_with_scheme):
        self.url = url_with_scheme.removeprefix("https://")
        self.retries = 3


def test_dataclass_with_own_init_is_copied():
    source = Endpoint("https://api.local")
    copy = deep_copy_and_apply(source, identity)
    assert type(copy) is Endpoint
    assert (copy.url, copy.retries) == ("api.local", 3)
    assert copy is not source
