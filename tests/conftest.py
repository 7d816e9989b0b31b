"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field

from graphclone import InMemoryAdvisorySink


@dataclass
class FixtureAddress:
    street: str
    city: str


@dataclass
class FixtureUser:
    name: str
    password: str
    age: int
    address: FixtureAddress | None = None
    tags: list[str] = field(default_factory=list)


@pytest.fixture
def sink():
    """Fresh in-memory advisory sink."""
    return InMemoryAdvisorySink()


@pytest.fixture
def user():
    return FixtureUser(
        name="alice",
        password="s3cret",
        age=30,
        address=FixtureAddress("1 Main St", "Springfield"),
        tags=["admin", "ops"],
    )
