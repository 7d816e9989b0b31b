from dataclasses import dataclass, field
from enum import Enum

from graphclone import AdvisoryKind, InMemoryAdvisorySink, Maybe, deep_copy_and_apply
from graphclone.transforms import compose, redact


class Environment(Enum):
    DEV = "dev"
    PROD = "prod"


@dataclass
class Database:
    host: str
    user: str
    password: str
    replicas: list[str] = field(default_factory=list)


@dataclass
class ServiceConfig:
    """Live configuration that must never be logged as-is."""

    name: str
    environment: Environment
    database: Database
    api_token: Maybe[str] = field(default_factory=Maybe.empty)
    labels: dict[str, str] = field(default_factory=dict)

    @property
    def is_production(self) -> bool:
        return self.environment is Environment.PROD


def mask_token(field, value):
    """Keep only the last four characters of the API token."""
    if field is not None and field.name == "api_token" and isinstance(value, str):
        return "*" * (len(value) - 4) + value[-4:]
    return value


def main() -> None:
    config = ServiceConfig(
        name="billing",
        environment=Environment.PROD,
        database=Database("db.internal", "billing", "hunter2", ["db-r1", "db-r2"]),
        api_token=Maybe("sk-live-0123456789"),
        labels={"team": "payments"},
    )

    sink = InMemoryAdvisorySink()
    snapshot = deep_copy_and_apply(config, compose(redact("password"), mask_token), sink=sink)

    print(f"Snapshot: {snapshot}")
    print(f"Source password still set: {config.database.password == 'hunter2'}")
    for advisory in sink.of_kind(AdvisoryKind.READ_ONLY_PROPERTY_LOST):
        print(f"Advisory: {advisory.message}")


if __name__ == "__main__":
    main()
