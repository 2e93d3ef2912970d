"""Data models for data-source registry records.

A data source is a named connection descriptor that feeds reference by id.
Records are polymorphic: the reserved ``@type`` key of the wire object
selects the variant, and only the JDBC variant carries connection fields.

Example usage:
    # Decode a registry payload
    datasource = parse_datasource({
        "@type": "JdbcDatasource",
        "id": "6f1b2c3d",
        "name": "warehouse",
        "databaseConnectionUrl": "jdbc:postgresql://db:5432/warehouse",
    })
    assert isinstance(datasource, JdbcDatasource)

    # Encode it back for a save request
    payload = datasource.to_dict()
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

TYPE_KEY = "@type"

JDBC_TYPE = "JdbcDatasource"
USER_TYPE = "UserDatasource"

# wire key -> attribute
_COMMON_FIELDS: dict[str, str] = {
    "name": "name",
    "description": "description",
    "type": "type",
}
_JDBC_FIELDS: dict[str, str] = {
    "databaseConnectionUrl": "database_connection_url",
    "databaseDriverClassName": "database_driver_class_name",
    "databaseDriverLocation": "database_driver_location",
    "databaseUser": "database_user",
    "password": "password",
}
_RESERVED_KEYS = frozenset({TYPE_KEY, "id", "sourceForFeeds", *_COMMON_FIELDS})


class DatasourceKind(Enum):
    """Structural variant of a data source."""

    JDBC = JDBC_TYPE
    USER = USER_TYPE


class DatasourceTypeError(ValueError):
    """Raised when a payload's discriminator is missing or unknown."""

    pass


@dataclass
class Datasource:
    """Base data-source record.

    Not instantiated directly; use one of the variants. The discriminator
    is a class attribute, so it cannot drift from the concrete type.

    Attributes:
        name: Display name, not guaranteed unique
        description: Free-text description
        type: Registry-defined subtype label, unrelated to ``kind``
        source_for_feeds: Feed references using this data source, as sent
            by the registry
        id: Registry-assigned identifier, None until first save
        extras: Registry fields not modelled here, written back on save
    """

    kind: ClassVar[DatasourceKind]

    name: str = ""
    description: str = ""
    type: str = ""
    source_for_feeds: list[Any] = field(default_factory=list)
    id: str | None = None
    extras: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if type(self) is Datasource:
            raise TypeError("Datasource is abstract; use a concrete variant")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id":
            current = self.__dict__.get("id")
            if current is not None and value != current:
                raise AttributeError(
                    f"id {current!r} was assigned by the registry and cannot change"
                )
        super().__setattr__(name, value)

    @property
    def is_new(self) -> bool:
        """True until the registry has assigned an id."""
        return self.id is None

    @property
    def feed_ids(self) -> list[Any]:
        """Ids of the feeds referencing this data source, in order."""
        return [
            feed.get("id") if isinstance(feed, Mapping) else feed
            for feed in self.source_for_feeds
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the registry wire format.

        Returns:
            JSON-serializable dictionary including the discriminator.
            ``id`` is omitted while the record is unsaved.
        """
        payload: dict[str, Any] = dict(self.extras)
        payload[TYPE_KEY] = self.kind.value
        if self.id is not None:
            payload["id"] = self.id
        for key, attr in _COMMON_FIELDS.items():
            payload[key] = getattr(self, attr)
        payload["sourceForFeeds"] = copy.deepcopy(self.source_for_feeds)
        return payload

    @classmethod
    def _field_values(cls, payload: Mapping[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {
            attr: _as_text(payload.get(key)) for key, attr in _COMMON_FIELDS.items()
        }
        values["id"] = payload.get("id")
        values["source_for_feeds"] = list(payload.get("sourceForFeeds") or [])
        values["extras"] = {
            key: value
            for key, value in payload.items()
            if key not in _RESERVED_KEYS and key not in cls._own_keys()
        }
        return values

    @classmethod
    def _own_keys(cls) -> frozenset[str]:
        return frozenset()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Datasource:
        """Build an instance of this variant from a wire payload."""
        return cls(**cls._field_values(payload))


@dataclass
class UserDatasource(Datasource):
    """A user-defined data source with no connection details."""

    kind: ClassVar[DatasourceKind] = DatasourceKind.USER


@dataclass
class JdbcDatasource(UserDatasource):
    """A data source backed by a JDBC connection.

    Attributes:
        database_connection_url: URL of the form jdbc:subprotocol:subname
        database_driver_class_name: Fully-qualified driver class name
        database_driver_location: Comma-separated files, folders and/or URLs
            holding the driver JAR and its dependencies
        database_user: Database user name
        password: Database password, never included in repr
    """

    kind: ClassVar[DatasourceKind] = DatasourceKind.JDBC

    database_connection_url: str = ""
    database_driver_class_name: str = ""
    database_driver_location: str = ""
    database_user: str = ""
    password: str = field(default="", repr=False)

    @property
    def driver_locations(self) -> list[str]:
        """Split ``database_driver_location`` into its entries."""
        return [
            part.strip()
            for part in self.database_driver_location.split(",")
            if part.strip()
        ]

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        for key, attr in _JDBC_FIELDS.items():
            payload[key] = getattr(self, attr)
        return payload

    @classmethod
    def _own_keys(cls) -> frozenset[str]:
        return frozenset(_JDBC_FIELDS)

    @classmethod
    def _field_values(cls, payload: Mapping[str, Any]) -> dict[str, Any]:
        values = super()._field_values(payload)
        for key, attr in _JDBC_FIELDS.items():
            values[attr] = _as_text(payload.get(key))
        return values


_VARIANTS: dict[DatasourceKind, type[Datasource]] = {
    DatasourceKind.JDBC: JdbcDatasource,
    DatasourceKind.USER: UserDatasource,
}


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_datasource(payload: Mapping[str, Any]) -> Datasource:
    """Decode one registry payload into the variant named by its discriminator.

    Args:
        payload: Decoded JSON object from the registry

    Returns:
        A JdbcDatasource or UserDatasource

    Raises:
        DatasourceTypeError: If the payload is not an object, or its
            discriminator is missing or unknown
    """
    if not isinstance(payload, Mapping):
        raise DatasourceTypeError(
            f"Expected a data source object, got {type(payload).__name__}"
        )
    tag = payload.get(TYPE_KEY)
    if tag is None:
        raise DatasourceTypeError(f"Data source payload has no {TYPE_KEY!r} key")
    try:
        kind = DatasourceKind(tag)
    except ValueError as e:
        raise DatasourceTypeError(f"Unknown data source type: {tag!r}") from e
    return _VARIANTS[kind].from_dict(payload)


def parse_datasources(payload: Sequence[Mapping[str, Any]] | None) -> list[Datasource]:
    """Decode a sequence of registry payloads, preserving order."""
    if payload is None:
        return []
    if isinstance(payload, Mapping) or isinstance(payload, (str, bytes)):
        raise DatasourceTypeError(
            f"Expected a list of data sources, got {type(payload).__name__}"
        )
    return [parse_datasource(item) for item in payload]
