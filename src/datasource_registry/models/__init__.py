"""Data models for data-source registry records."""

from datasource_registry.models.datasource import (
    JDBC_TYPE,
    TYPE_KEY,
    USER_TYPE,
    Datasource,
    DatasourceKind,
    DatasourceTypeError,
    JdbcDatasource,
    UserDatasource,
    parse_datasource,
    parse_datasources,
)

__all__ = [
    "JDBC_TYPE",
    "TYPE_KEY",
    "USER_TYPE",
    "Datasource",
    "DatasourceKind",
    "DatasourceTypeError",
    "JdbcDatasource",
    "UserDatasource",
    "parse_datasource",
    "parse_datasources",
]
