"""
Schema Registry for managing sheet schema versions.
Maps internal field names to the column headers of a sheet, per version.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence
from datetime import datetime
import logging

from ..events.sink import SCHEMA_UPDATED, EventSink

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    # Raised when a table or schema version is not registered.
    pass


class SchemaConfigError(ValueError):
    # Raised when the startup table definitions are inconsistent.
    pass


@dataclass
class TableDefinition:
    # One table as supplied by configuration: its versions and the active one.
    table: str
    versions: Dict[str, Dict[str, str]]
    active_version: str


@dataclass
class SchemaDiff:
    # Result of comparing a sheet's actual headers with the expected ones.
    missing: List[str] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)
    has_changes: bool = False

    def to_dict(self) -> dict:
        return {
            "missing": list(self.missing),
            "extra": list(self.extra),
            "has_changes": self.has_changes,
        }


class SchemaVersion:
    # Represents a schema version with metadata.

    def __init__(
        self,
        version: str,
        fields: Dict[str, str],
        created_at: datetime,
        description: str = "",
        derived_from: Optional[str] = None
    ):
        self.version = version
        self.fields = dict(fields)
        self.created_at = created_at
        self.description = description
        self.derived_from = derived_from

    def get_field_names(self) -> List[str]:
        # Get list of field names in this schema.
        return list(self.fields.keys())

    def get_headers(self) -> List[str]:
        # Header labels in field order.
        return list(self.fields.values())

    def has_field(self, field_name: str) -> bool:
        # Check if schema has a specific field.
        return field_name in self.fields


class SchemaRegistry:
    """
    Versioned field -> header mappings for every known table.

    Each table owns a set of schema versions and exactly one active version.
    Reads resolve through the active version unless a version is named.
    New versions are forked from the active one with add_field and only
    become active through set_version. Nothing is ever removed.
    """

    def __init__(
        self,
        tables: Iterable[TableDefinition] = (),
        event_sink: Optional[EventSink] = None
    ):
        self._versions: Dict[str, Dict[str, SchemaVersion]] = {}
        self._current_versions: Dict[str, str] = {}
        self._event_sink = event_sink

        for definition in tables:
            self._register_table(definition)

        if self._versions:
            logger.info(f"Registered schema tables: {self.list_tables()}")

    def _register_table(self, definition: TableDefinition) -> None:
        table = definition.table
        if table in self._versions:
            raise SchemaConfigError(f"Table defined more than once: {table}")
        if definition.active_version not in definition.versions:
            raise SchemaConfigError(
                f"Active version {definition.active_version} is not defined for sheet: {table}"
            )

        created_at = datetime.now()
        self._versions[table] = {}
        for version, fields in definition.versions.items():
            self._versions[table][version] = SchemaVersion(
                version=version,
                fields=fields,
                created_at=created_at,
                description="Configured at startup"
            )
            logger.debug(f"Registered schema version {version} for sheet: {table}")

        self._current_versions[table] = definition.active_version

    def _get_table(self, table: str) -> Dict[str, SchemaVersion]:
        if table not in self._versions:
            raise NotFoundError(f"Schema not found for sheet: {table}")
        return self._versions[table]

    def _resolve(self, table: str, version: Optional[str] = None) -> SchemaVersion:
        # Look up a version, defaulting to the active one.
        versions = self._get_table(table)
        if version is None:
            version = self._current_versions.get(table)
            if not version:
                raise NotFoundError(f"No active schema version for sheet: {table}")

        if version not in versions:
            raise NotFoundError(f"Schema version {version} not found for sheet: {table}")
        return versions[version]

    # Lookups

    def list_tables(self) -> List[str]:
        # List all registered tables.
        return list(self._versions.keys())

    def list_versions(self, table: str) -> List[str]:
        # List all schema versions of a table, in registration order.
        return list(self._get_table(table).keys())

    def has_version(self, table: str, version: str) -> bool:
        return table in self._versions and version in self._versions[table]

    def get_current_version(self, table: str) -> str:
        # Get the active schema version of a table.
        return self._resolve(table).version

    def get_version_info(self, table: str, version: str) -> SchemaVersion:
        # Get full version information.
        return self._resolve(table, version)

    def get_schema(self, table: str, version: Optional[str] = None) -> Dict[str, str]:
        # Field -> header mapping of the active (or named) version.
        return dict(self._resolve(table, version).fields)

    def get_headers(self, table: str, version: Optional[str] = None) -> List[str]:
        # Ordered header row for writing or validating a sheet.
        return self._resolve(table, version).get_headers()

    # Row translation

    def map_row_to_object(
        self,
        table: str,
        actual_headers: Sequence[Any],
        row_values: Sequence[Any],
        version: Optional[str] = None
    ) -> Dict[str, Any]:
        # Decode one row into a field -> value mapping.
        # Unknown headers are skipped; absent cells (past the end of the row
        # or None) are left out, empty strings are kept.
        schema = self._resolve(table, version).fields
        reverse_schema = self._get_reverse_schema(schema)

        mapped = {}
        for index, header in enumerate(actual_headers):
            field_name = reverse_schema.get(str(header).strip())
            if field_name is None:
                continue
            if index < len(row_values) and row_values[index] is not None:
                mapped[field_name] = row_values[index]

        return mapped

    def map_object_to_row(
        self,
        table: str,
        record: Dict[str, Any],
        version: Optional[str] = None
    ) -> List[Any]:
        # Encode a record as a row in header order; missing fields become "".
        schema = self._resolve(table, version).fields
        return [
            "" if record.get(field_name) is None else record[field_name]
            for field_name in schema
        ]

    def detect_schema_changes(self, table: str, actual_headers: Sequence[Any]) -> SchemaDiff:
        # Compare a sheet's header row against the active schema.
        expected_headers = self.get_headers(table)
        actual_set = {str(h).strip() for h in actual_headers}
        expected_set = set(expected_headers)

        # Set sizes first, then membership of the actual headers. Duplicate
        # headers collapse in actual_set and are not reported on their own.
        has_changes = (
            len(actual_set) != len(expected_set)
            or any(h not in expected_set for h in actual_set)
        )

        return SchemaDiff(
            missing=[h for h in expected_headers if h not in actual_set],
            extra=[h for h in actual_headers if str(h).strip() not in expected_set],
            has_changes=has_changes,
        )

    # Evolution

    def add_field(
        self,
        table: str,
        field_name: str,
        header_name: str,
        new_version: str
    ) -> None:
        # Fork the active schema into new_version with one field added or
        # relabelled. The active version is left unchanged.
        versions = self._get_table(table)
        current = self._resolve(table)

        fields = dict(current.fields)
        fields[field_name] = header_name

        previous = versions.get(new_version)
        versions[new_version] = SchemaVersion(
            version=new_version,
            fields=fields,
            created_at=datetime.now(),
            description=f"Added field '{field_name}'",
            derived_from=current.version
        )

        logger.info(f"Added field '{field_name}' to {table} schema version {new_version}")

        if self._event_sink is None:
            return

        try:
            self._event_sink.emit(SCHEMA_UPDATED, {
                "table": table,
                "old_version": current.version,
                "new_version": new_version,
                "change": {"added": field_name},
            })
        except Exception:
            # Undo the fork so a failed announcement leaves no trace
            if previous is None:
                del versions[new_version]
            else:
                versions[new_version] = previous
            logger.error(f"Failed to announce schema update for {table}, reverted {new_version}")
            raise

    def set_version(self, table: str, version: str) -> None:
        # Switch the active schema version of a table.
        versions = self._get_table(table)
        if version not in versions:
            raise NotFoundError(f"Schema version {version} not found for sheet: {table}")

        old_version = self._current_versions.get(table)
        self._current_versions[table] = version

        logger.info(f"Updated {table} schema from {old_version} to {version}")

    def _get_reverse_schema(self, schema: Dict[str, str]) -> Dict[str, str]:
        # Header -> field lookup; with duplicate headers the last field wins.
        return {header.strip(): field_name for field_name, header in schema.items()}
