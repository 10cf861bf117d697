"""
Dupe Database

In-memory table storage for duped records.

Each model gets one table: an insertion-ordered list of records. Ordering
matters because singular lookups return the first match.
"""

import logging
from typing import List, Dict, Any, Optional, Callable, Iterator

from ..common import UnknownTableError

logger = logging.getLogger("dupe.database")


class Record:
    """
    A single duped resource.

    Attributes are readable as properties or by key. Reading an attribute the
    record does not carry returns None, so lookup predicates such as
    ``lambda b: b.label == 'rooby'`` work across records with differing
    attributes. Stored attributes win over the helper methods below, so a
    record with an ``items`` attribute reads it as ``record.items``; use
    ``model_name_of`` and ``attributes_of`` where the names may collide.

    Example:
        record = Record('author', {'id': 1, 'name': 'Arthur C. Clarke'})
        record.name        # 'Arthur C. Clarke'
        record['id']       # 1
        record.bio         # None
    """

    __slots__ = ('_model_name', '_attributes')

    def __init__(self, model_name: str, attributes: Optional[Dict[str, Any]] = None):
        object.__setattr__(self, '_model_name', model_name)
        object.__setattr__(self, '_attributes', dict(attributes or {}))

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith('_'):
            attributes = object.__getattribute__(self, '_attributes')
            if name in attributes:
                return attributes[name]
        return object.__getattribute__(self, name)

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def id(self) -> Optional[int]:
        return self._attributes.get('id')

    def __getattr__(self, name: str) -> Any:
        if name in Record.__slots__ or (name.startswith('__') and name.endswith('__')):
            raise AttributeError(name)
        return self._attributes.get(name)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"Record attributes are read-only (tried to set '{name}')")

    def __reduce__(self):
        return (Record, (self._model_name, self._attributes))

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __contains__(self, key: str) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def keys(self):
        return self._attributes.keys()

    def items(self):
        return self._attributes.items()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, expanding nested records."""
        return {key: _expand(value) for key, value in self._attributes.items()}

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._model_name == other._model_name and self._attributes == other._attributes

    def __hash__(self):
        return hash((self._model_name, self._attributes.get('id')))

    def __repr__(self) -> str:
        attrs = ', '.join(f"{k}={v!r}" for k, v in self._attributes.items())
        return f"<Record {self._model_name} {attrs}>"


def model_name_of(record: Record) -> str:
    """Model name of a record, even when it stores a ``model_name`` attribute."""
    return record._model_name


def attributes_of(record: Record) -> Dict[str, Any]:
    """Copy of a record's stored attributes, in insertion order."""
    return dict(record._attributes)


def _expand(value: Any) -> Any:
    if isinstance(value, Record):
        return {key: _expand(v) for key, v in attributes_of(value).items()}
    if isinstance(value, (list, tuple)):
        return [_expand(v) for v in value]
    return value


class Database:
    """
    Keyed table storage of records.

    Example:
        db = Database()
        db.create_table('author')
        db.insert(Record('author', {'id': 1, 'name': 'A'}))
        db.select('author', lambda a: a.name == 'A')
    """

    def __init__(self):
        self.tables: Dict[str, List[Record]] = {}

    def create_table(self, name: str):
        """Register an empty table for a model; existing data is kept."""
        if name not in self.tables:
            self.tables[name] = []
            logger.debug(f"Created table '{name}'")

    def insert(self, record: Record):
        """
        Append a record to its model's table.

        Raises:
            UnknownTableError: If the record's table was never created
        """
        self._table(model_name_of(record)).append(record)

    def select(
        self,
        model_name: str,
        predicate: Optional[Callable[[Record], bool]] = None
    ) -> List[Record]:
        """
        Select records from a table in insertion order.

        Args:
            model_name: Table to query
            predicate: Filter applied to each record (all records when None)

        Returns:
            List of matching records, possibly empty

        Raises:
            UnknownTableError: If the table was never created
        """
        table = self._table(model_name)
        if predicate is None:
            return list(table)
        return [record for record in table if predicate(record)]

    def has_table(self, name: str) -> bool:
        return name in self.tables

    def table_names(self) -> List[str]:
        return list(self.tables.keys())

    def count(self, model_name: str) -> int:
        return len(self._table(model_name))

    def _table(self, name: str) -> List[Record]:
        try:
            return self.tables[name]
        except KeyError:
            raise UnknownTableError(name) from None
