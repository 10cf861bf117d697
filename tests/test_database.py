"""
Tests for Dupe Database

Tests table storage and records including:
- Table creation and insertion
- Predicate selection in insertion order
- Unknown table errors
- Record attribute access and equality
"""

import copy
import pickle
import pytest

from dupe.common import UnknownTableError
from dupe.store.database import Database, Record, attributes_of, model_name_of


@pytest.fixture
def database():
    """Database with an author table holding two records."""
    db = Database()
    db.create_table('author')
    db.insert(Record('author', {'id': 1, 'name': 'Arthur C. Clarke'}))
    db.insert(Record('author', {'id': 2, 'name': 'Robert Heinlein'}))
    return db


class TestRecord:
    """Test Record class."""

    def test_attribute_access(self):
        """Test reading attributes as properties and keys."""
        record = Record('author', {'id': 1, 'name': 'Arthur C. Clarke'})

        assert record.model_name == 'author'
        assert record.id == 1
        assert record.name == 'Arthur C. Clarke'
        assert record['name'] == 'Arthur C. Clarke'

    def test_missing_attribute_is_none(self):
        """Test that absent attributes read as None."""
        record = Record('book', {'id': 1})

        assert record.label is None
        assert 'label' not in record
        with pytest.raises(KeyError):
            record['label']

    def test_read_only(self):
        """Test that records reject attribute assignment."""
        record = Record('book', {'id': 1})

        with pytest.raises(AttributeError):
            record.title = 'Rama'

    def test_equality(self):
        """Test records compare by model and attributes."""
        a = Record('author', {'id': 1, 'name': 'A'})

        assert a == Record('author', {'id': 1, 'name': 'A'})
        assert a != Record('author', {'id': 1, 'name': 'B'})
        assert a != Record('book', {'id': 1, 'name': 'A'})

    def test_stored_attributes_shadow_helper_methods(self):
        """Test that attributes named like Record helpers read as stored values."""
        order = Record('order', {'id': 1, 'items': 3, 'get': 'x', 'keys': 'k', 'to_dict': 'd'})

        assert order.items == 3
        assert order.get == 'x'
        assert order.keys == 'k'
        assert order.to_dict == 'd'
        assert attributes_of(order) == {'id': 1, 'items': 3, 'get': 'x', 'keys': 'k', 'to_dict': 'd'}

    def test_model_name_attribute(self):
        """Test a record storing its own model_name attribute."""
        record = Record('widget', {'id': 1, 'model_name': 'X-100'})

        assert record.model_name == 'X-100'
        assert model_name_of(record) == 'widget'

    def test_insert_record_with_colliding_attributes(self):
        """Test storing a record whose attributes collide with helper names."""
        db = Database()
        db.create_table('widget')
        db.insert(Record('widget', {'id': 1, 'model_name': 'X-100'}))

        assert db.count('widget') == 1

    def test_copy_and_pickle(self):
        """Test that records survive copying and pickling."""
        author = Record('author', {'id': 1, 'name': 'A', 'tags': ['sci-fi']})

        shallow = copy.copy(author)
        deep = copy.deepcopy(author)
        restored = pickle.loads(pickle.dumps(author))

        assert shallow == author
        assert deep == author
        assert restored == author
        assert model_name_of(restored) == 'author'
        assert deep.tags is not author.tags

    def test_to_dict_expands_nested_records(self):
        """Test converting a record with associations to a dictionary."""
        author = Record('author', {'id': 1, 'name': 'A'})
        book = Record('book', {'id': 3, 'author': author, 'editors': [author]})

        assert book.to_dict() == {
            'id': 3,
            'author': {'id': 1, 'name': 'A'},
            'editors': [{'id': 1, 'name': 'A'}]
        }


class TestDatabase:
    """Test Database class."""

    def test_create_table_is_idempotent(self, database):
        """Test that re-creating a table keeps its records."""
        database.create_table('author')

        assert database.count('author') == 2

    def test_insert_unknown_table(self):
        """Test inserting into a table that was never created."""
        db = Database()

        with pytest.raises(UnknownTableError) as exc_info:
            db.insert(Record('book', {'id': 1}))

        assert exc_info.value.model_name == 'book'

    def test_select_all_in_insertion_order(self, database):
        """Test selecting without a predicate."""
        results = database.select('author')

        assert [r.id for r in results] == [1, 2]

    def test_select_with_predicate(self, database):
        """Test selecting with a predicate."""
        results = database.select('author', lambda a: a.name == 'Robert Heinlein')

        assert len(results) == 1
        assert results[0].id == 2

    def test_select_empty_table(self):
        """Test selecting from an empty table."""
        db = Database()
        db.create_table('book')

        assert db.select('book') == []

    def test_select_unknown_table(self):
        """Test selecting from a table that was never created."""
        with pytest.raises(UnknownTableError):
            Database().select('book')

    def test_select_returns_copy(self, database):
        """Test that callers cannot mutate a table through a selection."""
        database.select('author').clear()

        assert database.count('author') == 2

    def test_table_names(self, database):
        """Test listing tables."""
        database.create_table('book')

        assert database.table_names() == ['author', 'book']
        assert database.has_table('book')
        assert not database.has_table('publisher')
