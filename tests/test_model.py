"""
Tests for Dupe Model

Tests model definitions and record building including:
- Bare models
- Static defaults
- Transformations (plain, keyword and decorator forms)
- Definition errors
- Sequential ids
"""

import pytest
from datetime import date

from dupe.common import InvalidArgumentError, InvalidDefinitionError
from dupe.store.model import Model, Sequence, Default, Transform


class TestSequence:
    """Test Sequence class."""

    def test_starts_at_one(self):
        """Test default starting value."""
        sequence = Sequence()

        assert [sequence.next() for _ in range(3)] == [1, 2, 3]

    def test_custom_start(self):
        """Test custom starting value."""
        assert Sequence(10).next() == 10


class TestModelDefinition:
    """Test defining attribute rules."""

    def test_static_default(self):
        """Test that a plain value becomes a Default rule."""
        model = Model('author')
        model.define(lambda author: author.bio('Lorem ipsum delor.'))

        assert model.rules == {'bio': Default('Lorem ipsum delor.')}

    def test_transformation(self):
        """Test that a callable becomes a Transform rule."""
        model = Model('book')
        model.define(lambda book: book.published(transform=int))

        assert model.rules == {'published': Transform(int)}

    def test_callable_default_by_keyword(self):
        """Test forcing a callable to be a default value."""
        model = Model('book')
        model.define(lambda book: book.factory(default=dict))

        assert model.rules == {'factory': Default(dict)}

    def test_decorator_form(self):
        """Test defining a transformation with a decorator."""
        def configure(define):
            @define.name
            def shout(value):
                return value.upper()

        model = Model('author')
        model.define(configure)

        assert model.create({'name': 'arthur'}).name == 'ARTHUR'

    def test_default_and_transform_together(self):
        """Test that configuring both forms for one attribute fails."""
        model = Model('author')

        with pytest.raises(InvalidDefinitionError):
            model.define(lambda author: author.bio('Lorem', transform=str.upper))

    def test_missing_rule_value(self):
        """Test that a setter called without a value fails."""
        model = Model('author')

        with pytest.raises(InvalidDefinitionError):
            model.define(lambda author: author.bio())

    def test_duplicate_attribute(self):
        """Test that an attribute can only be configured once."""
        def configure(define):
            define.bio('one')
            define.bio('two')

        with pytest.raises(InvalidDefinitionError):
            Model('author').define(configure)

    def test_id_cannot_be_configured(self):
        """Test that the id attribute is reserved."""
        with pytest.raises(InvalidDefinitionError):
            Model('author').define(lambda author: author.id(5))


class TestModelCreate:
    """Test building records."""

    @pytest.fixture
    def author_model(self):
        """Author model with a default and a transformation."""
        def configure(define):
            define.bio('Lorem ipsum delor.')
            define.date_of_birth(lambda d: date.fromisoformat(d))

        model = Model('author')
        model.define(configure)
        return model

    def test_bare_model_stores_attributes(self):
        """Test that a model without rules keeps exactly the given attributes."""
        record = Model('author').create({'name': 'Arthur C. Clarke', 'genre': 'sci-fi'})

        assert record.to_dict() == {'id': 1, 'name': 'Arthur C. Clarke', 'genre': 'sci-fi'}
        assert record.model_name == 'author'

    def test_default_used_when_omitted(self, author_model):
        """Test that defaults fill omitted attributes."""
        record = author_model.create({'name': 'Arthur C. Clarke'})

        assert record.bio == 'Lorem ipsum delor.'

    def test_default_overridden_by_raw_value(self, author_model):
        """Test that a supplied value replaces the default untransformed."""
        record = author_model.create({'bio': 'Wrote 2001.'})

        assert record.bio == 'Wrote 2001.'

    def test_transform_applied_to_supplied_value(self, author_model):
        """Test that transformations apply to supplied values."""
        record = author_model.create({'date_of_birth': '1917-12-16'})

        assert record.date_of_birth == date(1917, 12, 16)

    def test_transform_not_materialized_when_omitted(self, author_model):
        """Test that an omitted transformed attribute stays absent."""
        record = author_model.create({'name': 'Arthur C. Clarke'})

        assert 'date_of_birth' not in record
        assert record.date_of_birth is None

    def test_sequential_ids(self):
        """Test that ids increase from 1."""
        model = Model('author')

        ids = [model.create({}).id for _ in range(4)]

        assert ids == [1, 2, 3, 4]

    def test_supplied_id_is_ignored(self):
        """Test that the generated id wins over a supplied one."""
        model = Model('author')

        assert model.create({'id': 99}).id == 1

    def test_non_mapping_attributes(self):
        """Test building a record from something other than a mapping."""
        with pytest.raises(InvalidArgumentError):
            Model('author').create(['name', 'Arthur'])

    def test_mutable_default_copied_per_record(self):
        """Test that list and dict defaults are not shared between records."""
        model = Model('book')
        model.define(lambda book: (book.tags([]), book.meta({'draft': True})))

        first = model.create({})
        second = model.create({})
        first.tags.append('sci-fi')

        assert second.tags == []
        assert first.meta is not second.meta
        assert model.rules['tags'] == Default([])
