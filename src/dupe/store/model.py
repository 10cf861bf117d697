"""
Dupe Model

Per-resource schema: attribute defaults, attribute transformations and the
id sequence used when building new records.

Example:
    model = Model('author')
    model.define(lambda author: (
        author.bio('Lorem ipsum delor.'),
        author.date_of_birth(lambda d: date.fromisoformat(d)),
    ))
    record = model.create({'name': 'Arthur C. Clarke', 'date_of_birth': '1917-12-16'})
"""

import copy
from typing import Dict, Any, Optional, Callable, Mapping, Union
from dataclasses import dataclass

from .database import Record
from ..common import InvalidArgumentError, InvalidDefinitionError

_MISSING = object()


@dataclass(frozen=True)
class Default:
    """Static value used when the caller omits the attribute."""

    value: Any

    def fresh_value(self) -> Any:
        """The value for one record; list, dict and set defaults are copied per record."""
        if isinstance(self.value, (list, dict, set)):
            return copy.copy(self.value)
        return self.value


@dataclass(frozen=True)
class Transform:
    """Function applied to a caller-supplied attribute value."""

    function: Callable[[Any], Any]


AttributeRule = Union[Default, Transform]


class Sequence:
    """Monotonic id generator, starting at 1 unless told otherwise."""

    def __init__(self, start: int = 1):
        self.current = start

    def next(self) -> int:
        value = self.current
        self.current += 1
        return value


class AttributeSetter:
    """Configures the rule for one attribute; also usable as a decorator."""

    def __init__(self, model: 'Model', attribute: str):
        self.model = model
        self.attribute = attribute

    def __call__(self, value: Any = _MISSING, *, default: Any = _MISSING, transform: Optional[Callable] = None):
        supplied = [v for v in (value, default) if v is not _MISSING]
        if transform is not None:
            supplied.append(transform)

        if len(supplied) != 1:
            raise InvalidDefinitionError(
                f"Attribute '{self.attribute}' of '{self.model.name}' takes exactly one of "
                f"a default value or a transformation"
            )

        if transform is not None:
            rule = Transform(transform)
        elif default is not _MISSING:
            rule = Default(default)
        elif callable(value):
            rule = Transform(value)
        else:
            rule = Default(value)

        self.model.add_rule(self.attribute, rule)
        return transform or (default if default is not _MISSING else value)


class ModelDefinition:
    """
    Builder handed to a model configurator.

    Any attribute access yields a setter for that attribute:

        define.bio('Lorem ipsum')                   # default
        define.published(transform=int)             # transformation
        define.factory(default=dict)                # callable default
        define.tags([])                             # copied into each record

        @define.author
        def find_author(name):                      # transformation
            return registry.find('author', lambda a: a.name == name)
    """

    def __init__(self, model: 'Model'):
        self._model = model

    def __getattr__(self, name: str) -> AttributeSetter:
        if name.startswith('_'):
            raise AttributeError(name)
        return AttributeSetter(self._model, name)


class Model:
    """Schema and factory for one named resource type."""

    def __init__(self, name: str, id_sequence: Optional[Sequence] = None):
        self.name = name
        self.rules: Dict[str, AttributeRule] = {}
        self.id_sequence = id_sequence or Sequence()

    def define(self, configurator: Callable[[ModelDefinition], Any]):
        """Run a configurator against this model's definition builder."""
        configurator(ModelDefinition(self))

    def add_rule(self, attribute: str, rule: AttributeRule):
        if attribute == 'id':
            raise InvalidDefinitionError(f"'id' of '{self.name}' is assigned automatically and cannot be configured")
        if attribute in self.rules:
            raise InvalidDefinitionError(f"Attribute '{attribute}' of '{self.name}' is already defined")
        self.rules[attribute] = rule

    def create(self, raw_attributes: Optional[Mapping[str, Any]] = None) -> Record:
        """
        Build a new record from raw attributes.

        Supplied attributes with a Transform rule are transformed; supplied
        attributes with a Default rule keep the supplied value; omitted
        attributes fall back to their Default, if any. Attributes without a
        rule pass through unchanged. The record is not inserted anywhere.

        Args:
            raw_attributes: Caller-supplied attribute values

        Returns:
            New Record with a fresh sequential id
        """
        raw_attributes = {} if raw_attributes is None else raw_attributes
        if not isinstance(raw_attributes, Mapping):
            raise InvalidArgumentError(
                f"Records for '{self.name}' must be built from a mapping, got {type(raw_attributes).__name__}"
            )

        attributes: Dict[str, Any] = {'id': self.id_sequence.next()}

        for key, value in raw_attributes.items():
            key = str(key)
            if key == 'id':
                continue
            rule = self.rules.get(key)
            if isinstance(rule, Transform):
                attributes[key] = rule.function(value)
            else:
                attributes[key] = value

        for key, rule in self.rules.items():
            if key not in attributes and isinstance(rule, Default):
                attributes[key] = rule.fresh_value()

        return Record(self.name, attributes)

    def __repr__(self) -> str:
        return f"<Model {self.name} rules={list(self.rules)}>"
