"""
Dupe Registry

Owns the model definitions, the record database and the mock network (with
its request log). Test code defines models, creates or stubs records and
finds them again through a registry; mocks consult it to build responses.

A process-wide default registry is available through get_default_registry()
for code that cannot be handed one explicitly.
"""

import inspect
import logging
import re
from typing import List, Dict, Any, Optional, Callable, Mapping, Union

from .database import Database, Record
from .model import Model, ModelDefinition
from ..common import (
    DupeConfig,
    InvalidArgumentError,
    InvalidDefinitionError,
    singularize,
    pluralize,
    is_plural
)
from ..mock.encoders import get_encoder
from ..mock.network import Network, RequestLog

logger = logging.getLogger("dupe.registry")

Predicate = Callable[[Record], bool]


class Registry:
    """
    Model definitions, records and mocked services for a test run.

    Example:
        registry = Registry()

        registry.define('author', lambda author: author.bio('Lorem ipsum delor.'))

        registry.create('author', {'name': 'Arthur C. Clarke'})
        registry.stub(20, 'books', like={'title': lambda n: f"book {n}"})

        registry.find('authors')                                   # list
        registry.find('author', lambda a: a.name == 'Arthur C. Clarke')  # record or None

        registry.network.request('get', '/authors/1.xml')
        registry.reset()
    """

    def __init__(self, config: Optional[DupeConfig] = None):
        """
        Initialize registry.

        Args:
            config: Optional DupeConfig (format, default mocks, debug output)
        """
        self.config = config or DupeConfig()
        self.encoder = get_encoder(self.config.format)

        if self.config.log_level:
            logging.getLogger("dupe").setLevel(getattr(logging, self.config.log_level.upper()))

        self.models: Dict[str, Model] = {}
        self.database = Database()
        self.log = RequestLog()
        self.network = Network(self)
        self._mocked_models = set()

    @property
    def debug(self) -> bool:
        return self.config.debug

    @debug.setter
    def debug(self, value: bool):
        self.config.debug = bool(value)

    def define(self, name: str, configurator: Optional[Callable[[ModelDefinition], Any]] = None) -> Model:
        """
        Define a model, optionally configuring attribute defaults and transformations.

        The configurator receives a ModelDefinition builder:

            def book(define):
                define.genre('sci-fi')
                define.author(lambda name: registry.find('author', lambda a: a.name == name))

            registry.define('book', book)

        Redefining a name replaces the previous model; existing records stay.

        Args:
            name: Singular resource name
            configurator: Callable taking exactly one argument (the builder)

        Returns:
            The registered Model

        Raises:
            InvalidDefinitionError: If the call shape or a rule is invalid
        """
        if not isinstance(name, str) or not name:
            raise InvalidDefinitionError(
                "Unknown define parameter format. A model name (string) is required."
            )

        if configurator is not None and not _takes_one_argument(configurator):
            raise InvalidDefinitionError(
                "Unknown define parameter format. The configurator must accept exactly one argument."
            )

        model = Model(name)
        if configurator is not None:
            model.define(configurator)

        self._register_model(name, model)
        logger.debug(f"Defined model '{name}' with rules {list(model.rules)}")
        return model

    def create(
        self,
        model_name: str,
        records: Union[Mapping[str, Any], List[Mapping[str, Any]], None] = None
    ) -> Union[Record, List[Record]]:
        """
        Create and store records.

        Args:
            model_name: Resource name, singular or plural
            records: A mapping of attributes, or a list of such mappings

        Returns:
            The created Record for a mapping, or a list of Records for a list

        Raises:
            InvalidArgumentError: If records is not a mapping or a list of mappings
        """
        name = singularize(model_name)
        records = {} if records is None else records

        if isinstance(records, Mapping):
            batch = False
        elif isinstance(records, (list, tuple)) and all(isinstance(r, Mapping) for r in records):
            batch = True
        else:
            raise InvalidArgumentError("You must call create with either a mapping or a list of mappings.")

        if name not in self.models:
            self._register_model(name, Model(name))

        model = self.models[name]
        if not batch:
            return self._insert(model.create(records))

        created = [self._insert(model.create(r)) for r in records]
        logger.debug(f"Created {len(created)} '{name}' records")
        return created

    def stub(
        self,
        count: int,
        model_name: str,
        like: Optional[Mapping[str, Any]] = None,
        starting_with: int = 1
    ) -> List[Record]:
        """
        Quickly create many records.

        Callable values in ``like`` are called with the sequence index
        (``starting_with``, ``starting_with + 1``, ...); other values are
        copied into every record. Model definitions are honoured.

        Example:
            registry.stub(20, 'authors', like={'name': lambda n: f"author {n}"}, starting_with=150)

        Returns:
            List of created records
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidArgumentError(f"Stub count must be a non-negative integer, got {count!r}")
        if isinstance(starting_with, bool) or not isinstance(starting_with, int):
            raise InvalidArgumentError(f"starting_with must be an integer, got {starting_with!r}")

        template = like or {}
        if not isinstance(template, Mapping):
            raise InvalidArgumentError("The 'like' option must be a mapping of attribute names to values.")

        records = [
            {key: (value(i) if callable(value) else value) for key, value in template.items()}
            for i in range(starting_with, starting_with + count)
        ]
        return self.create(model_name, records)

    def find(self, model_name: str, predicate: Optional[Predicate] = None) -> Union[Record, List[Record], None]:
        """
        Search for records.

        A plural name returns every match as a list (possibly empty); a
        singular name returns the first match or None.

        Example:
            registry.find('books', lambda b: 1960 <= b.published <= 1969)
            registry.find('book', lambda b: b.author.name == 'Arthur C. Clarke')

        Args:
            model_name: Resource name, singular or plural
            predicate: Filter applied to each record (all records when None)
        """
        plural = is_plural(model_name)
        results = self._select(singularize(model_name), predicate)
        if plural:
            return results
        return results[0] if results else None

    def reset(self):
        """Clear model definitions, records, mocked services and the request log."""
        if self.debug and len(self.log):
            print(self.log.pretty_print())

        self.models = {}
        self.database = Database()
        self.log.reset()
        self.network.clear()
        self._mocked_models = set()
        logger.debug("Registry reset")

    def _register_model(self, name: str, model: Model):
        previous = self.models.get(name)
        if previous is not None:
            # keep ids unique within the surviving table
            model.id_sequence = previous.id_sequence

        self.models[name] = model
        self.database.create_table(name)
        self._install_default_mocks(name)

    def _insert(self, record: Record) -> Record:
        self.database.insert(record)
        return record

    def _select(self, name: str, predicate: Optional[Predicate] = None) -> List[Record]:
        if not self.database.has_table(name):
            return []
        return self.database.select(name, predicate)

    def _install_default_mocks(self, name: str):
        """Mock find-all and find-by-id GET requests for a model."""
        if not self.config.default_mocks or name in self._mocked_models:
            return

        collection = re.escape(pluralize(name))
        suffix = re.escape(self.config.format)

        def find_all():
            return self._select(name)

        def find_one(record_id):
            found = self._select(name, lambda r: r.id == int(record_id))
            return found[0] if found else None

        self.network.define_service_mock('get', re.compile(rf'^/{collection}\.{suffix}$'), find_all)
        self.network.define_service_mock('get', re.compile(rf'^/{collection}/(\d+)\.{suffix}$'), find_one)
        self._mocked_models.add(name)


def _takes_one_argument(configurator: Any) -> bool:
    if not callable(configurator):
        return False
    try:
        parameters = inspect.signature(configurator).parameters.values()
    except (TypeError, ValueError):
        return False

    positional = [
        p for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    variadic = [p for p in parameters if p.kind == inspect.Parameter.VAR_POSITIONAL]
    required_keywords = [
        p for p in parameters
        if p.kind == inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
    ]
    return len(positional) == 1 and not variadic and not required_keywords


_default_registry: Optional[Registry] = None


def get_default_registry() -> Registry:
    """Get the process-wide registry, creating it from DUPE_* environment settings on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = Registry(DupeConfig.from_env())
    return _default_registry


def set_default_registry(registry: Optional[Registry]):
    """Replace the process-wide registry (None recreates it on next use)."""
    global _default_registry
    _default_registry = registry
