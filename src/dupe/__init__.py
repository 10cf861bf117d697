"""
Dupe

In-memory records and mocked RESTful resources for behaviour-driven tests.

The module-level functions operate on the process-wide default registry:

    import dupe

    dupe.define('author', lambda author: author.bio('Lorem ipsum delor.'))
    dupe.create('author', {'name': 'Arthur C. Clarke'})
    dupe.stub(20, 'books', like={'title': lambda n: f"book {n}"})

    dupe.find('author', lambda a: a.name == 'Arthur C. Clarke')
    dupe.network().request('get', '/authors.xml')
    dupe.reset()
"""

from .common import (
    DupeConfig,
    DupeError,
    UnknownVerbError,
    InvalidArgumentError,
    InvalidDefinitionError,
    UnknownTableError,
    ResourceNotFoundError,
    RequestNotFoundError
)
from .store import (
    Database,
    Record,
    Model,
    Registry,
    get_default_registry,
    set_default_registry,
    load_fixtures
)
from .mock import (
    Mock,
    Network,
    RequestLog,
    MockServer,
    create_mock_app,
    DupeAdapter,
    mount_dupe
)


def define(name, configurator=None):
    """Define a model on the default registry."""
    return get_default_registry().define(name, configurator)


def create(model_name, records=None):
    """Create records on the default registry."""
    return get_default_registry().create(model_name, records)


def stub(count, model_name, like=None, starting_with=1):
    """Stub records on the default registry."""
    return get_default_registry().stub(count, model_name, like=like, starting_with=starting_with)


def find(model_name, predicate=None):
    """Find records on the default registry."""
    return get_default_registry().find(model_name, predicate)


def reset():
    """Reset the default registry."""
    get_default_registry().reset()


def network():
    """The default registry's network."""
    return get_default_registry().network


def log():
    """The default registry's request log."""
    return get_default_registry().log


__all__ = [
    'DupeConfig',
    'DupeError',
    'UnknownVerbError',
    'InvalidArgumentError',
    'InvalidDefinitionError',
    'UnknownTableError',
    'ResourceNotFoundError',
    'RequestNotFoundError',
    'Database',
    'Record',
    'Model',
    'Registry',
    'get_default_registry',
    'set_default_registry',
    'load_fixtures',
    'Mock',
    'Network',
    'RequestLog',
    'MockServer',
    'create_mock_app',
    'DupeAdapter',
    'mount_dupe',
    'define',
    'create',
    'stub',
    'find',
    'reset',
    'network',
    'log',
]

__version__ = '1.0.0'
