"""
Dupe Record Store

In-memory records, model definitions and the registry tying them together.
"""

from .database import Database, Record, model_name_of, attributes_of
from .model import Model, ModelDefinition, Sequence, Default, Transform
from .registry import Registry, get_default_registry, set_default_registry
from .fixtures import load_fixtures

__all__ = [
    'Database',
    'Record',
    'model_name_of',
    'attributes_of',
    'Model',
    'ModelDefinition',
    'Sequence',
    'Default',
    'Transform',
    'Registry',
    'get_default_registry',
    'set_default_registry',
    'load_fixtures',
]
