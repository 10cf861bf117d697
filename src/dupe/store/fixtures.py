"""
Dupe Fixtures

Load records from YAML fixture files (or equivalent dictionaries), the way a
scenario's "Given the following authors:" tables would create them.

Example fixture file:

    authors:
      - name: Arthur C. Clarke
        date_of_birth: 1917-12-16
      - name: Robert Heinlein

    book:
      name: 2001 A Space Odyssey
      author: Arthur C. Clarke

Entries are created in document order, so later models may refer to
earlier ones through their definitions' transformations.
"""

from pathlib import Path
from typing import Dict, Any, Optional, Union, Mapping

import yaml

from .registry import get_default_registry
from ..common import InvalidArgumentError


def load_fixtures(
    source: Union[str, Path, Mapping[str, Any]],
    registry: Optional[Any] = None
) -> Dict[str, Any]:
    """
    Create records from a fixture file or mapping.

    Args:
        source: Path to a YAML file, or a mapping of model name to records
        registry: Registry to create records in (default registry if None)

    Returns:
        Mapping of model name to the created record or list of records

    Raises:
        InvalidArgumentError: If the fixture document is not a mapping
    """
    registry = registry if registry is not None else get_default_registry()

    if isinstance(source, (str, Path)):
        with open(source, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    else:
        data = source

    if not isinstance(data, Mapping):
        raise InvalidArgumentError(
            f"Fixtures must be a mapping of model names to records, got {type(data).__name__}"
        )

    created: Dict[str, Any] = {}
    for model_name, records in data.items():
        # an empty entry declares the model without records
        created[model_name] = registry.create(str(model_name), [] if records is None else records)

    return created
