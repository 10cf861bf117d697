"""
Dupe Naming Utilities

Resource name inflection. Model names are singular ("author"); collection
routes and plural lookups use the plural form ("authors").
"""

import inflection


def singularize(name: str) -> str:
    """Return the singular form of a resource name."""
    return inflection.singularize(str(name))


def pluralize(name: str) -> str:
    """Return the plural form of a resource name."""
    return inflection.pluralize(str(name))


def is_plural(name: str) -> bool:
    """
    Check whether a resource name is grammatically plural.

    Uncountable names ("sheep", "equipment") have no distinct plural form
    and are treated as singular.

    Args:
        name: Resource name as given by the caller

    Returns:
        True if the name is a plural token
    """
    name = str(name)
    return pluralize(name) == name and singularize(name) != name
