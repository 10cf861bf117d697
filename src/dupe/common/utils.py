"""
Dupe Common Utilities

Small text helpers used when rendering the request log.
"""

from textwrap import indent as _indent


def indent(text: str, level: int = 2) -> str:
    """
    Indent every line of a string.

    Args:
        text: Text to indent
        level: Number of spaces to prefix each line with

    Returns:
        Indented text

    Example:
        indent("apples\\noranges", 4)  # "    apples\\n    oranges"
    """
    return _indent(str(text), ' ' * level, lambda line: True)
