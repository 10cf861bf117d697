"""
Dupe Mock

A mock ties an HTTP verb and a URL pattern to a response-producer. When a
URL matches, the pattern's capture groups are handed to the producer, whose
result (a record, a list of records or None) is encoded into a response
body and the request is written to the registry's request log.
"""

import logging
import re
from typing import List, Any, Optional, Callable

from ..common import (
    InvalidArgumentError,
    ResourceNotFoundError,
    UnknownVerbError,
    pluralize
)
from ..store.database import Record, model_name_of

VERBS = ('get', 'post', 'put', 'delete')

COLLECTION_ROOT = 'results'

logger = logging.getLogger("dupe.mock")


def resolve_registry(registry: Optional[Any] = None) -> Any:
    """Return the given registry, or the process-wide default one."""
    if registry is not None:
        return registry
    from ..store.registry import get_default_registry
    return get_default_registry()


def normalize_verb(verb: Any) -> str:
    """
    Lower-case a verb and check it is one Dupe can mock.

    Raises:
        UnknownVerbError: If the verb is not one of get, post, put, delete
    """
    normalized = verb.lower() if isinstance(verb, str) else verb
    if normalized not in VERBS:
        raise UnknownVerbError(
            f"Unknown REST verb ('{verb}'). Valid REST verbs are: {', '.join(VERBS)}."
        )
    return normalized


class Mock:
    """
    Mocked service response for one verb and URL pattern.

    Example:
        mock = Mock('get', re.compile(r'/books/(\\d+)\\.xml'),
                    lambda id: registry.find('book', lambda b: b.id == int(id)))
        mock.match('/books/1.xml')           # True
        mock.mocked_response('/books/1.xml') # '<?xml ...><book>...</book>'
    """

    def __init__(
        self,
        verb: str,
        url_pattern: 're.Pattern',
        response: Callable[..., Any],
        registry: Optional[Any] = None,
        encoder: Optional[Any] = None
    ):
        """
        Initialize mock.

        Args:
            verb: HTTP verb (get, post, put, delete)
            url_pattern: Compiled regular expression matched against request URLs
            response: Producer called with the pattern's capture groups
            registry: Registry whose request log records served requests (default registry if None)
            encoder: Response encoder (the registry's encoder if None)
        """
        self.verb = normalize_verb(verb)

        if not isinstance(url_pattern, re.Pattern):
            raise InvalidArgumentError("The URL pattern parameter must be a type of regular expression.")
        if not callable(response):
            raise InvalidArgumentError("The response parameter must be callable.")

        self.url_pattern = url_pattern
        self.response = response
        self._registry = registry
        self._encoder = encoder

    @property
    def registry(self) -> Any:
        return resolve_registry(self._registry)

    @property
    def encoder(self) -> Any:
        return self._encoder or self.registry.encoder

    def match(self, url: str) -> bool:
        """Check whether the URL matches this mock's pattern."""
        return self.url_pattern.search(url) is not None

    def captures(self, url: str) -> List[Optional[str]]:
        """Extract the pattern's capture groups from a URL, in order."""
        found = self.url_pattern.search(url)
        if found is None:
            raise InvalidArgumentError(f"URL '{url}' does not match {self.url_pattern.pattern!r}")
        return list(found.groups())

    def mocked_response(self, url: str) -> str:
        """
        Produce the encoded response for a URL.

        The request is logged once whether or not a resource was found,
        and before any error propagates.

        Args:
            url: Requested URL

        Returns:
            Encoded response body

        Raises:
            InvalidArgumentError: If the URL does not match the pattern
            ResourceNotFoundError: If the producer returned None
        """
        captures = self.captures(url)
        body = None

        try:
            result = self.response(*captures)
            if result is None:
                logger.debug(f"No resource for {self.verb.upper()} {url}")
                raise ResourceNotFoundError(url)
            body = self._encode(result)
            return body
        finally:
            self.registry.log.add_request(self.verb, url, body)

    def _encode(self, result: Any) -> str:
        if isinstance(result, str):
            return result
        if isinstance(result, Record):
            return self.encoder.encode(result, root=model_name_of(result))
        if isinstance(result, (list, tuple)):
            records = list(result)
            return self.encoder.encode(records, root=self._collection_root(records))

        raise InvalidArgumentError(
            f"Mock responses must return a record, a list of records or None, got {type(result).__name__}"
        )

    @staticmethod
    def _collection_root(records: List[Any]) -> str:
        model_names = {model_name_of(r) for r in records if isinstance(r, Record)}
        if records and len(model_names) == 1 and all(isinstance(r, Record) for r in records):
            return pluralize(model_names.pop())
        return COLLECTION_ROOT

    def __repr__(self) -> str:
        return f"<Mock {self.verb.upper()} {self.url_pattern.pattern!r}>"
