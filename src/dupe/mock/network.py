"""
Dupe Network

Registered service mocks and the log of requests they served.

Mocks are kept per verb in registration order; the first registered mock
whose pattern matches a request serves it.
"""

import logging
from typing import List, Dict, Any, Optional, Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime

from .mock import Mock, VERBS, normalize_verb
from ..common import RequestNotFoundError, indent

logger = logging.getLogger("dupe.network")


@dataclass
class LoggedRequest:
    """A request served (or attempted) through a mock."""

    verb: str
    url: str
    response_body: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'verb': self.verb,
            'url': self.url,
            'response_body': self.response_body,
            'timestamp': self.timestamp
        }


class RequestLog:
    """
    Append-only record of dispatched requests, for test assertions.

    Example:
        registry.log.requests[-1].url    # '/authors.xml'
        len(registry.log)                # 1
        print(registry.log.pretty_print())
    """

    def __init__(self):
        self._requests: List[LoggedRequest] = []

    @property
    def requests(self) -> List[LoggedRequest]:
        return list(self._requests)

    def add_request(self, verb: str, url: str, response_body: Optional[str] = None) -> LoggedRequest:
        entry = LoggedRequest(verb=verb, url=url, response_body=response_body)
        self._requests.append(entry)
        logger.debug(f"Logged request: {verb.upper()} {url}")
        return entry

    def reset(self):
        self._requests.clear()

    def pretty_print(self) -> str:
        """
        Render the log for debugging output.

        Returns:
            "Logged Requests:" followed by each request and its indented response
        """
        lines = ["Logged Requests:"]
        for request in self._requests:
            response = request.response_body if request.response_body is not None else "(no response)"
            entry = f"Request: {request.verb.upper()} {request.url}\n"
            entry += indent(f"Response:\n{indent(response.rstrip())}")
            lines.append(indent(entry))
        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': len(self._requests),
            'requests': [r.to_dict() for r in self._requests]
        }

    def __len__(self) -> int:
        return len(self._requests)

    def __iter__(self) -> Iterator[LoggedRequest]:
        return iter(list(self._requests))


@dataclass
class MatchResult:
    """Result of matching a request against registered mocks."""

    matched: bool
    mock: Optional[Mock] = None
    reason: str = ""


class Network:
    """
    Per-verb registry of service mocks with first-registered-wins dispatch.

    Example:
        network.define_service_mock('get', re.compile(r'^/authors\\.xml$'),
                                    lambda: registry.find('authors'))
        network.request('get', '/authors.xml')
    """

    def __init__(self, registry: Any):
        """
        Initialize network.

        Args:
            registry: Registry whose request log and encoder the mocks use
        """
        self.registry = registry
        self._mocks: Dict[str, List[Mock]] = {verb: [] for verb in VERBS}

    def define_service_mock(self, verb: str, url_pattern: Any, response: Callable[..., Any]) -> Mock:
        """Register a mock after all previously registered mocks for its verb."""
        mock = Mock(verb, url_pattern, response, registry=self.registry)
        self._mocks[mock.verb].append(mock)
        logger.debug(f"Defined service mock {mock!r}")
        return mock

    def mocks(self, verb: str) -> List[Mock]:
        return list(self._mocks[normalize_verb(verb)])

    def match(self, verb: str, url: str) -> MatchResult:
        """
        Find the first registered mock that matches a request.

        Args:
            verb: HTTP verb
            url: Request URL (path plus optional query string)

        Returns:
            MatchResult with the matching mock, or an unmatched result
        """
        verb = normalize_verb(verb)
        for mock in self._mocks[verb]:
            if mock.match(url):
                return MatchResult(matched=True, mock=mock, reason=f"Matched {mock.url_pattern.pattern}")

        return MatchResult(matched=False, reason=f"No {verb.upper()} mock matches {url}")

    def request(self, verb: str, url: str) -> str:
        """
        Dispatch a request to the first matching mock.

        Returns:
            Encoded response body

        Raises:
            RequestNotFoundError: If no mock matches
            ResourceNotFoundError: If the matching mock finds no resource
        """
        result = self.match(verb, url)
        if not result.matched:
            logger.warning(f"No match found for {verb.upper()} {url}")
            raise RequestNotFoundError(verb, url)

        return result.mock.mocked_response(url)

    def clear(self):
        for mocks in self._mocks.values():
            mocks.clear()
