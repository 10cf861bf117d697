"""
Dupe Transport Adapter

A requests transport adapter that answers a session's requests from a
registry's mocked services instead of the network.

Example:
    session = mount_dupe(requests.Session(), registry)
    session.get('http://api.example.com/authors/1.xml').text
"""

import logging
from typing import Optional, Any
from urllib.parse import urlparse

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from .mock import VERBS, resolve_registry
from ..common import RequestNotFoundError, ResourceNotFoundError, UnknownVerbError

logger = logging.getLogger("dupe.adapter")

REASONS = {200: 'OK', 404: 'Not Found', 405: 'Method Not Allowed'}


class DupeAdapter(BaseAdapter):
    """Serve requests.Session traffic from a registry's network."""

    def __init__(self, registry: Optional[Any] = None):
        """
        Initialize adapter.

        Args:
            registry: Registry to serve (default registry if None)
        """
        super().__init__()
        self._registry = registry

    @property
    def registry(self) -> Any:
        return resolve_registry(self._registry)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        """Dispatch a prepared request to the first matching mock."""
        parsed = urlparse(request.url)
        url = parsed.path or '/'
        if parsed.query:
            url = f"{url}?{parsed.query}"

        try:
            body = self.registry.network.request(request.method.lower(), url)
            return self._build_response(request, 200, body, matched=True)
        except RequestNotFoundError as e:
            logger.warning(f"No match found for {request.method} {request.url}")
            return self._build_response(request, 404, str(e), matched=False)
        except ResourceNotFoundError as e:
            return self._build_response(request, 404, str(e), matched=True)
        except UnknownVerbError as e:
            return self._build_response(request, 405, str(e), matched=False)

    def _build_response(self, request, status: int, body: str, matched: bool) -> requests.Response:
        response = requests.Response()
        response.status_code = status
        response.reason = REASONS[status]
        content_type = self.registry.encoder.content_type if status == 200 else 'text/plain'
        response.headers = CaseInsensitiveDict({
            'Content-Type': f"{content_type}; charset=utf-8",
            'X-Dupe-Matched': 'true' if matched else 'false'
        })
        if status == 405:
            response.headers['Allow'] = ', '.join(verb.upper() for verb in VERBS)
        response._content = body.encode('utf-8')
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def mount_dupe(session: requests.Session, registry: Optional[Any] = None) -> requests.Session:
    """Route every http:// and https:// request of a session through Dupe."""
    adapter = DupeAdapter(registry)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    return session
