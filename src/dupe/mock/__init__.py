"""
Dupe Mock Module

Mocked RESTful services backed by duped records.

This module provides:
- URL-pattern mocks with response-producers
- Network dispatch and the request log
- XML and JSON response encoders
- FastAPI mock server and a requests transport adapter
"""

from .encoders import XmlEncoder, JsonEncoder, get_encoder
from .mock import Mock, VERBS
from .network import Network, RequestLog, LoggedRequest, MatchResult
from .server import MockServer, MockMetrics, create_mock_app
from .adapter import DupeAdapter, mount_dupe

__all__ = [
    # Encoders
    'XmlEncoder',
    'JsonEncoder',
    'get_encoder',

    # Mocks
    'Mock',
    'VERBS',
    'Network',
    'RequestLog',
    'LoggedRequest',
    'MatchResult',

    # HTTP surfaces
    'MockServer',
    'MockMetrics',
    'create_mock_app',
    'DupeAdapter',
    'mount_dupe',
]
