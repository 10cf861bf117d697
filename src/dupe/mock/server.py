"""
Dupe Mock Server

FastAPI application that answers HTTP requests from a registry's mocked
services, for code under test that talks to its resources over HTTP.

Features:
- Catch-all route dispatching to the first matching mock
- Admin API for the request log, models and metrics
- Registry reset between scenarios
"""

from __future__ import annotations  # Enable forward references for type hints

import json
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .mock import resolve_registry
from ..common import DupeConfig, RequestNotFoundError, ResourceNotFoundError

MOCKED_METHODS = ["GET", "POST", "PUT", "DELETE"]


@dataclass
class MockMetrics:
    """Track mock server metrics."""

    total_requests: int = 0
    matched_requests: int = 0
    unmatched_requests: int = 0
    not_found_resources: int = 0
    start_time: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        uptime_seconds = (datetime.now() - datetime.fromisoformat(self.start_time)).total_seconds()
        return {
            'total_requests': self.total_requests,
            'matched_requests': self.matched_requests,
            'unmatched_requests': self.unmatched_requests,
            'not_found_resources': self.not_found_resources,
            'match_rate': round((self.matched_requests / self.total_requests * 100) if self.total_requests > 0 else 0, 2),
            'uptime_seconds': round(uptime_seconds, 2),
            'start_time': self.start_time
        }


class MockServer:
    """
    FastAPI-based server for a registry's mocked services.

    Example:
        registry = Registry()
        registry.create('author', {'name': 'Arthur C. Clarke'})

        server = MockServer(registry)
        client = TestClient(server.app)
        client.get('/authors/1.xml').text
    """

    def __init__(self, registry: Optional[Any] = None, config: Optional[DupeConfig] = None):
        """
        Initialize mock server.

        Args:
            registry: Registry to serve (default registry if None)
            config: Optional DupeConfig (the registry's config if None)
        """
        self.registry = resolve_registry(registry)
        self.config = config or self.registry.config
        self.metrics = MockMetrics()

        self.logger = logging.getLogger("dupe.server")
        if self.config.log_level:
            self.logger.setLevel(getattr(logging, self.config.log_level.upper()))

        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application with routes."""
        app = FastAPI(
            title="Dupe Mock Server",
            description="Mocked RESTful resources served from duped records",
            version="1.0.0"
        )
        prefix = self.config.admin_prefix

        @app.get(f"{prefix}/requests")
        async def get_requests():
            """Get the request log."""
            return JSONResponse(content=self.registry.log.to_dict())

        @app.get(f"{prefix}/models")
        async def get_models():
            """List defined models with their record counts."""
            database = self.registry.database
            return JSONResponse(content={
                'models': [
                    {'name': name, 'records': database.count(name) if database.has_table(name) else 0}
                    for name in self.registry.models
                ]
            })

        @app.get(f"{prefix}/metrics")
        async def get_metrics():
            """Get server metrics."""
            return JSONResponse(content=self.metrics.to_dict())

        @app.post(f"{prefix}/reset")
        async def reset():
            """Reset the registry and metrics."""
            self.registry.reset()
            self.metrics = MockMetrics()
            return JSONResponse(content={'status': 'reset'})

        # Main catch-all route for mocking
        @app.api_route("/{path:path}", methods=MOCKED_METHODS)
        async def mock_request(request: Request, path: str):
            """Handle incoming requests and serve mock responses."""
            return self._handle_request(request, path)

        return app

    def _handle_request(self, request: Request, path: str) -> Response:
        """
        Dispatch a request into the registry's network.

        Args:
            request: FastAPI Request object
            path: Request path without the leading slash

        Returns:
            Response with the encoded body, or a 404 JSON error
        """
        self.metrics.total_requests += 1

        method = request.method
        url = f"/{path}"
        if request.url.query:
            url = f"{url}?{request.url.query}"

        self.logger.debug(f"Incoming: {method} {url}")

        try:
            body = self.registry.network.request(method.lower(), url)
        except RequestNotFoundError as e:
            self.metrics.unmatched_requests += 1
            self.logger.warning(f"No match found for {method} {url}")
            return self._not_found(str(e), matched=False)
        except ResourceNotFoundError as e:
            self.metrics.matched_requests += 1
            self.metrics.not_found_resources += 1
            return self._not_found(str(e), matched=True)

        self.metrics.matched_requests += 1
        return Response(
            content=body,
            status_code=200,
            media_type=self.registry.encoder.content_type,
            headers={'X-Dupe-Matched': 'true'}
        )

    def _not_found(self, message: str, matched: bool) -> Response:
        return Response(
            content=json.dumps({'error': message}),
            status_code=404,
            media_type="application/json",
            headers={'X-Dupe-Matched': 'true' if matched else 'false'}
        )

    def get_app(self) -> FastAPI:
        """
        Get the FastAPI app instance for testing or custom deployment.

        Returns:
            FastAPI application instance
        """
        return self.app


def create_mock_app(registry: Optional[Any] = None, config: Optional[DupeConfig] = None) -> FastAPI:
    """
    Convenience function to build the mock server's FastAPI application.

    Example:
        app = create_mock_app(registry)
        client = TestClient(app)
    """
    return MockServer(registry, config=config).get_app()
