"""
Dupe Errors

Exception hierarchy shared by the record store and the mock network.
Every error is raised at the point of the offending call and is never
retried internally.
"""


class DupeError(Exception):
    """Base class for all Dupe errors."""


class UnknownVerbError(DupeError):
    """A mock was declared with an HTTP verb Dupe does not recognize."""


class InvalidArgumentError(DupeError, ValueError):
    """Malformed arguments, e.g. a non-regex URL pattern or a non-mapping record payload."""


class InvalidDefinitionError(DupeError, ValueError):
    """Malformed model definition call or conflicting attribute rules."""


class UnknownTableError(DupeError, LookupError):
    """Database operation against a model whose table was never created."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"No table exists for model '{model_name}'")


class ResourceNotFoundError(DupeError, LookupError):
    """A mock's response-producer found no record for the requested URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Failed for request {url}")


class RequestNotFoundError(DupeError, LookupError):
    """No registered mock matches a dispatched request."""

    def __init__(self, verb: str, url: str):
        self.verb = verb
        self.url = url
        super().__init__(f"No mocked service response found for '{verb.upper()} {url}'")
