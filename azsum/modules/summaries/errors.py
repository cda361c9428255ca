from typing import Any


class SummarizationError(Exception):
    """
    Base class for everything that can go wrong while producing a summary.

    `details` carries whatever helps diagnosing the failure, usually the
    error body returned by Azure.
    """

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(SummarizationError):
    """The inbound payload is missing a usable `text` field."""


class ProtocolError(SummarizationError):
    """Azure answered without something the jobs protocol requires."""


class JobFailedError(SummarizationError):
    """Azure reports the job as failed."""


class MalformedResponseError(SummarizationError):
    """Azure reports success but the result is not where it should be."""


class TransportError(SummarizationError):
    """A call to Azure could not be completed or returned an error status."""


class JobTimeoutError(SummarizationError):
    """The job did not reach a terminal status within the configured bounds."""


__all__ = [
    'JobFailedError',
    'JobTimeoutError',
    'MalformedResponseError',
    'ProtocolError',
    'SummarizationError',
    'TransportError',
    'ValidationError',
]
