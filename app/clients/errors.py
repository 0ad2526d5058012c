"""
Exceptions raised by upstream API clients.
"""
from typing import Optional


class UpstreamError(Exception):
    """An upstream API call failed: transport error, non-2xx status, or GraphQL errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProfileNotFoundError(UpstreamError):
    """The social indexer has no Farcaster profile for the FID."""
