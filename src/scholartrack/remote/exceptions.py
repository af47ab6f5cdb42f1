"""Custom exceptions for the remote record store client."""


class RemoteStoreError(Exception):
    """Base exception for remote record store errors."""


class RecordNotFoundError(RemoteStoreError):
    """Record with given ID does not exist."""


class RemoteConfigError(RemoteStoreError):
    """Remote store credentials are missing or invalid."""
