"""Git repository access."""

from .repository import (
    DeletionError,
    FakeRepository,
    FetchError,
    GitRepository,
    HistoryLookupError,
    InvalidRepositoryError,
    RemoteDescriptor,
    RepositoryError,
)

__all__ = [
    "DeletionError",
    "FakeRepository",
    "FetchError",
    "GitRepository",
    "HistoryLookupError",
    "InvalidRepositoryError",
    "RemoteDescriptor",
    "RepositoryError",
]
