# ABOUTME: Synchronization layer: collection cache, mutation coordination, notifications.
# ABOUTME: Re-exports the public classes of the sync package.

from shelfsync.sync.cache import CollectionCache
from shelfsync.sync.mutations import Mutation, MutationCoordinator
from shelfsync.sync.notify import LoggingNotifier, Notifier, Outcome, RecordingNotifier

__all__ = [
    "CollectionCache",
    "LoggingNotifier",
    "Mutation",
    "MutationCoordinator",
    "Notifier",
    "Outcome",
    "RecordingNotifier",
]
