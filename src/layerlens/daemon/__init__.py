"""Change notification for long-running sessions."""

from layerlens.daemon.watcher import SaveWatcher, is_relevant_change

__all__ = ["SaveWatcher", "is_relevant_change"]
