"""Application context: the shared-state handle.

The foreground UI loop and the network worker both hold the same AppContext.
Every read or write of ``state`` happens inside ``locked()``, and the lock is
never held across a network call.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from spotify_tui.core.config import Config, load_device_id
from spotify_tui.domain.playback import PlaybackTicker
from spotify_tui.ui.blessed.state import ApplicationState


@dataclass
class AppContext:
    """Configuration plus the lock-guarded application state.

    Attributes:
        config: Application configuration
        state: Mutable application state, guarded by ``lock``
        lock: Exclusive lock; readers and writers alike must hold it
    """

    config: Config
    state: ApplicationState
    lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def create(cls, config: Config) -> "AppContext":
        """Create the context used for the lifetime of the process.

        Args:
            config: Application configuration

        Returns:
            New AppContext with a fresh ApplicationState
        """
        state = ApplicationState(
            user_config=config,
            ticker=PlaybackTicker(
                poll_interval_ms=config.behavior.poll_interval_milliseconds
            ),
            device_id=load_device_id(),
        )
        return cls(config=config, state=state)

    @contextmanager
    def locked(self) -> Iterator[ApplicationState]:
        """Hold the lock for a short read or mutation of the state."""
        with self.lock:
            yield self.state
