"""
Host map surface contract.

The clusterer never talks to a concrete map platform. It consumes the
``MapSurface`` protocol below: projection between geographic and pixel
space, the current viewport and zoom, event subscription, overlay
attachment and a scheduler for work that must run after the current pass.

Classes:
    Subscription: Handle returned by ``add_listener``; ``remove()`` releases it.
    EventBus: Listener registry keyed by (target, event name).
    DeferredQueue: FIFO of callbacks to run on a later turn of the host loop.
    Overlay: Protocol for objects attached to a surface.
    MapSurface: Protocol the host map platform implements.
"""

# Standard Library Imports
from collections import deque
from logging import Logger
from typing import Any, Callable, Deque, Dict, List, Protocol, Tuple, runtime_checkable

# Internal Imports
from markercluster.core.models.geo.latlng import LatLng, LatLngBounds, Point
from markercluster.utils.logging import get_logger

# Initialize logger
logger: Logger = get_logger(__name__)

Callback = Callable[..., Any]


class Subscription:
    """A registered listener. Removing it twice is harmless."""

    def __init__(self, bus: "EventBus", key: Tuple[int, str], callback: Callback):
        self._bus = bus
        self._key = key
        self.callback = callback
        self.active = True

    @property
    def event(self) -> str:
        return self._key[1]

    def remove(self) -> None:
        if not self.active:
            return
        self.active = False
        self._bus._discard(self)


class EventBus:
    """Listener registry keyed by the identity of the target and the event name."""

    def __init__(self):
        self._listeners: Dict[Tuple[int, str], List[Subscription]] = {}

    @staticmethod
    def _key(target: Any, event: str) -> Tuple[int, str]:
        return id(target), str(getattr(event, "value", event))

    def add_listener(self, target: Any, event: str, callback: Callback) -> Subscription:
        """Register ``callback`` for ``event`` raised on ``target``.

        Args:
            target: Object the event is raised on
            event: Event name
            callback: Called with the arguments passed to ``trigger``

        Returns:
            Subscription: Handle used to release the listener
        """
        key = self._key(target, event)
        subscription = Subscription(self, key, callback)
        self._listeners.setdefault(key, []).append(subscription)
        return subscription

    def trigger(self, target: Any, event: str, *args: Any) -> int:
        """Invoke every listener of ``event`` on ``target``.

        Returns:
            int: Number of listeners invoked
        """
        invoked = 0
        for subscription in list(self._listeners.get(self._key(target, event), ())):
            # A listener may remove a later one while we iterate
            if subscription.active:
                subscription.callback(*args)
                invoked += 1
        return invoked

    def listener_count(self, target: Any, event: str) -> int:
        return len(self._listeners.get(self._key(target, event), ()))

    def _discard(self, subscription: Subscription) -> None:
        listeners = self._listeners.get(subscription._key)
        if not listeners:
            return
        listeners[:] = [s for s in listeners if s is not subscription]
        if not listeners:
            del self._listeners[subscription._key]


class DeferredQueue:
    """Callbacks scheduled to run after the current synchronous pass."""

    def __init__(self):
        self._tasks: Deque[Callback] = deque()

    def __len__(self) -> int:
        return len(self._tasks)

    def schedule(self, callback: Callback) -> None:
        self._tasks.append(callback)

    def run_pending(self) -> int:
        """Run queued callbacks in FIFO order, including any they schedule.

        Returns:
            int: Number of callbacks run
        """
        count = 0
        while self._tasks:
            task = self._tasks.popleft()
            task()
            count += 1
        if count:
            logger.debug(f"Ran {count} deferred task(s)")
        return count


@runtime_checkable
class Overlay(Protocol):
    """An object drawn by the host surface once attached."""

    def on_add(self) -> None: ...

    def on_remove(self) -> None: ...


@runtime_checkable
class MapSurface(Protocol):
    """What the clusterer needs from the host map platform."""

    def from_lat_lng_to_pixel(self, point: LatLng) -> Point: ...

    def from_pixel_to_lat_lng(self, pixel: Point) -> LatLng: ...

    def get_bounds(self) -> LatLngBounds: ...

    def get_zoom(self) -> int: ...

    def fit_bounds(self, bounds: LatLngBounds) -> None: ...

    def add_listener(self, target: Any, event: str, callback: Callback) -> Subscription: ...

    def trigger(self, target: Any, event: str, *args: Any) -> int: ...

    def attach_overlay(self, overlay: Overlay) -> None: ...

    def detach_overlay(self, overlay: Overlay) -> None: ...

    def schedule(self, callback: Callback) -> None: ...
