from typing import Callable, List

from .viewport import Viewport

ScrollListener = Callable[[Viewport], object]


class ScrollEventStream:
    """Synchronous scroll notifications, delivered in registration order.

    Listener errors are not caught here.
    """

    def __init__(self):
        self._listeners: List[ScrollListener] = []

    def add_listener(self, listener: ScrollListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ScrollListener) -> None:
        self._listeners.remove(listener)

    def dispatch(self, viewport: Viewport) -> None:
        for listener in list(self._listeners):
            listener(viewport)

    def __len__(self) -> int:
        return len(self._listeners)
