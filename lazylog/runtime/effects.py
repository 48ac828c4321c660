"""Execution of deferred effects outside the view model.

Transitions only describe follow-up work; these helpers run it and feed the
resulting messages back in order. :class:`EffectRunner` runs effects on a
worker pool for the interactive loop, :func:`run_until_idle` runs them inline.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from queue import Empty, Queue

from loguru import logger

from ..messages import Effect, ErrorOccurredMsg, Msg, QuitMsg
from ..views.model import ViewModel

# One worker keeps effect results in submission order.
EFFECT_WORKERS = 1


def run_effect(effect: Effect) -> Msg | None:
    """Run one effect, turning an exception into an error message."""
    try:
        return effect()
    except Exception as exc:
        logger.exception("effect failed")
        return ErrorOccurredMsg(exc)


class EffectRunner:
    """Runs effects on background workers and queues their messages.

    Only the loop thread reads the queue and updates the view model, so
    messages are still processed one at a time.
    """

    def __init__(self, max_workers: int = EFFECT_WORKERS) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lazylog-effect")
        self._messages: Queue[Msg] = Queue()

    def post(self, msg: Msg) -> None:
        self._messages.put(msg)

    def submit(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            future = self._executor.submit(run_effect, effect)
            future.add_done_callback(self._on_done)

    def _on_done(self, future: Future[Msg | None]) -> None:
        if future.cancelled():
            return
        msg = future.result()
        if msg is not None:
            self._messages.put(msg)

    def next_message(self, timeout: float | None = None) -> Msg | None:
        """Pop the next queued message, or ``None`` when none arrives in time."""
        try:
            if timeout is None:
                return self._messages.get_nowait()
            return self._messages.get(timeout=timeout)
        except Empty:
            return None

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


def run_until_idle(
    model: ViewModel,
    messages: Iterable[Msg] = (),
    *,
    effects: Iterable[Effect] = (),
    max_steps: int = 10_000,
) -> tuple[ViewModel, bool]:
    """Process ``messages`` and every message their effects produce, in FIFO order.

    ``effects`` run first, as the host loop does with initial effects.
    Returns the final model and whether a quit was requested; processing
    stops at the first :class:`QuitMsg`.
    """
    queue: deque[Msg] = deque()
    for effect in effects:
        produced = run_effect(effect)
        if produced is not None:
            queue.append(produced)
    queue.extend(messages)

    steps = 0
    while queue:
        steps += 1
        if steps > max_steps:
            raise RuntimeError(f"message processing did not settle after {max_steps} steps")
        msg = queue.popleft()
        if isinstance(msg, QuitMsg):
            return model, True
        model, follow_ups = model.update(msg)
        for effect in follow_ups:
            produced = run_effect(effect)
            if produced is not None:
                queue.append(produced)
    return model, False


__all__ = ["EFFECT_WORKERS", "EffectRunner", "run_effect", "run_until_idle"]
