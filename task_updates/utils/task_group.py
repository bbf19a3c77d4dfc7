import threading
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any


class TaskCancelledError(Exception):
    pass


class TaskGroup:
    """Runs callables on a thread pool and fails as a unit.

    The first task to raise is recorded once in the group's error slot and
    the shared cancellation event is set. Tasks that have not started yet are
    cancelled; running tasks can poll ``cancelled`` or call
    ``raise_if_cancelled`` to stop early. ``join`` waits for every task and
    then raises the recorded error, or returns the results in submission
    order.
    """

    def __init__(self, max_workers: int):
        self._executor: ThreadPoolExecutor = ThreadPoolExecutor(max_workers=max(1, max_workers))
        self._futures: list[Future] = []
        self._cancel_event: threading.Event = threading.Event()
        self._error_lock: threading.Lock = threading.Lock()
        self._first_error: BaseException | None = None

    def __enter__(self) -> "TaskGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc is not None:
            self._cancel_event.set()
        self._executor.shutdown(wait=True, cancel_futures=True)

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise TaskCancelledError("task group was cancelled")

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        future = self._executor.submit(self._run, fn, *args)
        self._futures.append(future)
        return future

    def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        self.raise_if_cancelled()
        try:
            return fn(*args)
        except TaskCancelledError:
            raise
        except Exception as e:
            self._record_error(e)
            raise

    def _record_error(self, error: BaseException) -> None:
        with self._error_lock:
            if self._first_error is None:
                self._first_error = error
        self._cancel_event.set()

    def join(self) -> list[Any]:
        _, pending = wait(self._futures, return_when=FIRST_EXCEPTION)
        if self._cancel_event.is_set():
            for future in pending:
                future.cancel()
        wait(self._futures)

        if self._first_error is not None:
            raise self._first_error
        return [future.result() for future in self._futures]
