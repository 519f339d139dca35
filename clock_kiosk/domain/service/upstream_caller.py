import threading
from collections import defaultdict
from concurrent.futures import Future, TimeoutError as FutureTimeout
from typing import Any, Callable

from ..errors import UpstreamTimeout
from ...utils import get_logger

logger = get_logger(__name__)


class UpstreamCaller:
    """Runs calls to external collaborators with a bounded wait.

    Each attempt runs on its own daemon thread, so a call that never returns
    only holds its own thread and other collaborators keep answering. A call
    that does not answer within ``timeout_seconds`` is retried up to
    ``max_retries`` more times before ``UpstreamTimeout`` is raised. At most
    ``max_pending`` unfinished attempts are kept per collaborator; past that
    the call fails immediately instead of piling up threads.
    """

    def __init__(self, timeout_seconds: float, max_retries: int, max_pending: int = 4):
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.max_pending = max_pending
        self._lock = threading.Lock()
        self._pending: dict[str, int] = defaultdict(int)

    def pending(self, name: str) -> int:
        with self._lock:
            return self._pending[name]

    def call(self, name: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            future = self._submit(name, fn, args, kwargs)
            if future is None:
                logger.error("%s still has %d calls hanging, not calling again", name, self.max_pending)
                raise UpstreamTimeout(f"{name} is not responding")
            try:
                return future.result(timeout=self.timeout_seconds)
            except FutureTimeout:
                logger.warning(
                    "%s timed out after %.1fs (attempt %d/%d)",
                    name,
                    self.timeout_seconds,
                    attempt,
                    attempts,
                )
        logger.error("%s did not respond after %d attempts", name, attempts)
        raise UpstreamTimeout(f"{name} did not respond after {attempts} attempts")

    def _submit(self, name: str, fn: Callable[..., Any], args, kwargs) -> Future | None:
        with self._lock:
            if self._pending[name] >= self.max_pending:
                return None
            self._pending[name] += 1

        future: Future = Future()

        def run():
            try:
                if not future.set_running_or_notify_cancel():
                    return
                try:
                    result = fn(*args, **kwargs)
                except BaseException as e:
                    future.set_exception(e)
                else:
                    future.set_result(result)
            finally:
                with self._lock:
                    self._pending[name] -= 1

        threading.Thread(target=run, name=f"upstream-{name}", daemon=True).start()
        return future
