"""
Debounced search.
Remote lookups fire only after input settles for a quiet period, and only the
most recently issued lookup may update the results.
"""

import threading  # timers and the state lock
from typing import Callable, Generic, List, Optional, TypeVar  # type hints

from loguru import logger  # console logger

from .config import DEBOUNCE_SECONDS, MIN_QUERY_LENGTH  # defaults
from .errors import MoodMatchError  # lookup failures

T = TypeVar("T")

# Factory with threading.Timer's signature: (interval, function, args) -> timer
TimerFactory = Callable[..., threading.Timer]


class Debouncer:
	"""
	Trailing-edge debouncer: call() (re)starts a quiet-period timer, and the
	callback runs once with the arguments of the last call made before it expired.
	"""

	def __init__(self, delay: float, callback: Callable[..., None], timer_factory: TimerFactory = threading.Timer):
		self.delay = delay
		self.callback = callback
		self.timer_factory = timer_factory
		self._timer = None
		self._args: tuple = ()
		self._calls = 0  # identifies the live timer
		self._lock = threading.Lock()

	@property
	def pending(self) -> bool:
		return self._timer is not None

	def call(self, *args) -> None:
		with self._lock:
			if self._timer is not None:
				self._timer.cancel()
			self._args = args
			self._calls += 1
			self._timer = self.timer_factory(self.delay, self._fire, (self._calls,))
			self._timer.daemon = True
			self._timer.start()

	def _fire(self, call_id: int) -> None:
		with self._lock:
			if call_id != self._calls or self._timer is None:
				return  # superseded by a later call
			self._timer = None
			args = self._args
		self.callback(*args)

	def cancel(self) -> None:
		with self._lock:
			if self._timer is not None:
				self._timer.cancel()
			self._timer = None

	def flush(self) -> None:
		"""Run the pending call now instead of waiting for the timer."""
		with self._lock:
			if self._timer is None:
				return
			self._timer.cancel()
			self._timer = None
			args = self._args
		self.callback(*args)


class DebouncedSearch(Generic[T]):
	"""
	Free-text search box state.
	Short queries clear the results locally. Longer ones are debounced; each
	issued lookup gets a generation number and a response is applied only if
	its generation is still the latest.
	"""

	def __init__(
		self,
		lookup: Callable[[str], List[T]],
		min_length: int = MIN_QUERY_LENGTH,
		delay: float = DEBOUNCE_SECONDS,
		on_results: Optional[Callable[[List[T]], None]] = None,
		timer_factory: TimerFactory = threading.Timer,
	):
		self.lookup = lookup
		self.min_length = min_length
		self.on_results = on_results
		self.query = ""
		self.results: List[T] = []
		self.error: Optional[str] = None
		self._generation = 0
		self._lock = threading.RLock()  # held while publishing; on_results may re-submit
		self._debouncer = Debouncer(delay, self._run, timer_factory=timer_factory)

	@property
	def pending(self) -> bool:
		return self._debouncer.pending

	def submit(self, query: str) -> None:
		"""Record a keystroke's worth of input."""
		self.query = query
		if len(query.strip()) < self.min_length:
			self._debouncer.cancel()
			with self._lock:
				self._generation += 1  # in-flight responses are now stale
				self.results = []
				self.error = None
				self._publish([])
			return
		self._debouncer.call(query.strip())

	def flush(self) -> None:
		self._debouncer.flush()

	def _publish(self, results: List[T]) -> None:
		if self.on_results is not None:
			self.on_results(results)

	def _run(self, query: str) -> None:
		with self._lock:
			self._generation += 1
			generation = self._generation
		logger.debug(f"[Search] Lookup #{generation} for {query!r}")

		try:
			results = list(self.lookup(query))
		except MoodMatchError as e:
			logger.error(f"[Search] Lookup #{generation} for {query!r} failed: {e}")
			with self._lock:
				if generation == self._generation:
					self.error = str(e)
			return

		with self._lock:
			if generation != self._generation:
				logger.debug(f"[Search] Discarding stale lookup #{generation} (latest is #{self._generation})")
				return
			self.results = results
			self.error = None
			self._publish(results)  # under the lock so a newer lookup cannot publish first
