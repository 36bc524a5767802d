"""
Step sequencer for the preference wizard.
Five ordered steps gate on their required selection; the last step fetches
recommendations and moves the wizard into its terminal section.
"""

from dataclasses import dataclass  # step descriptors
from enum import Enum  # wizard sections
from typing import Callable, List, Optional, Sequence  # type hints

from loguru import logger  # console logger

from .errors import RemoteCallError, ValidationError  # failure types
from .models import PreferenceSelection  # selection record
from .preferences import PreferenceStore  # selection owner
from .schemas import FilmSummary  # result cards

SELECTION_REQUIRED = "Please make a selection before proceeding."
ALL_FIELDS_REQUIRED = "Please fill in all required fields before getting recommendations."
RECOMMENDATIONS_FAILED = "An error occurred while fetching recommendations. Please try again."


@dataclass(frozen=True)
class Step:
	title: str  # heading shown above the selector
	required_field: Optional[str] = None  # selection attribute that must be set to advance


STEPS = (
	Step("Mood", "mood"),
	Step("Language", "language"),
	Step("Genre", "genre"),
	Step("Actor"),
	Step("Release Date Range"),
)


class Section(str, Enum):
	PREFERENCES = "preferences"
	RECOMMENDATIONS = "recommendations"


class StepSequencer:
	"""
	State machine over step indices 0..N-1 plus the terminal recommendations
	section. The terminal section is entered only after the final step validates
	and the fetch succeeds; reset() is its only way out.
	"""

	def __init__(
		self,
		preferences: PreferenceStore,
		fetch_recommendations: Callable[[PreferenceSelection], List[FilmSummary]],
		steps: Sequence[Step] = STEPS,
	):
		self.preferences = preferences
		self.fetch_recommendations = fetch_recommendations
		self.steps = tuple(steps)
		self.current_step = 0
		self.section = Section.PREFERENCES
		self.recommendations: List[FilmSummary] = []
		self.error: Optional[str] = None

	@property
	def step(self) -> Step:
		return self.steps[self.current_step]

	@property
	def is_last_step(self) -> bool:
		return self.current_step == len(self.steps) - 1

	@property
	def is_complete(self) -> bool:
		return self.section is Section.RECOMMENDATIONS

	def _fail(self, message: str) -> None:
		self.error = message
		logger.debug(f"[Wizard] Step {self.current_step} blocked: {message}")
		raise ValidationError(message)

	def advance(self) -> bool:
		"""
		Move to the next step, or fetch recommendations from the last one.
		Raises ValidationError when a required selection is missing. Returns True
		when the wizard moved; False when the fetch failed or the wizard is
		already showing recommendations.
		"""
		if self.is_complete:
			logger.debug("[Wizard] advance() ignored in recommendations section")
			return False

		selection = self.preferences.selection
		if not self.is_last_step:
			field = self.step.required_field
			if field and not getattr(selection, field):
				self._fail(SELECTION_REQUIRED)
			self.current_step += 1
			self.error = None
			logger.debug(f"[Wizard] Advanced to step {self.current_step} ({self.step.title})")
			return True

		if selection.missing_required():
			self._fail(ALL_FIELDS_REQUIRED)

		logger.info(f"[Wizard] Requesting recommendations for {selection}")
		self.error = None
		try:
			results = self.fetch_recommendations(selection)
		except RemoteCallError as e:
			logger.error(f"[Wizard] Recommendation request failed: {e}")
			self.error = RECOMMENDATIONS_FAILED
			return False

		self.recommendations = list(results)
		self.section = Section.RECOMMENDATIONS
		logger.info(f"[Wizard] Showing {len(self.recommendations)} recommendations")
		return True

	def retreat(self) -> None:
		if self.current_step > 0:
			self.current_step -= 1

	def reset(self, clear_selection: bool = True) -> None:
		"""Start over: back to the first step and out of the recommendations section."""
		self.current_step = 0
		self.section = Section.PREFERENCES
		self.recommendations = []
		self.error = None
		if clear_selection:
			self.preferences.reset()
		logger.debug("[Wizard] Reset to first step")
