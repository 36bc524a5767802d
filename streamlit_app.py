"""
Streamlit UI for MoodMatch Films.
Calls the recommendation backend (default http://localhost:5000) and the TMDB
catalog; liked movies are cached locally and synced per signed-in user.

Run UI:   streamlit run streamlit_app.py
"""

# Streamlit framework to build the interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import List, Optional  # type hints

# Console logging
from loguru import logger  # console logger

from moodmatch.api_client import ApiClient  # backend endpoints
from moodmatch.auth import Identity, streamlit_identity  # signed-in user
from moodmatch.catalog import CatalogClient  # TMDB lookups
from moodmatch.choices import GENRES, LANGUAGES, MOODS  # wizard options
from moodmatch.config import MAX_RELEASE_YEAR, MIN_RELEASE_YEAR, Settings, setup_logging  # settings
from moodmatch.debounce import DebouncedSearch  # actor/title search boxes
from moodmatch.errors import RemoteCallError, ValidationError  # failure types
from moodmatch.likes import LikedMovieStore  # liked-movie set
from moodmatch.pager import ResultPager  # three-card pages
from moodmatch.preferences import PreferenceStore  # selection + query string
from moodmatch.schemas import FilmSummary  # result cards
from moodmatch.storage import LocalStorage  # local durable cache
from moodmatch.wizard import StepSequencer  # step state machine

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="MoodMatch Films", layout="wide")


# Settings and clients are shared by every session
@st.cache_resource
def init_settings() -> Settings:
	settings = Settings.from_env()  # env + .env
	setup_logging(settings.log_level)  # one sink at the configured level
	logger.info(f"[UI] Using backend {settings.api_url}")
	return settings


@st.cache_resource
def init_clients():
	settings = init_settings()
	api = ApiClient(settings.api_url, timeout=settings.request_timeout)
	catalog = CatalogClient(settings.tmdb_api_key, timeout=settings.request_timeout)
	storage = LocalStorage(settings.storage_path)
	return api, catalog, storage


settings = init_settings()
api, catalog, storage = init_clients()
identity: Optional[Identity] = streamlit_identity()  # None for anonymous users


def init_session_state() -> None:
	"""Create the per-session stores once."""
	state = st.session_state
	if "preferences" not in state:
		state.preferences = PreferenceStore(st.query_params)  # mirrors into the URL
		state.preferences.load_from_query()  # restore a shared link
	if "wizard" not in state:
		state.wizard = StepSequencer(state.preferences, api.search_films)
	if "likes" not in state:
		state.likes = LikedMovieStore(api, storage, streamlit_identity)
		state.likes.hydrate()  # this user's local cache slot first, always available
		state.likes_owner = identity.user_id if identity else None
	if "actor_search" not in state:
		state.actor_search = DebouncedSearch(catalog.search_people, delay=settings.debounce_seconds)
	if "title_search" not in state:
		state.title_search = DebouncedSearch(catalog.search_movies, delay=settings.debounce_seconds)
	for name in ("rec_pager", "title_pager", "similar_pager"):
		if name not in state:
			state[name] = ResultPager()
	state.setdefault("selected_film", None)
	state.setdefault("describe_results", [])
	state.setdefault("synced_user", None)


init_session_state()

# Sign-in or sign-out switches to that user's cache slot
current_user = identity.user_id if identity else None
if st.session_state.likes_owner != current_user:
	st.session_state.likes.hydrate()
	st.session_state.likes_owner = current_user
	st.session_state.synced_user = None

# Reconcile likes with the remote store once per signed-in user
if identity is not None and st.session_state.synced_user != identity.user_id:
	if st.session_state.likes.sync_remote():
		st.session_state.synced_user = identity.user_id


# ----------------------------------------------------------------- widgets

def like_button(film: FilmSummary, key_prefix: str) -> None:
	"""Heart toggle; disabled for anonymous users."""
	likes: LikedMovieStore = st.session_state.likes
	liked = likes.is_liked(film.id)
	st.button(
		"♥ Liked" if liked else "♡ Like",
		key=f"{key_prefix}-like-{film.id}",
		on_click=likes.toggle,
		args=(film.id, not liked),
		disabled=identity is None,
		help=None if identity else "Sign in to like movies",
	)


def open_film(film_id: str) -> None:
	st.query_params["film"] = film_id


def film_card(film: FilmSummary, key_prefix: str) -> None:
	"""Poster, title, metadata and actions for one film."""
	if film.cover_image:
		st.image(film.cover_image, width="stretch")
	else:
		st.caption("No poster available")
	st.subheader(film.title)
	meta = []
	if film.year:
		meta.append(str(film.year))
	if film.rating is not None:
		meta.append(f"★ {film.rating:.1f}")
	if film.genres:
		meta.append(", ".join(film.genres))
	if meta:
		st.caption(" | ".join(meta))
	c1, c2 = st.columns(2)
	with c1:
		like_button(film, key_prefix)
	with c2:
		st.button("View Details", key=f"{key_prefix}-open-{film.id}", on_click=open_film, args=(film.id,))


def paged_cards(pager: ResultPager, key_prefix: str, on_select=None) -> None:
	"""Render the visible window of a pager with wraparound navigation."""
	if not pager.films:
		return
	columns = st.columns(pager.page_size)
	for col, film in zip(columns, pager.visible):
		with col:
			film_card(film, key_prefix)
			if on_select is not None:
				st.button("Select", key=f"{key_prefix}-select-{film.id}", on_click=on_select, args=(film,))
	if pager.has_navigation:  # hidden for a single page
		c1, c2, c3 = st.columns([1, 2, 1])
		with c1:
			st.button("◀ Previous", key=f"{key_prefix}-prev", on_click=pager.previous)
		with c2:
			st.caption(f"Page {pager.current_page + 1} of {pager.page_count}")
		with c3:
			st.button("Next ▶", key=f"{key_prefix}-next", on_click=pager.next)


def option_grid(options, selected: Optional[str], on_pick, key_prefix: str) -> None:
	"""Buttons in rows of four; the selected option is highlighted."""
	columns = st.columns(4)
	for i, option in enumerate(options):
		with columns[i % 4]:
			st.button(
				option,
				key=f"{key_prefix}-{option}",
				type="primary" if option == selected else "secondary",
				on_click=on_pick,
				args=(option,),
			)


# ------------------------------------------------------------ wizard steps

def mood_step(prefs: PreferenceStore) -> None:
	option_grid(MOODS, prefs.selection.mood, prefs.set_mood, "mood")


def language_step(prefs: PreferenceStore) -> None:
	option_grid(LANGUAGES, prefs.selection.language, prefs.set_language, "language")


def genre_step(prefs: PreferenceStore) -> None:
	option_grid(GENRES, prefs.selection.genre, prefs.set_genre, "genre")


def actor_step(prefs: PreferenceStore) -> None:
	search: DebouncedSearch = st.session_state.actor_search

	def on_change() -> None:
		search.submit(st.session_state.actor_query)
		search.flush()  # the text box only commits once typing has settled

	st.text_input("Search for an actor:", key="actor_query", placeholder="Enter actor name", on_change=on_change)
	if search.error:
		st.error(search.error)
	if prefs.selection.actor:
		st.caption(f"Selected: {prefs.selection.actor.name}")
		st.button("Clear actor", on_click=prefs.set_actor, args=(None,))
	if search.results:
		st.write("Select an actor:")
		columns = st.columns(4)
		for i, actor in enumerate(search.results):
			with columns[i % 4]:
				if actor.profile_image_url:
					st.image(actor.profile_image_url, width=92)
				chosen = prefs.selection.actor and prefs.selection.actor.id == actor.id
				st.button(
					actor.name,
					key=f"actor-{actor.id}",
					type="primary" if chosen else "secondary",
					on_click=prefs.set_actor,
					args=(actor,),
				)


def release_date_step(prefs: PreferenceStore) -> None:
	hint = f"{MIN_RELEASE_YEAR}-{MAX_RELEASE_YEAR}"
	start = st.text_input("Release Date Start", value=prefs.selection.release_date_start or "", placeholder=hint)
	end = st.text_input("Release Date End", value=prefs.selection.release_date_end or "", placeholder=hint)
	if not prefs.set_release_date_start(start):
		st.warning(f"Release Date Start must be between {hint}.")
	if not prefs.set_release_date_end(end):
		st.warning(f"Release Date End must be between {hint}.")
	warning = prefs.selection.date_range_warning()
	if warning:
		st.error(warning)  # shown, never blocks submission


STEP_RENDERERS = [mood_step, language_step, genre_step, actor_step, release_date_step]


def preference_badges(prefs: PreferenceStore) -> None:
	sel = prefs.selection
	badges = [sel.mood, sel.language, sel.genre, sel.actor.name if sel.actor else None]
	if sel.release_date_start:
		badges.append(f"From: {sel.release_date_start}")
	if sel.release_date_end:
		badges.append(f"To: {sel.release_date_end}")
	st.markdown(" ".join(f"`{b}`" for b in badges if b))


def wizard_page() -> None:
	wizard: StepSequencer = st.session_state.wizard
	prefs: PreferenceStore = st.session_state.preferences
	pager: ResultPager = st.session_state.rec_pager

	if wizard.is_complete:
		st.header("Your Personalized Recommendations")
		st.write("Your Preferences:")
		preference_badges(prefs)
		if not wizard.recommendations:
			st.info("No films matched your preferences.")
		paged_cards(pager, "rec")
		if st.button("Start Over"):
			wizard.reset()
			pager.reset([])
			st.rerun()
		return

	st.header("Find your next film by mood")
	st.subheader(wizard.step.title)
	st.caption(f"Step {wizard.current_step + 1} of {len(wizard.steps)}")
	STEP_RENDERERS[wizard.current_step](prefs)

	if wizard.error:
		st.error(wizard.error)

	c1, c2 = st.columns(2)
	with c1:
		if st.button("◀ Previous", disabled=wizard.current_step == 0):
			wizard.retreat()
			st.rerun()
	with c2:
		label = "Get Recommendations" if wizard.is_last_step else "Next ▶"
		if st.button(label, type="primary"):
			try:
				with st.spinner("Loading recommendations..."):
					moved = wizard.advance()
			except ValidationError:
				moved = False  # message is on wizard.error
			if moved and wizard.is_complete:
				pager.reset(wizard.recommendations)
			st.rerun()


# ------------------------------------------------------------- other pages

def search_similar_page() -> None:
	st.header("Find Similar Films")
	search: DebouncedSearch = st.session_state.title_search
	title_pager: ResultPager = st.session_state.title_pager
	similar_pager: ResultPager = st.session_state.similar_pager

	def on_change() -> None:
		st.session_state.selected_film = None  # a new query clears the selection
		search.submit(st.session_state.title_query)
		search.flush()
		title_pager.reset(search.results)

	def select(film: Optional[FilmSummary]) -> None:
		st.session_state.selected_film = film

	st.text_input("Search for a film", key="title_query", placeholder="Enter a film title", on_change=on_change)
	if search.error:
		st.error(search.error)

	selected: Optional[FilmSummary] = st.session_state.selected_film
	if selected is not None:
		c1, c2 = st.columns([1, 2])
		with c1:
			if selected.cover_image:
				st.image(selected.cover_image, width="stretch")
		with c2:
			st.subheader(selected.title)
			if selected.year:
				st.caption(str(selected.year))
			st.button("Back to Results", on_click=select, args=(None,))
			like_button(selected, "selected")
			if st.button("Find Similar Films", type="primary"):
				with st.spinner("Searching..."):
					try:
						similar_pager.reset(api.search_similar_films(selected.id))
						st.session_state.selected_film = None
						search.submit("")  # clears the title results
						title_pager.reset([])
						st.rerun()
					except RemoteCallError:
						st.error("An error occurred while fetching similar films. Please try again.")
	else:
		paged_cards(title_pager, "title", on_select=select)

	if similar_pager.films:
		st.divider()
		st.subheader("Similar Films")
		paged_cards(similar_pager, "similar")


def describe_page() -> None:
	st.header("Describe a Film")
	with st.form("describe"):
		description = st.text_input("Enter a description for the film")
		submitted = st.form_submit_button("Submit")
	if submitted and description.strip():
		with st.spinner("Loading..."):
			try:
				st.session_state.describe_results = api.search_by_description(description.strip())
			except RemoteCallError:
				st.session_state.describe_results = []
				st.error("An error occurred while fetching films. Please try again.")
	results: List[FilmSummary] = st.session_state.describe_results
	columns = st.columns(3)
	for i, film in enumerate(results):
		with columns[i % 3]:
			film_card(film, "describe")


def liked_movies_page() -> None:
	st.header("Liked Movies")
	if identity is None:
		st.info("Sign in to see the movies you liked.")
		return
	likes: LikedMovieStore = st.session_state.likes
	with st.spinner("Loading liked movies..."):
		films = likes.liked_films(catalog)
	if not films:
		st.info("You haven't liked any movies yet.")
		return
	columns = st.columns(3)
	for i, film in enumerate(films):
		with columns[i % 3]:
			if film.cover_image:
				st.image(film.cover_image, width="stretch")
			st.subheader(film.title)
			st.button("Remove", key=f"remove-{film.id}", on_click=likes.remove, args=(film.id,))


def film_detail_page(film_id: str) -> None:
	def back() -> None:
		del st.query_params["film"]

	st.button("◀ Back", on_click=back)
	try:
		film = api.get_film(film_id)
	except RemoteCallError:
		logger.error(f"[UI] An error occurred while fetching film details for {film_id}")
		film = None
	if film is None:
		st.warning("Film not found")
		return

	st.title(film.title)
	like_button(film.summary(), "detail")
	c1, c2 = st.columns([1, 2])
	with c1:
		if film.cover_image:
			st.image(film.cover_image, width="stretch")
	with c2:
		st.subheader("About the Film")
		if film.description:
			st.write(film.description)
		st.write(f"Director: {film.director or 'Unknown'}")
		st.write(f"Release Date: {film.formatted_release_date or 'Unknown'}")
		st.write(f"Language: {film.language or 'Unknown'}")
		st.write(f"Rating: {film.rating or 'N/A'}")
		st.write(f"Genres: {', '.join(film.genres)}")

		if film.actors:
			st.subheader("Cast")
			columns = st.columns(5)
			for i, actor in enumerate(film.actors):
				with columns[i % 5]:
					if actor.profile_path:
						st.image(actor.profile_path, width=80)
					st.caption(actor.name)

		if film.trailer_url:
			st.subheader("Trailer")
			st.video(film.trailer_url)


# ------------------------------------------------------------------ layout

with st.sidebar:
	st.title("🎬 MoodMatch Films")
	page = st.radio("Navigate", ["Mood Match", "Search Similar", "Describe", "Liked Movies"])
	st.markdown("---")
	if identity is not None:
		st.caption(f"Signed in as {identity.user_id}")
		if hasattr(st, "logout"):
			st.button("Sign out", on_click=st.logout)
	elif hasattr(st, "login"):
		st.button("Sign in", on_click=st.login)

film_param = st.query_params.get("film")
if film_param:
	film_detail_page(film_param)
elif page == "Mood Match":
	wizard_page()
elif page == "Search Similar":
	search_similar_page()
elif page == "Describe":
	describe_page()
else:
	liked_movies_page()
