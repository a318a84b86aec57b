"""
Streamlit UI for Movie Explorer.
Searches TMDB through the local FastAPI proxy, shows movie details, and keeps
a favorites list with your own 1-5 rating and note, saved on this machine.

Run API:  uvicorn api:app --reload
Run UI:   streamlit run streamlit_app.py
"""

# Run controller coroutines from Streamlit callbacks
import asyncio  # event loop per user action
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Console logging
from loguru import logger  # console logger

# Local modules: configuration, proxy client, persistence and state
from movie_explorer.config import Settings, configure_logging  # env-based settings
from movie_explorer.client import ProxyClient  # HTTP client for the proxy API
from movie_explorer.controller import (  # application state
	AppController,
	DetailsError,
	DetailsLoaded,
	DetailsLoading,
	SearchStatus,
)
from movie_explorer.favorites_store import FavoritesStore, FileStorage  # local persistence
from movie_explorer.models import MAX_RATING, MIN_RATING  # rating bounds
from movie_explorer.presentation import poster_url, release_year, runtime_label, truncate_overview  # formatting

RATING_CHOICES = list(range(MIN_RATING, MAX_RATING + 1))  # 1..5

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Explorer", layout="wide")  # wide layout

# Settings are read once per session
if "settings" not in st.session_state:
	st.session_state.settings = Settings.from_env()  # env + optional .env
	configure_logging(st.session_state.settings.log_level)  # single stderr sink
settings: Settings = st.session_state.settings

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", settings.api_url)  # where the proxy lives


def get_controller(base_url: str) -> AppController:
	"""Return this session's controller, rebuilding it when the API URL changes."""
	controller = st.session_state.get("controller")
	if controller is None or controller.client.base_url != base_url.rstrip("/"):
		store = FavoritesStore(FileStorage(settings.favorites_dir))  # favorites on local disk
		controller = AppController(client=ProxyClient(base_url), store=store)  # loads favorites once
		st.session_state.controller = controller
		logger.info(f"[UI] Controller ready with {controller.favorite_count} favorites, API at {base_url}")
	return controller


controller = get_controller(api_url)

# Quick reachability probe so users know whether searches can work
if controller.client.is_available():
	st.sidebar.success("API reachable.")  # success note
else:
	st.sidebar.error("API not reachable. Start it with `uvicorn api:app --reload`.")  # error note


# ---- callbacks (run before the next rerun renders) ----------------------

def on_search():
	asyncio.run(controller.search(st.session_state.query))


def on_open_details(movie_id: int):
	asyncio.run(controller.open_details(movie_id))


def on_rating_change(movie_id: int):
	controller.update_favorite(movie_id, rating=st.session_state[f"rating_{movie_id}"])


def on_note_change(movie_id: int):
	controller.update_favorite(movie_id, note=st.session_state[f"note_{movie_id}"])


# ---- header -------------------------------------------------------------

head_left, head_right = st.columns([4, 1])
with head_left:
	st.title("🎬 Movie Explorer")  # friendly header
	st.caption("Search movies, view details, and save favorites with your rating & notes.")
with head_right:
	st.metric("Favorites", controller.favorite_count)  # badge with the count


# ---- details overlay ----------------------------------------------------

def render_details():
	state = controller.details
	with st.container(border=True):
		_, top_right = st.columns([5, 1])  # push the button to the right
		with top_right:
			st.button("Close", key="close_details", on_click=controller.close_details)

		if isinstance(state, DetailsLoading):
			st.info("Loading details…")
		elif isinstance(state, DetailsError):
			st.error(state.message)
		elif isinstance(state, DetailsLoaded):
			details = state.details
			c1, c2 = st.columns([1, 3])  # poster column + text column
			with c1:
				url = poster_url(details.poster_path, "w342")
				if url:
					st.image(url)  # poster
			with c2:
				st.subheader(details.title)
				st.caption(f"Year: {release_year(details.release_date)} · Runtime: {runtime_label(details.runtime)}")
				st.write(details.overview or "No overview available.")


if controller.details_open:
	render_details()


favorites_col, search_col = st.columns(2)  # two panels side by side

# ---- favorites panel ----------------------------------------------------

with favorites_col:
	st.subheader("Favorites")
	st.caption("Saved locally")

	if not controller.favorites:
		st.info("No favorites yet. Add some from search results.")

	for fav in controller.favorites:
		with st.container(border=True):
			c1, c2 = st.columns([1, 4])  # small image column + large text column
			with c1:
				url = poster_url(fav.poster_path)
				if url:
					st.image(url)  # poster
			with c2:
				st.markdown(f"**{fav.title}** ({release_year(fav.release_date)})")
				st.selectbox(
					"Rating",
					RATING_CHOICES,
					index=RATING_CHOICES.index(fav.rating),
					key=f"rating_{fav.id}",
					on_change=on_rating_change,
					args=(fav.id,),
				)
				st.text_area(
					"Note",
					value=fav.note,
					key=f"note_{fav.id}",
					placeholder="Optional note...",
					height=68,
					on_change=on_note_change,
					args=(fav.id,),
				)
				st.button("Remove", key=f"remove_fav_{fav.id}", on_click=controller.remove_favorite, args=(fav.id,))


# ---- search panel -------------------------------------------------------

with search_col:
	st.subheader("Search")
	st.caption("TMDB via proxy")

	with st.form("search_form"):
		st.text_input("Movie title", key="query", placeholder="Search by title...")
		st.form_submit_button("Search", type="primary", on_click=on_search)

	search = controller.search_state
	if search.status is SearchStatus.ERROR:
		st.error(search.error)

	for movie in search.results:
		with st.container(border=True):
			c1, c2 = st.columns([1, 4])
			with c1:
				url = poster_url(movie.poster_path)
				if url:
					st.image(url)
			with c2:
				st.markdown(f"**{movie.title}** ({release_year(movie.release_date)})")
				st.write(truncate_overview(movie.overview))  # synopsis preview
				b1, b2 = st.columns(2)
				with b1:
					st.button("Details", key=f"details_{movie.id}", on_click=on_open_details, args=(movie.id,))
				with b2:
					if controller.is_favorite(movie.id):
						st.button("Unfavorite", key=f"unfav_{movie.id}", on_click=controller.remove_favorite, args=(movie.id,))
					else:
						st.button("Favorite", key=f"fav_{movie.id}", type="primary", on_click=controller.add_favorite, args=(movie,))

	if search.status is SearchStatus.IDLE:
		st.info("Try searching for “Batman”, “Inception”, “Harry Potter”, etc.")
