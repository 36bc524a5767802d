"""
Authenticated identity as seen by the client.
The identity provider itself is external; this module only carries its result.
"""

from dataclasses import dataclass  # value object
from typing import Callable, Dict, Optional  # type hints

from loguru import logger  # console logger


@dataclass(frozen=True)
class Identity:
	user_id: str  # provider subject id
	token: str = ""  # session token, may be empty when the provider exposes none

	def auth_headers(self) -> Dict[str, str]:
		"""Headers the backend expects on per-user endpoints."""
		return {
			"Authorization": f"Bearer {self.token}",
			"User-ID": self.user_id,
		}


# Returns the signed-in identity, or None for anonymous users
IdentityProvider = Callable[[], Optional[Identity]]


def streamlit_identity() -> Optional[Identity]:
	"""
	Read the signed-in user from Streamlit's OIDC integration (st.user).
	Anonymous sessions, and deployments without auth configured, yield None.
	"""
	import streamlit as st  # imported lazily so the library works without a UI

	user = getattr(st, "user", None)
	if user is None or not user.get("is_logged_in", False):
		return None

	user_id = user.get("sub") or user.get("email")
	if not user_id:
		logger.warning("[Auth] Signed-in user has neither 'sub' nor 'email'; treating as anonymous")
		return None

	token = ""
	try:
		token = user.tokens.get("id", "") or ""
	except (AttributeError, KeyError):
		logger.debug("[Auth] Provider exposes no tokens; sending an empty bearer token")
	return Identity(user_id=str(user_id), token=token)
