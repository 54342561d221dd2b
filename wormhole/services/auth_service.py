"""Authentication façade over the profile service."""

import logging
from collections.abc import Callable
from typing import Any

from supabase import Client
from supabase_auth.types import User

from wormhole.core.config import Settings
from wormhole.models.profile import ProfileRow
from wormhole.services.profile_service import ProfileService, SignInResult, SignUpResult

logger = logging.getLogger(__name__)


class AuthService:
    """Account flows for UI callers.

    Sign-up, sign-in and sign-out log and re-raise failures. Reading the
    current user or profile never raises: an auth state that cannot be
    determined is reported as signed out.
    """

    def __init__(self, client: Client, settings: Settings | None = None) -> None:
        """Initialize auth service.

        Args:
            client: Supabase client whose session is managed.
            settings: Optional settings passed to the profile service.
        """
        self.profiles = ProfileService(client, settings)

    async def sign_up(self, username: str, email: str, password: str) -> SignUpResult:
        """Create an account and return it with its profile, if available."""
        try:
            result = await self.profiles.sign_up(username, email, password)
        except Exception as e:
            logger.error("Sign up failed: %s", e)
            raise

        if result.profile.degraded:
            logger.info("User %s signed up; profile pending: %s", result.user.id, result.profile.error)
        else:
            logger.info("User %s signed up with profile %s", result.user.id, result.profile.value["id"])
        return result

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Sign in and return the account with its profile."""
        try:
            result = await self.profiles.sign_in(email, password)
        except Exception as e:
            logger.error("Sign in failed: %s", e)
            raise

        logger.info("User %s signed in", result.user.id)
        return result

    async def sign_out(self) -> None:
        try:
            await self.profiles.sign_out()
        except Exception as e:
            logger.error("Sign out failed: %s", e)
            raise

        logger.info("User signed out")

    async def get_current_user(self) -> User | None:
        """Get the signed-in account, or None if it cannot be determined."""
        try:
            return await self.profiles.get_current_user()
        except Exception as e:
            logger.error("Get current user failed: %s", e)
            return None

    async def get_current_profile(self) -> ProfileRow | None:
        """Get the signed-in profile, or None if it cannot be determined."""
        try:
            return await self.profiles.get_current_profile()
        except Exception as e:
            logger.error("Get current profile failed: %s", e)
            return None

    def on_auth_state_change(self, callback: Callable[[User | None], Any]) -> Callable[[], None]:
        """Listen to auth state changes.

        Args:
            callback: Called with the current user, or None after sign-out.

        Returns:
            Callable: Stops the listener when called.
        """
        subscription = self.profiles.on_auth_state_change(callback)

        def unsubscribe() -> None:
            subscription.unsubscribe()

        return unsubscribe
