"""Profile data access and account flows."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from supabase import Client
from supabase_auth.types import Session, Subscription, User
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from wormhole.api.middleware.error_handler import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from wormhole.core.config import Settings, get_settings
from wormhole.core.supabase import first_row, single_row
from wormhole.models.profile import PROFILE_COLUMNS, ProfileRow, PublicProfileCard
from wormhole.models.result import Lookup
from wormhole.models.worm import WormStatus
from wormhole.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)

# Statuses allowed for the bulk visibility change
BULK_WORM_STATUSES = (WormStatus.PRIVATE, WormStatus.FRIENDS)


@dataclass
class SignUpResult:
    """Outcome of sign-up.

    profile is degraded when the trigger-created row was not readable
    within the polling budget.
    """

    user: User
    session: Session | None
    profile: Lookup[ProfileRow] = field(default_factory=Lookup)


@dataclass
class SignInResult:
    """Outcome of a successful password sign-in."""

    user: User
    session: Session | None
    profile: ProfileRow


class ProfileService:
    """Data access for the profiles table and the account lifecycle."""

    def __init__(self, client: Client, settings: Settings | None = None) -> None:
        """Initialize profile service.

        Args:
            client: Supabase client carrying the caller's session.
            settings: Settings for the sign-up polling budget.
        """
        self.client = client
        self.settings = settings or get_settings()

    async def get_by_auth_id(self, auth_id: str) -> ProfileRow | None:
        """Get a profile by auth account ID.

        Returns:
            ProfileRow | None: The profile or None if not found.
        """
        response = (
            self.client.table("profiles")
            .select(PROFILE_COLUMNS)
            .eq("auth_id", str(auth_id))
            .maybe_single()
            .execute()
        )
        return single_row(response)

    async def get_by_profile_id(self, profile_id: int) -> ProfileRow | None:
        """Get a profile by its numeric ID.

        Returns:
            ProfileRow | None: The profile or None if not found.
        """
        response = (
            self.client.table("profiles")
            .select(PROFILE_COLUMNS)
            .eq("id", profile_id)
            .maybe_single()
            .execute()
        )
        return single_row(response)

    async def get_public_card(self, profile_id: int) -> PublicProfileCard | None:
        """Get the public card of a profile."""
        response = (
            self.client.table("public_profile_cards")
            .select("profile_id, username, badge_slug, badge_url")
            .eq("profile_id", profile_id)
            .maybe_single()
            .execute()
        )
        return single_row(response)

    async def get_current_user(self) -> User | None:
        """Get the auth account of the client's session, if any."""
        response = self.client.auth.get_user()
        if not response:
            return None
        return response.user

    async def get_current_profile(self) -> ProfileRow | None:
        """Get the profile of the signed-in account.

        Returns:
            ProfileRow | None: None when there is no user or no active session.
        """
        user = await self.get_current_user()
        if not user:
            return None

        session = self.client.auth.get_session()
        if not session:
            return None

        return await self.get_by_auth_id(user.id)

    async def sign_up(self, username: str, email: str, password: str) -> SignUpResult:
        """Create an account and read back its trigger-created profile.

        The profile row is written by a database trigger after the account
        exists, so it is polled with bounded backoff. Failing to read it does
        not fail sign-up; the result's profile lookup is degraded instead.

        Args:
            username: Username stored in user metadata for the trigger.
            email: Account email.
            password: Account password.

        Returns:
            SignUpResult: The user, session and profile lookup.

        Raises:
            ValidationError: If no user was created.
        """
        response = self.client.auth.sign_up(
            {
                "email": email,
                "password": password,
                "options": {"data": {"username": username}},
            }
        )

        user = response.user
        if not user:
            raise ValidationError("Failed to create user")

        if response.session is None:
            # Email confirmation pending; RLS hides the profile until sign-in
            profile = Lookup[ProfileRow](error="No active session after sign-up")
        else:
            profile = await self._wait_for_profile(user.id)

        return SignUpResult(user=user, session=response.session, profile=profile)

    async def _wait_for_profile(self, auth_id: str) -> Lookup[ProfileRow]:
        retrying = AsyncRetrying(
            retry=retry_if_result(lambda profile: profile is None) | retry_if_exception_type(Exception),
            stop=stop_after_attempt(self.settings.signup_profile_poll_attempts),
            wait=wait_exponential(
                multiplier=self.settings.signup_profile_poll_min_wait,
                min=self.settings.signup_profile_poll_min_wait,
                max=self.settings.signup_profile_poll_max_wait,
            ),
            reraise=True,
        )

        try:
            profile = await retrying(self.get_by_auth_id, auth_id)
        except RetryError:
            logger.warning(
                "Profile for %s not created after %d lookups",
                auth_id,
                self.settings.signup_profile_poll_attempts,
            )
            return Lookup(error="Profile not created yet")
        except Exception as e:
            logger.warning("Could not fetch profile after sign-up: %s", e)
            return Lookup(error=str(e))

        return Lookup(value=profile)

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Sign in with email and password.

        Raises:
            AuthenticationError: If no user came back.
            NotFoundError: If the account has no profile row.
        """
        response = self.client.auth.sign_in_with_password(
            {
                "email": email,
                "password": password,
            }
        )

        user = response.user
        if not user:
            raise AuthenticationError("Failed to sign in")

        profile = await self.get_by_auth_id(user.id)
        if not profile:
            raise NotFoundError("Profile not found")

        return SignInResult(user=user, session=response.session, profile=profile)

    async def sign_out(self) -> None:
        """Invalidate the client's session."""
        self.client.auth.sign_out()

    async def update_current_profile(self, data: ProfileUpdate) -> ProfileRow | None:
        """Update the signed-in account's profile.

        Args:
            data: The fields to update. Omitted fields are kept; an explicit
                None clears the column.

        Returns:
            ProfileRow | None: The updated profile.

        Raises:
            AuthenticationError: If there is no signed-in profile.
        """
        profile = await self.get_current_profile()
        if not profile:
            raise AuthenticationError("Not authenticated")

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return profile

        response = (
            self.client.table("profiles")
            .update(update_data)
            .eq("id", profile["id"])
            .execute()
        )
        return first_row(response)

    async def delete_account(self) -> None:
        """Delete the signed-in account through the delete_user_account RPC."""
        self.client.rpc("delete_user_account").execute()

    async def update_all_worms_status(self, status: WormStatus | str) -> None:
        """Set the visibility of every worm owned by the signed-in profile.

        Args:
            status: private or friends.

        Raises:
            ValidationError: If status is not private or friends.
            AuthenticationError: If there is no signed-in profile.
        """
        try:
            status = WormStatus(status)
        except ValueError as e:
            raise ValidationError(f"Invalid worm status: {status}") from e
        if status not in BULK_WORM_STATUSES:
            raise ValidationError("Bulk status must be private or friends")

        profile = await self.get_current_profile()
        if not profile:
            raise AuthenticationError("Not authenticated")

        (
            self.client.table("worms")
            .update({"status": status.value})
            .eq("author_id", profile["id"])
            .execute()
        )

    def on_auth_state_change(self, callback: Callable[[User | None], Any]) -> Subscription:
        """Subscribe to sign-in/sign-out/refresh events of the client.

        Args:
            callback: Called with the session's user, or None when signed out.

        Returns:
            Subscription: Call unsubscribe() on it to stop listening.
        """

        def _on_change(event: Any, session: Session | None) -> None:
            callback(session.user if session else None)

        return self.client.auth.on_auth_state_change(_on_change)
