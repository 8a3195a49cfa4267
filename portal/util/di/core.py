"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from portal.config import AuthSettings, HoursSettings, PollSettings, Settings
from portal.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_hours_settings(self, settings: Settings) -> HoursSettings:
        return settings.hours

    @provide
    def provide_poll_settings(self, settings: Settings) -> PollSettings:
        return settings.polls
