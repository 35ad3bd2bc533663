from __future__ import annotations
"""API key gate — decides whether a Gemini key is available.

Two sources are consulted, in order:
  1. a host-provided key selector (an embedding shell that owns key picking)
  2. the GEMINI_API_KEY / API_KEY environment value

Nothing is cached: every check re-reads the environment and asks the host
again. No method here raises; a missing key is a normal False result.
"""

import logging
from typing import Callable, Protocol

from welcome_reel.config import Settings

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "PLACEHOLDER_API_KEY"
_UNUSABLE_KEY_VALUES = frozenset({"", PLACEHOLDER_API_KEY, "undefined"})


class KeySelector(Protocol):
    """Interactive key picker exposed by the host environment.

    The picker only reports and prompts for a selection. The selected key
    itself must reach this process through GEMINI_API_KEY (or API_KEY),
    since the workflow only ever sends the key returned by
    ``CredentialGate.resolve_api_key``. A host that reports a selection
    without exporting the key makes generation fail with MISSING_CREDENTIAL.
    """

    async def has_selected_api_key(self) -> bool: ...

    async def open_select_key(self) -> None: ...


def is_usable_key(value: str | None) -> bool:
    """True if *value* looks like a real key rather than an unset placeholder."""
    if value is None:
        return False
    return value.strip() not in _UNUSABLE_KEY_VALUES


def mask_key(key: str) -> str:
    """Mask an API key for safe logging: show first 8 and last 4 chars."""
    if len(key) <= 16:
        return "***"
    return f"{key[:8]}...{key[-4:]}"


class CredentialGate:
    """Pre-flight check for the generation workflow."""

    def __init__(
        self,
        selector: KeySelector | None = None,
        settings_factory: Callable[[], Settings] = Settings,
    ) -> None:
        self.selector = selector
        self._settings_factory = settings_factory

    def resolve_api_key(self) -> str | None:
        """Return the usable environment key, read fresh on every call."""
        try:
            value = self._settings_factory().GEMINI_API_KEY
        except Exception as e:
            logger.warning("Could not load settings while resolving API key: %s", e)
            return None
        if not is_usable_key(value):
            logger.debug("No usable API key in environment")
            return None
        value = value.strip()
        logger.debug("API key found in environment: %s", mask_key(value))
        return value

    async def has_credential(self) -> bool:
        """True if the host reports a selected key or the environment has one."""
        if self.selector is not None:
            try:
                if await self.selector.has_selected_api_key():
                    return True
            except Exception as e:
                logger.warning("Key selector check failed, using environment: %s", e)
        return self.resolve_api_key() is not None

    async def request_credential_selection(self) -> bool:
        """Open the host key picker if there is one.

        Returns False (after logging a warning) when no interactive picker
        exists; the caller should then point the user at GEMINI_API_KEY.
        """
        if self.selector is None:
            logger.warning(
                "API key selection is only available inside a host that provides "
                "a key selector. Configure GEMINI_API_KEY in the environment instead."
            )
            return False
        try:
            await self.selector.open_select_key()
        except Exception as e:
            logger.warning("Key selector failed to open: %s", e)
        return True


# Module-level singleton shared by the API layer and the video service
_credential_gate = CredentialGate()


def get_credential_gate() -> CredentialGate:
    """Return the process-wide CredentialGate (a host may set its ``selector``)."""
    return _credential_gate
