"""
AI playlist generation workflow.

Drives the idle -> generating -> preview cycle for one UI session. The
workflow holds its status and the last preview as a single GenerationState
value, so every transition is one assignment and observers never see a
status paired with the wrong preview.
"""

import asyncio
import logging
from typing import Optional

from ..gateway import (
    EntitlementDenied,
    GenericFailure,
    QuotaExceeded,
    RemoteActionGateway,
)
from ..models import GenerationPreview, GenerationState, GenerationStatus, RECOMMENDED_MIN_TRACKS
from ..notifications import NotificationSink, Severity

logger = logging.getLogger(__name__)

GENERATE_ENDPOINT = "generate_playlist"

PRO_ONLY_MESSAGE = "AI playlist generation is only available for PRO plan users"
UPGRADE_MESSAGE = "This feature requires a PRO plan. Please upgrade."
QUOTA_MESSAGE = (
    "Monthly AI generation quota exceeded. Please upgrade or wait until next month."
)
GENERATION_FAILED_MESSAGE = "Failed to generate playlist"
GENERATION_PENDING_MESSAGE = "A playlist is already being generated"
GENERATED_MESSAGE = "Playlist generated! Review and approve to save."


class GenerationWorkflow:
    """Stateful controller for AI playlist generation.

    Attributes:
        is_pro: Client-side entitlement flag, read on every generate() call

    Example:
        >>> workflow = GenerationWorkflow(gateway, sink, is_pro=True)
        >>> preview = await workflow.generate("upbeat running mix")
        >>> workflow.is_previewing
        True
    """

    def __init__(
        self,
        gateway: RemoteActionGateway,
        notifier: NotificationSink,
        is_pro: bool = False,
    ):
        self._gateway = gateway
        self._notifier = notifier
        self.is_pro = is_pro
        self._state = GenerationState()

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def status(self) -> GenerationStatus:
        return self._state.status

    @property
    def preview(self) -> Optional[GenerationPreview]:
        return self._state.preview

    @property
    def is_generating(self) -> bool:
        return self._state.status is GenerationStatus.GENERATING

    @property
    def is_previewing(self) -> bool:
        return self._state.status is GenerationStatus.PREVIEW

    async def generate(self, prompt: str, is_pro: Optional[bool] = None) -> Optional[GenerationPreview]:
        """Generate a playlist preview from a free-text prompt.

        Args:
            prompt: Description of the desired playlist
            is_pro: Entitlement flag for this call; defaults to ``self.is_pro``

        Returns:
            The new preview, or None when generation did not succeed
        """
        entitled = self.is_pro if is_pro is None else is_pro
        if not entitled:
            self._notifier.notify(Severity.ERROR, PRO_ONLY_MESSAGE)
            return None

        if self.is_generating:
            logger.warning("Ignoring generate() while a generation is pending")
            self._notifier.notify(Severity.WARNING, GENERATION_PENDING_MESSAGE)
            return None

        previous = self._state.preview
        self._state = GenerationState(GenerationStatus.GENERATING, previous)

        try:
            result = await self._gateway.call(GENERATE_ENDPOINT, {"prompt": prompt})
        except asyncio.CancelledError:
            self._state = GenerationState(GenerationStatus.IDLE, previous)
            raise
        except Exception as e:
            logger.exception("Playlist generation request failed")
            return self._fail(str(e) or GENERATION_FAILED_MESSAGE, previous)

        if isinstance(result, EntitlementDenied):
            return self._fail(UPGRADE_MESSAGE, previous)
        if isinstance(result, QuotaExceeded):
            return self._fail(QUOTA_MESSAGE, previous)
        if isinstance(result, GenericFailure):
            # Server-side error text is not shown; only transport faults carry their own message.
            if result.status_code is None and result.message:
                return self._fail(result.message, previous)
            return self._fail(GENERATION_FAILED_MESSAGE, previous)

        try:
            preview = GenerationPreview.from_dict(result.data)
        except ValueError as e:
            logger.error(f"Unusable generation response: {e}")
            return self._fail(GENERATION_FAILED_MESSAGE, previous)

        if preview.warning_under_min_count:
            self._notifier.notify(
                Severity.WARNING,
                f"Generated {preview.count} tracks (recommended: {RECOMMENDED_MIN_TRACKS}+)",
            )

        self._state = GenerationState(GenerationStatus.PREVIEW, preview)
        logger.info(f"Generated preview with {preview.count} tracks")
        self._notifier.notify(Severity.SUCCESS, GENERATED_MESSAGE)
        return preview

    def reset(self) -> None:
        """Discard the preview and return to idle."""
        self._state = GenerationState()

    def _fail(self, message: str, previous: Optional[GenerationPreview]) -> None:
        self._state = GenerationState(GenerationStatus.IDLE, previous)
        self._notifier.notify(Severity.ERROR, message)
        return None
