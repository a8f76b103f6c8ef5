import asyncio
import itertools
import logging
from typing import Callable

from viralclip.client import request_clips
from viralclip.exceptions import ValidationError
from viralclip.models import Clip

logger = logging.getLogger(__name__)

EMPTY_URL_MESSAGE = "Please enter a YouTube URL."
GENERIC_FAILURE_MESSAGE = "Failed to generate clips. Please check the URL or try again later."


class ClipController:
    """Holds the url / loading / error / clips state behind the UI.

    Fields are only mutated on the event loop. The blocking provider call runs in a
    worker thread so the loop stays responsive while a request is in flight.
    Submissions are numbered; when a newer one has started, the older response is
    dropped, so the last submission wins rather than the last response.
    """

    def __init__(self, requester: Callable[[str], list[Clip]] | None = None):
        self._requester = requester or request_clips
        self._request_ids = itertools.count(1)
        self._latest_request_id = 0
        self.url = ""
        self.is_loading = False
        self.error: str | None = None
        self.clips: list[Clip] = []
        self.last_failure: BaseException | None = None

    @property
    def status(self) -> str:
        if self.is_loading:
            return "loading"
        if self.error:
            return "error"
        if self.clips:
            return "success"
        return "idle"

    def _validate(self, url: str) -> str:
        url = url.strip() if url else ""
        if not url:
            raise ValidationError(EMPTY_URL_MESSAGE)
        return url

    async def submit(self, url: str) -> None:
        self.url = url
        try:
            url = self._validate(url)
        except ValidationError as exc:
            self.error = str(exc)
            self.last_failure = exc
            return

        request_id = next(self._request_ids)
        self._latest_request_id = request_id
        self.error = None
        self.last_failure = None
        self.clips = []
        self.is_loading = True

        try:
            clips = await asyncio.to_thread(self._requester, url)
        except Exception as exc:
            if request_id != self._latest_request_id:
                logger.info("Discarding stale failure for request %d: %s", request_id, exc)
                return
            logger.error("Clip request %d for %s failed: %s", request_id, url, exc, exc_info=exc)
            self.error = GENERIC_FAILURE_MESSAGE
            self.last_failure = exc
            return
        else:
            if request_id != self._latest_request_id:
                logger.info("Discarding stale response for request %d", request_id)
                return
            self.clips = list(clips)
        finally:
            if request_id == self._latest_request_id:
                self.is_loading = False
