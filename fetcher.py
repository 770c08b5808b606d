"""
TourGpX — Tour to GPX Converter
Downloads the tour page, retrying a fixed number of times.
"""

from __future__ import annotations
import http.client
import logging
import math
import time
import urllib.error
import urllib.request
from typing import Callable, Optional

from config import Configuration, Deadline
from errors import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """HTTP GET with a fixed user agent, timeout and retry interval.

    ``opener`` defaults to ``urllib.request.build_opener()``; anything with an
    ``open(request, timeout=...)`` method will do. ``sleep`` is called
    between attempts.
    """

    def __init__(self, config: Configuration, deadline: Optional[Deadline] = None,
                 opener=None, sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.deadline = deadline or Deadline(math.inf)
        self.opener = opener or urllib.request.build_opener()
        self.sleep = sleep

    def fetch(self, url: str) -> str:
        attempts = max(1, self.config.max_retries)
        last_error: Optional[BaseException] = None

        for attempt in range(attempts):
            if attempt > 0:
                logger.info("Retry attempt %d/%d", attempt + 1, attempts)
                self.sleep(min(self.config.retry_interval, self.deadline.remaining()))
            self.deadline.check()

            try:
                return self._get(url)
            except FetchError as e:
                last_error = e
            logger.debug("Attempt %d/%d failed: %s", attempt + 1, attempts, last_error)

        raise FetchError("all retry attempts failed", cause=last_error)

    def _get(self, url: str) -> str:
        """Single attempt. Every failure is raised as FetchError."""
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.config.user_agent})
        except ValueError as e:
            raise FetchError("error creating request", cause=e) from e

        timeout = min(self.config.http_timeout, self.deadline.remaining())
        try:
            resp = self.opener.open(req, timeout=timeout)
        except urllib.error.HTTPError as e:
            e.close()
            raise FetchError(f"unexpected status code: {e.code}") from e
        except (OSError, ValueError, http.client.HTTPException) as e:
            raise FetchError("error making request", cause=e) from e

        with resp:
            status = getattr(resp, "status", None) or resp.getcode()
            if status != 200:
                raise FetchError(f"unexpected status code: {status}")
            try:
                body = resp.read()
            except (OSError, http.client.HTTPException) as e:
                raise FetchError("error reading response body", cause=e) from e
            charset = resp.headers.get_content_charset() or "utf-8"

        try:
            return body.decode(charset, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")
