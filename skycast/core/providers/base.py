from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response

from ..errors import QuotaExceeded, ServiceError


@dataclass
class RequestConfig:
    timeout: float = 30.0


class AIServiceProvider:
    """Base class that adds timeouts and error mapping for HTTP AI services.

    Failed calls are never retried; every transport or HTTP failure is
    reported once as a :class:`ServiceError`.
    """

    name = "ai-service"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(self.__class__.__name__)
        self._testing_mode = os.environ.get("TESTING_MODE", "0") == "1"

    def _build_session(self, config: RequestConfig) -> requests.Session:
        return requests.Session()

    def _handle_response(self, response: Response) -> Response:
        if self._testing_mode:
            self._log.info("%s responded %s: %s", self.name, response.status_code, response.text[:500])
        if response.status_code == 429:
            self._log.warning("Quota exceeded: %s", response.text)
            raise QuotaExceeded(self._error_detail(response))
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise ServiceError(self._error_detail(response))
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise ServiceError("The weather service took too long to answer. Please try again.") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise ServiceError() from exc
        return self._handle_response(response)

    @staticmethod
    def _error_detail(response: Response) -> Optional[str]:
        """Return the upstream ``error.message`` when the body carries one."""
        try:
            payload = response.json()
        except ValueError:
            return None
        if not isinstance(payload, dict):
            return None
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None


__all__ = ["AIServiceProvider", "RequestConfig"]
