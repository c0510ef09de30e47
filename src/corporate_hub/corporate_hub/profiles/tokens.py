from __future__ import annotations

import logging
from typing import Protocol

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class SignedLinks:
    """Issue and check time-limited tokens for email verification and password reset."""

    def __init__(self, secret_key: str, *, max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS):
        self._secret_key = secret_key
        self._max_age = int(max_age_seconds)

    def _serializer(self, salt: str) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(self._secret_key, salt=salt)

    def issue(self, profile_id: int, email: str, *, salt: str) -> str:
        return self._serializer(salt).dumps({"id": int(profile_id), "email": email})

    def read(self, token: str, *, salt: str) -> dict:
        try:
            data = self._serializer(salt).loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("This link has expired. Please request a new one.")
        except BadSignature:
            raise AuthenticationError("This link is invalid.")
        if not isinstance(data, dict) or "id" not in data or "email" not in data:
            raise AuthenticationError("This link is invalid.")
        return data


class Mailer(Protocol):
    def link(self, path: str) -> str:
        raise NotImplementedError

    def send(self, *, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class LoggingMailer:
    """Writes outgoing mail to the log instead of an SMTP server."""

    def __init__(self, base_url: str = "http://localhost:5000"):
        self.base_url = base_url.rstrip("/")

    def link(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def send(self, *, to: str, subject: str, body: str) -> None:
        logger.info("Mail to %s | %s | %s", to, subject, body)
