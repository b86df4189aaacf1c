"""
Stateless math challenge for the public contact form.

The token carries the expiry and a nonce in clear text and an HMAC over
"answer:expiry:nonce", so checking an answer needs no storage: the signature
only matches when the submitted answer is the one the question was built for.
"""
import hashlib
import hmac
import random
import secrets
import time
from typing import Optional, Tuple

from app.config import settings


def _sign(answer: int, expires_at: int, nonce: str) -> str:
    value = f"{answer}:{expires_at}:{nonce}"
    return hmac.new(settings.captcha_secret.encode("utf-8"), value.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_challenge(now: Optional[float] = None) -> Tuple[str, str]:
    """Return (question, token) for a sum of two integers between 1 and 10."""
    first, second = random.randint(1, 10), random.randint(1, 10)
    expires_at = int((now if now is not None else time.time()) + settings.captcha_ttl_sec)
    nonce = secrets.token_hex(8)
    token = f"{expires_at}.{nonce}.{_sign(first + second, expires_at, nonce)}"
    return f"What is {first} + {second}?", token


def verify_challenge(token: str, answer: int, now: Optional[float] = None) -> bool:
    parts = (token or "").split(".")
    if len(parts) != 3:
        return False
    expires_raw, nonce, digest = parts
    try:
        expires_at = int(expires_raw)
    except ValueError:
        return False
    if expires_at < (now if now is not None else time.time()):
        return False
    return hmac.compare_digest(digest, _sign(answer, expires_at, nonce))
