"""reCAPTCHA v3 token verification."""

import logging

import requests

from src.utils.config import get_recaptcha_min_score, get_recaptcha_secret

logger = logging.getLogger(__name__)

VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
REQUEST_TIMEOUT_SECONDS = 10


def verify_recaptcha(token: str) -> bool:
    """
    Verify a reCAPTCHA v3 token.

    Returns False when the secret is unset, the call fails, or the score is
    below the configured minimum.
    """
    secret = get_recaptcha_secret()
    if not secret:
        logger.error("RECAPTCHA_SECRET_KEY is not set")
        return False
    if not token:
        return False

    try:
        response = requests.post(
            VERIFY_URL,
            data={"secret": secret, "response": token},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"reCAPTCHA verification error: {e}")
        return False

    score = float(data.get("score") or 0.0)
    passed = bool(data.get("success")) and score >= get_recaptcha_min_score()
    if not passed:
        logger.warning(f"reCAPTCHA rejected - success={data.get('success')}, score={score}")
    return passed
