"""
Shared OpenAI helpers.
Provides client creation, per-request client lookup, and error message extraction.
"""

from typing import Optional, Any

from flask import current_app
from openai import OpenAI, APIError

CLIENT_EXTENSION_KEY = "openai_client"


# --- CLIENT CREATION ---
def create_openai_client(api_key: Optional[str]) -> OpenAI:
    """
    Build the process-wide OpenAI client.

    Args:
        api_key (str): The OpenAI API key.

    Returns:
        OpenAI: A configured client.

    Raises:
        RuntimeError: If the key is missing.
    """
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is missing. Set it in .env")
    # Single attempt per call; failures go straight back to the caller
    return OpenAI(api_key=api_key, max_retries=0)


def get_openai_client() -> Any:
    """
    Return the client registered on the current app by create_app().
    """
    return current_app.extensions[CLIENT_EXTENSION_KEY]


# --- ERROR MESSAGES ---
def provider_error_message(exc: BaseException, default: str) -> str:
    """
    Pick the most useful message to hand back to the browser.

    Order of preference:
    1. The message inside the provider's error body.
    2. The exception's own text.
    3. The given default.

    Args:
        exc (BaseException): The caught exception.
        default (str): Literal used when nothing better is available.

    Returns:
        str: A non-empty message.
    """
    if isinstance(exc, APIError):
        body = exc.body
        if isinstance(body, dict):
            inner = body.get("error") if isinstance(body.get("error"), dict) else body
            message = inner.get("message")
            if message:
                return str(message)
        if exc.message:
            return exc.message

    text = str(exc)
    return text if text else default
