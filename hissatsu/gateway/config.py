"""
Environment configuration for the Hissatsu Maker gateway.
Values come from the process environment or a local .env file.
"""

import os
from typing import Dict, Any

from dotenv import load_dotenv

# Load .env only once here
load_dotenv()

SKILL_PARSE_MODES = ("json", "text")


def load_config() -> Dict[str, Any]:
    """
    Read all settings from the environment.

    The API key is returned as-is (possibly None); the app factory decides
    whether a missing key is fatal, since tests inject their own client.

    Returns:
        dict: Settings keyed the same way as Flask's app.config.
    """
    return {
        "OPENAI_API_KEY": os.getenv("OPENAI_API_KEY"),
        "PORT": int(os.getenv("PORT", 3000)),
        "SKILL_PARSE_MODE": os.getenv("SKILL_PARSE_MODE", "json").strip().lower(),
        "OPENAI_TEXT_MODEL": os.getenv("OPENAI_TEXT_MODEL", "gpt-4.1-mini"),
        "OPENAI_VISION_MODEL": os.getenv("OPENAI_VISION_MODEL", "gpt-4.1-mini"),
        "OPENAI_IMAGE_MODEL": os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1"),
        "AVATAR_SIZE": os.getenv("AVATAR_SIZE", "1024x1536"),
        "MAX_UPLOAD_MB": int(os.getenv("MAX_UPLOAD_MB", 5)),
        "DEBUG": os.getenv("FLASK_DEBUG", "0") == "1",
    }
