"""
Turn model output into a complete skill result.

Two shapes are supported:
- JSON mode: the model returns a JSON object with name/tagline/description.
- Text mode: the model returns labelled lines (技名：/キャッチコピー：/説明：).

Both always yield all three fields. Missing fields get a fixed fallback.
"""

import json
import re
from typing import Dict, Any, Optional

FALLBACK_NAME = "名無しの必殺技"
FALLBACK_TAGLINE = "キャッチコピーは迷子になりました"
FALLBACK_DESCRIPTION = "説明文を生成できませんでした。"

SKILL_FIELDS = ("name", "tagline", "description")

FALLBACKS = {
    "name": FALLBACK_NAME,
    "tagline": FALLBACK_TAGLINE,
    "description": FALLBACK_DESCRIPTION,
}

# Full-width and ASCII colons both count. Name and tagline stop at the end of
# their line; the description runs to the end of the text.
NAME_PATTERN = re.compile(r"技名[ \t　]*[:：][ \t　]*(.*)")
TAGLINE_PATTERN = re.compile(r"キャッチコピー[ \t　]*[:：][ \t　]*(.*)")
DESCRIPTION_PATTERN = re.compile(r"説明[ \t　]*[:：]\s*([\s\S]*)")


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def complete_skill(raw: Dict[str, Any]) -> Dict[str, str]:
    """
    Keep only the three skill fields, filling blanks with fallbacks.

    Args:
        raw (dict): Whatever the model produced.

    Returns:
        dict: Exactly name, tagline and description, all non-empty.
    """
    return {
        field: _clean(raw.get(field)) or FALLBACKS[field]
        for field in SKILL_FIELDS
    }


def parse_json_skill(content: Optional[str]) -> Dict[str, str]:
    """
    Parse a JSON-mode completion.

    Raises:
        ValueError: If the content is not a JSON object. json.JSONDecodeError
            is a ValueError subclass, so malformed JSON surfaces the same way.
    """
    if content is None:
        raise ValueError("Model returned no content")

    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    return complete_skill(data)


def _match(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    return _clean(match.group(1))


def parse_labelled_skill(text: Optional[str]) -> Dict[str, str]:
    """
    Extract the skill fields from labelled free text.

    The description capture runs to the end of the text. Never raises.

    Args:
        text (str): Raw completion text.

    Returns:
        dict: Exactly name, tagline and description.
    """
    text = text or ""
    return complete_skill({
        "name": _match(NAME_PATTERN, text),
        "tagline": _match(TAGLINE_PATTERN, text),
        "description": _match(DESCRIPTION_PATTERN, text),
    })
