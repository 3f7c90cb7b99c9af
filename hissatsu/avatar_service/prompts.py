"""
Prompts for the chibi avatar pipeline: glasses check, then image edit.
"""

from typing import Optional

GLASSES_CHECK_PROMPT = (
    "Look at the person in this photo. Are they wearing glasses or sunglasses? "
    "Answer with exactly one word: YES or NO. Do not add anything else."
)

GLASSES_ON_CLAUSE = (
    "- The person wears glasses in the photo. The character MUST wear glasses "
    "with the same frame shape and color, clearly visible on the face."
)

GLASSES_OFF_CLAUSE = (
    "- The person does NOT wear glasses. The character MUST NOT wear glasses, "
    "sunglasses, goggles or any other eyewear."
)

AVATAR_PROMPT_TEMPLATE = """
Transform the person in this photo into a cute chibi-style full-body game character.

Requirements:
- Full body, 2 to 3 heads tall, deformed chibi proportions.
- Keep the original pose, clothing and hairstyle.
- Keep the facial features recognizable so it still looks like the same person.
{eyewear_clause}
- Comedic, lively RPG character mood with a slightly exaggerated expression.
- Simple soft gradient background, no text, no logos.
- Exactly one character in the image.
- Show the whole body from head to feet; do not crop any part of the character.
""".strip()


def build_avatar_prompt(has_glasses: bool) -> str:
    """
    Assemble the image-edit prompt with exactly one eyewear clause.
    """
    clause = GLASSES_ON_CLAUSE if has_glasses else GLASSES_OFF_CLAUSE
    return AVATAR_PROMPT_TEMPLATE.format(eyewear_clause=clause)


def parse_glasses_verdict(answer: Optional[str]) -> bool:
    """
    Read the classifier's one-word answer.

    Only an answer starting with "Y" (any case) counts as yes; anything else,
    including empty or missing output, is treated as no.
    """
    if not isinstance(answer, str):
        return False
    return answer.strip().upper().startswith("Y")
