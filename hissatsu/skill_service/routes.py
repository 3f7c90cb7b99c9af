"""
Skill service route handlers.

Provides:
- POST /generate-skill : Turn a self-introduction into an RPG special move.

The OpenAI client is looked up on the current app (see ai_service.utils).
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, request, jsonify, Response, current_app

from hissatsu.ai_service.utils import get_openai_client
from hissatsu.skill_service.parsing import parse_json_skill, parse_labelled_skill
from hissatsu.skill_service.prompts import (
    JSON_SYSTEM_PROMPT,
    TEXT_SYSTEM_PROMPT,
    build_user_message,
)

skill_bp = Blueprint("skill", __name__)


# --- REQUEST LOGGING ---
@skill_bp.before_request
def before_request() -> None:
    logging.info(f"[Skill] Incoming {request.method} {request.path}")


@skill_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Skill] Response {response.status}")
    return response


# --- GENERATE SKILL ---
@skill_bp.route("/generate-skill", methods=["POST"])
def generate_skill() -> Tuple[Response, int]:
    """
    Generate a special move from a self-introduction.

    Expects a JSON body with:
    - intro (str): Non-blank self-introduction.

    Returns:
        200: JSON with name, tagline and description.
        400: Missing or blank intro.
        500: AI request or response parsing failed.
    """
    data = request.get_json(silent=True)
    intro = data.get("intro") if isinstance(data, dict) else None

    if not isinstance(intro, str) or not intro.strip():
        logging.info("[Skill] Rejected request without intro")
        return jsonify({"error": "intro is required"}), 400

    mode = current_app.config["SKILL_PARSE_MODE"]
    system_prompt = JSON_SYSTEM_PROMPT if mode == "json" else TEXT_SYSTEM_PROMPT

    request_args: Dict[str, Any] = {
        "model": current_app.config["OPENAI_TEXT_MODEL"],
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": build_user_message(intro)},
        ],
    }
    if mode == "json":
        request_args["response_format"] = {"type": "json_object"}

    try:
        completion = get_openai_client().chat.completions.create(**request_args)
        content = completion.choices[0].message.content

        if mode == "json":
            skill = parse_json_skill(content)
        else:
            skill = parse_labelled_skill(content)
    except Exception:
        logging.exception("[Skill] AI error")
        return jsonify({"error": "AI request failed"}), 500

    return jsonify(skill), 200
