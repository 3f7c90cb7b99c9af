"""
Avatar service route handlers.

Provides:
- POST /generate-avatar : Turn an uploaded photo into a chibi character image.

Pipeline (sequential, single attempt each):
1. Ask a vision model whether the person wears glasses.
2. Build the image-edit prompt with the matching eyewear clause.
3. Send the original photo to the image-edit endpoint and return the PNG
   as a data URI.
"""

import base64
import logging
from typing import Tuple

from flask import Blueprint, request, jsonify, Response, current_app, abort

from hissatsu.ai_service.utils import get_openai_client, provider_error_message
from hissatsu.avatar_service.prompts import (
    GLASSES_CHECK_PROMPT,
    build_avatar_prompt,
    parse_glasses_verdict,
)

avatar_bp = Blueprint("avatar", __name__)

PHOTO_FIELD = "photo"
DEFAULT_MIMETYPE = "image/png"
DEFAULT_ERROR = "Avatar generation failed"


# --- REQUEST LOGGING ---
@avatar_bp.before_request
def before_request() -> None:
    """
    Log the request and reject oversized bodies before the view runs.
    """
    logging.info(
        f"[Avatar] Incoming {request.method} {request.path} "
        f"Content-Length={request.content_length}"
    )
    limit = current_app.config.get("MAX_CONTENT_LENGTH")
    if limit and request.content_length and request.content_length > limit:
        abort(413)


@avatar_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Avatar] Response {response.status}")
    return response


# --- HELPERS ---
def to_data_uri(payload: bytes, mimetype: str) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mimetype};base64,{encoded}"


def detect_glasses(client, image_bytes: bytes, mimetype: str) -> bool:
    """
    Run the yes/no glasses classification on the photo.

    Args:
        client: OpenAI client.
        image_bytes (bytes): Raw upload.
        mimetype (str): Upload MIME type, used for the data URI.

    Returns:
        bool: True only for an affirmative answer.
    """
    completion = client.chat.completions.create(
        model=current_app.config["OPENAI_VISION_MODEL"],
        messages=[
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": GLASSES_CHECK_PROMPT},
                    {"type": "image_url", "image_url": {"url": to_data_uri(image_bytes, mimetype)}},
                ],
            }
        ],
        max_tokens=3,
        temperature=0,
    )
    answer = completion.choices[0].message.content
    has_glasses = parse_glasses_verdict(answer)
    logging.info(f"[Avatar] Glasses check answer={answer!r} -> {has_glasses}")
    return has_glasses


def render_chibi(client, image_bytes: bytes, filename: str, mimetype: str, prompt: str) -> str:
    """
    Request the chibi image edit.

    Returns:
        str: Base64-encoded PNG.

    Raises:
        RuntimeError: If the provider returned no image data.
    """
    result = client.images.edit(
        model=current_app.config["OPENAI_IMAGE_MODEL"],
        image=(filename, image_bytes, mimetype),
        prompt=prompt,
        n=1,
        size=current_app.config["AVATAR_SIZE"],
        input_fidelity="high",
        quality="high",
        output_format="png",
    )
    if not result.data or not result.data[0].b64_json:
        raise RuntimeError("Image API returned no image data")
    return result.data[0].b64_json


# --- GENERATE AVATAR ---
@avatar_bp.route("/generate-avatar", methods=["POST"])
def generate_avatar() -> Tuple[Response, int]:
    """
    Generate a chibi avatar from an uploaded photo.

    Expects multipart/form-data with:
    - photo (file): Image of at most MAX_UPLOAD_MB megabytes.

    Returns:
        200: JSON with ok=True and imageUrl (data:image/png;base64,...).
        400: Missing or empty photo.
        413: Photo over MAX_UPLOAD_BYTES or body over MAX_CONTENT_LENGTH.
        500: AI request failed.
    """
    upload = request.files.get(PHOTO_FIELD)
    if upload is None or not upload.filename:
        logging.info("[Avatar] Rejected request without photo")
        return jsonify({"error": f"photo file is required (form field '{PHOTO_FIELD}')"}), 400

    limit = current_app.config["MAX_UPLOAD_BYTES"]
    image_bytes = upload.read(limit + 1)
    if len(image_bytes) > limit:
        abort(413)
    if not image_bytes:
        return jsonify({"error": "uploaded photo is empty"}), 400

    filename = upload.filename
    mimetype = upload.mimetype or DEFAULT_MIMETYPE

    try:
        client = get_openai_client()
        has_glasses = detect_glasses(client, image_bytes, mimetype)
        prompt = build_avatar_prompt(has_glasses)
        b64_png = render_chibi(client, image_bytes, filename, mimetype, prompt)
    except Exception as e:
        logging.exception("[Avatar] Generation failed")
        return jsonify({"error": provider_error_message(e, DEFAULT_ERROR)}), 500

    return jsonify({"ok": True, "imageUrl": f"data:image/png;base64,{b64_png}"}), 200
