"""HTTP clients for the OCR and structured extraction services."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import httpx

from spendscan.runtime.logging import get_logger

logger = get_logger(__name__)

REQUEST_TIMEOUT = 60.0

_IMAGE_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".heic": "image/heic",
    ".webp": "image/webp",
}


class ExtractionServiceUnavailable(RuntimeError):
    """Raised when the OCR or extraction service cannot be reached or returns an error."""


def _post_image(image_path: Path, url: str, service: str) -> httpx.Response:
    content_type = _IMAGE_TYPES.get(image_path.suffix.lower(), "application/octet-stream")
    logger.info("Sending receipt to %s service at %s...", service, url)

    try:
        image_bytes = image_path.read_bytes()

        start_time = time.time()
        response = httpx.post(
            url,
            files={"file": (image_path.name, image_bytes, content_type)},
            timeout=REQUEST_TIMEOUT,
        )
        elapsed_time = time.time() - start_time
        logger.info("%s service returned in %.2f seconds", service, elapsed_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to %s service: %s", service, e)
        raise ExtractionServiceUnavailable(f"Failed to connect to {service} service: {e}") from e

    if response.status_code != 200:
        # Response bodies can echo receipt text; log the status only.
        logger.error("%s service error: %s", service, response.status_code)
        raise ExtractionServiceUnavailable(f"{service} service error: {response.status_code}")
    return response


def _text_from_ocr_payload(payload: Any) -> str:
    """Pull recognized text out of an OCR reply ({"text"}, {"full_text"} or {"lines"})."""
    if isinstance(payload, str):
        return payload
    if not isinstance(payload, dict):
        return ""
    for key in ("text", "full_text"):
        value = payload.get(key)
        if isinstance(value, str):
            return value
    lines = payload.get("lines")
    if isinstance(lines, list):
        texts = [line.get("text", "") if isinstance(line, dict) else str(line) for line in lines]
        return "\n".join(text for text in texts if text)
    return ""


def call_ocr_service(image_path: Path, ocr_url: str) -> str:
    """
    Send a receipt image to the OCR service and return its recognized text.

    Lines are newline-separated in reading order.
    """
    response = _post_image(image_path, f"{ocr_url.rstrip('/')}/ocr", "OCR")
    try:
        payload = response.json()
    except ValueError:
        payload = response.text
    text = _text_from_ocr_payload(payload)
    logger.debug("OCR returned %d lines", len(text.splitlines()))
    return text


def call_extraction_service(image_path: Path, extraction_url: str) -> str:
    """
    Send a receipt image to the structured extraction service.

    Returns the model's reply text, which may wrap its JSON object in code
    fences. Replies of the form {"content": "..."} are unwrapped.
    """
    response = _post_image(image_path, f"{extraction_url.rstrip('/')}/extract", "Extraction")
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and isinstance(payload.get("content"), str):
        return payload["content"]
    return response.text
