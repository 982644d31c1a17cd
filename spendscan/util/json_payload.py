"""Pull a JSON object out of free-form model output."""

from __future__ import annotations

import json
from typing import Any


def extract_json_object(content: str) -> dict[str, Any] | None:
    """
    Decode the JSON object embedded in a model reply.

    Markdown code fences are removed and the text is cut from the first "{"
    to the last "}". Returns None when nothing decodes to a JSON object.
    """
    if not isinstance(content, str):
        return None

    text = content.strip()
    if text.startswith("```"):
        text = text.replace("```json", "").replace("```", "").strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        text = text[start : end + 1]

    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
