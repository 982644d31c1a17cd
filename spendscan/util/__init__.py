"""Small shared helpers with no spendscan dependencies."""

from .json_payload import extract_json_object

__all__ = [
    "extract_json_object",
]
