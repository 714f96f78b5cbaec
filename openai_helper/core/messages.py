"""Rewrite chat messages into content-block arrays with inlined local files."""

import base64
import mimetypes
from collections.abc import Mapping
from pathlib import Path
from typing import Any

DEFAULT_IMAGE_MIME = "image/png"


def _text_block(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


def _image_block(path: Path) -> dict[str, Any]:
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = DEFAULT_IMAGE_MIME
    b64_image = base64.b64encode(path.read_bytes()).decode("ascii")
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{mime_type};base64,{b64_image}"},
    }


def _text_file_block(path: Path) -> dict[str, Any]:
    contents = path.read_text(encoding="utf-8")
    return _text_block(f"Contents of {path.name}:\n{contents}")


def build_message(message: Mapping[str, Any]) -> dict[str, Any]:
    """
    Rewrite one message so its local files are inlined as content blocks.

    The original text comes first, then one base64 image block per entry
    of ``image_files``, then one text block per entry of ``text_files``.
    Messages without either list are returned as a plain copy.

    Args:
        message: Message mapping with ``role``, ``content`` and optional
            ``image_files`` / ``text_files`` lists of local paths

    Returns:
        New message dict ready to send

    Raises:
        OSError: If a referenced file cannot be read
    """
    image_files = message.get("image_files") or []
    text_files = message.get("text_files") or []
    rewritten = {k: v for k, v in message.items() if k not in ("image_files", "text_files")}

    if not image_files and not text_files:
        return rewritten

    content = message.get("content")
    if isinstance(content, list):
        blocks = list(content)
    elif content is None:
        blocks = []
    else:
        blocks = [_text_block(str(content))]

    blocks.extend(_image_block(Path(p)) for p in image_files)
    blocks.extend(_text_file_block(Path(p)) for p in text_files)

    rewritten["content"] = blocks
    return rewritten


def build_messages(messages: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Rewrite every message in order."""
    return [build_message(m) for m in messages]
