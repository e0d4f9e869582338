"""Free-text tags for a photo from a hosted multimodal model.

The model is asked for a comma-separated list of tags; the first candidate's
text is split into a list. The tags feed TagClassifier and the tag-based
track search.
"""

import base64
from typing import Any, List, Optional

import requests

from moodsync.config import Settings
from moodsync.core import ClassificationError, ConfigurationError, log_step, log_success

TAGGING_PROMPT = (
    "Act as an expert image analyst. Provide a comma-separated list of 5-10 "
    "tags that describe the most prominent elements, colors, and themes in "
    "this image. Do not include any text other than the comma-separated list "
    "of tags."
)

_MAGIC_TYPES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def guess_mime_type(image_bytes: bytes) -> str:
    """MIME type from the file signature; JPEG when unknown."""
    head = bytes(image_bytes[:12])
    for magic, mime_type in _MAGIC_TYPES:
        if head.startswith(magic):
            return mime_type
    if head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def parse_tags(payload: Any) -> List[str]:
    """
    Tags from a generateContent answer
    (candidates[0].content.parts[0].text, comma separated).

    Unexpected shapes yield an empty list.
    """
    if not isinstance(payload, dict):
        return []
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return []
    text = parts[0].get("text")
    if not isinstance(text, str):
        return []
    return [tag.strip() for tag in text.split(",") if tag.strip()]


class ImageTagger:
    """
    Client for the image tagging endpoint.

    The API key is optional in Settings; tagging without one raises
    ConfigurationError naming GEMINI_API_KEY.
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = settings.image_tagging_url
        self.timeout = settings.request_timeout
        self._api_key = settings.gemini_api_key
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _post(self, image_bytes: bytes) -> Any:
        body = {
            "contents": [
                {
                    "parts": [
                        {"text": TAGGING_PROMPT},
                        {
                            "inlineData": {
                                "mimeType": guess_mime_type(image_bytes),
                                "data": base64.b64encode(bytes(image_bytes)).decode("ascii"),
                            }
                        },
                    ]
                }
            ]
        }
        try:
            r = self.session.post(
                self.endpoint,
                headers={"x-goog-api-key": self._api_key},
                json=body,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise ClassificationError(f"Image tagging timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise ClassificationError(f"Image tagging request failed: {e}") from e

        if not r.ok:
            raise ClassificationError(f"Image tagging API error: {r.status_code} {r.reason}")

        try:
            return r.json()
        except ValueError as e:
            raise ClassificationError("Image tagging API returned invalid JSON") from e

    def tag(self, image_bytes: bytes) -> List[str]:
        """
        Tags describing the photo.

        Raises ConfigurationError without an API key, and ClassificationError
        when the image is unusable, the endpoint fails, or no tag comes back.
        """
        if not self.configured:
            raise ConfigurationError(["GEMINI_API_KEY"])
        if not isinstance(image_bytes, (bytes, bytearray, memoryview)) or not len(image_bytes):
            raise ClassificationError("Cannot tag image: expected non-empty bytes")

        log_step("Tagging image...")
        tags = parse_tags(self._post(image_bytes))
        if not tags:
            raise ClassificationError("No tags returned for the image")

        log_success(f"Image tags: {', '.join(tags)}")
        return tags
