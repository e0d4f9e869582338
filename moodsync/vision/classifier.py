"""Scene classification of photos through a hosted image model.

The image is sent as base64 of the raw bytes (no re-encoding) to an inference
endpoint that answers with {label, score} predictions. Depending on the model
deployment the payload is either a list of predictions or a single object;
both shapes are normalized here and never leak past this module.
"""

import base64
from typing import Any, List, Optional, Tuple

import requests

from moodsync.config import Settings
from moodsync.core import (
    ClassificationError,
    ClassificationResult,
    LabelScore,
    log_step,
    log_success,
)
from moodsync.labels import SCENE, resolve_mood


def _encode_image(image_bytes: bytes) -> str:
    if not isinstance(image_bytes, (bytes, bytearray, memoryview)):
        raise ClassificationError(
            f"Cannot encode image: expected bytes, got {type(image_bytes).__name__}"
        )
    if len(image_bytes) == 0:
        raise ClassificationError("Cannot encode image: empty payload")
    return base64.b64encode(bytes(image_bytes)).decode("ascii")


def _to_label_score(item: Any) -> Optional[LabelScore]:
    """
    Convert one raw prediction into a LabelScore, or None when unusable.

    The score falls back to "confidence", then 0, and is clamped to [0, 1].
    """
    if not isinstance(item, dict):
        return None
    label = item.get("label")
    if not isinstance(label, str) or not label.strip():
        return None

    raw_score = item.get("score")
    if raw_score is None:
        raw_score = item.get("confidence")
    try:
        score = float(raw_score or 0)
    except (TypeError, ValueError):
        score = 0.0

    return LabelScore(label=label.strip().lower(), score=max(0.0, min(1.0, score)))


def normalize_predictions(payload: Any) -> Tuple[LabelScore, ...]:
    """
    Normalize a vendor payload into LabelScores sorted by descending score.

    Accepts a list of {label, score} objects or a single such object.
    Anything else (including an error object) yields an empty tuple.
    Ties keep vendor order.
    """
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict) and "label" in payload:
        items = [payload]
    else:
        items = []

    labels: List[LabelScore] = []
    for item in items:
        entry = _to_label_score(item)
        if entry is not None:
            labels.append(entry)

    labels.sort(key=lambda ls: ls.score, reverse=True)
    return tuple(labels)


class VisionClassifier:
    """
    Client for the image classification endpoint.

    The session is injectable so tests (and callers that pool connections)
    can supply their own.
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = settings.vision_model_url
        self.timeout = settings.request_timeout
        self._token = settings.huggingface_api_token
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    def _post(self, encoded: str) -> Any:
        body = {"inputs": encoded, "options": {"wait_for_model": True}}
        try:
            r = self.session.post(
                self.endpoint,
                headers=self._headers(),
                json=body,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise ClassificationError(
                f"Image classification timed out after {self.timeout}s"
            ) from e
        except requests.RequestException as e:
            raise ClassificationError(f"Image classification request failed: {e}") from e

        if not r.ok:
            raise ClassificationError(
                f"Image classification API error: {r.status_code} {r.reason}"
            )

        try:
            return r.json()
        except ValueError as e:
            raise ClassificationError(
                "Image classification API returned invalid JSON"
            ) from e

    def classify(self, image_bytes: bytes) -> ClassificationResult:
        """
        Classify a photo and resolve its scene to a vibe.

        Raises ClassificationError when the image cannot be encoded, the
        endpoint fails, or no label can be read from the answer.
        """
        encoded = _encode_image(image_bytes)

        log_step("Analyzing scene vibe from image...")
        payload = self._post(encoded)

        labels = normalize_predictions(payload)
        if not labels:
            raise ClassificationError("No scene detected in the image")

        top = labels[0]
        mood = resolve_mood(top.label, SCENE)
        log_success(
            f"Detected vibe: {mood.value} (scene {top.label!r}, "
            f"{round(top.score * 100)}% confidence)"
        )

        return ClassificationResult(
            labels=labels,
            mood=mood,
            top_label=top.label,
            vocabulary=SCENE.name,
        )
