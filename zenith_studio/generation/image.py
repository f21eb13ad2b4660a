"""Image generation client: Gemini image model or a hosted inference endpoint."""

import base64
import binascii
from typing import Optional

import requests
from google import genai
from google.genai import types
from loguru import logger

from ..config import ImageConfig
from ..errors import GenerationError
from ..models import Comic, ImagePayload, Panel
from .prompts import build_edited_image_prompt, build_image_prompt

_PROXY_ERRORS = {
    401: "Invalid API token. Check your HUGGINGFACE_TOKEN environment variable.",
    429: "Rate limit exceeded. Please wait a moment before trying again.",
    503: "Model is loading. Please try again in 20-30 seconds.",
}


def sniff_mime_type(raw: bytes, default: str = "image/png") -> str:
    if raw.startswith(b"\x89PNG"):
        return "image/png"
    if raw.startswith(b"\xff\xd8"):
        return "image/jpeg"
    if raw[:4] == b"RIFF" and raw[8:12] == b"WEBP":
        return "image/webp"
    return default


class GeminiImageBackend:
    def __init__(self, config: ImageConfig, api_key: str):
        self.config = config
        self.api_key = api_key
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise GenerationError("No Gemini API key configured (set GEMINI_API_KEY).")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str) -> Optional[ImagePayload]:
        return self._call(prompt)

    def edit(self, prior: ImagePayload, instruction: str, prompt: Optional[str] = None) -> Optional[ImagePayload]:
        image_part = types.Part.from_bytes(
            data=base64.b64decode(prior.data),
            mime_type=prior.mime_type,
        )
        return self._call([image_part, instruction])

    def _call(self, contents) -> Optional[ImagePayload]:
        try:
            response = self.client.models.generate_content(
                model=self.config.model,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Image call to {self.config.model} failed: {e}")
            raise GenerationError(f"Image generation failed: {e}") from e
        return self._first_image(response)

    @staticmethod
    def _first_image(response) -> Optional[ImagePayload]:
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                inline = getattr(part, "inline_data", None)
                if inline is None or not inline.data:
                    continue
                data = inline.data
                if isinstance(data, bytes):
                    data = base64.b64encode(data).decode("ascii")
                return ImagePayload(data=data, mime_type=inline.mime_type or "image/png")
        logger.warning("Image model returned no image part")
        return None


class ProxyImageBackend:
    """POSTs the prompt to a hosted text-to-image endpoint.

    The endpoint may answer with raw image bytes, base64 text, or JSON that
    carries base64; all three are normalized into an ImagePayload.
    """

    def __init__(self, config: ImageConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def generate(self, prompt: str) -> Optional[ImagePayload]:
        headers = {"Content-Type": "application/json"}
        if self.config.proxy_token:
            headers["Authorization"] = f"Bearer {self.config.proxy_token}"
        try:
            response = self.session.post(
                self.config.proxy_url,
                headers=headers,
                json={"inputs": prompt, "options": {"use_cache": False, "wait_for_model": True}},
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Image proxy request failed: {e}")
            raise GenerationError(f"Image proxy error: {e}") from e

        if not response.ok:
            logger.error(f"Image proxy error {response.status_code}: {response.text[:200]}")
            message = _PROXY_ERRORS.get(response.status_code, "Image service error")
            raise GenerationError(f"{message} (HTTP {response.status_code})")

        return self.normalize(response)

    def edit(self, prior: ImagePayload, instruction: str, prompt: Optional[str] = None) -> Optional[ImagePayload]:
        # Text-to-image only: regenerate from the stored prompt plus the instruction.
        if not prompt:
            logger.warning("Proxy backend cannot edit an image without its original prompt")
            return None
        return self.generate(build_edited_image_prompt(prompt, instruction))

    @staticmethod
    def normalize(response: requests.Response) -> Optional[ImagePayload]:
        content_type = response.headers.get("Content-Type", "").split(";")[0].strip().lower()

        if content_type.startswith("image/"):
            if not response.content:
                return None
            return ImagePayload(
                data=base64.b64encode(response.content).decode("ascii"),
                mime_type=content_type,
            )

        if content_type == "application/json":
            body = response.json()
            if isinstance(body, dict) and body.get("error"):
                raise GenerationError(f"Image service error: {body['error']}")
            if isinstance(body, list) and body:
                body = body[0]
            if not isinstance(body, dict):
                return None
            data = body.get("image") or body.get("data") or body.get("b64_json")
            mime = body.get("mimeType") or body.get("mime_type")
            return _payload_from_b64(data, mime)

        return _payload_from_b64(response.text.strip(), None)


def _payload_from_b64(data, mime: Optional[str]) -> Optional[ImagePayload]:
    if not data or not isinstance(data, str):
        return None
    if data.startswith("data:") and "," in data:
        header, data = data.split(",", 1)
        mime = mime or header[5:].split(";")[0]
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Image service returned a body that is not base64")
        return None
    if not raw:
        return None
    return ImagePayload(data=data, mime_type=mime or sniff_mime_type(raw))


class ImageGenerationClient:
    """Prompt in, base64 image out; ``None`` when the service produced no image."""

    def __init__(self, config: ImageConfig, api_key: str = "", backend=None):
        self.config = config
        if backend is not None:
            self.backend = backend
        elif config.backend == "proxy":
            self.backend = ProxyImageBackend(config)
        else:
            self.backend = GeminiImageBackend(config, api_key)

    def generate(self, panel: Panel, comic: Comic) -> Optional[ImagePayload]:
        prompt = build_image_prompt(panel, comic)
        logger.info(f"Generating image for panel {panel.id}")
        return self.backend.generate(prompt)

    def edit(self, prior: ImagePayload, instruction: str, prompt: Optional[str] = None) -> Optional[ImagePayload]:
        logger.info("Editing image")
        return self.backend.edit(prior, instruction, prompt)
