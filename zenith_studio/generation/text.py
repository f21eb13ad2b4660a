"""Text generation client over the google-genai SDK."""

import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from google import genai
from google.genai import types
from loguru import logger

from ..config import GeminiConfig
from ..errors import GenerationError, InvalidOutputError
from ..models import Turn


@dataclass
class CallLog:
    action: str = ""
    model: str = ""
    prompt_preview: str = ""
    response_preview: str = ""
    elapsed_seconds: float = 0.0


class TextGenerationClient:
    """Sends prompts (optionally with history) to Gemini and returns text."""

    def __init__(self, config: GeminiConfig):
        self.config = config
        self.logs: List[CallLog] = []
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not self.config.api_key:
                raise GenerationError("No Gemini API key configured (set GEMINI_API_KEY).")
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def _config(self, system: Optional[str], **extra) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system,
            temperature=self.config.temperature,
            **extra,
        )

    def chat(self, system: str, history: Sequence[Turn], message: str) -> str:
        """Continue a conversation; ``history`` is every prior turn in order."""
        start = time.time()
        try:
            chat = self.client.chats.create(
                model=self.config.text_model,
                config=self._config(system),
                history=[
                    types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
                    for turn in history
                ],
            )
            response = chat.send_message(message)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Chat call to {self.config.text_model} failed: {e}")
            raise GenerationError(f"The AI service returned an error: {e}") from e
        text = self._text_of(response)
        self._log("chat", self.config.text_model, message, text, time.time() - start)
        return text

    def generate(self, prompt: str, system: Optional[str] = None, model: Optional[str] = None) -> str:
        """Single-turn free text."""
        return self._generate(prompt, model or self.config.panel_model, self._config(system), "generate")

    def generate_json(self, prompt: str, schema, system: Optional[str] = None) -> str:
        """Single-turn call constrained to ``schema``; returns the raw JSON text."""
        config = self._config(
            system,
            response_mime_type="application/json",
            response_schema=schema,
        )
        return self._generate(prompt, self.config.panel_model, config, "generate_json")

    def _generate(self, prompt: str, model: str, config, action: str) -> str:
        start = time.time()
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"{action} call to {model} failed: {e}")
            raise GenerationError(f"The AI service returned an error: {e}") from e
        text = self._text_of(response)
        self._log(action, model, prompt, text, time.time() - start)
        return text

    @staticmethod
    def _text_of(response) -> str:
        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise InvalidOutputError("The AI returned an empty response.")
        return text

    def _log(self, action: str, model: str, prompt: str, response: str, elapsed: float) -> None:
        logger.debug(f"{action} on {model} took {elapsed:.2f}s ({len(response)} chars)")
        self.logs.append(
            CallLog(
                action=action,
                model=model,
                prompt_preview=prompt[:200],
                response_preview=response[:200] if response else "",
                elapsed_seconds=round(elapsed, 2),
            )
        )
