"""Generative backends that answer prompts with search-grounded text."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

import google.generativeai as genai

from orientall_app.config import AppConfig


LOGGER = logging.getLogger(__name__)


@dataclass
class GenerationReply:
    """Raw text from the model plus the ``(uri, title)`` pairs it cited."""

    text: str
    citations: List[Tuple[str, str]] = field(default_factory=list)


class GenerativeBackend(ABC):
    """Abstract prompt-in, text-out capability."""

    @abstractmethod
    async def generate(self, prompt: str, enable_search: bool = True) -> GenerationReply:
        """Return the model reply for ``prompt``."""


def _reply_text(response: Any) -> str:
    # ``response.text`` raises when the candidate has no text parts, e.g. a
    # blocked or empty answer; that is an empty reply, not a crash.
    try:
        return response.text or ""
    except (ValueError, AttributeError, IndexError):
        return ""


def _grounding_citations(response: Any) -> List[Tuple[str, str]]:
    citations: List[Tuple[str, str]] = []
    for candidate in getattr(response, "candidates", None) or []:
        metadata = getattr(candidate, "grounding_metadata", None)
        for chunk in getattr(metadata, "grounding_chunks", None) or []:
            web = getattr(chunk, "web", None)
            uri = getattr(web, "uri", "") if web is not None else ""
            if uri:
                citations.append((uri, getattr(web, "title", "") or ""))
        # The first candidate is the one whose text we return.
        break
    return citations


class GeminiSearchBackend(GenerativeBackend):
    """Gemini model with the Google Search grounding tool enabled."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self._model: genai.GenerativeModel | None = None
        if config.is_configured:
            genai.configure(api_key=config.api_key)

    @property
    def model(self) -> genai.GenerativeModel:
        if self._model is None:
            self._model = genai.GenerativeModel(self.config.model)
        return self._model

    @staticmethod
    def _search_tools() -> Sequence[Any]:
        # The SDK only forwards the retrieval form of search grounding.
        return [genai.protos.Tool(google_search_retrieval=genai.protos.GoogleSearchRetrieval())]

    async def generate(self, prompt: str, enable_search: bool = True) -> GenerationReply:
        LOGGER.info("Requesting grounded generation", extra={"model": self.config.model})
        response = await self.model.generate_content_async(
            prompt,
            tools=self._search_tools() if enable_search else None,
            request_options={"timeout": self.config.request_timeout_seconds},
        )
        return GenerationReply(text=_reply_text(response), citations=_grounding_citations(response))


class MockGenerativeBackend(GenerativeBackend):
    """Offline backend replaying canned replies, for tests and local runs."""

    def __init__(
        self,
        text: str = "",
        citations: List[Tuple[str, str]] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.text = text
        self.citations = list(citations or [])
        self.error = error
        self.calls: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def generate(self, prompt: str, enable_search: bool = True) -> GenerationReply:
        self.calls.append(prompt)
        LOGGER.info("Returning mock generation", extra={"search": enable_search})
        if self.error is not None:
            raise self.error
        return GenerationReply(text=self.text, citations=list(self.citations))


__all__ = ["GenerationReply", "GenerativeBackend", "GeminiSearchBackend", "MockGenerativeBackend"]
