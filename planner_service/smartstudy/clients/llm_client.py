"""
Artifact: planner_service/smartstudy/clients/llm_client.py
Purpose: Wraps external LLM client construction for Nvidia-backed LangChain chat model calls.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-13: Added StudyGuideClient with lazy model creation and explicit close. (SmartStudy Team)
Preconditions:
- `langchain_nvidia_ai_endpoints` package is installed; credentials come from settings or the caller.
Inputs:
- Acceptable: Model name string, numeric temperature, max token values, and an optional API key.
- Unacceptable: Unsupported model identifiers or non-numeric generation parameters.
Postconditions:
- The chat model is created on first use and released on close().
Returns:
- `ChatNVIDIA` objects (or whatever the injected factory builds).
Errors/Exceptions:
- RuntimeError when a closed client is used.
- Underlying provider/client initialization exceptions for invalid setup.
"""

from typing import Any, Callable, Optional

from langchain_nvidia_ai_endpoints import ChatNVIDIA

from ..core.config import settings
from ..core.logging import get_logger

logger = get_logger("smartstudy.guides")


def build_nvidia_chat_client(
    model_name: str,
    temperature: float,
    max_tokens: int,
    api_key: Optional[str] = None,
) -> ChatNVIDIA:
    """Create a configured ChatNVIDIA client."""
    kwargs = {}
    if api_key:
        kwargs["api_key"] = api_key
    return ChatNVIDIA(
        model=model_name,
        temperature=temperature,
        max_tokens=max_tokens,
        **kwargs,
    )


class StudyGuideClient:
    """Owns the chat model used for study-guide generation."""

    def __init__(
        self,
        model_name: str,
        temperature: float,
        max_tokens: int,
        api_key: str = "",
        factory: Callable[..., Any] = build_nvidia_chat_client,
    ):
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._api_key = api_key
        self._factory = factory
        self._llm = None
        self._closed = False

    @classmethod
    def from_settings(cls) -> "StudyGuideClient":
        return cls(
            model_name=settings.study_guide_model(),
            temperature=settings.study_guide_temperature(),
            max_tokens=settings.study_guide_max_tokens(),
            api_key=settings.nvidia_api_key(),
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key) and not self._closed

    @property
    def closed(self) -> bool:
        return self._closed

    def chat_model(self):
        if self._closed:
            raise RuntimeError("StudyGuideClient is closed")
        if self._llm is None:
            logger.info(
                "Initializing LLM | model=%s temperature=%s max_tokens=%d",
                self.model_name,
                self.temperature,
                self.max_tokens,
            )
            self._llm = self._factory(
                model_name=self.model_name,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                api_key=self._api_key,
            )
        return self._llm

    def close(self) -> None:
        self._llm = None
        self._closed = True
