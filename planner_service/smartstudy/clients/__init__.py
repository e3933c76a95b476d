"""Client package exports for external provider integrations."""

from .llm_client import StudyGuideClient, build_nvidia_chat_client

__all__ = ["StudyGuideClient", "build_nvidia_chat_client"]
