"""
Service wiring for the orchestrator.

- get_analysis_client(): AnalysisClient over the configured LLM provider
- build_orchestrator(): a fresh, caller-owned Orchestrator wired from settings

Each call builds new instances; nothing is cached at module level so that
callers (console, tests) control the lifecycle of their sessions.
"""
from __future__ import annotations

from eduvane.services.analysis import AnalysisClient
from eduvane.services.chat import ChatSessionFactory, get_chat_session_factory
from eduvane.services.llm import get_llm_service
from eduvane.services.orchestration import Orchestrator
from eduvane.services.persistence import BasePersistenceService, get_persistence_service
from eduvane.settings import settings


def get_analysis_client() -> AnalysisClient:
    return AnalysisClient(get_llm_service(), settings)


def build_orchestrator(
    is_guest: bool = False,
    persistence: BasePersistenceService | None = None,
    chat_session_factory: ChatSessionFactory | None = None,
) -> Orchestrator:
    """Build an Orchestrator from settings.

    Raises:
        ConfigurationError: missing API key or unsupported provider
    """
    return Orchestrator(
        analysis_client=get_analysis_client(),
        chat_session_factory=chat_session_factory or get_chat_session_factory(),
        persistence=persistence or get_persistence_service(),
        is_guest=is_guest,
        fast_path_threshold=settings.fast_path_threshold,
    )
