"""learnkit LLM - Client for the generative backend."""

from .client import BackendClient

__all__ = ["BackendClient"]
