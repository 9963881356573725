"""Provider configurations."""

from semquiz.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
