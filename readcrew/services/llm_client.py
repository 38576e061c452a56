"""
Generative text client using LiteLLM

Wraps the external completion provider behind one coroutine:
"given a system instruction and a conversation history, produce text".
Supports Groq, OpenAI, Gemini and Anthropic through LiteLLM.

Usage:
    from readcrew.services.llm_client import create_client

    client = create_client(config)      # None when no API key is configured
    if client:
        text = await client.complete(system, [{"role": "user", "content": "hi"}])
"""

import logging
import os
from typing import Dict, List, Optional, Protocol

import litellm
from litellm import acompletion

from ..config import ServerConfig

logger = logging.getLogger(__name__)

# Suppress LiteLLM's verbose logging
litellm.suppress_debug_info = True

# Drop unsupported params for models with restrictions
litellm.drop_params = True


# ============================================================================
# Model Configuration
# ============================================================================

SUPPORTED_MODELS: Dict[str, str] = {
    "groq": "groq/llama-3.3-70b-versatile",
    "openai": "gpt-5-mini",
    "gemini": "gemini/gemini-2.5-flash",
    "anthropic": "claude-sonnet-4-5",
}

# Environment variable names for API keys
API_KEY_ENV_VARS: Dict[str, str] = {
    "groq": "GROQ_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


# ============================================================================
# Provider Availability
# ============================================================================

def get_available_providers() -> List[str]:
    """Providers with an API key present in the environment."""
    return [p for p, env_var in API_KEY_ENV_VARS.items() if os.getenv(env_var)]


def is_provider_available(provider: str) -> bool:
    """Check if a specific provider has an API key configured."""
    env_var = API_KEY_ENV_VARS.get(provider)
    return bool(env_var and os.getenv(env_var))


def get_model_for_provider(provider: str) -> str:
    """
    Get the model identifier for a provider.

    Raises:
        ValueError: If provider is not supported
    """
    model = SUPPORTED_MODELS.get(provider)
    if not model:
        raise ValueError(f"Unsupported provider: {provider}. "
                         f"Supported: {list(SUPPORTED_MODELS.keys())}")
    return model


# ============================================================================
# Client
# ============================================================================

class GenerativeClient(Protocol):
    """Anything that can turn an instruction plus history into text."""

    async def complete(
        self,
        system_instruction: str,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> str:
        ...


class LiteLLMClient:
    """GenerativeClient backed by litellm.acompletion."""

    def __init__(self, provider: str, model: Optional[str] = None, timeout: float = 30.0):
        self.provider = provider
        self.model = model or get_model_for_provider(provider)
        self.timeout = timeout

    async def complete(
        self,
        system_instruction: str,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> str:
        """
        Call the provider and return the reply text.

        Raises:
            ValueError: If the provider answers with no content
            Exception: Transport/API errors from LiteLLM propagate unchanged
        """
        response = await acompletion(
            model=self.model,
            messages=[{"role": "system", "content": system_instruction}, *messages],
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=self.timeout,
        )
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise ValueError(f"Empty completion from {self.model}")
        return content


def create_client(config: ServerConfig) -> Optional[LiteLLMClient]:
    """Build the client for the configured provider, or None when it has no API key."""
    provider = config.llm_provider
    if provider not in SUPPORTED_MODELS:
        logger.warning("[startup] Unsupported LLM_PROVIDER %r; generative features disabled", provider)
        return None
    if not is_provider_available(provider):
        logger.warning(
            "[startup] %s not set; every recommendation will come from the fallback catalog",
            API_KEY_ENV_VARS[provider],
        )
        return None
    client = LiteLLMClient(provider, model=config.llm_model, timeout=config.llm_timeout_seconds)
    logger.info("[startup] Generative client: %s (%s)", provider, client.model)
    return client
