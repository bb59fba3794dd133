from typing import Any

from .base import LLMProvider
from .providers import DeepSeekProvider, OpenAIProvider

_PROVIDERS: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "deepseek": DeepSeekProvider,
}

SUPPORTED_PROVIDERS = tuple(_PROVIDERS)


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create a chat provider by name.

    Args:
        provider: 'openai' or 'deepseek' (case-insensitive)
        **config: Keyword arguments for the provider class. ``api_key`` is
            required; ``model`` and ``base_url`` are optional.

    Returns:
        Provider instance, not yet connected

    Raises:
        ValueError: If the provider name is unknown
        TypeError: If ``api_key`` is missing

    Examples:
        >>> llm = create_llm_provider("deepseek", api_key="sk-...")
        >>> llm.model
        'deepseek-chat'
    """
    provider_cls = _PROVIDERS.get(provider.lower())
    if provider_cls is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(repr(p) for p in SUPPORTED_PROVIDERS)}"
        )
    if "api_key" not in config:
        raise TypeError(f"{provider_cls.__name__} requires 'api_key' in config")
    return provider_cls(**config)
