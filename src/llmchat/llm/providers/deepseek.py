from typing import Any

from .openai import OpenAIProvider

DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL = "deepseek-chat"


class DeepSeekProvider(OpenAIProvider):
    """Chat provider for DeepSeek's OpenAI-compatible endpoint.

    Only the endpoint and default model differ from OpenAI; DeepSeek has no
    organization header.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        **client_kwargs: Any
    ):
        super().__init__(api_key=api_key, model=model, base_url=base_url, **client_kwargs)
