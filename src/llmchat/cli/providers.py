"""Builds the chat provider from environment configuration."""

import os

import typer
from rich.console import Console

from ..llm import LLMProvider, create_llm_provider

_console = Console()

DEFAULT_PROVIDER = "openai"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"


def get_llm(
    provider: str | None = None,
    model: str | None = None,
    console: Console | None = None,
) -> LLMProvider:
    """Return the configured provider, or exit with a diagnostic.

    Args:
        provider: Provider name, overriding LLM_PROVIDER
        model: Model name, overriding the provider's model variable
        console: Optional Rich console for output

    Returns:
        LLM provider instance

    Raises:
        typer.Exit: If the provider is unknown or its API key is not set

    Environment variables:
        LLM_PROVIDER: Provider type (openai, deepseek; default: openai)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        OPENAI_BASE_URL: Optional OpenAI-compatible endpoint
        DEEPSEEK_API_KEY: DeepSeek API key (for deepseek provider)
        DEEPSEEK_MODEL: DeepSeek model (default: deepseek-chat)
    """
    con = console or _console
    llm_provider = (provider or os.getenv("LLM_PROVIDER", DEFAULT_PROVIDER)).lower()

    if llm_provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[red]Error: OPENAI_API_KEY environment variable not set[/red]")
            raise typer.Exit(code=1)
        return create_llm_provider(
            "openai",
            api_key=api_key,
            model=model or os.getenv("OPENAI_CHAT_MODEL", DEFAULT_OPENAI_MODEL),
            base_url=os.getenv("OPENAI_BASE_URL") or None,
        )

    elif llm_provider == "deepseek":
        api_key = os.getenv("DEEPSEEK_API_KEY")
        if not api_key:
            con.print("[red]Error: DEEPSEEK_API_KEY environment variable not set[/red]")
            raise typer.Exit(code=1)
        return create_llm_provider(
            "deepseek",
            api_key=api_key,
            model=model or os.getenv("DEEPSEEK_MODEL", DEFAULT_DEEPSEEK_MODEL),
        )

    con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
    raise typer.Exit(code=1)
