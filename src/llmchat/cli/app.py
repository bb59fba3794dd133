"""Command line entry point: reads configuration and starts the chat TUI."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console

from .providers import get_llm

# .env values never override variables already set in the shell
load_dotenv()

app = typer.Typer(
    name="llmchat",
    help="Terminal chat client that streams model replies as they arrive",
    add_completion=True,
)

console = Console()


@app.command()
def chat(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider: openai or deepseek (default: $LLM_PROVIDER or openai)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to chat with (default: provider's model variable)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat TUI."""
    llm = get_llm(provider=provider, model=model, console=console)

    async def _tui() -> int:
        from ..ui import run_chat_tui

        async with llm:
            return await run_chat_tui(llm=llm, log_level=log_level)

    try:
        exit_code = asyncio.run(_tui())
    except KeyboardInterrupt:
        exit_code = 0
    except Exception as e:
        console.print(f"[red]Error running program: {e}[/red]")
        raise typer.Exit(code=1)

    if exit_code:
        raise typer.Exit(code=exit_code)


def main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
