import logging
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from content_curator.config import Settings
from content_curator.models import Platform

load_dotenv()
app = typer.Typer(help="AI-powered real-time content curator for short-form video ideas.")
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.command()
def run(
    topic: Optional[str] = typer.Argument(None, help="Initial topic to research"),
    platform: Optional[Platform] = typer.Option(None, "--platform", "-p", help="Target platform"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Chat model id (default: gpt-4o)"),
    plain_copy: bool = typer.Option(False, "--plain-copy", help="Strip markdown when copying to the clipboard"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    _setup_logging(verbose)

    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/] invalid configuration\n{exc}")
        raise typer.Exit(1)
    if model:
        settings = settings.model_copy(update={"model": model})

    from content_curator.agent.loop import run_interactive_loop
    code = run_interactive_loop(settings, topic=topic, platform=platform, plain_copy=plain_copy)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
