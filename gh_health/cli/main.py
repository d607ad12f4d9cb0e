"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .collect import collect, summary

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="github-health",
    help="Collect GitHub repositories and their open issues for visualisation",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="collect", context_settings={"help_option_names": ["-h", "--help"]})(
    collect
)
app.command(name="summary", context_settings={"help_option_names": ["-h", "--help"]})(
    summary
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_health import __version__

    console.print(f"GitHub Repo Health v{__version__}")


if __name__ == "__main__":
    app()
