"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .enrich import classify_command, locations_command, providers_command
from .init import init_command
from .scrape import scrape_command
from .sources import sources_app

app = typer.Typer(
    name="redline",
    help="Redline - Political violence news scraper and AI enrichment",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("scrape")(scrape_command)
app.command("classify")(classify_command)
app.command("locations")(locations_command)
app.command("providers")(providers_command)
app.add_typer(sources_app, name="sources", help="Manage news sources")


if __name__ == "__main__":
    app()
