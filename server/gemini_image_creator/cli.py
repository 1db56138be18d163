"""CLI for the Gemini image creator MCP server.

Usage:
    gemini-image-creator                 # same as `serve`
    gemini-image-creator serve
    gemini-image-creator tools [--json]
    gemini-image-creator generate "a red fox" -o fox.png
"""

import asyncio
import json
import logging
import time
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from gemini_image_creator.config import Settings, load_settings
from gemini_image_creator.errors import ConfigurationError, ImageCreatorError
from gemini_image_creator.gemini import GeminiClient
from gemini_image_creator.logging_config import configure_logging
from gemini_image_creator.tool_server import build_generate_image_tool
from gemini_image_creator.transport import run_stdio_server
from gemini_image_creator.types import GeneratedImage, GenerationRequest, ModelIdentifier
from gemini_image_creator.use_case import GenerateImageUseCase

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gemini-image-creator",
    help="MCP server for Google Gemini image generation",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigurationError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def _configure_logging(settings: Settings) -> None:
    configure_logging(
        json_format=settings.log_json,
        log_level=settings.log_level,
        log_file=settings.log_file,
    )


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the stdio server when no command is given."""
    if ctx.invoked_subcommand is None:
        serve()


@app.command()
def serve() -> None:
    """Serve newline-delimited JSON-RPC on stdin/stdout until stdin closes."""
    settings = _load_settings_or_exit()
    _configure_logging(settings)
    logger.info("Starting Google Gemini Image Creator MCP Server")

    try:
        asyncio.run(run_stdio_server(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


@app.command()
def tools(
    as_json: bool = typer.Option(False, "--json", help="Print the raw tools/list payload"),
) -> None:
    """Show the tool schema advertised by tools/list."""
    settings = Settings()
    tool = build_generate_image_tool(settings.gemini_default_model, settings.allowed_models)

    if as_json:
        typer.echo(json.dumps({"tools": [tool.model_dump(by_alias=True)]}, indent=2))
        return

    console.print(f"[bold cyan]{tool.name}[/bold cyan] - {tool.description}")

    table = Table(title="Parameters", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="yellow")
    table.add_column("Required", justify="center")
    table.add_column("Details", style="dim")

    required = set(tool.input_schema.get("required", []))
    for name, schema in tool.input_schema["properties"].items():
        details = schema.get("description", "")
        if "enum" in schema:
            details += f"\nchoices: {', '.join(schema['enum'])}"
        if "default" in schema:
            details += f"\ndefault: {schema['default']}"
        table.add_row(
            name,
            schema.get("type", "-"),
            "[green]✓[/green]" if name in required else "",
            details,
        )

    console.print(table)


async def _generate_async(settings: Settings, prompt: str, model: str | None) -> GeneratedImage:
    if model is None:
        identifier = ModelIdentifier(settings.gemini_default_model)
    else:
        identifier = ModelIdentifier.parse(model, settings.allowed_models)

    async with GeminiClient(
        settings.gemini_api_key,
        base_url=settings.gemini_api_base_url,
        timeout=settings.gemini_request_timeout,
    ) as client:
        use_case = GenerateImageUseCase(client, max_prompt_length=settings.max_prompt_length)
        return await use_case.execute(GenerationRequest(prompt=prompt, model=identifier))


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Text prompt for image generation"),
    model: str | None = typer.Option(None, "--model", "-m", help="Gemini model name"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (default: generated_<timestamp>.png)"
    ),
) -> None:
    """Generate one image without starting the server.

    Examples:
        gemini-image-creator generate "watercolor lighthouse at dusk"
        gemini-image-creator generate "line drawing of a cat" -m gemini-2.5-flash-image -o cat.png
    """
    settings = _load_settings_or_exit()
    _configure_logging(settings)

    try:
        image = asyncio.run(_generate_async(settings, prompt, model))
    except ImageCreatorError as e:
        err_console.print(f"[red]Failed to generate image: {e}[/red]")
        raise typer.Exit(1) from e

    path = output or Path(f"generated_{int(time.time())}.png")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(image.data)
    console.print(
        f"[green]Saved {image.size_bytes:,} bytes ({image.mime_type}) "
        f"from {image.model} to {path}[/green]"
    )


# Entry point
if __name__ == "__main__":
    app()
