"""CLI commands to talk to Sakai from a terminal."""

from __future__ import annotations

from contextlib import aclosing
from pathlib import Path
from typing import TYPE_CHECKING

import click
import structlog
from rich import get_console
from rich.prompt import Prompt

from sakai.lib.files import extract_file_blocks
from sakai.schemas import ChatAssistantRequest, ConversationMessage, Personality, ProjectGenerationRequest, TextPart
from sakai.utils.sync_tools import run_

if TYPE_CHECKING:
    from rich.console import Console

    from sakai.services.genai import GenAIService


logger = structlog.get_logger()

EXIT_COMMANDS = {"/quit", "/exit", "/q"}


def _get_initialized_service(console: Console) -> GenAIService:
    from sakai.services.genai import get_genai_service

    genai_service = get_genai_service()
    if not genai_service.is_initialized:
        console.print("[red]GenAI is not configured: set GEMINI_API_KEY or VERTEX_AI_PROJECT_ID.[/red]")
        raise SystemExit(1)
    return genai_service


def _save_file_blocks(console: Console, text: str, save_dir: Path) -> None:
    blocks = extract_file_blocks(text)
    if not blocks:
        return
    save_dir.mkdir(parents=True, exist_ok=True)
    for block in blocks:
        target = save_dir / block.safe_name
        target.write_text(block.content, encoding="utf-8")
        console.print(f"[green]✓[/green] Saved [cyan]{target}[/cyan]")


@click.group(name="assistant", help="Talk to Sakai from the terminal.")
def assistant_group() -> None:
    """Sakai assistant commands."""
    from sakai.config import setup_logging

    setup_logging()


@assistant_group.command(name="model-info", help="Show the configured Gemini models.")
def model_info_cmd() -> None:
    """Show the configured Gemini models."""
    from sakai.lib.settings import get_settings
    from sakai.services.genai import get_genai_service

    console = get_console()
    settings = get_settings()
    backend = "Vertex AI" if settings.genai.PROJECT_ID else "Gemini Developer API"
    console.print("[bold cyan]🤖 AI Model Configuration[/bold cyan]")
    console.print(f"[bold]Backend:[/bold] {backend}")
    console.print(f"[bold]Chat Model:[/bold] {settings.genai.CHAT_MODEL}")
    console.print(f"[bold]Image Model:[/bold] {settings.genai.IMAGE_MODEL}")
    console.print(f"[bold]Default Temperature:[/bold] {settings.genai.DEFAULT_TEMPERATURE}")
    if settings.genai.PROJECT_ID:
        console.print(f"[bold]Google Project:[/bold] {settings.genai.PROJECT_ID}")
        console.print(f"[bold]Location:[/bold] {settings.genai.LOCATION}")

    if get_genai_service().is_initialized:
        console.print("[bold green]✓ Client initialized[/bold green]")
    else:
        console.print("[bold red]✗ No credentials: set GEMINI_API_KEY or VERTEX_AI_PROJECT_ID[/bold red]")


@assistant_group.command(name="chat", help="Start an interactive chat session.")
@click.option(
    "--personality",
    "-p",
    type=click.Choice([p.value for p in Personality]),
    default=Personality.DEFAULT.value,
    show_default=True,
)
@click.option("--memory", "-m", default=None, help="Information Sakai should always take into account")
@click.option("--system-prompt", default=None, help="Replace the persona (developer mode)")
@click.option("--temperature", "-t", type=click.FloatRange(0, 1), default=None)
@click.option(
    "--save-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write the files Sakai proposes into this directory",
)
def chat_cmd(
    personality: str,
    memory: str | None,
    system_prompt: str | None,
    temperature: float | None,
    save_dir: Path | None,
) -> None:
    """Start an interactive chat session."""

    @run_
    async def _chat() -> None:
        from sakai.services.assistant import ChatAssistantService

        console = get_console()
        assistant = ChatAssistantService(_get_initialized_service(console))
        history: list[ConversationMessage] = []

        console.rule("[bold magenta]Sakai", style="magenta", align="left")
        console.print("[dim]Type /quit to leave.[/dim]")

        while True:
            try:
                user_text = Prompt.ask("[bold cyan]Toi[/bold cyan]")
            except (EOFError, KeyboardInterrupt):
                break
            if user_text.strip() in EXIT_COMMANDS:
                break
            if not user_text.strip():
                continue

            history.append(ConversationMessage(role="user", parts=[TextPart(text=user_text)]))
            request = ChatAssistantRequest(
                history=list(history),
                memory=memory,
                override_system_prompt=system_prompt,
                temperature=temperature,
                personality=personality,
            )

            console.print("[bold magenta]Sakai[/bold magenta] ", end="")
            answer = ""
            async with aclosing(assistant.stream_chat(request)) as chunks:
                async for chunk in chunks:
                    if chunk.error is not None:
                        console.print(f"\n[red]Désolé, une erreur est survenue : {chunk.error}[/red]")
                        break
                    answer += chunk.text or ""
                    console.print(chunk.text, end="", markup=False, highlight=False)
            console.print()

            if answer:
                history.append(ConversationMessage(role="model", parts=[TextPart(text=answer)]))
                if save_dir is not None:
                    _save_file_blocks(console, answer, save_dir)

    _chat()


@assistant_group.command(name="thought", help="Print a short thought from Sakai.")
def thought_cmd() -> None:
    """Print a short thought from Sakai."""

    @run_
    async def _thought() -> None:
        from sakai.services.flows import AssistantFlowService

        console = get_console()
        result = await AssistantFlowService(_get_initialized_service(console)).generate_sakai_thought()
        console.print(f"[italic]{result.thought}[/italic]")

    _thought()


@assistant_group.command(name="build-project", help="Generate a Vite + React project from a description.")
@click.argument("description")
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("sakai-generated-app"),
    show_default=True,
)
def build_project_cmd(description: str, output: Path) -> None:
    """Generate a Vite + React project from a description."""

    @run_
    async def _build() -> None:
        from rich.table import Table

        from sakai.services.flows import AssistantFlowService

        console = get_console()
        flows = AssistantFlowService(_get_initialized_service(console))
        with console.status("[bold blue]Generating project files...", spinner="dots"):
            result = await flows.generate_project_files(ProjectGenerationRequest(user_input_prompt=description))

        if result.error or not result.files:
            console.print(f"[red]✗ {result.error or 'No files generated'}[/red]")
            raise SystemExit(1)

        root = output.resolve()
        table = Table(show_header=True, header_style="bold blue")
        table.add_column("File", style="cyan")
        table.add_column("Size", justify="right")
        for file_path, content in sorted(result.files.items()):
            target = (root / file_path.lstrip("/")).resolve()
            if not target.is_relative_to(root):
                logger.warning("Skipping file outside of the output directory", path=file_path)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            table.add_row(file_path, f"{len(content):,} chars")

        console.print(table)
        console.print(f"[green]✓[/green] Project written to [cyan]{root}[/cyan]")

    _build()
