"""CLI interface for the search summarizer."""

import asyncio
from typing import NoReturn

import typer
from rich.console import Console

from .config import settings
from .exceptions import ConfigurationError, InvalidIndexError, PersistenceError, SearchSummarizerError
from .observability import setup_structured_logging
from .render import render_saved_list, render_state
from .saved import SavedSearchStore
from .workflow import Orchestrator, SaveState, SessionState, WorkflowStage

app = typer.Typer(help="Search the web and summarize the top results with an LLM")
saved_app = typer.Typer(help="Manage saved searches")
app.add_typer(saved_app, name="saved")

console = Console()

SHELL_HELP = """Type a question to search. Commands:
  :save        save the current answer
  :list        show saved searches
  :load N      reopen saved search N
  :delete N    delete saved search N
  :reset       clear the current answer
  :quit        exit"""


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _print_notice(orchestrator: Orchestrator) -> bool:
    """Print the pending session notice, if any. Returns whether one was shown."""
    notice = orchestrator.state.notice
    if notice:
        console.print(f"[yellow]{notice}[/yellow]")
    return bool(notice)


def _build_orchestrator() -> Orchestrator:
    setup_structured_logging(settings.logging.level, settings.logging.json_logs)
    try:
        return Orchestrator.from_settings(settings)
    except ConfigurationError as e:
        _fail(str(e))


def _open_store() -> SavedSearchStore:
    setup_structured_logging(settings.logging.level, settings.logging.json_logs)
    store = SavedSearchStore(settings.get_store_path())
    try:
        store.load()
    except PersistenceError as e:
        _fail(str(e))
    return store


@app.command()
def search(
    query: str = typer.Argument(..., help="Question to search for"),
    save: bool = typer.Option(False, "--save", "-s", help="Save the query, sources and answer"),
) -> None:
    """Search, summarize the top results, and print sources and answer."""
    orchestrator = _build_orchestrator()

    async def _search() -> SessionState:
        await orchestrator.load_saved()
        _print_notice(orchestrator)
        with console.status("Searching..."):
            state = await orchestrator.run_query(query)
        if save:
            if state.can_save:
                await orchestrator.save_current()
            else:
                console.print("[yellow]Nothing to save: the answer is incomplete.[/yellow]")
        return orchestrator.state

    try:
        state = asyncio.run(_search())
    except SearchSummarizerError as e:
        _fail(str(e))

    render_state(console, state)
    if state.stage == WorkflowStage.FAILED:
        raise typer.Exit(code=1)


async def _handle_shell_line(orchestrator: Orchestrator, line: str) -> bool:
    """Run one shell input line. Returns False when the shell should exit."""
    command, _, argument = line.partition(" ")
    argument = argument.strip()

    if command in (":quit", ":q", ":exit"):
        return False
    if command == ":help":
        console.print(SHELL_HELP)
    elif command == ":save":
        if orchestrator.state.can_save:
            await orchestrator.save_current()
            if not _print_notice(orchestrator):
                console.print("[green]✓ Saved[/green]")
        elif orchestrator.state.save_state == SaveState.SAVED:
            console.print("[dim]Already saved.[/dim]")
        else:
            console.print("[yellow]Nothing to save yet.[/yellow]")
    elif command == ":list":
        console.print(render_saved_list(orchestrator.saved))
    elif command == ":load":
        index = _parse_index(argument)
        if index is None or not 0 <= index < len(orchestrator.saved):
            console.print(f"[red]No saved search at index {argument or '?'}[/red]")
        else:
            render_state(console, orchestrator.load_into_session(orchestrator.saved[index]))
    elif command == ":delete":
        index = _parse_index(argument)
        if index is None:
            console.print("[red]Usage: :delete N[/red]")
        elif typer.confirm("Delete this saved search?", default=False):
            try:
                await orchestrator.delete_saved(index)
            except InvalidIndexError as e:
                console.print(f"[red]{e}[/red]")
            else:
                if not _print_notice(orchestrator):
                    console.print(render_saved_list(orchestrator.saved))
    elif command == ":reset":
        orchestrator.reset()
    elif command.startswith(":"):
        console.print(f"[red]Unknown command {command}[/red] (try :help)")
    else:
        with console.status("Searching..."):
            state = await orchestrator.run_query(line)
        render_state(console, state)
    return True


def _parse_index(argument: str) -> int | None:
    try:
        return int(argument)
    except ValueError:
        return None


@app.command()
def shell() -> None:
    """Interactive session: search, save, reload and delete answers."""
    orchestrator = _build_orchestrator()

    async def _shell() -> None:
        await orchestrator.load_saved()
        _print_notice(orchestrator)
        console.print(SHELL_HELP)
        while True:
            try:
                line = console.input("[bold blue]search>[/bold blue] ").strip()
            except EOFError:
                break
            if not line:
                continue
            if not await _handle_shell_line(orchestrator, line):
                break

    asyncio.run(_shell())


@saved_app.command("list")
def saved_list() -> None:
    """List saved searches."""
    store = _open_store()
    console.print(render_saved_list(store.entries))


@saved_app.command("show")
def saved_show(index: int = typer.Argument(..., help="Position in the saved list")) -> None:
    """Show a saved search's sources and answer."""
    store = _open_store()
    if not 0 <= index < len(store.entries):
        _fail(str(InvalidIndexError(index, len(store.entries))))
    render_state(console, SessionState.from_saved(store.entries[index]))


@saved_app.command("delete")
def saved_delete(
    index: int = typer.Argument(..., help="Position in the saved list"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a saved search."""
    store = _open_store()
    if not 0 <= index < len(store.entries):
        _fail(str(InvalidIndexError(index, len(store.entries))))
    if not yes:
        typer.confirm(f"Delete saved search '{store.entries[index].query}'?", abort=True)
    try:
        store.delete(index)
    except (InvalidIndexError, PersistenceError) as e:
        _fail(str(e))
    console.print(render_saved_list(store.entries))


@app.command()
def config() -> None:
    """Show current configuration."""
    print(f"Provider: {settings.llm.provider}")
    print(f"Model: {settings.llm.model_name}")
    print(f"Base URL: {settings.llm.base_url or '(default)'}")
    print(f"LLM API key: {'set' if settings.llm.get_api_key_for_provider() else '(missing)'}")
    print(f"Search URL: {settings.search.base_url}")
    print(f"Search API key: {'set' if settings.search.get_api_key() else '(missing)'}")
    print(f"Saved searches: {settings.get_store_path()}")
    print(f"Log level: {settings.logging.level}")


if __name__ == "__main__":
    app()
