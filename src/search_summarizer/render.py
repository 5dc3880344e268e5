"""Rich rendering of session state for the terminal."""

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import SavedSearch, SearchResponse
from .utils import format_published_date, site_name, truncate
from .workflow import SaveState, SessionState, WorkflowStage

SNIPPET_PREVIEW = 240
TITLE_PREVIEW = 90


def render_sources(response: SearchResponse) -> Panel:
    """Source cards in upstream order: title, site and date, snippet."""
    cards = []
    for index, result in enumerate(response.results, start=1):
        header = Text(f"{index}. ", style="bold")
        header.append(truncate(result.title or result.url, TITLE_PREVIEW), style=f"bold blue link {result.url}")
        meta = Text(f"{site_name(result.url)} • {format_published_date(result.published_date)}", style="dim")
        snippet = Text(truncate(result.snippet, SNIPPET_PREVIEW))
        cards.append(Group(header, meta, snippet, Text("")))

    if not cards:
        cards.append(Text("No sources found.", style="dim"))
    return Panel(Group(*cards), title="Sources", title_align="left", border_style="blue")


def render_summary(summary: str, saved: bool = False) -> Panel:
    """The answer as formatted markdown."""
    subtitle = "✓ Saved" if saved else None
    return Panel(Markdown(summary), title="Answer", title_align="left", subtitle=subtitle, border_style="magenta")


def render_saved_list(saved: tuple[SavedSearch, ...]) -> Table | Text:
    """Saved searches with their positional index."""
    if not saved:
        return Text("No saved searches.", style="dim")

    table = Table(title="Saved Searches", show_lines=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Query")
    table.add_column("Sources", justify="right", style="dim")
    for index, entry in enumerate(saved):
        table.add_row(str(index), entry.query, str(len(entry.results.results)))
    return table


def render_state(console: Console, state: SessionState) -> None:
    """Print everything the current state has to show."""
    if state.stage == WorkflowStage.FAILED:
        console.print(f"[red]Search failed:[/red] {state.error}")
    if state.results is not None:
        console.print(render_sources(state.results))
    if state.summary:
        console.print(render_summary(state.summary, saved=state.save_state == SaveState.SAVED))
    elif state.results is not None and state.error:
        console.print(f"[yellow]No summary available:[/yellow] {state.error}")
    if state.notice:
        console.print(f"[yellow]{state.notice}[/yellow]")
