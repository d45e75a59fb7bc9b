"""Terminal rendering for the interactive loop, built on rich."""
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from content_curator.models import ContentType, ModelInfo, Platform
from content_curator.utils.clipboard import extract_numbered_items

console = Console()

PLATFORM_LABELS: dict[Platform, str] = {
    Platform.INSTAGRAM: "📸 Instagram Reels",
    Platform.YOUTUBE: "▶️  YouTube Shorts",
    Platform.TIKTOK: "🎵 TikTok",
    Platform.ALL: "📱 All Platforms",
}

CONTENT_TITLES: dict[ContentType, str] = {
    ContentType.SEARCH: "🔍 Research",
    ContentType.IDEAS: "💡 Content Ideas",
    ContentType.SCRIPT: "📝 Reel Script",
    ContentType.TRENDING: "🔥 Trending Report",
    ContentType.HOOKS: "🎣 Hooks",
    ContentType.FULL: "📦 Content Package",
}

HELP_ROWS = [
    ("/search, /research", "Research the topic on the web"),
    ("/ideas", "5 viral content ideas"),
    ("/script", "Full reel script"),
    ("/trending", "Trends from the last 7 days"),
    ("/hooks", "10 scroll-stopping hooks"),
    ("/full, /package", "Complete content package"),
    ("/more", "More variations of the last content"),
    ("/platform, /p", "Switch target platform"),
    ("/topic, /t", "Change topic (clears generated content)"),
    ("/model, /m", "Switch AI model"),
    ("/copy, /c", "Copy last content to clipboard"),
    ("/last", "Show last content again"),
    ("/clear", "Clear the screen"),
    ("/help, /?", "Show this help"),
    ("/quit, /q", "Exit"),
]


def print_header() -> None:
    console.print()
    console.rule("[bold magenta]Content Curator[/]")
    console.print("[dim]AI-powered real-time content curator for short-form video · search by Tavily[/]", justify="center")
    console.print()


def print_search_status(configured: bool) -> None:
    if configured:
        console.print("[green]✓[/] Web search enabled")
    else:
        console.print("[yellow]⚠ Web search disabled.[/] [dim]Set TAVILY_API_KEY in .env for real-time results.[/]")


def print_session_panel(topic: str, platform: Platform) -> None:
    body = f"[dim]Topic:[/] [bold]{topic}[/]\n[dim]Platform:[/] {PLATFORM_LABELS[platform]}"
    console.print(Panel(body, title="🎯 Current Session", expand=False))


def print_inline_status(model: ModelInfo, topic: str, platform: Platform) -> None:
    premium = " [yellow]⚡[/]" if model.premium else ""
    console.print(f"[dim]{model.name}{premium} · {topic} · {platform.value}[/]")


def print_help() -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column(style="dim")
    for cmd, desc in HELP_ROWS:
        table.add_row(cmd, desc)
    console.print(Panel(table, title="Commands", subtitle="[dim]or type feedback to refine the last result[/]", expand=False))


def print_content(content: str, content_type: ContentType) -> None:
    items = extract_numbered_items(content)
    subtitle = f"[dim]{len(items)} numbered items[/]" if items else None
    console.print()
    console.print(Panel(Markdown(content), title=CONTENT_TITLES[content_type], subtitle=subtitle))


def print_success(message: str) -> None:
    console.print(f"[bold green]✓[/] {message}")


def print_error(message: str) -> None:
    console.print(f"[bold red]Error:[/] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/] {message}")


def print_goodbye() -> None:
    console.print("\n[dim]Goodbye![/]")
