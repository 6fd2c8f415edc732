"""
Template Editor UI Components

Console rendering and prompts for the editing screen, built on rich.
"""

import re
from typing import Optional, List, Callable, Any, Dict, Sequence
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt, Confirm
from rich.table import Table
from rich.text import Text

MASK = "********"
CLEAR_INPUT = "-"

# Key names whose values are never shown
SECRET_PATTERNS = [
    "token", "password", "secret", "api_key", "apikey", "authorization",
]

SECRET_REGEXES = [
    r'(?<=Bearer )[A-Za-z0-9\-._~+/]+=*',
    r'eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+',  # JWT
]


def mask_secrets(text: str, mask: str = MASK) -> str:
    """Replace bearer tokens, JWTs and ``token=...`` style values with ``mask``."""
    if not text:
        return text

    # Bearer values first so the "Bearer" prefix stays readable
    for regex in SECRET_REGEXES:
        text = re.sub(regex, mask, text)

    for name in SECRET_PATTERNS:
        assignment = rf'({name}["\']?\s*[=:]\s*["\']?)(?!Bearer\b)([^"\'\s,}}]+)(["\']?)'
        text = re.sub(assignment, rf'\1{mask}\3', text, flags=re.IGNORECASE)

    return text


def is_secret_key(key: str) -> bool:
    lowered = key.lower()
    return any(name in lowered for name in SECRET_PATTERNS)


def format_category(category: str) -> str:
    """'soft_skills' -> 'SOFT SKILLS'."""
    return category.replace("_", " ").upper()


def resolve_choice(selection: str, choices: List[str]) -> Optional[str]:
    """Match a typed 1-based number or a choice name; None if neither fits."""
    selection = (selection or "").strip()
    if selection.isdigit():
        position = int(selection)
        return choices[position - 1] if 1 <= position <= len(choices) else None
    return next((c for c in choices if c.lower() == selection.lower()), None)


class EditorUI:
    """Rendering and prompts for the template editing screen."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def clear(self):
        self.console.clear()

    def print_header(self, title: str = "EDIT INTERVIEW TEMPLATE"):
        self.console.print()
        self.console.print(Panel(
            f"[bold blue]{title}[/bold blue]",
            subtitle="[dim]Questions and AI keywords[/dim]",
            border_style="blue",
            padding=(0, 2)
        ))
        self.console.print()

    def print_success(self, message: str):
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str):
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str):
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str):
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def print_exception(self, error: Exception):
        """Print an error with its remediation hint, if it carries one."""
        message = getattr(error, "message", None) or str(error)
        self.print_error(message)
        remediation = getattr(error, "remediation", None)
        if remediation:
            self.print_info(f"To fix: {remediation}")

    def prompt_text(self, prompt: str, default: str = "", clearable: bool = False) -> str:
        """Free text input. Blank input keeps ``default``.

        With ``clearable``, typing CLEAR_INPUT empties the field.
        """
        if clearable and default:
            prompt = f"{prompt} [dim]('{CLEAR_INPUT}' to clear)[/dim]"
        answer = Prompt.ask(prompt, default=default or None, console=self.console) or ""
        if clearable and answer.strip() == CLEAR_INPUT:
            return ""
        return answer

    def prompt_confirm(self, prompt: str, default: bool = False) -> bool:
        return Confirm.ask(prompt, default=default, console=self.console)

    def prompt_choice(
        self,
        prompt: str,
        choices: List[str],
        default: Optional[str] = None,
        labels: Optional[Dict[str, str]] = None
    ) -> str:
        """Numbered menu; loops until a listed choice is picked."""
        labels = labels or {}
        self.console.print(f"\n[bold]{prompt}[/bold]")
        for number, choice in enumerate(choices, 1):
            current = "[bold green]→[/bold green]" if choice == default else " "
            self.console.print(f"  {current} [{number}] {labels.get(choice, choice)}")

        default_number = str(choices.index(default) + 1) if default in choices else None
        while True:
            answer = Prompt.ask("Choose", default=default_number, console=self.console)
            picked = resolve_choice(answer, choices)
            if picked is not None:
                return picked
            self.print_error(f"Pick 1-{len(choices)} or type a name")

    def prompt_index(self, prompt: str, count: int) -> Optional[int]:
        """Prompt for a 1-based row number. Returns a 0-based index or None."""
        if count == 0:
            return None
        answer = Prompt.ask(f"{prompt} (1-{count}, blank to cancel)", default="", console=self.console)
        if not answer.strip():
            return None
        if answer.strip().isdigit() and 1 <= int(answer) <= count:
            return int(answer) - 1
        self.print_error(f"No row {answer}; rows are 1-{count}")
        return None

    def show_progress(self, description: str, task_func: Callable[[], Any]) -> Any:
        """Run ``task_func`` behind a transient spinner and return its result."""
        with Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            transient=True,
            console=self.console
        ) as spinner:
            spinner.add_task(description, total=None)
            return task_func()

    def show_template_details(self, title: str, description: str):
        """Show the template title and description."""
        table = Table(title="TEMPLATE DETAILS", border_style="blue", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Title *", title or "[dim]not set[/dim]")
        table.add_row("Description", description or "[dim]not set[/dim]")
        self.console.print(table)

    def show_tabs(self, active: str, question_count: int, keyword_count: int):
        """Show the tab bar with item counts."""
        tabs = Text()
        for name, label in (("questions", f"QUESTIONS ({question_count})"),
                            ("keywords", f"AI KEYWORDS ({keyword_count})")):
            style = "bold reverse" if name == active else "dim"
            tabs.append(f" {label} ", style=style)
            tabs.append("  ")
        self.console.print(tabs)
        self.console.print()

    def show_questions(self, questions: Sequence[Any], time_labels: Dict[int, str]):
        """Show the question list in display order."""
        table = Table(border_style="blue")
        table.add_column("#", style="cyan", width=3)
        table.add_column("Question")
        table.add_column("Time Limit", style="dim")

        for question in questions:
            text = question.text or "[dim](empty)[/dim]"
            label = time_labels.get(question.time_limit, f"{question.time_limit}s")
            table.add_row(str(question.order), text, label)

        self.console.print(table)

    def show_keywords(self, groups: Dict[str, Sequence[Any]], icons: Dict[str, str]):
        """Show keywords grouped by category."""
        if not groups:
            self.console.print("[dim]No keywords yet. Add keywords to help the AI score answers.[/dim]")
            return

        index = 1
        for category, keywords in groups.items():
            chips = Text()
            for keyword in keywords:
                chips.append(f"[{index}] ", style="dim")
                chips.append(keyword.keyword, style="bold")
                if keyword.weight > 1:
                    chips.append(f" {keyword.weight}x", style="yellow")
                chips.append("   ")
                index += 1
            self.console.print(Panel(
                chips,
                title=f"{icons.get(category, '📋')} {format_category(category)} ({len(keywords)})",
                title_align="left",
                border_style="blue"
            ))

    def show_templates_table(self, templates: List[Dict[str, Any]]):
        """Show the template dashboard."""
        table = Table(title="Interview Templates", border_style="blue")
        table.add_column("ID", style="cyan")
        table.add_column("Title")
        table.add_column("Description", style="dim")

        for template in templates:
            table.add_row(
                str(template.get("id", "")),
                str(template.get("title") or ""),
                str(template.get("description") or "")
            )

        self.console.print(table)

    def show_settings(self, settings: Dict[str, str]):
        """Show resolved connection settings. Secret values are never printed."""
        table = Table(title="Template Editor Settings", border_style="blue")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")

        for key, value in settings.items():
            if not value:
                shown = "[dim]not set[/dim]"
            elif is_secret_key(key):
                shown = MASK
            else:
                shown = mask_secrets(value)
            table.add_row(key, shown)

        self.console.print(table)
