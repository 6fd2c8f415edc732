"""
Template Editor Command Line Interface

Main entry point for the template-editor CLI.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from template_editor.editor.exceptions import TemplateEditorError, get_error_code

console = Console()


def _build_config(api_url: Optional[str], token: Optional[str], config_path: Optional[str]):
    from template_editor.editor.config import load_config

    return load_config(
        config_path=Path(config_path) if config_path else None,
        api_url=api_url,
        api_token=token,
    )


def _fail(error: TemplateEditorError):
    from template_editor.editor.ui import EditorUI

    EditorUI(console).print_exception(error)
    sys.exit(get_error_code(error))


def connection_options(func):
    """Options shared by every command that talks to the backend."""
    func = click.option("--config", "config_path", type=click.Path(dir_okay=False),
                        help="Path to config.yaml")(func)
    func = click.option("--token", envvar="TEMPLATE_EDITOR_TOKEN",
                        help="Bearer token sent with each request")(func)
    func = click.option("--api-url", envvar="TEMPLATE_EDITOR_API_URL",
                        help="Backend base URL, e.g. http://localhost:5000")(func)
    func = click.option("--log-file", type=click.Path(dir_okay=False),
                        help="Also write a debug log to this file")(func)
    func = click.option("--verbose", "-v", is_flag=True, help="Show detailed output")(func)
    return func


def _setup_logging(verbose: bool, log_file: Optional[str] = None):
    import logging
    from template_editor.editor.logging_config import setup_logging

    setup_logging(
        level=logging.DEBUG if verbose else None,
        log_file=Path(log_file) if log_file else None
    )


@click.group()
@click.version_option(package_name="interview-template-editor")
def main():
    """Interview Template Editor: edit interview questions and AI keywords"""
    pass


@main.command()
@click.argument("template_id")
@connection_options
def edit(template_id: str, api_url: str, token: str, config_path: str, verbose: bool, log_file: str):
    """Edit a template's details, questions and keywords.

    Examples:
        template-editor edit 42
        template-editor edit 42 --api-url http://localhost:5000
    """
    from template_editor.editor import EditSession
    from template_editor.editor.client import TemplateApiClient
    from template_editor.editor.loader import RemoteLoader

    _setup_logging(verbose, log_file)
    try:
        config = _build_config(api_url, token, config_path)
    except TemplateEditorError as e:
        _fail(e)

    with TemplateApiClient.from_config(config) as client:
        session = EditSession(
            client,
            template_id,
            console=console,
            redirect_delay=config.redirect_delay
        )
        try:
            saved = session.run()
        except KeyboardInterrupt:
            session.close()
            console.print()
            console.print("[yellow]Editing cancelled. Unsaved changes were discarded.[/yellow]")
            sys.exit(130)

        if session.load_error is not None:
            sys.exit(get_error_code(session.load_error))

        if saved:
            _show_dashboard(RemoteLoader(client))


def _show_dashboard(loader):
    from template_editor.editor.ui import EditorUI

    ui = EditorUI(console)
    try:
        templates = loader.list_templates()
    except TemplateEditorError as e:
        ui.print_warning(e.message)
        return
    ui.show_templates_table(templates)


@main.command()
@click.argument("template_id")
@connection_options
def show(template_id: str, api_url: str, token: str, config_path: str, verbose: bool, log_file: str):
    """Print a template with its questions and grouped keywords."""
    from template_editor.editor.client import TemplateApiClient
    from template_editor.editor.loader import RemoteLoader
    from template_editor.editor.models import CATEGORY_ICONS, TIME_LIMIT_LABELS
    from template_editor.editor.store import TemplateStore
    from template_editor.editor.ui import EditorUI

    _setup_logging(verbose, log_file)
    ui = EditorUI(console)
    try:
        config = _build_config(api_url, token, config_path)
        with TemplateApiClient.from_config(config) as client:
            state = RemoteLoader(client).load(template_id)
    except TemplateEditorError as e:
        _fail(e)

    store = TemplateStore(state)
    ui.show_template_details(store.title, store.description)
    console.print()
    console.print(f"[bold]QUESTIONS ({len(store.questions)})[/bold]")
    ui.show_questions(store.questions.items, TIME_LIMIT_LABELS)
    console.print()
    console.print(f"[bold]AI KEYWORDS ({len(store.keywords)})[/bold]")
    ui.show_keywords(store.keywords.group_by_category(), CATEGORY_ICONS)


@main.command(name="list")
@connection_options
def list_templates(api_url: str, token: str, config_path: str, verbose: bool, log_file: str):
    """List interview templates."""
    from template_editor.editor.client import TemplateApiClient
    from template_editor.editor.loader import RemoteLoader
    from template_editor.editor.ui import EditorUI

    _setup_logging(verbose, log_file)
    try:
        config = _build_config(api_url, token, config_path)
        with TemplateApiClient.from_config(config) as client:
            templates = RemoteLoader(client).list_templates()
    except TemplateEditorError as e:
        _fail(e)

    if not templates:
        console.print("[dim]No templates found.[/dim]")
        return
    EditorUI(console).show_templates_table(templates)


@main.command(name="config")
@connection_options
def show_config(api_url: str, token: str, config_path: str, verbose: bool, log_file: str):
    """Show the resolved connection settings (secrets masked)."""
    from template_editor.editor.ui import EditorUI

    _setup_logging(verbose, log_file)
    try:
        config = _build_config(api_url, token, config_path)
    except TemplateEditorError as e:
        _fail(e)

    EditorUI(console).show_settings(config.to_display_dict())


if __name__ == "__main__":
    main()
