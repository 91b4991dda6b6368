"""termlaunch CLI - 命令行入口

Commands:
  load NAME   create the tmux session for a project, or attach if it runs
  new NAME    write a starter project file and open it in $EDITOR
  list        list project files
"""

import asyncio
import os

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from termlaunch import config
from termlaunch.errors import TermLaunchError
from termlaunch.plan.types import CommandPlan
from termlaunch.runtime import Launcher, bootstrap
from termlaunch.spec.loader import create_project, list_projects, load_project, resolve_project_path
from termlaunch.telemetry import configure_logging


def get_console() -> Console:
    """Rich Console; degrades to plain text when piped."""
    return Console(stderr=False)


def format_error(message: str, console: Console) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_plan(plan: CommandPlan, console: Console) -> None:
    """Print a compiled plan, placeholders shown as <id>."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Command")
    for position, command in enumerate(plan):
        table.add_row(str(position), command.kind.value, escape("tmux " + command.display()))
    console.print(table)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every tmux command.")
@click.option("-L", "--socket-name", default=None, envvar="TERMLAUNCH_SOCKET_NAME", help="tmux socket name (-L).")
@click.option("-S", "--socket-path", default=None, envvar="TERMLAUNCH_SOCKET_PATH", help="tmux socket path (-S).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, socket_name: str | None, socket_path: str | None) -> None:
    """termlaunch: declarative tmux sessions."""
    configure_logging("DEBUG" if verbose else config.LOG_LEVEL)
    ctx.ensure_object(dict)
    ctx.obj["socket_name"] = socket_name
    ctx.obj["socket_path"] = socket_path


@cli.command()
@click.argument("name")
@click.option("-p", "--project-dir", default=None, help="Directory holding project files.")
@click.option("-d", "--detached", is_flag=True, help="Create the session without attaching.")
@click.option("--dry-run", is_flag=True, help="Print the tmux commands instead of running them.")
@click.pass_context
def load(ctx: click.Context, name: str, project_dir: str | None, detached: bool, dry_run: bool) -> None:
    """Create or attach to the session of project NAME."""
    console = get_console()
    try:
        spec = load_project(resolve_project_path(name, project_dir))
        components = bootstrap(socket_name=ctx.obj["socket_name"], socket_path=ctx.obj["socket_path"])
        result = asyncio.run(Launcher(components).launch(spec, attach=not detached, dry_run=dry_run))
    except TermLaunchError as e:
        format_error(str(e), console)
        raise SystemExit(1) from None

    if result.profile.development:
        console.print(
            f"[yellow]Warning:[/yellow] tmux {escape(result.profile.version)} is a development build, "
            "assuming the newest feature set"
        )
    for index in result.downgraded:
        window = spec.windows[index]
        console.print(
            f"[yellow]Note:[/yellow] layout {escape(str(window.layout))} of window "
            f"'{escape(window.label(index))}' is not supported by tmux {escape(result.profile.version)}, "
            f"using {config.DEFAULT_LAYOUT}"
        )

    if dry_run:
        format_plan(result.plan, console)
    elif not result.attached:
        state = "created" if result.created else "already running"
        console.print(f"Session [green]{escape(result.session)}[/green] {state}.")


@cli.command()
@click.argument("name")
@click.option("-p", "--project-dir", default=None, help="Directory holding project files.")
@click.option("--no-edit", is_flag=True, help="Do not open the new file in $EDITOR.")
def new(name: str, project_dir: str | None, no_edit: bool) -> None:
    """Write a starter project file for NAME and open it in $EDITOR."""
    console = get_console()
    try:
        path = create_project(name, project_dir)
    except TermLaunchError as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
    console.print(f"Created [green]{escape(str(path))}[/green]")

    if no_edit:
        return
    if os.environ.get("EDITOR"):
        click.edit(filename=str(path))
    else:
        console.print(
            "[yellow]Default editor is not set.[/yellow] "
            "Define $EDITOR in your shell profile to open new projects automatically."
        )


@cli.command(name="list")
@click.option("-p", "--project-dir", default=None, help="Directory holding project files.")
def list_command(project_dir: str | None) -> None:
    """List project files."""
    console = get_console()
    names = list_projects(project_dir)
    if not names:
        console.print("[dim]No projects.[/dim]")
        return
    for project in names:
        console.print(project)


def main() -> None:
    """入口函数"""
    cli(obj={})


if __name__ == "__main__":
    main()
