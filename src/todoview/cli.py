"""todoview CLI - task list backed by a remote todo API."""

import json
import logging
import sys
import time
from dataclasses import dataclass

import click

from .config import load_config
from .core.collection import TodoCollection
from .core.tasks import FilterCriteria, Task
from .errors import ValidationError
from .workflows import Outcome, TodoManager, build_manager

DATE_FORMAT = click.DateTime(formats=["%Y-%m-%d"])


@click.group()
@click.version_option(package_name="todoview")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """todoview - browse, search and add todos."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.obj = load_config()


def _load_or_exit(manager: TodoManager) -> None:
    outcome = manager.load()
    if not outcome.ok:
        click.echo(f"Error: {outcome.message}", err=True)
        sys.exit(1)


def _format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    status = "Completed" if task.completed else "Pending"
    return f"[{mark}] {task.text}  (#{task.id}, created {task.created_at}, {status})"


def _show_page(collection: TodoCollection) -> None:
    """Shared page display logic."""
    click.echo(collection.summary())
    tasks = collection.current_page()
    if not tasks:
        click.echo("No todos found.")
        return

    for task in tasks:
        click.echo(_format_task(task))

    click.echo()
    click.echo(collection.page_info().format())
    numbers = collection.page_numbers()
    if numbers:
        click.echo(
            "Pages: "
            + " ".join(f"[{n}]" if n == collection.page else str(n) for n in numbers)
        )


@main.command("list")
@click.option("--page", "-p", "page", default=1, show_default=True, help="Page to show")
@click.option("--search", "-s", default="", help="Only todos containing this text")
@click.option("--from", "date_from", type=DATE_FORMAT, default=None, help="Created on or after (YYYY-MM-DD)")
@click.option("--to", "date_to", type=DATE_FORMAT, default=None, help="Created on or before (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_todos(config, page: int, search: str, date_from, date_to, as_json: bool):
    """List todos, one page at a time."""
    manager = build_manager(config)
    _load_or_exit(manager)

    collection = manager.collection
    collection.apply_filter(FilterCriteria(search, date_from, date_to))
    collection.go_to(page)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "page": collection.page,
                    "total_pages": collection.total_pages,
                    "total": len(collection.filtered),
                    "todos": [
                        {
                            "id": t.id,
                            "todo": t.text,
                            "completed": t.completed,
                            "createdAt": t.created_at,
                            "origin": t.origin.value,
                        }
                        for t in collection.current_page()
                    ],
                },
                indent=2,
            )
        )
    else:
        _show_page(collection)


@main.command()
@click.argument("text")
@click.option("--user-id", type=int, default=None, help="Owner of the new todo (default from config)")
@click.pass_obj
def add(config, text: str, user_id: int | None):
    """Add a todo."""
    manager = build_manager(config)
    outcome = manager.add_task(text, user_id if user_id is not None else config.user_id)
    if not outcome.ok:
        click.echo(f"Error: {outcome.message}", err=True)
        sys.exit(1)
    click.echo(outcome.message)
    click.echo(_format_task(outcome.task))


@main.command()
@click.argument("task_id", type=int)
@click.option("--done/--pending", default=True, help="Mark completed (default) or pending")
@click.pass_obj
def toggle(config, task_id: int, done: bool):
    """Mark a todo completed or pending."""
    manager = build_manager(config)
    _load_or_exit(manager)

    outcome = manager.toggle_complete(task_id, done)
    if outcome.task is None:
        click.echo(f"No todo with id {task_id}.")
        return
    if not outcome.task.is_local:
        click.echo("Note: remote todos are not saved, the change lasts for this session only.")
    click.echo(outcome.message)


# ============== Interactive session ==============


@dataclass
class Notification:
    """A transient message that disappears once its interval has passed."""

    message: str
    is_error: bool
    expires_at: float

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


BROWSE_HELP = """Commands:
  n / p          next / previous page
  g N            go to page N
  s TEXT         search (empty to clear search)
  from DATE      created on or after (YYYY-MM-DD, empty to clear)
  to DATE        created on or before (YYYY-MM-DD, empty to clear)
  c              clear all filters
  a TEXT         add a todo
  x ID / u ID    mark completed / pending
  h              this help
  q              quit"""


class BrowseSession:
    """Interactive view over a single manager for the lifetime of the session."""

    def __init__(self, manager: TodoManager, user_id: int, error_seconds: int, success_seconds: int):
        self.manager = manager
        self.user_id = user_id
        self.error_seconds = error_seconds
        self.success_seconds = success_seconds
        self.notifications: list[Notification] = []

    def notify(self, outcome: Outcome) -> None:
        if not outcome.message:
            return
        seconds = self.success_seconds if outcome.ok else self.error_seconds
        self.notifications.append(
            Notification(outcome.message, not outcome.ok, time.monotonic() + seconds)
        )

    def render(self) -> None:
        now = time.monotonic()
        self.notifications = [n for n in self.notifications if not n.expired(now)]
        click.echo()
        for note in self.notifications:
            click.secho(note.message, fg="red" if note.is_error else "green", err=note.is_error)
        _show_page(self.manager.collection)

    def _refilter(self, **changes) -> None:
        criteria = self.manager.collection.criteria
        fields = {
            "search_text": criteria.search_text,
            "date_from": criteria.date_from,
            "date_to": criteria.date_to,
            **changes,
        }
        try:
            self.manager.apply_filter(FilterCriteria(**fields))
        except ValidationError as e:
            self.notify(Outcome(ok=False, message=str(e), error=e))

    def _task_id(self, arg: str) -> int | None:
        try:
            return int(arg)
        except ValueError:
            self.notify(Outcome(ok=False, message=f"Not a todo id: {arg!r}"))
            return None

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the session should end."""
        command, _, arg = line.strip().partition(" ")
        arg = arg.strip()
        collection = self.manager.collection

        match command.lower():
            case "q" | "quit":
                return False
            case "n":
                collection.next_page()
            case "p":
                collection.previous_page()
            case "g":
                if arg.isdigit():
                    collection.go_to(int(arg))
                else:
                    self.notify(Outcome(ok=False, message=f"Not a page number: {arg!r}"))
            case "s":
                self._refilter(search_text=arg)
            case "from":
                self._refilter(date_from=arg or None)
            case "to":
                self._refilter(date_to=arg or None)
            case "c":
                self.manager.clear_filter()
            case "a":
                self.notify(self.manager.add_task(arg, self.user_id))
            case "x" | "u":
                task_id = self._task_id(arg)
                if task_id is not None:
                    self.notify(self.manager.toggle_complete(task_id, command.lower() == "x"))
            case "h" | "help" | "?":
                click.echo(BROWSE_HELP)
            case "":
                pass
            case _:
                self.notify(Outcome(ok=False, message=f"Unknown command: {command} (h for help)"))
        return True


@main.command()
@click.pass_obj
def browse(config):
    """Browse todos interactively."""
    manager = build_manager(config)
    _load_or_exit(manager)

    session = BrowseSession(
        manager,
        user_id=config.user_id,
        error_seconds=config.error_display_seconds,
        success_seconds=config.success_display_seconds,
    )
    click.echo(BROWSE_HELP)
    try:
        while True:
            session.render()
            line = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
            if not session.handle(line):
                break
    except (KeyboardInterrupt, click.Abort):
        click.echo()
