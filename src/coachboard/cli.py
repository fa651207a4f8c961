"""Coachboard CLI - trainer's dashboard."""

import json
import logging
import sys

import click

from .config import load_config
from .core.dates import Weekday, Window
from .core.display import format_today_markdown, format_upcoming_markdown, format_week_markdown
from .core.tasks import EVERY_WEEK, THIS_WEEK
from .core.text import format_clock, join_and, slugify_name, titleize
from .dashboard import Dashboard, ValidationError

FREQUENCIES = ["once", "monthly", "quarterly", "annual"]


def _dashboard() -> Dashboard:
    return Dashboard.from_config(load_config())


def _report_load_errors(dash: Dashboard) -> None:
    """Warn about records that were skipped while loading."""
    for error in dash.load_errors:
        click.echo(f"Warning: skipped record: {error}", err=True)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_days(values: tuple[str, ...]) -> list[Weekday]:
    try:
        return [Weekday.parse(v) for v in values]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--day") from e


def _parse_training(entries: tuple[str, ...]) -> dict[str, str]:
    schedule = {}
    for entry in entries:
        day, sep, clock = entry.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected DAY=TIME, got {entry!r}", param_hint="--train")
        schedule[day.strip()] = clock.strip()
    return schedule


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Show informational log output")
def main(verbose: bool):
    """Coachboard - Trainer's Dashboard CLI."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO if verbose else logging.WARNING,
    )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def today(as_json: bool):
    """Show today's tasks and training sessions."""
    dash = _dashboard()
    lines = dash.today_agenda()
    sessions = dash.todays_sessions()
    _report_load_errors(dash)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "date": dash.today.isoformat(),
                    "tasks": lines,
                    "sessions": [
                        {"time": start.strftime("%H:%M"), "client": name} for start, name in sessions
                    ],
                },
                indent=2,
            )
        )
        return

    click.echo(format_today_markdown(lines, sessions, dash.today))


@main.command()
@click.option(
    "--start",
    type=click.Choice(["today", "sunday", "monday"]),
    default=None,
    help="First day shown (defaults to WEEK_STARTS_ON)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(start: str | None, as_json: bool):
    """Show this week's tasks and client workouts."""
    config = load_config()
    dash = Dashboard.from_config(config)
    agenda = dash.week_agenda(dash.week_order(start or config.week_starts_on))
    _report_load_errors(dash)

    if as_json:
        click.echo(json.dumps({day.label: lines for day, lines in agenda.items()}, indent=2))
        return

    click.echo(format_week_markdown(agenda, Weekday.of(dash.today)))


@main.command()
@click.option(
    "--window",
    type=click.Choice([w.value for w in Window]),
    default=Window.MONTH.value,
    show_default=True,
    help="How far ahead to look",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def upcoming(window: str, as_json: bool):
    """Show upcoming birthdays and events."""
    dash = _dashboard()
    found = dash.upcoming(Window(window))
    _report_load_errors(dash)

    if as_json:
        click.echo(json.dumps({d.isoformat(): lines for d, lines in found.items()}, indent=2))
        return

    click.echo(format_upcoming_markdown(found, dash.today))


@main.command()
def sweep():
    """Delete expired tasks and past one-time events."""
    dash = _dashboard()
    try:
        report = dash.sweep()
    except RuntimeError as e:
        _fail(str(e))
    _report_load_errors(dash)
    if not report.removed:
        click.echo("Nothing to sweep.")
        return
    for title in report.titles():
        click.echo(f"Removed {title}")


# ============== Tasks ==============


@main.group()
def tasks():
    """Manage custom tasks."""


@tasks.command("list")
def tasks_list():
    """List live tasks with their days."""
    dash = _dashboard()
    live = dash.list_tasks()
    _report_load_errors(dash)
    if not live:
        click.echo("No tasks.")
        return
    for task in live:
        days = ", ".join(d.label for d in sorted(task.weekdays))
        expires = f" (until {task.expiry})" if task.expiry else ""
        click.echo(f"• {task.title}: {days}{expires}")


@tasks.command("add")
@click.argument("title")
@click.option("--day", "days", multiple=True, help="Day of the week (repeatable)")
@click.option(
    "--frequency",
    type=click.Choice([EVERY_WEEK, THIS_WEEK]),
    default=EVERY_WEEK,
    show_default=True,
)
def tasks_add(title: str, days: tuple[str, ...], frequency: str):
    """Add a task repeated on the given days."""
    dash = _dashboard()
    try:
        task = dash.add_task(title, _parse_days(days), frequency)
    except (ValidationError, RuntimeError) as e:
        _fail(str(e))
    click.echo(f"You have successfully added {task.title} to your Tasks")


@tasks.command("delete")
@click.argument("title")
@click.option("--day", "days", multiple=True, help="Only remove from these days")
def tasks_delete(title: str, days: tuple[str, ...]):
    """Remove a task from some days, or from every day."""
    dash = _dashboard()
    weekdays = _parse_days(days) if days else list(Weekday)
    try:
        dash.delete_task_days({day: [title] for day in weekdays})
    except RuntimeError as e:
        _fail(str(e))
    click.echo(f"You have successfully deleted {title} from your Tasks")


# ============== Events ==============


@main.group()
def events():
    """Manage custom events."""


@events.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def events_list(as_json: bool):
    """List events with their recurrence rules."""
    dash = _dashboard()
    listed = dash.list_events()
    _report_load_errors(dash)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "title": e.title,
                        "date": e.anchor_date.isoformat(),
                        "frequency": e.frequency.value,
                        "description": description,
                    }
                    for e, description in listed
                ],
                indent=2,
            )
        )
        return

    if not listed:
        click.echo("No events.")
        return
    for event, description in listed:
        click.echo(f"• {event.title} - {description}")


@events.command("add")
@click.argument("title")
@click.argument("anchor", metavar="DATE")
@click.option("--frequency", type=click.Choice(FREQUENCIES), default="once", show_default=True)
def events_add(title: str, anchor: str, frequency: str):
    """Add an event on DATE (YYYY-MM-DD)."""
    dash = _dashboard()
    try:
        item = dash.add_event(title, anchor, frequency)
    except (ValidationError, RuntimeError) as e:
        _fail(str(e))
    click.echo(f"You have successfully added {item.title} to your Events")
    click.echo(dash.describe_recurrence(item))


@events.command("delete")
@click.argument("titles", nargs=-1, required=True)
def events_delete(titles: tuple[str, ...]):
    """Delete events by title."""
    dash = _dashboard()
    try:
        dash.delete_events(list(titles))
    except RuntimeError as e:
        _fail(str(e))
    click.echo(f"You have successfully deleted {join_and(list(titles))} from your Events")


# ============== Clients ==============


@main.group()
def clients():
    """Manage clients."""


@clients.command("list")
def clients_list():
    """List current and archived clients."""
    dash = _dashboard()
    records = dash.list_clients()
    _report_load_errors(dash)
    if not records:
        click.echo("No clients.")
        return
    for client in records:
        status = " (archived)" if client.archived else ""
        click.echo(f"### {client.client_name}{status}")
        for label, value in client.display_fields()[1:]:
            text = value.format()
            if text:
                click.echo(f"  {label}: {text}")


@clients.command("add")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--dob", "date_of_birth", required=True, help="Date of birth (YYYY-MM-DD)")
@click.option("--email", default="")
@click.option("--address", default="")
@click.option("--train", "training", multiple=True, help="DAY=TIME, e.g. Monday=6:00 AM")
@click.option("--extra", "extra_days", multiple=True, help="Day with an additional workout")
def clients_add(first_name, last_name, date_of_birth, email, address, training, extra_days):
    """Add a current client."""
    schedule = _parse_training(training)
    form = {
        "first_name": first_name,
        "last_name": last_name,
        "date_of_birth": date_of_birth,
        "email": email,
        "address": address,
        "training_schedule": schedule,
        "additional_workouts": list(extra_days),
    }
    dash = _dashboard()
    try:
        slug = dash.add_client(form)
    except (ValueError, RuntimeError) as e:
        _fail(str(e))
    click.echo(f"You have successfully added {first_name} {last_name} to your Current Clients ({slug})")


@clients.command("edit")
@click.argument("name")
@click.option("--first-name")
@click.option("--last-name")
@click.option("--dob", "date_of_birth", help="Date of birth (YYYY-MM-DD)")
@click.option("--email")
@click.option("--address")
@click.option("--train", "training", multiple=True, help="DAY=TIME; replaces the whole schedule")
@click.option("--extra", "extra_days", multiple=True, help="Replaces the additional workout days")
def clients_edit(name, first_name, last_name, date_of_birth, email, address, training, extra_days):
    """Edit a current client; changing the name renames them."""
    changes = {
        "first_name": first_name,
        "last_name": last_name,
        "date_of_birth": date_of_birth,
        "email": email,
        "address": address,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if training:
        changes["training_schedule"] = _parse_training(training)
    if extra_days:
        changes["additional_workouts"] = list(extra_days)

    dash = _dashboard()
    try:
        slug = dash.update_client(slugify_name(name), changes)
    except (ValueError, RuntimeError) as e:
        _fail(str(e))
    click.echo(f"You have successfully edited {titleize(slug)}'s data")


@clients.command("archive")
@click.argument("name")
def clients_archive(name: str):
    """Move a current client to Archived Clients."""
    slug = slugify_name(name)
    dash = _dashboard()
    try:
        moved = dash.archive_client(slug)
    except (ValidationError, RuntimeError) as e:
        _fail(str(e))
    if moved:
        click.echo(f"You have successfully moved {titleize(slug)} to Archived Clients")
    else:
        click.echo(f"{titleize(slug)} is already archived.")


@clients.command("restore")
@click.argument("name")
def clients_restore(name: str):
    """Move an archived client back to Current Clients."""
    slug = slugify_name(name)
    dash = _dashboard()
    try:
        moved = dash.restore_client(slug)
    except (ValidationError, RuntimeError) as e:
        _fail(str(e))
    if moved:
        click.echo(f"You have successfully moved {titleize(slug)} to Current Clients")
    else:
        click.echo(f"{titleize(slug)} is already a current client.")


@clients.command("delete")
@click.argument("name")
def clients_delete(name: str):
    """Delete an archived client and their documents."""
    slug = slugify_name(name)
    dash = _dashboard()
    try:
        deleted = dash.delete_client(slug)
    except ValidationError as e:
        _fail(str(e))
    if deleted:
        click.echo(f"You have successfully deleted {titleize(slug)} from your Archived Clients")
    else:
        click.echo(f"No archived client named {titleize(slug)}.")


@main.command()
def sessions():
    """Show today's training sessions."""
    dash = _dashboard()
    found = dash.todays_sessions()
    _report_load_errors(dash)
    if not found:
        click.echo("No sessions today.")
        return
    for start, name in found:
        click.echo(f"  {format_clock(start):8} {name}")


@main.command()
def bot():
    """Run the Telegram bot."""
    from .telegram_bot import run_bot

    try:
        run_bot()
    except ValueError as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
