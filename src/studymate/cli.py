"""Command line entry points for StudyMate reminders and habits."""

from __future__ import annotations

import time
from contextlib import contextmanager
from datetime import timedelta
from typing import Iterator

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import StudyMateError
from .logging_config import setup_logging
from .models.datetime_arg import DateTimeArg
from .models.habit import StreakResult
from .models.reminder import IndexedReminder, Reminder
from .scheduler import ReminderScheduler
from .services.formatting import parse_duration

pass_app = click.make_pass_decorator(AppContext)


@contextmanager
def _user_errors() -> Iterator[None]:
    """Turn core errors into click messages with a non-zero exit status."""

    try:
        yield
    except (StudyMateError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _duration(value: str) -> timedelta:
    with _user_errors():
        return parse_duration(value)


def _positions(indexes: tuple[int, ...]) -> list[int]:
    """Convert 1-based user positions to list indexes."""

    return [index - 1 for index in indexes]


def _echo_batch(app: AppContext):
    def sink(batch: list[Reminder]) -> None:
        click.echo("Reminder!")
        for reminder in batch:
            position = app.reminders.index_of(reminder)
            if position is None:
                click.echo(f"   {reminder}")
            else:
                click.echo(f"   {IndexedReminder(position + 1, reminder)}")

    return sink


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """StudyMate reminders and habit streaks."""

    if ctx.obj is None:
        with _user_errors():
            config = BaseConfig()
            setup_logging(config)
            ctx.obj = create_app_context(config)


@cli.command("list")
@pass_app
def list_items(app: AppContext) -> None:
    """Show all reminders and habits."""

    reminders = app.reminders.reminders()
    if reminders:
        click.echo("Here are your reminders:")
        for position, reminder in enumerate(reminders, start=1):
            click.echo(str(IndexedReminder(position, reminder)))
    else:
        click.echo("Reminders list is empty!")

    habits = app.habits.habits()
    if habits:
        click.echo("Here are your habits:")
        for position, habit in enumerate(habits, start=1):
            click.echo(f"{position}. {habit}")
    else:
        click.echo("Habit list is empty!")


@cli.command("add-habit")
@click.argument("name")
@click.option("--every", "every", default="PT24H", show_default=True, help="ISO-8601 interval")
@pass_app
def add_habit(app: AppContext, name: str, every: str) -> None:
    """Track a new habit."""

    with _user_errors():
        habit = app.habits.add_habit(name, _duration(every))
        app.save()
    click.echo(f"Added habit: {habit}")


@cli.command("add-reminder")
@click.argument("name")
@click.argument("when")
@click.option("--every", "every", default=None, help="ISO-8601 interval for a recurring reminder")
@pass_app
def add_reminder(app: AppContext, name: str, when: str, every: str | None) -> None:
    """Add a reminder firing at WHEN (e.g. 2025-10-12T08:00)."""

    with _user_errors():
        remind_at = DateTimeArg.parse(when)
        if every is None:
            reminder = app.reminders.add_reminder_one_time(name, remind_at)
        else:
            reminder = app.reminders.add_reminder_recurring(name, remind_at, _duration(every))
        app.save()
    click.echo(f"Added reminder: {reminder}")


@cli.command("delete")
@click.argument("indexes", nargs=-1, type=int, required=True)
@pass_app
def delete_reminders(app: AppContext, indexes: tuple[int, ...]) -> None:
    """Delete reminders by position."""

    with _user_errors():
        removed = app.reminders.delete(_positions(indexes))
        app.save()
    for reminder in removed:
        click.echo(f"Deleted: {reminder}")
    click.echo(f"Now you have {app.reminders.count} reminder(s).")


@cli.command("on")
@click.argument("indexes", nargs=-1, type=int, required=True)
@pass_app
def turn_on(app: AppContext, indexes: tuple[int, ...]) -> None:
    """Switch reminders on."""

    with _user_errors():
        changed, unchanged = app.reminders.turn_on(_positions(indexes))
        app.save()
    for reminder in changed:
        click.echo(f"Turned on: {reminder}")
    for reminder in unchanged:
        click.echo(f"Already on: {reminder}")


@cli.command("off")
@click.argument("indexes", nargs=-1, type=int, required=True)
@pass_app
def turn_off(app: AppContext, indexes: tuple[int, ...]) -> None:
    """Switch reminders off."""

    with _user_errors():
        changed, unchanged = app.reminders.turn_off(_positions(indexes))
        app.save()
    for reminder in changed:
        click.echo(f"Turned off: {reminder}")
    for reminder in unchanged:
        click.echo(f"Already off: {reminder}")


@cli.command("snooze")
@click.argument("index", type=int)
@click.argument("duration")
@pass_app
def snooze(app: AppContext, index: int, duration: str) -> None:
    """Delay a one-time reminder by an ISO-8601 DURATION (e.g. PT10M)."""

    with _user_errors():
        reminder = app.reminders.snooze(index - 1, _duration(duration))
        app.save()
    click.echo(f"Snoozed: {reminder}")


@cli.command("streak")
@click.argument("index", type=int)
@pass_app
def streak(app: AppContext, index: int) -> None:
    """Mark a habit as done for this cycle."""

    with _user_errors():
        result = app.habits.inc_streak(index - 1)
        habit = app.habits.get_habit(index - 1)
        app.save()

    if result is StreakResult.TOO_EARLY:
        click.echo(f"Too early! {habit}")
    elif result is StreakResult.TOO_LATE:
        click.echo(f"Missed the deadline, streak reset. {habit}")
    else:
        click.echo(f"Nice, streak is now {habit.streak}! {habit}")


@cli.command("check")
@pass_app
def check(app: AppContext) -> None:
    """Fire due reminders once and exit."""

    scheduler = ReminderScheduler(app.reminders, app.config.TICK_SECONDS, clock=app.clock)
    batch = scheduler.tick()
    if batch:
        _echo_batch(app)(batch)
    else:
        click.echo("No reminders due.")
    with _user_errors():
        app.save()


@cli.command("watch")
@click.option("--interval", type=click.IntRange(min=1), default=None, help="Seconds between ticks")
@pass_app
def watch(app: AppContext, interval: int | None) -> None:
    """Keep firing reminders in the background until interrupted."""

    scheduler = ReminderScheduler(
        app.reminders,
        interval or app.config.TICK_SECONDS,
        clock=app.clock,
        sink=_echo_batch(app),
    )
    scheduler.start()
    click.echo("Watching reminders, press Ctrl+C to stop.")
    try:
        while scheduler.running:
            time.sleep(1)
    except KeyboardInterrupt:
        click.echo("Stopping...")
    finally:
        scheduler.shutdown()
        with _user_errors():
            app.save()


def main() -> None:
    cli(prog_name="studymate")


if __name__ == "__main__":
    main()
