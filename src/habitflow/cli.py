"""Command line interface for HabitFlow."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .constants import MessageKind, Visibility
from .infra.database import bootstrap_database
from .infra.repositories import (
    SQLModelDailyCardRepository,
    SQLModelHabitRepository,
    SQLModelJournalRepository,
    SQLModelMessageRepository,
    SQLModelUserRepository,
    load_snapshot,
)
from .logging_config import bind_user, setup_logging
from .services import dates, habits as habit_service, journal as journal_service, messages as message_service
from .services.export_json import export_user_json
from .services.profile import build_dashboard, build_public_profile


class AppState:
    """Objects shared by every command of one invocation."""

    def __init__(self, username: str, config: BaseConfig) -> None:
        self.config = config
        self.engine, self.session_factory = bootstrap_database(config)
        self.users = SQLModelUserRepository(self.session_factory)
        self.user = self.users.get_or_create(username)
        self.habits = SQLModelHabitRepository(self.session_factory)
        self.cards = SQLModelDailyCardRepository(self.session_factory)
        self.journal = SQLModelJournalRepository(self.session_factory)
        self.messages = SQLModelMessageRepository(self.session_factory)


pass_state = click.make_pass_decorator(AppState)


@click.group()
@click.option("--user", "username", envvar="HABITFLOW_USER", default=None, help="Username to act as")
@click.pass_context
def cli(ctx: click.Context, username: str | None) -> None:
    """Track habits, fill the daily card and check your streak."""

    config = BaseConfig()
    setup_logging(config)
    try:
        ctx.obj = AppState(username or config.DEFAULT_USER, config)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    bind_user(ctx.obj.user.username)
    ctx.call_on_close(ctx.obj.engine.dispose)


@cli.command("add-habit")
@click.argument("name")
@click.option("--category", default="custom", show_default=True, help="spiritual, health, productivity or custom")
@pass_state
def add_habit(state: AppState, name: str, category: str) -> None:
    """Add a habit to track."""

    try:
        habit = habit_service.create_habit(name, category, user_id=state.user.username)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    habit = state.habits.create(habit, user_id=state.user.username)
    click.echo(f"Added {habit.name} [{habit.category}] ({habit.id})")


@cli.command("add-presets")
@pass_state
def add_presets(state: AppState) -> None:
    """Add the five daily prayers as spiritual habits."""

    existing = state.habits.list_all(user_id=state.user.username)
    created = habit_service.add_preset_habits(existing, user_id=state.user.username)
    if not created:
        click.echo("All presets already tracked.")
        return
    state.habits.create_many(created, user_id=state.user.username)
    click.echo("Added " + ", ".join(h.name for h in created))


@cli.command("remove-habit")
@click.argument("habit_id")
@pass_state
def remove_habit(state: AppState, habit_id: str) -> None:
    """Delete a habit; saved cards keep their history."""

    if not state.habits.delete(habit_id, user_id=state.user.username):
        raise click.ClickException(f"No habit with id {habit_id}")
    click.echo(f"Removed {habit_id}")


@cli.command("habits")
@pass_state
def list_habits(state: AppState) -> None:
    """List habits."""

    rows = state.habits.list_all(user_id=state.user.username)
    if not rows:
        click.echo("No habits yet.")
        return
    for habit in rows:
        click.echo(f"{habit.id}  {habit.name} [{habit.category}]")


def _resolve_checks(habits, done: tuple[str, ...]) -> dict[str, bool]:
    by_name = {habit.name.lower(): habit.id for habit in habits}
    ids = {habit.id for habit in habits}
    checks: dict[str, bool] = {}
    for token in done:
        habit_id = token if token in ids else by_name.get(token.lower())
        if habit_id is None:
            raise click.ClickException(f"Unknown habit: {token}")
        checks[habit_id] = True
    return checks


@cli.command("checkin")
@click.option("--done", multiple=True, help="Habit id or name completed (repeatable)")
@click.option("--sleep", "sleep_hours", default="", help="Hours slept")
@click.option("--notes", default="", help="Free text notes")
@click.option("--date", "card_date", default=None, help="Card date (YYYY-MM-DD), defaults to today")
@pass_state
def checkin(state: AppState, done: tuple[str, ...], sleep_hours: str, notes: str, card_date: str | None) -> None:
    """Save the daily card, replacing any card already saved for that date."""

    username = state.user.username
    day = card_date or dates.today()
    habits = state.habits.list_all(user_id=username)
    try:
        card = habit_service.build_card(
            day, habits, _resolve_checks(habits, done), sleep_hours, notes, user_id=username
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    saved = state.cards.upsert_card(card, user_id=username)
    streak = state.cards.get_current_streak(user_id=username)
    click.echo(
        f"{dates.format_date(saved.date)}: {saved.completed_habits}/{saved.total_habits} "
        f"habits ({saved.completion_pct}%), streak {streak}"
    )


def _load(state: AppState, username: str):
    snapshot = load_snapshot(state.session_factory, username)
    if snapshot is None:
        raise click.ClickException(f"No user {message_service.normalize_username(username)}")
    return snapshot


@cli.command("streak")
@pass_state
def streak(state: AppState) -> None:
    """Show current and longest streak."""

    summary = build_dashboard(_load(state, state.user.username))
    click.echo(f"Current streak: {summary.streak}")
    click.echo(f"Longest streak: {summary.longest_streak}")
    click.echo(f"Today: {summary.today_pct}%")


@cli.command("profile")
@click.argument("username", required=False)
@pass_state
def profile(state: AppState, username: str | None) -> None:
    """Show the public profile of a user (yourself by default)."""

    view = build_public_profile(_load(state, username or state.user.username))
    click.echo(f"{view.display_name} (@{view.username})")
    click.echo(f"Streak: {view.streak}  Today: {view.today_pct}%  Habits: {len(view.habit_names)}")
    for card in view.recent_cards:
        click.echo(f"  {dates.format_date(card.date)}  {card.completion_pct}%")
    for thought in view.thoughts:
        click.echo(f"  \"{thought.text}\"")


@cli.command("users")
@pass_state
def list_users(state: AppState) -> None:
    """List everyone with a profile."""

    for user in state.users.list_all():
        marker = "*" if user.username == state.user.username else " "
        click.echo(f"{marker} {user.username}  {user.display_name or user.username}")


@cli.command("thought")
@click.argument("text")
@click.option("--private", is_flag=True, help="Hide from your public profile")
@pass_state
def thought(state: AppState, text: str, private: bool) -> None:
    """Write a journal thought."""

    visibility = Visibility.PRIVATE if private else Visibility.PUBLIC
    try:
        item = journal_service.create_thought(text, visibility, user_id=state.user.username)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    item = state.journal.add_thought(item, user_id=state.user.username)
    click.echo(f"Saved {item.visibility} thought ({item.id})")


@cli.command("quote")
@click.argument("text")
@click.option("--author", default="", help="Who said it")
@pass_state
def quote(state: AppState, text: str, author: str) -> None:
    """Save a quote to your journal."""

    try:
        item = journal_service.create_quote(text, author, user_id=state.user.username)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    item = state.journal.add_quote(item, user_id=state.user.username)
    click.echo(f"Saved quote ({item.id})")


@cli.command("link")
@click.argument("url")
@click.option("--title", default="", help="Title shown instead of the url")
@pass_state
def link(state: AppState, url: str, title: str) -> None:
    """Save a media link to your journal."""

    try:
        item = journal_service.create_media_link(url, title, user_id=state.user.username)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    item = state.journal.add_media_link(item, user_id=state.user.username)
    click.echo(f"Saved link {item.title} ({item.id})")


@cli.command("journal")
@pass_state
def show_journal(state: AppState) -> None:
    """List your thoughts, quotes and links, newest first."""

    username = state.user.username
    for item in state.journal.list_thoughts(user_id=username):
        click.echo(f"{item.date}  [{item.visibility}] {item.text}")
    for item in state.journal.list_quotes(user_id=username):
        suffix = f" - {item.author}" if item.author else ""
        click.echo(f"{item.date}  \"{item.text}\"{suffix}")
    for item in state.journal.list_media_links(user_id=username):
        click.echo(f"{item.date}  {item.title} <{item.url}>")


@cli.command("send")
@click.argument("recipient")
@click.argument("text")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in MessageKind]),
    default=MessageKind.MOTIVATION.value,
    show_default=True,
)
@click.option("--private", is_flag=True, help="Keep off the recipient's public profile")
@pass_state
def send(state: AppState, recipient: str, text: str, kind: str, private: bool) -> None:
    """Send a message to another user."""

    visibility = Visibility.PRIVATE if private else Visibility.PUBLIC
    try:
        message = message_service.create_message(
            state.user.username,
            recipient,
            text,
            kind,
            visibility,
            sender_name=state.user.display_name,
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if state.users.get(message.recipient) is None:
        raise click.ClickException(f"No user {message.recipient}")
    message = state.messages.send(message)
    click.echo(f"Sent {message.kind} to @{message.recipient}")


@cli.command("inbox")
@click.option("--sent", is_flag=True, help="Show messages you sent instead")
@pass_state
def inbox(state: AppState, sent: bool) -> None:
    """List messages addressed to you."""

    username = state.user.username
    rows = state.messages.outbox(username) if sent else state.messages.inbox(username)
    if not rows:
        click.echo("No messages.")
        return
    for message in rows:
        who = f"to @{message.recipient}" if sent else f"from {message.sender_name} (@{message.sender})"
        click.echo(f"{message.date}  {who} [{message.kind}] {message.text}")


@cli.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@pass_state
def export(state: AppState, output: Path) -> None:
    """Write all of your data to a JSON file."""

    path = export_user_json(_load(state, state.user.username), output)
    click.echo(f"Export written: {path}")


def main() -> None:  # pragma: no cover - console entry
    cli(prog_name="habitflow")


if __name__ == "__main__":  # pragma: no cover
    main()
