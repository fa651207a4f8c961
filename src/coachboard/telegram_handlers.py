"""Telegram command handlers."""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from .config import load_config
from .core.dates import Weekday, Window
from .core.display import format_today_markdown, format_upcoming_markdown, format_week_markdown
from .dashboard import Dashboard
from .telegram_format import send_markdown

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "/today - Today's tasks and sessions\n"
    "/week - This week's tasks and client workouts\n"
    "/upcoming - Birthdays and events in the next 30 days\n"
    "/upcoming week - Birthdays and events in the next 7 days\n"
    "/help - Show all commands"
)


def today_message(dash: Dashboard) -> str:
    """Markdown for today's agenda, shared by /today and the morning push."""
    return format_today_markdown(dash.today_agenda(), dash.todays_sessions(), dash.today)


# ============== Simple Commands ==============


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text(
        "Hey! I'm Coachboard, your training dashboard.\n\n"
        "Commands:\n" + HELP_TEXT
    )


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text("Coachboard Commands\n\n" + HELP_TEXT)


async def today_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /today command."""
    dash = Dashboard.from_config(load_config())
    try:
        text = today_message(dash)
    except RuntimeError as e:
        logger.error(f"Failed to build today's agenda: {e}")
        await update.message.reply_text(f"Failed to load records: {e}")
        return
    await send_markdown(update.message, text)


async def week_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /week command."""
    config = load_config()
    dash = Dashboard.from_config(config)
    try:
        agenda = dash.week_agenda(dash.week_order(config.week_starts_on))
    except RuntimeError as e:
        logger.error(f"Failed to build week agenda: {e}")
        await update.message.reply_text(f"Failed to load records: {e}")
        return
    await send_markdown(update.message, format_week_markdown(agenda, Weekday.of(dash.today)))


async def upcoming_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /upcoming [week|month] command."""
    args = context.args or []
    try:
        window = Window(args[0].lower()) if args else Window.MONTH
    except ValueError:
        await update.message.reply_text("Usage: /upcoming [week|month]")
        return

    dash = Dashboard.from_config(load_config())
    try:
        found = dash.upcoming(window)
    except RuntimeError as e:
        logger.error(f"Failed to load upcoming items: {e}")
        await update.message.reply_text(f"Failed to load records: {e}")
        return
    await send_markdown(update.message, format_upcoming_markdown(found, dash.today))
