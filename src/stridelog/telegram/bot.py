"""Telegram bot front end for StrideLog."""

import logging
import re

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from ..activity_log import ActivityLog, open_activity_log
from ..commands import KIND_ALIASES, kind_from_command, parse_activity_args
from ..config import StrideLogConfig, config_from_env
from ..errors import RecordNotFound, StrideLogError
from ..formatting import format_popup, format_record, format_record_list
from ..logging import get_logger
from ..records import Record
from ..storage import SQLiteStore

logger = logging.getLogger(__name__)


WELCOME_MESSAGE = """
🏃 *StrideLog*

Share a location, then log what you did there.

*Commands:*
/run KM MIN CADENCE - Log a run
/cycle KM MIN ELEVATION - Log a ride
/walk KM MIN STEPS - Log a walk
/list - Show all activities
/show ID - Show where an activity happened
/reset - Delete all activities
"""

MAX_MESSAGE_LENGTH = 4096


def escape_markdown(text: str) -> str:
    """Escape special characters for Telegram MarkdownV2."""
    # Characters that need escaping in MarkdownV2
    special_chars = r"_*[]()~`>#+-=|{}.!"
    pattern = f"([{re.escape(special_chars)}])"
    return re.sub(pattern, r"\\\1", text)


def truncate_message(text: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """Truncate message to fit Telegram limits."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 20] + "\n... [truncated]"


def format_record_markdown(record: Record) -> str:
    """Render a record for MarkdownV2 with its label in bold."""
    _, _, details = format_record(record).partition("\n")
    return f"*{escape_markdown(format_popup(record))}*\n{escape_markdown(details)}"


class TelegramBot:
    """Telegram bot for StrideLog.

    A shared location plays the part of a map click: it becomes the chat's
    pending position for the next logged activity.
    """

    def __init__(
        self,
        token: str | None = None,
        config: StrideLogConfig | None = None,
        activity_log: ActivityLog | None = None,
    ) -> None:
        self.config = config or config_from_env()
        self.token = token or self.config.telegram_token
        if not self.token:
            raise ValueError("TELEGRAM_TOKEN not set")

        self.json_logger = get_logger()
        self.store: SQLiteStore | None = None
        if activity_log is None:
            activity_log, self.store = open_activity_log(self.config, logger=self.json_logger)

        self.activity_log = activity_log
        self.positions: dict[str, tuple[float, float]] = {}
        self._app: Application | None = None

    def _get_chat_id(self, update: Update) -> str:
        """Get chat_id as string from update."""
        assert update.effective_chat is not None
        return str(update.effective_chat.id)

    async def _handle_start(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /start command."""
        assert update.message is not None
        chat_id = self._get_chat_id(update)

        self.json_logger.log("telegram_start", source=f"telegram:{chat_id}")

        await update.message.reply_text(
            WELCOME_MESSAGE,
            parse_mode=ParseMode.MARKDOWN,
        )

    async def _handle_location(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Remember a shared location as the chat's pending position."""
        assert update.message is not None
        assert update.message.location is not None
        chat_id = self._get_chat_id(update)

        location = update.message.location
        self.positions[chat_id] = (location.latitude, location.longitude)

        await update.message.reply_text(
            "📍 Got it. Now log the activity: /run, /cycle or /walk"
        )

    async def _handle_activity(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /run, /cycle and /walk."""
        assert update.message is not None
        assert update.message.text is not None
        chat_id = self._get_chat_id(update)

        command = update.message.text.split()[0].split("@")[0]
        kind = kind_from_command(command)
        assert kind is not None

        position = self.positions.get(chat_id)
        if position is None:
            await update.message.reply_text("📍 Share a location first.")
            return

        try:
            inputs = parse_activity_args(kind, context.args or [])
            record = self.activity_log.log_activity(kind, position, inputs)
        except StrideLogError as e:
            await update.message.reply_text(f"❌ {e}")
            return

        del self.positions[chat_id]

        await update.message.reply_text(
            format_record_markdown(record),
            parse_mode=ParseMode.MARKDOWN_V2,
        )
        await update.message.reply_location(*record.coordinates)

    async def _handle_list(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /list command."""
        assert update.message is not None
        text = format_record_list(self.activity_log.records)
        await update.message.reply_text(truncate_message(text))

    async def _handle_show(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /show ID: reply with the record and its location."""
        assert update.message is not None

        if not context.args or len(context.args) != 1:
            await update.message.reply_text("Usage: /show ID")
            return

        try:
            record = self.activity_log.mark_used(context.args[0])
        except RecordNotFound as e:
            await update.message.reply_text(str(e))
            return

        await update.message.reply_text(
            format_record_markdown(record),
            parse_mode=ParseMode.MARKDOWN_V2,
        )
        await update.message.reply_location(*record.coordinates)

    async def _handle_reset(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /reset command."""
        assert update.message is not None
        chat_id = self._get_chat_id(update)

        count = self.activity_log.clear_all()
        self.positions.clear()

        self.json_logger.log("telegram_reset", source=f"telegram:{chat_id}", count=count)

        await update.message.reply_text(f"✨ Deleted {count} activities.")

    async def _post_shutdown(self, application: Application) -> None:
        """Called after Application.shutdown()."""
        self.close()

    def close(self) -> None:
        """Persist usage counters and close the store."""
        self.activity_log.save()
        if self.store is not None:
            self.store.close()
            self.store = None

    def build_app(self) -> Application:
        """Build the Telegram application."""
        self._app = (
            Application.builder()
            .token(self.token)
            .post_shutdown(self._post_shutdown)
            .build()
        )

        # Add handlers
        self._app.add_handler(CommandHandler("start", self._handle_start))
        self._app.add_handler(CommandHandler(list(KIND_ALIASES), self._handle_activity))
        self._app.add_handler(CommandHandler("list", self._handle_list))
        self._app.add_handler(CommandHandler("show", self._handle_show))
        self._app.add_handler(CommandHandler("reset", self._handle_reset))
        self._app.add_handler(MessageHandler(filters.LOCATION, self._handle_location))

        return self._app

    def run(self) -> None:
        """Run the bot (blocking)."""
        app = self.build_app()

        logger.info("Starting Telegram bot with %d activities loaded", len(self.activity_log))
        app.run_polling()


def run_telegram_bot() -> None:
    """Run the Telegram bot with configuration from the environment."""
    from ..logging import configure_logger

    config = config_from_env()
    assert config.log_dir is not None
    configure_logger(config.log_dir, max_size_mb=config.log_max_size_mb)

    if not config.telegram_token:
        print("❌ Error: TELEGRAM_TOKEN environment variable not set")
        return

    bot = TelegramBot(config=config)
    bot.run()
