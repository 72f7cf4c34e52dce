"""Telegram bot integration."""

from .bot import TelegramBot, run_telegram_bot

__all__ = ["TelegramBot", "run_telegram_bot"]
