"""Telegram trade notifications.

Sends success and error notifications to a single configured chat.
Loading notifications are only logged.
"""

import asyncio
import itertools
import logging
from typing import Optional

from aiogram import Bot
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError

from swapdesk.notifications.base import NotificationKind, NotificationSink

logger = logging.getLogger(__name__)

_PREFIXES = {
    NotificationKind.SUCCESS: "<b>Trade Update</b>",
    NotificationKind.ERROR: "<b>Trade Problem</b>",
}


class TelegramNotifier(NotificationSink):
    """Sends trade notifications to a Telegram chat."""

    def __init__(self, bot: Bot, chat_id: int):
        self.bot = bot
        self.chat_id = chat_id
        self._handles = itertools.count(1)
        self._pending: set[asyncio.Task] = set()

    def show(self, kind: NotificationKind, message: str) -> int:
        kind = NotificationKind(kind)
        handle = next(self._handles)

        if kind == NotificationKind.LOADING:
            logger.debug(f"[loading] {message}")
            return handle

        text = f"{_PREFIXES[kind]}\n\n{message}"
        try:
            task = asyncio.get_running_loop().create_task(self.send_message(text))
        except RuntimeError:
            logger.warning("No running event loop - Telegram notification dropped")
            return handle

        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return handle

    async def send_message(self, message: str, parse_mode: Optional[str] = "HTML") -> bool:
        """Send a message to the configured chat.

        Returns:
            True if message was sent successfully
        """
        try:
            await self.bot.send_message(
                chat_id=self.chat_id,
                text=message,
                parse_mode=parse_mode,
            )
            return True
        except TelegramForbiddenError:
            logger.warning(f"Chat {self.chat_id} has blocked the bot")
            return False
        except TelegramBadRequest as e:
            logger.error(f"Bad request sending to {self.chat_id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Failed to send notification to {self.chat_id}: {e}")
            return False

    async def drain(self) -> None:
        """Wait for notifications still being sent."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        await self.bot.session.close()


def create_telegram_notifier(token: str, chat_id: int) -> TelegramNotifier:
    """Create a notifier with its own bot session."""
    return TelegramNotifier(Bot(token=token), chat_id)
