# transport/telegram_app.py
import os
from datetime import time
from typing import List, Optional
from zoneinfo import ZoneInfo

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import BadRequest, TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from config import REMINDER_TIME, REMINDER_TIMEZONE
from core.events import Button, Event, EventKind, OutboundMessage
from core.log_config import get_logger
from services.reminder import DailyReminder
from services.router import ConversationRouter

logger = get_logger("telegram_transport")


# -----------------------------
# Update -> Event
# -----------------------------
def update_to_event(update: Update) -> Optional[Event]:
    chat = update.effective_chat
    if chat is None:
        return None

    if update.callback_query is not None:
        return Event(conversation_id=chat.id, kind=EventKind.SELECTION, payload=update.callback_query.data or "")

    message = update.effective_message
    if message is None or not message.text:
        return None

    if message.text.startswith("/start"):
        return Event(conversation_id=chat.id, kind=EventKind.START, payload=message.text)
    if message.text.startswith("/"):
        return Event(conversation_id=chat.id, kind=EventKind.COMMAND, payload=message.text)
    return Event(conversation_id=chat.id, kind=EventKind.TEXT, payload=message.text)


def build_markup(controls: List[List[Button]]) -> Optional[InlineKeyboardMarkup]:
    if not controls:
        return None
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(button.label, callback_data=button.selection_id) for button in row]
            for row in controls
        ]
    )


# -----------------------------
# OutboundMessage -> Telegram
# -----------------------------
class TelegramSender:
    def __init__(self, bot):
        self.bot = bot

    async def send(self, message: OutboundMessage) -> None:
        if message.photo is not None:
            await self._send_photo(message)
            return

        markup = build_markup(message.controls)
        try:
            await self.bot.send_message(
                chat_id=message.conversation_id,
                text=message.text,
                parse_mode=message.parse_mode,
                reply_markup=markup,
            )
        except BadRequest as exc:
            if message.parse_mode is None:
                raise
            # Unbalanced Markdown in user or model text
            logger.warning(f"[MARKDOWN_FALLBACK] conversation_id={message.conversation_id}, error={exc}")
            await self.bot.send_message(chat_id=message.conversation_id, text=message.text, reply_markup=markup)

    async def _send_photo(self, message: OutboundMessage) -> None:
        if not os.path.exists(message.photo):
            logger.warning(f"[PHOTO_MISSING] path={message.photo}")
            return
        with open(message.photo, "rb") as photo:
            await self.bot.send_photo(chat_id=message.conversation_id, photo=photo, caption=message.text)

    async def send_all(self, messages: List[OutboundMessage]) -> None:
        for message in messages:
            await self.send(message)


# -----------------------------
# Application
# -----------------------------
class FinanceBot:
    def __init__(self, token: str, router: ConversationRouter, reminder: DailyReminder):
        self.router = router
        self.reminder = reminder
        # Updates from different chats run concurrently; the router serializes each chat
        self.application = Application.builder().token(token).concurrent_updates(True).build()
        self.sender = TelegramSender(self.application.bot)
        self._register_handlers()
        self._schedule_jobs()

    def _register_handlers(self) -> None:
        app = self.application
        # Edited messages are not new input
        app.add_handler(CommandHandler("start", self.on_update, filters=filters.UpdateType.MESSAGE))
        app.add_handler(CallbackQueryHandler(self.on_selection))
        app.add_handler(
            MessageHandler(filters.UpdateType.MESSAGE & filters.TEXT & ~filters.COMMAND, self.on_update)
        )
        app.add_error_handler(self.on_error)

    def _schedule_jobs(self) -> None:
        reminder_time = time(
            hour=REMINDER_TIME.hour,
            minute=REMINDER_TIME.minute,
            tzinfo=ZoneInfo(REMINDER_TIMEZONE),
        )
        self.application.job_queue.run_daily(self.send_reminders, time=reminder_time, name="daily_reminder")
        logger.info(f"📅 Scheduled daily reminder at {reminder_time.isoformat()} {REMINDER_TIMEZONE}")

    async def on_update(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        event = update_to_event(update)
        if event is None:
            return
        await self.router.handle(event, deliver=self.sender.send_all)

    async def on_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.callback_query.answer()
        await self.on_update(update, context)

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("[TELEGRAM_ERROR] %s", context.error, exc_info=context.error)

    async def send_reminders(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        for message in await self.reminder.build_reminders():
            try:
                await self.sender.send(message)
            except TelegramError:
                logger.exception(f"[REMINDER_SEND_ERROR] conversation_id={message.conversation_id}")

    def run(self) -> None:
        logger.info("🤖 Bot started. Polling...")
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)
