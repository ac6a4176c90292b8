# scripts/weather/temperature_handler.py
import asyncio
import logging
from functools import partial

from telegram import Update, InlineKeyboardMarkup, InlineKeyboardButton, LinkPreviewOptions
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from scripts.weather.temperature_workflow import generate_current_report, generate_today_report

logger = logging.getLogger("temperature_handler")

REFRESH_CALLBACK = "temperature_refresh"
PROCESS_MANAGER_KEY = "process_manager"


def _refresh_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton("🔄 Обновить", callback_data=REFRESH_CALLBACK)]
    ])


async def temperature_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Отчёт о температуре за сегодня по местоположению бота."""
    pm = context.application.bot_data[PROCESS_MANAGER_KEY]
    chat_id = update.effective_chat.id

    await context.bot.send_message(chat_id=chat_id, text="📍 Определяем местоположение...")

    # Сценарий блокирующий (requests, sqlite3) — уводим его из event loop
    loop = asyncio.get_running_loop()
    outcome = await loop.run_in_executor(
        None,
        partial(
            generate_today_report,
            pm.resolver,
            pm.client,
            pm.cache,
            start_hour=pm.config.window_start_hour,
            chart_base_url=pm.config.chart_api_url,
        ),
    )
    logger.info(f"📨 Отчёт для чата {chat_id}: {outcome.state.value}")

    if outcome.chart_url:
        try:
            await context.bot.send_photo(chat_id=chat_id, photo=outcome.chart_url)
        except TelegramError as e:
            logger.warning(f"⚠️ График не отправлен: {e}")

    await context.bot.send_message(
        chat_id=chat_id,
        text=outcome.text,
        reply_markup=_refresh_keyboard(),
        link_preview_options=LinkPreviewOptions(is_disabled=True),
        parse_mode=ParseMode.HTML,
    )


async def temperature_refresh_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Кнопка «Обновить»: сценарий запускается заново с геолокации."""
    query = update.callback_query
    await query.answer()
    await temperature_command(update, context)


async def current_weather_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Текущая погода в запасном городе."""
    pm = context.application.bot_data[PROCESS_MANAGER_KEY]
    loop = asyncio.get_running_loop()
    outcome = await loop.run_in_executor(
        None, partial(generate_current_report, pm.client, pm.fallback_location())
    )
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text=outcome.text,
        parse_mode=ParseMode.HTML,
    )
