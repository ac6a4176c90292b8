# bot.py
# -*- coding: utf-8 -*-
"""
Основной скрипт бота: температура за сегодня и текущая погода.
"""
import logging
import sys
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    ContextTypes
)
from process_manager import ProcessManager
from scripts.weather.temperature_handler import (
    PROCESS_MANAGER_KEY,
    REFRESH_CALLBACK,
    current_weather_command,
    temperature_command,
    temperature_refresh_callback
)


# === Обработчики команд ===
async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Главное меню."""
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text=(
            "🌡️ Температурный бот\n\n"
            "Выберите действие:\n"
            "• /temperature — температура сегодня с 05:00 до сейчас\n"
            "• /now — погода сейчас в запасном городе"
        )
    )


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logging.error(f"⚠️ Исключение при обработке: {context.error}", exc_info=context.error)
    if update and hasattr(update, 'update_id'):
        logging.error(f"Update ID: {update.update_id}")


def build_application(process_manager: ProcessManager) -> Application:
    """Создаёт приложение и регистрирует обработчики."""
    app = Application.builder().token(process_manager.config.telegram_token).build()
    app.bot_data[PROCESS_MANAGER_KEY] = process_manager

    # 1. ОБРАБОТЧИКИ КОМАНД
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("temperature", temperature_command))
    app.add_handler(CommandHandler("now", current_weather_command))

    # 2. CALLBACK QUERY HANDLERS (с pattern)
    app.add_handler(CallbackQueryHandler(temperature_refresh_callback, pattern=f"^{REFRESH_CALLBACK}$"))

    # 3. ОБРАБОТЧИК ОШИБОК
    app.add_error_handler(error_handler)
    return app


# === Основная функция запуска ===
def main():
    process_manager = ProcessManager()
    process_manager.initialize_sync()
    logging.info("🚀 Запуск бота")
    if not process_manager.config.telegram_token:
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")

    app = build_application(process_manager)
    print("🚀 Бот запущен. Используйте /temperature.")
    print("Нажмите Ctrl+C для остановки.")

    try:
        app.run_polling(drop_pending_updates=True)
    except KeyboardInterrupt:
        print("\n🛑 Остановка по запросу пользователя.")
    finally:
        process_manager.shutdown_sync()
        print("✅ Бот завершил работу.")


if __name__ == "__main__":
    if sys.platform == "win32":
        import asyncio
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    main()
