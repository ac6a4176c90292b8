# -*- coding: utf-8 -*-
"""
Скрипт отчёта о температуре без бота: печатает отчёт в stdout.

Запуск:
    python -m scripts.weather.temperature_today_script          # сегодня с 05:00
    python -m scripts.weather.temperature_today_script now      # погода сейчас
"""

import sys
import logging
from pathlib import Path

# Добавляем путь к проекту, если нужно
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from process_manager import ProcessManager
from scripts.weather.temperature_workflow import generate_current_report, generate_today_report

logger = logging.getLogger("temperature_today_script")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    mode = argv[0] if argv else "today"

    pm = ProcessManager()
    pm.initialize_sync()
    try:
        logger.info(f"🚀 Запуск скрипта отчёта ({mode})")
        if mode == "now":
            outcome = generate_current_report(pm.client, pm.fallback_location())
        else:
            outcome = generate_today_report(
                pm.resolver,
                pm.client,
                pm.cache,
                start_hour=pm.config.window_start_hour,
                chart_base_url=pm.config.chart_api_url,
            )

        # Вывод для вызывающего процесса
        print(f"EVENT_TYPE:{'task_error' if outcome.is_error else 'task_result'}")
        print(f"REPORT_STATE:{outcome.state.value}")
        if outcome.chart_url:
            print(f"CHART_URL:{outcome.chart_url}")
        print(outcome.text)
        return 1 if outcome.is_error else 0
    finally:
        pm.shutdown_sync()


if __name__ == "__main__":
    sys.exit(main())
