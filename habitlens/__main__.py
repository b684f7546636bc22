#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitLens - точка входа
Запуск: python -m habitlens [--host HOST] [--port PORT] [--reload]
"""

import argparse

from .dashboard.app import run_dashboard
from .dashboard.config import settings


def main():
    parser = argparse.ArgumentParser(description='Запуск HabitLens Dashboard')
    parser.add_argument('--host', default=settings.DASHBOARD_HOST, help='Host для запуска')
    parser.add_argument('--port', type=int, default=settings.DASHBOARD_PORT, help='Port для запуска')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка')
    args = parser.parse_args()

    run_dashboard(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
