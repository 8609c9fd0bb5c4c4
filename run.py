#!/usr/bin/env python3
"""Скрипт для запуска SCIM Resource Server"""

import sys
import subprocess
import argparse


def run_server():
    """Запуск сервера разработки"""
    print("🚀 Запуск SCIM Resource Server...")
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "scim_server.main:app",
            "--host", "0.0.0.0",
            "--port", "8000",
            "--reload"
        ], check=True)
    except KeyboardInterrupt:
        print("\n✋ Сервер остановлен")
    except subprocess.CalledProcessError as e:
        print(f"❌ Ошибка запуска сервера: {e}")
        sys.exit(1)


def run_tests():
    """Запуск тестов"""
    print("🧪 Запуск тестов...")
    result = subprocess.run([
        sys.executable, "-m", "pytest",
        "tests/",
        "-v",
        "--tb=short"
    ], check=False)
    if result.returncode == 0:
        print("✅ Все тесты прошли успешно!")
    else:
        print("❌ Некоторые тесты не прошли")
        sys.exit(1)


def install_deps():
    """Установка зависимостей"""
    print("📦 Установка зависимостей...")
    try:
        subprocess.run([
            sys.executable, "-m", "pip", "install",
            "-e", ".[test,dev]"
        ], check=True)
        print("✅ Зависимости установлены успешно!")
    except subprocess.CalledProcessError as e:
        print(f"❌ Ошибка установки зависимостей: {e}")
        sys.exit(1)


def lint_code():
    """Проверка кода линтерами"""
    print("🔍 Проверка кода...")

    # Black
    print("  Форматирование с Black...")
    try:
        subprocess.run([
            sys.executable, "-m", "black",
            "scim_server/", "tests/", "--check"
        ], check=True)
        print("  ✅ Black: код отформатирован правильно")
    except subprocess.CalledProcessError:
        print("  ⚠️  Black: требуется форматирование")
        subprocess.run([
            sys.executable, "-m", "black",
            "scim_server/", "tests/"
        ])
        print("  ✅ Black: код отформатирован")

    # Flake8
    print("  Проверка с Flake8...")
    try:
        subprocess.run([
            sys.executable, "-m", "flake8",
            "scim_server/", "tests/"
        ], check=True)
        print("  ✅ Flake8: проблем не найдено")
    except subprocess.CalledProcessError:
        print("  ❌ Flake8: найдены проблемы")


def main():
    """Главная функция"""
    parser = argparse.ArgumentParser(description="SCIM Resource Server управление")
    parser.add_argument(
        "command",
        choices=["server", "test", "install", "lint"],
        help="Команда для выполнения"
    )

    args = parser.parse_args()

    if args.command == "server":
        run_server()
    elif args.command == "test":
        run_tests()
    elif args.command == "install":
        install_deps()
    elif args.command == "lint":
        lint_code()


if __name__ == "__main__":
    main()
