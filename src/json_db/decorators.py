"""Decorators for console commands."""

import logging
import time
from functools import wraps

from src.json_db.errors import (
    FileReadError,
    FileSystemError,
    FileWriteError,
    NameCollisionError,
)

logger = logging.getLogger(__name__)


def handle_db_errors(func):
    """Catch and print expected table errors in one place."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileReadError as error:
            print(f"Ошибка чтения файла таблицы: {error}")
            return None
        except FileWriteError as error:
            print(f"Ошибка записи файла таблицы: {error}")
            return None
        except NameCollisionError as error:
            print(f"Ошибка: имя уже занято. {error}")
            return None
        except FileSystemError as error:
            print(f"Ошибка файловой системы: {error}")
            return None
        except KeyError as error:
            print(f"Ошибка: Таблица или столбец {error} не найден.")
            return None
        except ValueError as error:
            print(f"Ошибка валидации: {error}")
            return None

    return wrapper


CONFIRM_ANSWERS = {"y", "yes", "д", "да"}


def confirm_action(action_name):
    """Ask before running `func`; the question names the call's arguments."""

    def decorator(func):
        @wraps(func)
        def wrapper(session, *args, **kwargs):
            target = " -> ".join(str(arg) for arg in args)
            question = f'Подтвердите "{action_name}" ({target}) [y/n]: '
            if input(question).strip().lower() not in CONFIRM_ANSWERS:
                print("Операция отменена.")
                return None
            return func(session, *args, **kwargs)

        return wrapper

    return decorator


def log_time(func):
    """Log execution time in seconds."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.monotonic()
        result = func(*args, **kwargs)
        elapsed = time.monotonic() - start
        logger.debug("%s finished in %.3f s", func.__name__, elapsed)
        return result

    return wrapper
