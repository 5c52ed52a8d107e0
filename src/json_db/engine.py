import shlex
from datetime import datetime

import prompt
from prettytable import PrettyTable

from src.json_db.constants import ID_FIELD
from src.json_db.database import Database
from src.json_db.decorators import confirm_action, handle_db_errors, log_time
from src.json_db.meta import SaveResult
from src.json_db.parser import parse_condition, parse_record
from src.json_db.table import Table


def print_help() -> None:
    """Print available commands for database mode."""
    print("***Операции с таблицами***")
    print("Функции:")
    print("<command> list_tables - показать список всех таблиц.")
    print("<command> create_table <имя_таблицы> - создать пустую таблицу.")
    print(
        "<command> insert into <имя_таблицы> values "
        "(<поле1>=<значение1>, <поле2>=<значение2>, ...) - создать запись."
    )
    print("<command> select from <имя_таблицы> - прочитать все записи.")
    print(
        "<command> select from <имя_таблицы> where "
        "<поле> = <значение> - прочитать записи по условию."
    )
    print("<command> save <имя_таблицы> - сохранить изменения таблицы.")
    print("<command> save - сохранить все открытые таблицы.")
    print("<command> rename <имя_таблицы> <новое_имя> - переименовать таблицу.")
    print("<command> info <имя_таблицы> - вывести информацию о таблице.")
    print("<command> exit - выход из программы.")
    print("<command> help - справочная информация.")


class Session:
    """Open table handles of one console run."""

    def __init__(self, database: Database) -> None:
        self.database = database
        self.tables: dict[str, Table] = {}

    def table(self, name: str) -> Table:
        """Return an open handle, loading the table on first use."""
        if name not in self.tables:
            if not self.database.has_table(name):
                raise KeyError(name)
            self.tables[name] = self.database.table(name)
        return self.tables[name]

    def unsaved(self) -> list[str]:
        return sorted(name for name, table in self.tables.items() if table.is_dirty)


@handle_db_errors
def create_table(session: Session, table_name: str) -> Table:
    table = session.database.create_table(table_name)
    session.tables[table_name] = table
    return table


@handle_db_errors
@log_time
def insert(session: Session, table_name: str, values_text: str) -> int:
    """Insert one record and return the id given to it."""
    record = parse_record(values_text)
    table = session.table(table_name)
    table.insert(record)
    return table.all()[-1].id


@handle_db_errors
@log_time
def select(session: Session, table_name: str, where_clause: dict | None = None):
    """Select all rows or rows matching where clause."""
    table = session.table(table_name)
    if where_clause is None:
        return table.all()

    where_column, where_value = next(iter(where_clause.items()))
    return table.filter(lambda row, _index: row.get(where_column) == where_value)


@handle_db_errors
def save(session: Session, table_name: str) -> SaveResult:
    return session.table(table_name).save()


@handle_db_errors
@confirm_action("переименование таблицы")
def rename(session: Session, table_name: str, new_name: str) -> bool:
    table = session.table(table_name)
    table.rename(new_name)
    session.tables[new_name] = session.tables.pop(table_name)
    return True


@handle_db_errors
def get_table_info(session: Session, table_name: str) -> dict[str, object]:
    """Return human-readable table info."""
    table = session.table(table_name)
    modified = datetime.fromtimestamp(table.times()["modified"])
    return {
        "table": table.name,
        "rows_count": len(table),
        "current_id": table.meta.current_id,
        "size": table.size(),
        "modified": modified.isoformat(" ", "seconds"),
        "unsaved": table.is_dirty,
    }


def _field_names(rows) -> list[str]:
    """Collect field names in first-seen order with id first."""
    names = [ID_FIELD]
    for row in rows:
        for name in row:
            if name not in names:
                names.append(name)
    return names


def _render_select_table(rows) -> None:
    """Render rows with PrettyTable."""
    field_names = _field_names(rows)
    table = PrettyTable()
    table.field_names = field_names
    for row in rows:
        table.add_row([row.get(name, "") for name in field_names])
    print(table)


def _report_save(table_name: str, result: SaveResult | None) -> None:
    if result is None:
        return
    if result is SaveResult.NOOP:
        print(f'Таблица "{table_name}" не изменялась.')
    elif result is SaveResult.SUCCESS:
        print(f'Таблица "{table_name}" успешно сохранена.')
    else:
        print(f'Ошибка: не удалось сохранить таблицу "{table_name}".')


def run(database: Database | None = None) -> None:
    """Run interactive table console."""
    session = Session(database or Database())
    print("***База данных***")
    print_help()

    while True:
        user_input = prompt.string("Введите команду: ").strip()

        if not user_input:
            continue

        try:
            parts = shlex.split(user_input)
        except ValueError:
            print("Некорректное значение: ошибка разбора команды. Попробуйте снова.")
            continue

        command = parts[0]

        if user_input == "exit":
            unsaved = session.unsaved()
            if unsaved:
                print(f"Несохранённые изменения потеряны: {', '.join(unsaved)}.")
            break
        if user_input == "help":
            print_help()
            continue

        if command == "list_tables":
            if user_input != "list_tables":
                print("Некорректное значение: list_tables. Попробуйте снова.")
                continue
            tables = session.database.list_tables()
            if not tables:
                print("Список таблиц пуст.")
                continue
            for table_name in tables:
                print(f"- {table_name}")
            continue

        if command == "create_table":
            if len(parts) != 2:
                print("Некорректное значение: create_table. Попробуйте снова.")
                continue
            if create_table(session, parts[1]) is not None:
                print(f'Таблица "{parts[1]}" успешно создана.')
            continue

        if user_input.startswith("insert into "):
            if " values " not in user_input:
                print("Некорректное значение: insert. Попробуйте снова.")
                continue

            head, values_part = user_input.split(" values ", 1)
            head_parts = head.split()
            if len(head_parts) != 3:
                print("Некорректное значение: insert. Попробуйте снова.")
                continue
            table_name = head_parts[2]

            values_part = values_part.strip()
            if not (values_part.startswith("(") and values_part.endswith(")")):
                print("Некорректное значение: insert. Попробуйте снова.")
                continue

            new_id = insert(session, table_name, values_part[1:-1].strip())
            if new_id is None:
                continue
            print(f'Запись с ID={new_id} успешно добавлена в таблицу "{table_name}".')
            continue

        if user_input.startswith("select from "):
            select_parts = user_input.split()
            if len(select_parts) < 3:
                print("Некорректное значение: select. Попробуйте снова.")
                continue
            table_name = select_parts[2]

            where_clause = None
            if " where " in user_input:
                _, where_part = user_input.split(" where ", 1)
                try:
                    where_clause = parse_condition(where_part)
                except ValueError as error:
                    print(error)
                    continue

            rows = select(session, table_name, where_clause)
            if rows is None:
                continue
            if not len(rows):
                print("Записей не найдено.")
                continue

            _render_select_table(rows)
            continue

        if command == "save":
            if len(parts) > 2:
                print("Некорректное значение: save. Попробуйте снова.")
                continue
            names = parts[1:] or sorted(session.tables)
            if not names:
                print("Нет открытых таблиц.")
                continue
            for table_name in names:
                _report_save(table_name, save(session, table_name))
            continue

        if command == "rename":
            if len(parts) != 3:
                print("Некорректное значение: rename. Попробуйте снова.")
                continue
            if rename(session, parts[1], parts[2]):
                print(f'Таблица "{parts[1]}" переименована в "{parts[2]}".')
            continue

        if command == "info":
            if len(parts) != 2:
                print("Некорректное значение: info. Попробуйте снова.")
                continue

            info = get_table_info(session, parts[1])
            if info is None:
                continue

            print(f'Таблица: {info["table"]}')
            print(f'Количество записей: {info["rows_count"]}')
            print(f'Последний ID: {info["current_id"]}')
            print(f'Размер файла: {info["size"]} байт')
            print(f'Изменена: {info["modified"]}')
            if info["unsaved"]:
                print("Есть несохранённые изменения.")
            continue

        print(f"Функции {command} нет. Попробуйте снова.")
