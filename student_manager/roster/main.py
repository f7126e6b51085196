# roster/main.py
"""Главный модуль, реализующий консольный интерфейс (CLI) для списка студентов."""
import logging
import traceback
from pathlib import Path
from typing import List, Optional, Union

from . import errors
from .config import Settings
from .io_utils import JsonFileStorage
from .logger import setup_logger
from .models import EDUCATION_TYPES, Record, format_grade
from .roster import Roster
from .state import AppState

logger = logging.getLogger(__name__)

FORM_FIELDS = [
    ("last_name", "Прізвище"),
    ("first_name", "Ім'я"),
    ("middle_name", "По батькові"),
    ("phone", "Номер телефону"),
    ("email", "Електронна пошта"),
    ("birth_date", "Дата народження (РРРР-ММ-ДД)"),
    ("group", "Група"),
    ("address", "Місце проживання"),
    ("education_type", f"Форма навчання ({'/'.join(EDUCATION_TYPES)})"),
    ("grades", "Оцінки через пробіл"),
]

SORT_FIELDS = [
    ("last_name", "Прізвище"),
    ("first_name", "Ім'я"),
    ("middle_name", "По батькові"),
    ("phone", "Номер телефону"),
    ("email", "Електронна пошта"),
    ("birth_date", "Дата народження"),
    ("group", "Група"),
    ("address", "Місце проживання"),
    ("education_type", "Форма навчання"),
    ("average_grade", "Середній бал"),
]

SAVE_FAILED = "⚠️ Зміни не вдалося зберегти у сховище. Подробиці в журналі."


def print_menu():
    """Выводит на экран главное меню."""
    print("\n" + "="*30)
    print("    СПИСОК СТУДЕНТІВ")
    print("="*30)
    print("1. Показати студентів")
    print("2. Додати студента")
    print("3. Редагувати студента")
    print("4. Видалити студента")
    print("5. Пошук")
    print("6. Скинути пошук")
    print("7. Сортування")
    print("8. Скинути сортування")
    print("9. Завантажити список у .txt")
    print("0. Вихід")
    print("="*30)


def show_records(records: List[Record]):
    if not records:
        print("ℹ️ Студентів не знайдено.")
        return
    for number, record in enumerate(records, start=1):
        print(f"{number:>3}. {record}")
    print(f"Всього: {len(records)}")


def read_form(current: Optional[Record] = None) -> dict:
    """Запрашивает поля формы. При редактировании пустой ввод оставляет старое значение."""
    fields = {}
    for name, label in FORM_FIELDS:
        if current is None:
            fields[name] = input(f"{label}: ")
            continue

        if name == "grades":
            old_value = " ".join(format_grade(g) for g in current.grades)
        else:
            old_value = getattr(current, name)
        value = input(f"{label} [{old_value}]: ")
        fields[name] = value if value.strip() else old_value
    return fields


def choose_record(state: AppState) -> Optional[Record]:
    """Спрашивает номер студента в текущем (отфильтрованном и отсортированном) списке."""
    records = state.visible_records()
    if not records:
        print("ℹ️ Список студентів порожній.")
        return None

    show_records(records)
    number = int(input("Введіть номер студента у списку: "))
    if not 1 <= number <= len(records):
        print(f"❌ Номер повинен бути від 1 до {len(records)}.")
        return None
    return records[number - 1]


def choose_sorting(state: AppState):
    for number, (_, label) in enumerate(SORT_FIELDS, start=1):
        print(f"{number:>2}. {label}")
    numbers = input("Номери полів через пробіл (прізвище та ім'я можна разом): ").split()
    if not numbers:
        print("❌ Будь ласка, виберіть поле сортування та напрямок!")
        return

    state.selected_sort_fields = []
    for number in numbers:
        index = int(number)
        if not 1 <= index <= len(SORT_FIELDS):
            raise IndexError(f"поля з номером {index} немає")
        field, _ = SORT_FIELDS[index - 1]
        state.toggle_sort_field(field)

    direction = input("Напрямок (asc - за зростанням, desc - за спаданням): ")
    state.set_sort_direction(direction)


def main_cli(state: AppState, export_dir: Union[str, Path] = "exports"):
    """Основной цикл консольного приложения."""
    while True:
        print_menu()
        choice = input("Виберіть пункт меню: ").strip()

        try:
            if choice == '1':
                print("\n--- Студенти ---")
                show_records(state.visible_records())

            elif choice == '2':
                try:
                    record = state.add_record(read_form())
                    if not state.last_save_ok:
                        print(SAVE_FAILED)
                    print(f"✅ Студента {record.full_name} додано.")
                    show_records(state.visible_records())
                except errors.DataValidationError as e:
                    print(f"❌ {e}")

            elif choice == '3':
                record = choose_record(state)
                if record is None:
                    continue
                state.start_edit(record.id)
                try:
                    if not state.save_edit(read_form(record)):
                        print(SAVE_FAILED)
                    print("✅ Дані студента оновлено.")
                except errors.DataValidationError as e:
                    state.cancel_edit()
                    print(f"❌ {e}")

            elif choice == '4':
                record = choose_record(state)
                if record is None:
                    continue
                answer = input("Ви впевнені, що хочете видалити цього студента? (т/н): ")
                if answer.strip().lower() in ("т", "так", "y", "yes"):
                    if not state.delete_record(record.id):
                        print(SAVE_FAILED)
                    print("✅ Студента видалено.")

            elif choice == '5':
                state.apply_search(input("Текст для пошуку: "))
                show_records(state.visible_records())

            elif choice == '6':
                state.reset_search()
                show_records(state.visible_records())

            elif choice == '7':
                choose_sorting(state)
                show_records(state.visible_records())

            elif choice == '8':
                state.clear_sorting()
                show_records(state.visible_records())

            elif choice == '9':
                path = state.export_to(export_dir)
                print(f"✅ Список збережено у {path}.")

            elif choice == '0':
                print("👋 До побачення!")
                break

            else:
                print("❌ Невірний вибір. Введіть число від 0 до 9.")

        except (ValueError, IndexError) as e:
            print(f"❌ Помилка вводу: {e}")
        except errors.RosterAppError as e:
            print(f"❌ {e}")
        except Exception as e:
            logger.exception("Непредвиденная ошибка в меню")
            print(f"❌ Сталася непередбачена помилка: {e}")


def start():
    """Настройки, логирование, хранилище и запуск меню."""
    settings = Settings()
    settings.validate()
    setup_logger("roster", settings.log_level_value, settings.log_file)

    storage = JsonFileStorage(settings.data_dir)
    state = AppState(Roster(storage, settings.storage_slot))
    main_cli(state, settings.export_dir)


def run() -> int:
    """Точка входа консольной команды roster-cli."""
    try:
        start()
    except KeyboardInterrupt:
        print("\nПрограму примусово зупинено.")
    except Exception:
        print("\n!!! КРИТИЧНА ПОМИЛКА ЗАПУСКУ !!!")
        traceback.print_exc()
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(run())
