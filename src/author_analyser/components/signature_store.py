"""
Компонент для чтения и записи файлов сигнатур известных авторов.

Формат файла: первая строка содержит имя автора, следующие пять строк содержат
признаки в порядке FEATURE_NAMES, по одному числу на строку.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..interfaces.document_processor import FEATURE_NAMES, Signature, SignatureStoreInterface

logger = logging.getLogger(__name__)


class SignatureFormatError(ValueError):
    """Файл сигнатуры повреждён или имеет неверный формат."""
    pass


class SignatureStore(SignatureStoreInterface):
    """Хранилище сигнатур на файловой системе."""

    def __init__(self, encoding: str = 'utf-8'):
        """
        Args:
            encoding: Кодировка файлов сигнатур
        """
        self.encoding = encoding

    def load_signature(self, path: Union[str, Path]) -> Signature:
        """
        Загружает сигнатуру из файла.

        Args:
            path: Путь к файлу сигнатуры

        Returns:
            Сигнатура автора

        Raises:
            SignatureFormatError: если файл не соответствует формату
        """
        path = Path(path)
        with open(path, 'r', encoding=self.encoding) as f:
            lines = [line.strip() for line in f.read().splitlines()]

        # Пустые строки в конце файла допустимы
        while lines and not lines[-1]:
            lines.pop()

        expected = 1 + len(FEATURE_NAMES)
        if len(lines) != expected:
            raise SignatureFormatError(
                f"{path}: ожидалось {expected} строк (имя и {len(FEATURE_NAMES)} признаков), найдено {len(lines)}"
            )

        name = lines[0]
        if not name:
            raise SignatureFormatError(f"{path}: пустое имя автора")

        values = {}
        for feature, raw in zip(FEATURE_NAMES, lines[1:]):
            try:
                values[feature] = float(raw)
            except ValueError as e:
                raise SignatureFormatError(f"{path}: признак '{feature}' не является числом: {raw!r}") from e

        return Signature(name=name, **values)

    def load_signatures(self, folder: Union[str, Path]) -> List[Signature]:
        """
        Загружает все сигнатуры из папки (файлы сортируются по имени).

        Повреждённые файлы пропускаются с предупреждением в логе.

        Args:
            folder: Папка с файлами сигнатур

        Returns:
            Список сигнатур

        Raises:
            FileNotFoundError: если папка не существует
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise FileNotFoundError(f"Папка сигнатур не найдена: {folder}")

        signatures: List[Signature] = []
        for path in sorted(folder.iterdir()):
            if not path.is_file() or path.name.startswith('.'):
                continue
            try:
                signatures.append(self.load_signature(path))
            except (OSError, UnicodeDecodeError, SignatureFormatError) as e:
                logger.warning(f"Пропускаю файл сигнатуры {path.name}: {e}")

        logger.info(f"Загружено сигнатур: {len(signatures)} из {folder}")
        return signatures

    def save_signature(self, signature: Signature, path: Union[str, Path]) -> None:
        """
        Сохраняет сигнатуру в файл того же формата.

        Args:
            signature: Сигнатура для записи
            path: Путь к файлу
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [signature.name] + [repr(float(getattr(signature, feature))) for feature in FEATURE_NAMES]
        with open(path, 'w', encoding=self.encoding) as f:
            f.write("\n".join(lines) + "\n")
        logger.info(f"Сигнатура '{signature.name}' сохранена: {path}")
