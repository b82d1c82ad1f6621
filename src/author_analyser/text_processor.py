"""
Модуль для подготовки входных текстов

Содержит функции для:
- Удаления HTML тегов
- Открытия файла как потокового источника символов для лексера
- Сбора списка текстовых файлов из папок
"""

import io
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from bs4 import BeautifulSoup

from .config import config


HTML_SUFFIXES = {'.html', '.htm'}

# Границы этих элементов разделяют слова; внутри строчных тегов текст склеивается
BLOCK_TAGS = [
    'address', 'article', 'aside', 'blockquote', 'dd', 'div', 'dl', 'dt',
    'figcaption', 'footer', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header',
    'li', 'main', 'nav', 'ol', 'p', 'pre', 'section', 'table', 'td', 'th',
    'title', 'tr', 'ul',
]


class DocumentTextProcessor:
    """Класс для подготовки текстов к лексическому разбору"""

    def __init__(self, encoding: Optional[str] = None, extensions: Optional[Iterable[str]] = None) -> None:
        """
        Args:
            encoding: Кодировка входных файлов (по умолчанию из config)
            extensions: Расширения файлов, которые берутся из папок
        """
        self.encoding = encoding or config.get_encoding()
        self.extensions = {ext.lower() for ext in (extensions or config.get_text_extensions())}

    def html_document_to_text(self, html: str) -> str:
        """
        Извлекает текст из полного HTML документа (скрипты и стили отбрасываются)

        Блочные элементы и <br> отделяются переводом строки, строчные
        теги (<b>, <span>, ...) не разрывают слово.

        Args:
            html: Содержимое HTML файла

        Returns:
            Текст документа
        """
        soup = BeautifulSoup(html, "lxml")
        for tag in soup(["script", "style"]):
            tag.decompose()
        for br in soup("br"):
            br.replace_with("\n")
        for tag in soup(BLOCK_TAGS):
            tag.insert_before("\n")
            tag.append("\n")
        return soup.get_text()

    def open_source(self, path: Union[str, Path]) -> TextIO:
        """
        Открывает файл как источник символов для лексера.

        Обычный текст читается лениво из файла; HTML читается целиком,
        очищается от разметки и оборачивается в StringIO.
        Закрывать источник должен вызывающий код.

        Args:
            path: Путь к файлу

        Returns:
            Текстовый поток
        """
        path = Path(path)
        if path.suffix.lower() in HTML_SUFFIXES:
            html = path.read_text(encoding=self.encoding)
            return io.StringIO(self.html_document_to_text(html))
        return open(path, 'r', encoding=self.encoding)

    def collect_files(self, paths: Iterable[Union[str, Path]]) -> List[Path]:
        """
        Раскрывает папки в отсортированные списки текстовых файлов

        Args:
            paths: Файлы и/или папки

        Returns:
            Список файлов

        Raises:
            FileNotFoundError: если путь не существует
        """
        files: List[Path] = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                files.extend(
                    sorted(
                        p for p in path.iterdir()
                        if p.is_file() and not p.name.startswith('.') and p.suffix.lower() in self.extensions
                    )
                )
            elif path.is_file():
                files.append(path)
            else:
                raise FileNotFoundError(f"Путь не найден: {path}")
        return files
