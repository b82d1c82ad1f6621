"""
Модуль для атрибуции авторства текстов

Предоставляет функциональность для:
- Построения стилометрической сигнатуры текста или файла
- Загрузки и сохранения сигнатур известных авторов
- Поиска ближайшего автора по взвешенной сумме признаков
- Экспорта результатов
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, TextIO, Union

from .config import config
from .components.lexer import Lexer
from .components.document import Document
from .components.feature_extractor import DocumentStatistics
from .components.signature_store import SignatureStore
from .components.author_matcher import AuthorMatcher
from .components.exporter import ResultExporter
from .interfaces.document_processor import MatchResult, Signature
from .text_processor import DocumentTextProcessor

logger = logging.getLogger(__name__)


class AuthorshipAnalyzer:
    """Класс для определения авторства текстов по стилометрическим признакам"""

    def __init__(self,
                 signatures_folder: Optional[str] = None,
                 weights: Optional[Mapping[str, float]] = None,
                 output_dir: Optional[str] = None,
                 encoding: Optional[str] = None):
        """
        Инициализация анализатора

        Args:
            signatures_folder: Папка с сигнатурами авторов (по умолчанию из config)
            weights: Веса признаков (по умолчанию из config)
            output_dir: Папка для результатов (по умолчанию из config)
            encoding: Кодировка файлов (по умолчанию из config)
        """
        self.signatures_folder = Path(signatures_folder or config.get_signatures_folder())
        self.text_processor = DocumentTextProcessor(encoding=encoding)
        self.signature_store = SignatureStore(encoding=self.text_processor.encoding)
        self.matcher = AuthorMatcher(weights)
        self.exporter = ResultExporter(output_dir=output_dir or config.get_results_folder(),
                                       weights=self.matcher.weights)
        self._known_signatures: List[Signature] = []

    @property
    def known_signatures(self) -> List[Signature]:
        return list(self._known_signatures)

    def analyze_source(self, source: Union[str, TextIO], name: str) -> Signature:
        """
        Строит сигнатуру по источнику символов

        Args:
            source: Строка или текстовый поток
            name: Имя документа

        Returns:
            Сигнатура документа

        Raises:
            EmptyDocumentError: если в тексте нет слов
        """
        document = Document(Lexer(source))
        document.parse_document()
        signature = DocumentStatistics(document).signature(name)
        logger.debug(f"Сигнатура '{name}': {signature.as_dict()}")
        return signature

    def analyze_text(self, text: str, name: str = "text") -> Signature:
        """Строит сигнатуру по строке текста"""
        return self.analyze_source(text, name)

    def analyze_file(self, path: Union[str, Path], name: Optional[str] = None) -> Signature:
        """
        Строит сигнатуру по файлу (txt или html)

        Args:
            path: Путь к файлу
            name: Имя документа (по умолчанию имя файла без расширения)

        Returns:
            Сигнатура документа
        """
        path = Path(path)
        logger.info(f"Анализ файла: {path}")
        with self.text_processor.open_source(path) as source:
            return self.analyze_source(source, name or path.stem)

    def load_known_signatures(self, folder: Optional[Union[str, Path]] = None) -> List[Signature]:
        """
        Загружает сигнатуры известных авторов

        Args:
            folder: Папка с сигнатурами (по умолчанию signatures_folder)

        Returns:
            Список загруженных сигнатур
        """
        folder = Path(folder) if folder else self.signatures_folder
        self._known_signatures = self.signature_store.load_signatures(folder)
        return self.known_signatures

    def attribute(self, signature: Signature) -> MatchResult:
        """Находит ближайшего известного автора для сигнатуры"""
        if not self._known_signatures:
            self.load_known_signatures()
        return self.matcher.find_closest(signature, self._known_signatures)

    def attribute_files(self, paths: Iterable[Union[str, Path]]) -> List[MatchResult]:
        """
        Определяет автора для каждого файла

        Args:
            paths: Файлы и/или папки с текстами

        Returns:
            Результаты атрибуции в порядке файлов
        """
        files = self.text_processor.collect_files(paths)
        results = []
        for path in files:
            result = self.attribute(self.analyze_file(path))
            logger.info(f"{result.document_name}: {result.author} (разница {result.difference:.4f})")
            results.append(result)
        return results

    def save_signature(self, signature: Signature, folder: Optional[Union[str, Path]] = None) -> Path:
        """
        Сохраняет сигнатуру как известного автора

        Файл того же автора перезаписывается; если имя файла уже занято
        другим автором, к нему добавляется числовой суффикс.

        Args:
            signature: Сигнатура (имя сигнатуры используется как имя автора)
            folder: Папка сигнатур (по умолчанию signatures_folder)

        Returns:
            Путь к созданному файлу
        """
        folder = Path(folder) if folder else self.signatures_folder
        path = self._signature_path(folder, signature.name)
        self.signature_store.save_signature(signature, path)
        return path

    def _signature_path(self, folder: Path, author: str) -> Path:
        stem = re.sub(r'[^\w-]+', '_', author).strip('_') or 'author'
        path = folder / f"{stem}.stats"
        suffix = 2
        while path.exists() and self._stored_author(path) != author.strip():
            path = folder / f"{stem}_{suffix}.stats"
            suffix += 1
        return path

    def _stored_author(self, path: Path) -> Optional[str]:
        """Имя автора из первой строки существующего файла сигнатуры"""
        try:
            with open(path, 'r', encoding=self.signature_store.encoding) as f:
                return f.readline().strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Не удалось прочитать {path.name}: {e}")
            return None

    def export_results(self, results: List[MatchResult], base_filename: Optional[str] = None) -> Dict[str, Path]:
        """Экспортирует результаты атрибуции во все форматы"""
        return self.exporter.export_all_formats(results, base_filename or config.get_results_filename_prefix())
