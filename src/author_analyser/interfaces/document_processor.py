"""
Абстрактные интерфейсы для компонентов стилометрического анализа.

Определяет контракты лексера, парсера, извлекателя признаков,
хранилища сигнатур и экспортёра, а также общие типы данных
(сигнатура автора и результат сопоставления).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..components.token import Token
    from ..components.document import Document, Phrase, Sentence


# Канонический порядок признаков: в нём же они записываются в файлы сигнатур
FEATURE_NAMES = (
    'average_word_length',
    'type_token_ratio',
    'hapax_legomena_ratio',
    'average_words_per_sentence',
    'sentence_complexity',
)


@dataclass(frozen=True)
class Signature:
    """Стилометрическая сигнатура текста: пять числовых признаков."""
    name: str
    average_word_length: float
    type_token_ratio: float
    hapax_legomena_ratio: float
    average_words_per_sentence: float
    sentence_complexity: float

    def as_vector(self) -> np.ndarray:
        """Возвращает признаки в порядке FEATURE_NAMES."""
        return np.array([getattr(self, feature) for feature in FEATURE_NAMES], dtype=float)

    def as_dict(self) -> Dict[str, float]:
        """Признаки без имени (для отчётов)."""
        data = asdict(self)
        data.pop('name')
        return data


@dataclass
class MatchResult:
    """Результат сопоставления документа с известными авторами."""
    document_name: str
    author: str
    difference: float
    document_score: float
    author_score: float
    signature: Optional[Signature] = None


class LexerInterface(ABC):
    """Интерфейс потокового лексера."""

    @abstractmethod
    def has_next(self) -> bool:
        """Можно ли получить ещё токены."""
        pass

    @abstractmethod
    def next_token(self) -> 'Token':
        """Возвращает следующий токен."""
        pass


class DocumentParserInterface(ABC):
    """Интерфейс рекурсивного парсера документа."""

    @abstractmethod
    def parse_phrase(self) -> 'Phrase':
        """Разбирает одну фразу."""
        pass

    @abstractmethod
    def parse_sentence(self) -> 'Sentence':
        """Разбирает одно предложение."""
        pass

    @abstractmethod
    def parse_document(self, document: 'Document') -> None:
        """Заполняет документ предложениями до конца ввода."""
        pass


class FeatureExtractorInterface(ABC):
    """Интерфейс вычисления пяти лингвистических признаков."""

    @abstractmethod
    def average_word_length(self) -> float:
        pass

    @abstractmethod
    def type_token_ratio(self) -> float:
        pass

    @abstractmethod
    def hapax_legomena_ratio(self) -> float:
        pass

    @abstractmethod
    def average_words_per_sentence(self) -> float:
        pass

    @abstractmethod
    def sentence_complexity(self) -> float:
        pass


class SignatureStoreInterface(ABC):
    """Интерфейс хранилища сигнатур известных авторов."""

    @abstractmethod
    def load_signature(self, path: Union[str, Path]) -> Signature:
        """Загружает одну сигнатуру из файла."""
        pass

    @abstractmethod
    def load_signatures(self, folder: Union[str, Path]) -> List[Signature]:
        """Загружает все сигнатуры из папки."""
        pass

    @abstractmethod
    def save_signature(self, signature: Signature, path: Union[str, Path]) -> None:
        """Сохраняет сигнатуру в файл."""
        pass


class ResultExporterInterface(ABC):
    """Интерфейс для экспорта результатов."""

    @abstractmethod
    def export_to_excel(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """Экспортирует результаты в Excel формат."""
        pass

    @abstractmethod
    def export_to_csv(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """Экспортирует результаты в CSV формат."""
        pass

    @abstractmethod
    def export_to_json(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """Экспортирует результаты в JSON формат."""
        pass
