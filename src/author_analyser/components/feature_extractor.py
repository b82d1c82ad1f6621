"""
Компонент для вычисления лингвистических признаков документа.

Все признаки считаются только по токенам-словам, попавшим во фразы
разобранного документа. Цифры, пунктуация и неизвестные символы
в расчётах не участвуют.
"""

from collections import Counter
from typing import Dict, List

from ..interfaces.document_processor import FeatureExtractorInterface, Signature
from .document import Document


class EmptyDocumentError(ValueError):
    """Признак не определён: в документе нет слов или предложений."""

    def __init__(self, feature: str, reason: str):
        self.feature = feature
        super().__init__(f"Невозможно вычислить '{feature}': {reason}")


class DocumentStatistics(FeatureExtractorInterface):
    """Извлекатель пяти стилометрических признаков.

    Только читает дерево документа; методы можно вызывать в любом
    порядке и сколько угодно раз.
    """

    def __init__(self, document: Document):
        """
        Args:
            document: Разобранный документ
        """
        self.document = document

    def _words(self) -> List[str]:
        return [token.text for token in self.document.word_tokens()]

    def _require_words(self, feature: str) -> List[str]:
        words = self._words()
        if not words:
            raise EmptyDocumentError(feature, "в документе нет слов")
        return words

    def _require_sentences(self, feature: str) -> int:
        count = len(self.document)
        if count == 0:
            raise EmptyDocumentError(feature, "в документе нет предложений")
        return count

    def average_word_length(self) -> float:
        """Среднее число символов в слове."""
        words = self._require_words('average_word_length')
        return sum(len(word) for word in words) / len(words)

    def type_token_ratio(self) -> float:
        """Доля различных слов среди всех слов (повторяемость словаря)."""
        words = self._require_words('type_token_ratio')
        return len(set(words)) / len(words)

    def hapax_legomena_ratio(self) -> float:
        """
        |различных слов − повторяющихся различных слов| / всего слов.

        Формула отличается от классической доли слов, встречающихся
        ровно один раз; классический вариант: textbook_hapax_legomena_ratio().
        """
        words = self._require_words('hapax_legomena_ratio')
        counts = Counter(words)
        repeated = sum(1 for count in counts.values() if count > 1)
        return abs(len(counts) - repeated) / len(words)

    def textbook_hapax_legomena_ratio(self) -> float:
        """Альтернативный признак: доля слов, встречающихся ровно один раз."""
        words = self._require_words('textbook_hapax_legomena_ratio')
        counts = Counter(words)
        return sum(1 for count in counts.values() if count == 1) / len(words)

    def average_words_per_sentence(self) -> float:
        sentences = self._require_sentences('average_words_per_sentence')
        return len(self._words()) / sentences

    def sentence_complexity(self) -> float:
        """Среднее число фраз в предложении."""
        sentences = self._require_sentences('sentence_complexity')
        return self.document.phrase_count() / sentences

    def as_dict(self) -> Dict[str, float]:
        """Пять признаков в каноническом порядке."""
        return {
            'average_word_length': self.average_word_length(),
            'type_token_ratio': self.type_token_ratio(),
            'hapax_legomena_ratio': self.hapax_legomena_ratio(),
            'average_words_per_sentence': self.average_words_per_sentence(),
            'sentence_complexity': self.sentence_complexity(),
        }

    def signature(self, name: str) -> Signature:
        """
        Собирает сигнатуру документа.

        Args:
            name: Имя документа или автора

        Returns:
            Сигнатура из пяти признаков
        """
        return Signature(name=name, **self.as_dict())
