"""
Компонент для поиска ближайшего известного автора.

Сигнатура сворачивается во взвешенную сумму признаков; ближайшим
считается автор с минимальной разницей взвешенных сумм.
"""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..config import config, DEFAULT_FEATURE_WEIGHTS as DEFAULT_WEIGHTS
from ..interfaces.document_processor import FEATURE_NAMES, MatchResult, Signature

logger = logging.getLogger(__name__)


class AuthorMatcher:
    """Сопоставитель сигнатур по взвешенной сумме признаков."""

    def __init__(self, weights: Optional[Mapping[str, float]] = None):
        """
        Инициализирует сопоставитель.

        Args:
            weights: Веса признаков (по умолчанию из config)

        Raises:
            ValueError: если набор весов не совпадает с набором признаков
        """
        if weights is None:
            weights = config.get_feature_weights()

        unknown = set(weights) - set(FEATURE_NAMES)
        missing = set(FEATURE_NAMES) - set(weights)
        if unknown or missing:
            raise ValueError(
                f"Неверный набор весов: лишние={sorted(unknown)}, отсутствующие={sorted(missing)}"
            )

        self.weights = {feature: float(weights[feature]) for feature in FEATURE_NAMES}
        self._weight_vector = np.array([self.weights[feature] for feature in FEATURE_NAMES], dtype=float)

    def score(self, signature: Signature) -> float:
        """Взвешенная сумма признаков сигнатуры."""
        return float(np.dot(self._weight_vector, signature.as_vector()))

    def rank(self, signature: Signature, known: Sequence[Signature]) -> List[Tuple[Signature, float]]:
        """
        Ранжирует известных авторов по близости к сигнатуре.

        Args:
            signature: Сигнатура анализируемого документа
            known: Сигнатуры известных авторов

        Returns:
            Список кортежей (сигнатура автора, разница) по возрастанию разницы
        """
        target = self.score(signature)
        ranked = [(candidate, abs(target - self.score(candidate))) for candidate in known]
        ranked.sort(key=lambda item: item[1])
        return ranked

    def find_closest(self, signature: Signature, known: Sequence[Signature]) -> MatchResult:
        """
        Находит ближайшего автора.

        При равной разнице выигрывает кандидат, идущий позже в списке.

        Args:
            signature: Сигнатура анализируемого документа
            known: Сигнатуры известных авторов

        Returns:
            Результат сопоставления

        Raises:
            ValueError: если список известных авторов пуст
        """
        if not known:
            raise ValueError("Нет сигнатур известных авторов для сравнения")

        target = self.score(signature)
        best: Optional[Signature] = None
        best_score = 0.0
        best_difference = float('inf')
        for candidate in known:
            candidate_score = self.score(candidate)
            difference = abs(target - candidate_score)
            if difference <= best_difference:
                best, best_score, best_difference = candidate, candidate_score, difference

        logger.debug(f"{signature.name}: ближайший автор {best.name} (разница {best_difference:.4f})")
        return MatchResult(
            document_name=signature.name,
            author=best.name,
            difference=best_difference,
            document_score=target,
            author_score=best_score,
            signature=signature,
        )
