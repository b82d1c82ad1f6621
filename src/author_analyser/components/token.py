"""
Токен: типизированное значение, которое лексер отдаёт парсеру.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ProtocolViolationError(RuntimeError):
    """Попытка «съесть» не то, что является текущим (символ или токен).

    Это ошибка логики связки лексер/парсер, а не некорректный ввод,
    поэтому она никогда не перехватывается внутри ядра.
    """
    pass


class TokenType(Enum):
    """Типы токенов, которые выдаёт лексер."""
    WORD = "word"
    SENTENCE_END = "sentence_end"
    PHRASE_END = "phrase_end"
    DIGIT = "digit"
    END_OF_INPUT = "end_of_input"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Token:
    """Неизменяемый токен: тип и нормализованный текст."""
    kind: TokenType
    text: str

    def __post_init__(self):
        if not self.text and self.kind is not TokenType.END_OF_INPUT:
            raise ValueError(f"Пустой текст допустим только для END_OF_INPUT, получен {self.kind.name}")

    def matches(self, expected: Union['Token', str]) -> bool:
        """
        Проверка для протокола «сверить и продвинуться».

        Сравнивается только текст токена, тип не учитывается.
        Обычное равенство (==) при этом сравнивает и тип, и текст.

        Args:
            expected: Ожидаемый токен или его текст

        Returns:
            True если тексты совпадают
        """
        expected_text = expected.text if isinstance(expected, Token) else expected
        return self.text == expected_text

    def is_a(self, *kinds: TokenType) -> bool:
        """Проверяет, относится ли токен к одному из указанных типов."""
        return self.kind in kinds

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.text}"
