"""
Компонент потоковой лексической разбивки текста.

Читает источник символов по одному символу и классифицирует поток
в типизированные токены: слова, концы фраз и предложений, цифры,
неизвестные символы и конец ввода. Пробельные символы пропускаются.
"""

import io
import logging
import string
from typing import Iterator, List, Optional, TextIO, Union

from ..interfaces.document_processor import LexerInterface
from .token import ProtocolViolationError, Token, TokenType

logger = logging.getLogger(__name__)


class SourceReadError(IOError):
    """Ошибка чтения из источника символов. Фатальна, повторов нет."""
    pass


WHITESPACE = frozenset(" \t\n\r")
LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
WORD_SPECIALS = frozenset("'-")
PHRASE_TERMINATORS = frozenset(",:;")
SENTENCE_TERMINATORS = frozenset(".?!")


class Lexer(LexerInterface):
    """
    Потоковый лексер.

    Источник может быть строкой (оборачивается в StringIO) или любым
    объектом с методом read(1): открытым текстовым файлом, StringIO и т.п.
    Лексер читает источник ровно один раз и никогда его не закрывает.
    """

    def __init__(self, source: Union[str, TextIO]):
        """
        Инициализирует лексер и читает первый символ.

        Args:
            source: Строка или последовательный источник символов
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self._source = source
        self._current_char: Optional[str] = None
        self._end_of_file = False
        self._end_emitted = False
        self._get_next_char()

    def _get_next_char(self) -> None:
        """Читает следующий символ; при исчерпании выставляет флаг конца файла."""
        try:
            char = self._source.read(1)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Не удалось прочитать источник символов: {e}") from e
        if not char:
            self._end_of_file = True
            self._current_char = None
        else:
            self._current_char = char

    def _eat(self, expected: str) -> None:
        """
        Сверяет ожидаемый символ с текущим и продвигается на один символ.

        Raises:
            ProtocolViolationError: если символы не совпали
        """
        if expected != self._current_char:
            raise ProtocolViolationError(
                f"Символы не совпали: ожидался {expected!r}, текущий {self._current_char!r}"
            )
        self._get_next_char()

    @staticmethod
    def _is_letter(char: Optional[str]) -> bool:
        return char is not None and char in LETTERS

    @staticmethod
    def _is_digit(char: Optional[str]) -> bool:
        return char is not None and char in DIGITS

    @classmethod
    def _is_word_char(cls, char: Optional[str]) -> bool:
        return cls._is_letter(char) or cls._is_digit(char) or (char is not None and char in WORD_SPECIALS)

    def has_next(self) -> bool:
        """
        Можно ли получить ещё токены.

        Становится False только после того, как END_OF_INPUT был выдан
        хотя бы один раз, и больше не меняется.
        """
        return not self._end_emitted

    def next_token(self) -> Token:
        """
        Возвращает следующий токен.

        Returns:
            Токен; по исчерпании источника каждый вызов возвращает END_OF_INPUT
        """
        while not self._end_of_file and self._current_char in WHITESPACE:
            self._eat(self._current_char)

        if self._end_of_file:
            self._end_emitted = True
            return self._emit(Token(TokenType.END_OF_INPUT, ""))

        char = self._current_char
        if self._is_letter(char):
            return self._emit(Token(TokenType.WORD, self._scan_word()))
        if self._is_digit(char):
            kind = TokenType.DIGIT
        elif char in PHRASE_TERMINATORS:
            kind = TokenType.PHRASE_END
        elif char in SENTENCE_TERMINATORS:
            kind = TokenType.SENTENCE_END
        else:
            kind = TokenType.UNKNOWN
        self._eat(char)
        return self._emit(Token(kind, char))

    @staticmethod
    def _emit(token: Token) -> Token:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Токен {token}")
        return token

    def _scan_word(self) -> str:
        """Собирает максимальную серию букв, цифр, апострофов и дефисов."""
        chars: List[str] = []
        while self._is_word_char(self._current_char):
            chars.append(self._current_char)
            self._eat(self._current_char)
        return "".join(chars).lower()

    def __iter__(self) -> Iterator[Token]:
        """Лениво выдаёт токены до первого END_OF_INPUT включительно."""
        while self.has_next():
            yield self.next_token()


def tokenize(text: Union[str, TextIO]) -> List[Token]:
    """Возвращает все токены источника, включая завершающий END_OF_INPUT."""
    return list(Lexer(text))
