"""
Структура документа и рекурсивный парсер.

Документ ⊃ предложения ⊃ фразы ⊃ токены-слова. Парсер тянет токены
из лексера по одному и строит дерево за один проход по принципу
«посмотреть текущий токен, сверить и продвинуться».
"""

import logging
from typing import Iterator, List, Optional, Tuple

from ..interfaces.document_processor import DocumentParserInterface, LexerInterface
from .token import ProtocolViolationError, Token, TokenType

logger = logging.getLogger(__name__)


class Phrase:
    """Упорядоченная последовательность токенов-слов. Может быть пустой."""

    def __init__(self):
        self._tokens: List[Token] = []
        self._frozen = False

    def add_token(self, token: Token) -> None:
        """
        Добавляет слово в фразу.

        Args:
            token: Токен типа WORD

        Raises:
            ValueError: если токен не является словом
            RuntimeError: если фраза уже достроена
        """
        if self._frozen:
            raise RuntimeError("Фраза уже достроена и не может изменяться")
        if token.kind is not TokenType.WORD:
            raise ValueError(f"Фраза хранит только слова, получен {token.kind.name}")
        self._tokens.append(token)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return tuple(self._tokens)

    @property
    def words(self) -> List[str]:
        """Тексты слов фразы."""
        return [token.text for token in self._tokens]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __str__(self) -> str:
        return "".join(f"{{{token}}}" for token in self._tokens)


class Sentence:
    """Упорядоченная последовательность фраз (после разбора хотя бы одна)."""

    def __init__(self):
        self._phrases: List[Phrase] = []
        self._frozen = False

    def add_phrase(self, phrase: Phrase) -> None:
        if self._frozen:
            raise RuntimeError("Предложение уже достроено и не может изменяться")
        self._phrases.append(phrase)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def phrases(self) -> Tuple[Phrase, ...]:
        return tuple(self._phrases)

    def word_tokens(self) -> Iterator[Token]:
        """Все слова предложения по порядку."""
        for phrase in self._phrases:
            yield from phrase

    def __iter__(self) -> Iterator[Phrase]:
        return iter(self._phrases)

    def __len__(self) -> int:
        return len(self._phrases)

    def __str__(self) -> str:
        return "".join(f"[{phrase}]" for phrase in self._phrases)


class TokenCursor:
    """
    Курсор «текущего токена» для одного разбора.

    Каждый парсер владеет собственным курсором, поэтому параллельные
    разборы разных документов друг другу не мешают.
    """

    def __init__(self, lexer: LexerInterface):
        self._lexer = lexer
        self.current: Optional[Token] = None
        self.advance()

    def advance(self) -> None:
        """Забирает следующий токен из лексера."""
        self.current = self._lexer.next_token()

    def at(self, *kinds: TokenType) -> bool:
        """Является ли текущий токен одним из указанных типов."""
        return self.current.is_a(*kinds)

    def eat(self, expected: Token) -> None:
        """
        Сверяет ожидаемый токен с текущим (по тексту) и продвигается.

        Raises:
            ProtocolViolationError: если токены не совпали
        """
        if not self.current.matches(expected):
            raise ProtocolViolationError(
                f"Токены не совпали: ожидался {expected}, текущий {self.current}"
            )
        self.advance()


class DocumentParser(DocumentParserInterface):
    """Рекурсивный парсер: фраза внутри предложения внутри документа."""

    def __init__(self, lexer: LexerInterface):
        """
        Инициализирует парсер и сразу читает первый токен.

        Args:
            lexer: Источник токенов
        """
        self._cursor = TokenCursor(lexer)

    @property
    def current(self) -> Token:
        return self._cursor.current

    def parse_phrase(self) -> Phrase:
        """
        Разбирает фразу до конца фразы, предложения или ввода.

        В фразу попадают только слова; цифры и неизвестные символы
        потребляются и отбрасываются. Завершающий PHRASE_END потребляется,
        SENTENCE_END и END_OF_INPUT остаются вызывающему.

        Returns:
            Фраза (возможно пустая)
        """
        cursor = self._cursor
        phrase = Phrase()
        while not cursor.at(TokenType.END_OF_INPUT, TokenType.PHRASE_END, TokenType.SENTENCE_END):
            if cursor.at(TokenType.WORD):
                phrase.add_token(cursor.current)
            cursor.eat(cursor.current)
        if cursor.at(TokenType.PHRASE_END):
            cursor.eat(cursor.current)
        phrase.freeze()
        return phrase

    def parse_sentence(self) -> Sentence:
        """
        Разбирает предложение до конца предложения или ввода.

        Первая фраза разбирается всегда, даже если текущий токен уже
        граница, поэтому предложение содержит хотя бы одну фразу.
        Завершающий SENTENCE_END потребляется.

        Returns:
            Предложение
        """
        cursor = self._cursor
        sentence = Sentence()
        sentence.add_phrase(self.parse_phrase())
        while not cursor.at(TokenType.END_OF_INPUT, TokenType.SENTENCE_END):
            sentence.add_phrase(self.parse_phrase())
        if cursor.at(TokenType.SENTENCE_END):
            cursor.eat(cursor.current)
        sentence.freeze()
        return sentence

    def parse_document(self, document: 'Document') -> None:
        """
        Разбирает предложения до конца ввода и добавляет их в документ.

        Args:
            document: Документ, заполняемый на месте
        """
        while not self._cursor.at(TokenType.END_OF_INPUT):
            document._add_sentence(self.parse_sentence())


class Document:
    """
    Документ: упорядоченная последовательность предложений.

    Создаётся пустым поверх лексера и заполняется одним вызовом
    parse_document(); после разбора только для чтения.
    """

    def __init__(self, lexer: LexerInterface):
        """
        Args:
            lexer: Лексер, из которого будут браться токены
        """
        self._sentences: List[Sentence] = []
        self._parser = DocumentParser(lexer)
        self._parsed = False
        self._failed = False

    def _add_sentence(self, sentence: Sentence) -> None:
        if self._parsed:
            raise RuntimeError("Документ уже разобран и не может изменяться")
        self._sentences.append(sentence)

    def parse_document(self) -> None:
        """
        Заполняет документ предложениями. Повторный вызов ничего не делает.

        Если разбор прерван ошибкой, документ остаётся пустым и
        помечается как неудачный; повторный вызов бросает RuntimeError.
        """
        if self._parsed:
            return
        if self._failed:
            raise RuntimeError("Разбор документа уже завершился ошибкой")
        try:
            self._parser.parse_document(self)
        except Exception:
            self._sentences.clear()
            self._failed = True
            raise
        self._parsed = True
        logger.debug(
            f"Документ разобран: предложений={len(self._sentences)}, "
            f"фраз={self.phrase_count()}, слов={sum(1 for _ in self.word_tokens())}"
        )

    @property
    def is_parsed(self) -> bool:
        return self._parsed

    @property
    def sentences(self) -> Tuple[Sentence, ...]:
        return tuple(self._sentences)

    def word_tokens(self) -> Iterator[Token]:
        """Все слова документа по порядку."""
        for sentence in self._sentences:
            yield from sentence.word_tokens()

    def phrase_count(self) -> int:
        return sum(len(sentence) for sentence in self._sentences)

    def __iter__(self) -> Iterator[Sentence]:
        return iter(self._sentences)

    def __len__(self) -> int:
        return len(self._sentences)

    def __str__(self) -> str:
        return "".join(f" {sentence} " for sentence in self._sentences)
