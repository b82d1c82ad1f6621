"""
Компоненты для стилометрического анализа текста.

Каждый компонент отвечает за одну конкретную задачу:
- Lexer - потоковая разбивка текста на токены
- DocumentParser - построение дерева документ/предложение/фраза
- DocumentStatistics - вычисление лингвистических признаков
- SignatureStore - чтение и запись сигнатур авторов
- AuthorMatcher - поиск ближайшего автора
- ResultExporter - экспорт результатов
"""

from .token import Token, TokenType, ProtocolViolationError
from .lexer import Lexer, SourceReadError, tokenize
from .document import Document, DocumentParser, Phrase, Sentence, TokenCursor
from .feature_extractor import DocumentStatistics, EmptyDocumentError
from .signature_store import SignatureStore, SignatureFormatError
from .author_matcher import AuthorMatcher, DEFAULT_WEIGHTS
from .exporter import ResultExporter

__all__ = [
    'Token',
    'TokenType',
    'ProtocolViolationError',
    'Lexer',
    'SourceReadError',
    'tokenize',
    'Document',
    'DocumentParser',
    'Phrase',
    'Sentence',
    'TokenCursor',
    'DocumentStatistics',
    'EmptyDocumentError',
    'SignatureStore',
    'SignatureFormatError',
    'AuthorMatcher',
    'DEFAULT_WEIGHTS',
    'ResultExporter',
]
