"""
Author Analyser - модуль для стилометрического определения авторства

Этот модуль предоставляет инструменты для:
- Лексического разбора текста в поток токенов
- Построения структуры документа (предложения, фразы, слова)
- Вычисления пяти лингвистических признаков (сигнатуры)
- Сравнения сигнатуры с известными авторами
- Экспорта результатов в Excel, CSV и JSON
"""

__version__ = "0.1.0"
__author__ = "Sergey"

from .components.lexer import Lexer
from .components.document import Document
from .components.feature_extractor import DocumentStatistics
from .analyzer import AuthorshipAnalyzer
from . import cli

__all__ = [
    "Lexer",
    "Document",
    "DocumentStatistics",
    "AuthorshipAnalyzer",
    "cli"
]
