"""
Интерфейсы для компонентов стилометрического анализа.

Определяет абстрактные базовые классы для всех компонентов,
обеспечивая единообразный API и возможность замены реализаций.
"""

from .document_processor import (
    FEATURE_NAMES,
    Signature,
    MatchResult,
    LexerInterface,
    DocumentParserInterface,
    FeatureExtractorInterface,
    SignatureStoreInterface,
    ResultExporterInterface
)

__all__ = [
    'FEATURE_NAMES',
    'Signature',
    'MatchResult',
    'LexerInterface',
    'DocumentParserInterface',
    'FeatureExtractorInterface',
    'SignatureStoreInterface',
    'ResultExporterInterface'
]
