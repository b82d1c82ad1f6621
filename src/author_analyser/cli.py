#!/usr/bin/env python3
"""
Интерфейс командной строки для Author Analyser

Этот модуль предоставляет единый CLI для инструментов проекта:
1. Analyze - вывод стилометрических признаков текстов
2. Attribute - определение ближайшего известного автора
3. Make signature - создание файла сигнатуры известного автора
"""

import os
import argparse
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def _print_signature(signature) -> None:
    print(f"\n📄 {signature.name}")
    print(f"   Средняя длина слова: {signature.average_word_length:.4f}")
    print(f"   Type-token ratio: {signature.type_token_ratio:.4f}")
    print(f"   Hapax legomena ratio: {signature.hapax_legomena_ratio:.4f}")
    print(f"   Слов в предложении: {signature.average_words_per_sentence:.4f}")
    print(f"   Сложность предложений: {signature.sentence_complexity:.4f}")


def run_analyze(analyzer, paths: List[str]) -> bool:
    """Выводит признаки для каждого файла"""
    print("📊 Вычисление признаков...")
    for path in analyzer.text_processor.collect_files(paths):
        _print_signature(analyzer.analyze_file(path))
    return True


def run_attribute(analyzer, paths: List[str], export: bool) -> bool:
    """Определяет авторов файлов и при необходимости экспортирует результаты"""
    print("🔎 Определение авторства...")
    known = analyzer.load_known_signatures()
    if not known:
        print(f"❌ В папке {analyzer.signatures_folder} нет сигнатур авторов")
        return False
    print(f"📚 Загружено авторов: {len(known)}")

    results = analyzer.attribute_files(paths)
    if not results:
        print("⚠️ Нет файлов для анализа")
        return False

    print("\n📊 Результаты:")
    for result in results:
        print(f"   {result.document_name}: {result.author} (разница {result.difference:.4f})")

    if export:
        exported = analyzer.export_results(results)
        print("\n📁 Результаты экспортированы:")
        for kind, path in exported.items():
            print(f"   {kind}: {path}")
    return True


def run_make_signature(analyzer, path: str, author: str) -> bool:
    """Создаёт файл сигнатуры известного автора по тексту"""
    print(f"🧩 Создание сигнатуры автора {author}...")
    signature = analyzer.analyze_file(path, name=author)
    _print_signature(signature)
    saved = analyzer.save_signature(signature)
    print(f"✅ Сигнатура сохранена: {saved}")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Author Analyser - стилометрическое определение авторства",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  python -m author_analyser.cli --analyze text.txt                  # Признаки текста
  python -m author_analyser.cli --attribute                         # Тексты из папки mystery
  python -m author_analyser.cli --attribute a.txt b.txt --export    # С экспортом результатов
  python -m author_analyser.cli --make-signature book.txt --author "Mark Twain"
        """
    )
    parser.add_argument('--analyze', nargs='+', metavar='PATH',
                        help='Вывести признаки для файлов или папок')
    parser.add_argument('--attribute', nargs='*', metavar='PATH',
                        help='Определить авторов (по умолчанию папка mystery из config)')
    parser.add_argument('--make-signature', metavar='FILE',
                        help='Создать сигнатуру известного автора по тексту')
    parser.add_argument('--author', help='Имя автора для --make-signature')
    parser.add_argument('--signatures', metavar='DIR',
                        help='Папка с сигнатурами (по умолчанию из config)')
    parser.add_argument('--export', action='store_true',
                        help='Экспортировать результаты атрибуции (Excel, CSV, JSON, отчёт)')
    parser.add_argument('--debug', action='store_true',
                        help='Подробное логирование (DEBUG)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Основная функция CLI"""
    from .config import config

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug or os.environ.get('AUTHOR_ANALYSER_DEBUG') == '1':
        os.environ['AUTHOR_ANALYSER_LOGGING__LEVEL'] = 'DEBUG'
        config._apply_env_overrides()
    config._configure_logging_if_needed(force=True)

    if args.make_signature and not args.author:
        parser.error("--make-signature требует --author")

    from .analyzer import AuthorshipAnalyzer
    analyzer = AuthorshipAnalyzer(signatures_folder=args.signatures)

    print("🔍 Author Analyser - определение авторства")
    print("=" * 50)

    try:
        if args.analyze:
            success = run_analyze(analyzer, args.analyze)
        elif args.make_signature:
            success = run_make_signature(analyzer, args.make_signature, args.author)
        elif args.attribute is not None:
            paths = args.attribute or [config.get_mystery_folder()]
            success = run_attribute(analyzer, paths, args.export)
        else:
            parser.print_help()
            return 0
    except Exception as e:
        logger.error(f"Ошибка выполнения: {e}", exc_info=logger.isEnabledFor(logging.DEBUG))
        print(f"❌ Ошибка: {e}")
        return 1

    return 0 if success else 1


if __name__ == "__main__":
    raise SystemExit(main())
