import sys
from pathlib import Path
from typing import Dict

import pytest

# Пакет лежит в src/, добавляем путь, чтобы тесты работали без установки
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from author_analyser.interfaces.document_processor import FEATURE_NAMES  # noqa: E402


@pytest.fixture
def temp_directory(tmp_path: Path) -> Path:
    """Временная директория для тестов.

    Возвращает уникальную директорию для каждого теста.
    """
    return tmp_path


@pytest.fixture(scope="session")
def sample_texts():
    """Простые наборы английских текстов для тестирования."""
    from .fixtures.sample_texts import SAMPLE_SIMPLE_TEXT, SAMPLE_COMPLEX_TEXT, SAMPLE_HTML_TEXT

    return {
        "simple": SAMPLE_SIMPLE_TEXT,
        "complex": SAMPLE_COMPLEX_TEXT,
        "html": SAMPLE_HTML_TEXT,
    }


@pytest.fixture
def unit_weights() -> Dict[str, float]:
    """Единичные веса: оценка сигнатуры равна сумме признаков."""
    return {feature: 1.0 for feature in FEATURE_NAMES}


@pytest.fixture
def signatures_folder(tmp_path: Path) -> Path:
    """Папка с тремя корректными файлами сигнатур."""
    folder = tmp_path / "known_signatures"
    folder.mkdir()
    (folder / "austen.stats").write_text(
        "Jane Austen\n4.41\n0.052\n0.026\n24.5\n2.13\n", encoding="utf-8"
    )
    (folder / "dickens.stats").write_text(
        "Charles Dickens\n4.34\n0.067\n0.031\n18.9\n2.01\n", encoding="utf-8"
    )
    (folder / "twain.stats").write_text(
        "Mark Twain\n4.18\n0.087\n0.051\n15.1\n1.81\n", encoding="utf-8"
    )
    return folder


def pytest_configure(config):
    """Регистрируем маркеры для проекта."""
    config.addinivalue_line("markers", "integration: интеграционные тесты")
    config.addinivalue_line("markers", "performance: тесты производительности")
