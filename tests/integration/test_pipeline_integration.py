import pytest

from author_analyser.analyzer import AuthorshipAnalyzer
from author_analyser.text_processor import DocumentTextProcessor


@pytest.mark.integration
def test_full_pipeline_html_to_excel(sample_texts, signatures_folder, temp_directory):
    """Проверяет пайплайн: HTML → текст → сигнатура → атрибуция → Excel."""
    html_path = temp_directory / "mystery.html"
    html_path.write_text(sample_texts["html"], encoding="utf-8")

    # 1) Очистка HTML → текст
    processor = DocumentTextProcessor()
    with processor.open_source(html_path) as source:
        clean_text = source.read()
    assert "<" not in clean_text and ">" not in clean_text

    # 2) Сигнатура и атрибуция
    analyzer = AuthorshipAnalyzer(
        signatures_folder=str(signatures_folder),
        output_dir=str(temp_directory / "results"),
    )
    results = analyzer.attribute_files([html_path])
    assert len(results) == 1
    assert results[0].author in {s.name for s in analyzer.known_signatures}

    # 3) Экспорт
    exported = analyzer.export_results(results, base_filename="integration")

    assert exported["excel"].exists()
    assert exported["excel"].stat().st_size > 0


@pytest.mark.integration
def test_new_signature_is_used_for_attribution(sample_texts, signatures_folder, temp_directory):
    """Сохранённая сигнатура сразу участвует в сопоставлении."""
    analyzer = AuthorshipAnalyzer(
        signatures_folder=str(signatures_folder),
        output_dir=str(temp_directory / "results"),
    )
    analyzer.save_signature(analyzer.analyze_text(sample_texts["complex"], name="Committee Clerk"))
    analyzer.load_known_signatures()

    result = analyzer.attribute(analyzer.analyze_text(sample_texts["complex"], name="minutes"))

    assert result.author == "Committee Clerk"
    assert len(analyzer.known_signatures) == 4
