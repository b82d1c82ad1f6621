"""
Тесты для AuthorshipAnalyzer.
"""

import pytest

from author_analyser.analyzer import AuthorshipAnalyzer
from author_analyser.components.feature_extractor import EmptyDocumentError
from tests.fixtures.sample_texts import SAMPLE_COMPLEX_TEXT, SAMPLE_HTML_TEXT, SAMPLE_SIMPLE_TEXT
from tests.utils.signatures import make_signature


@pytest.fixture
def analyzer(tmp_path, unit_weights):
    signatures = tmp_path / "signatures"
    signatures.mkdir()
    return AuthorshipAnalyzer(
        signatures_folder=str(signatures),
        weights=unit_weights,
        output_dir=str(tmp_path / "results"),
        encoding="utf-8",
    )


class TestAnalyze:

    def test_analyze_text(self, analyzer):
        signature = analyzer.analyze_text("cat cat dog", name="pets")
        assert signature.name == "pets"
        assert signature.type_token_ratio == pytest.approx(2 / 3)

    def test_analyze_file_uses_stem_as_name(self, analyzer, tmp_path):
        path = tmp_path / "story.txt"
        path.write_text(SAMPLE_SIMPLE_TEXT, encoding="utf-8")

        signature = analyzer.analyze_file(path)

        assert signature.name == "story"
        assert signature == analyzer.analyze_text(SAMPLE_SIMPLE_TEXT, name="story")

    def test_analyze_html_file_ignores_markup(self, analyzer, tmp_path):
        path = tmp_path / "page.html"
        path.write_text(SAMPLE_HTML_TEXT, encoding="utf-8")

        signature = analyzer.analyze_file(path, name="page")

        expected = analyzer.analyze_text(
            "The house is big, and pretty. The dog eats in the garden.", name="page"
        )
        assert signature == expected

    def test_text_without_words(self, analyzer):
        with pytest.raises(EmptyDocumentError):
            analyzer.analyze_text("... 123 !!!")


class TestAttribution:

    def test_save_and_attribute(self, analyzer):
        for name, value in (("Low Author", 1.0), ("High Author", 3.0)):
            analyzer.save_signature(make_signature(name, value))

        result = analyzer.attribute(make_signature("doc", 2.8))

        assert result.author == "High Author"
        assert {s.name for s in analyzer.known_signatures} == {"Low Author", "High Author"}

    def test_save_signature_file_name(self, analyzer, tmp_path):
        path = analyzer.save_signature(make_signature("Mark Twain", 1.0))
        assert path == analyzer.signatures_folder / "Mark_Twain.stats"

        other = analyzer.save_signature(make_signature("???", 1.0), folder=tmp_path / "other")
        assert other.name == "author.stats"
        assert other.exists()

    def test_non_ascii_author_names_keep_separate_files(self, analyzer):
        first = analyzer.save_signature(make_signature("Лев Толстой", 1.0))
        second = analyzer.save_signature(make_signature("Фёдор Достоевский", 2.0))

        assert first.name == "Лев_Толстой.stats"
        assert second.name == "Фёдор_Достоевский.stats"
        assert len(analyzer.load_known_signatures()) == 2

    def test_colliding_file_names_do_not_overwrite(self, analyzer):
        first = analyzer.save_signature(make_signature("Mark Twain", 1.0))
        second = analyzer.save_signature(make_signature("Mark-Twain", 2.0))
        third = analyzer.save_signature(make_signature("Mark  Twain", 3.0))

        assert first.name == "Mark_Twain.stats"
        assert second.name == "Mark-Twain.stats"
        assert third.name == "Mark_Twain_2.stats"
        assert {s.name for s in analyzer.load_known_signatures()} == {"Mark Twain", "Mark-Twain", "Mark  Twain"}

    def test_same_author_is_overwritten(self, analyzer):
        first = analyzer.save_signature(make_signature("Mark Twain", 1.0))
        second = analyzer.save_signature(make_signature("Mark Twain", 2.0))

        assert first == second
        known = analyzer.load_known_signatures()
        assert len(known) == 1
        assert known[0].average_word_length == 2.0

    def test_attribute_without_known_authors(self, analyzer):
        with pytest.raises(ValueError):
            analyzer.attribute(make_signature("doc", 1.0))

    def test_attribute_files_matches_own_author(self, analyzer, tmp_path):
        texts = {"simple": SAMPLE_SIMPLE_TEXT, "complex": SAMPLE_COMPLEX_TEXT}
        for author, text in texts.items():
            analyzer.save_signature(analyzer.analyze_text(text, name=author))

        mystery = tmp_path / "mystery"
        mystery.mkdir()
        for author, text in texts.items():
            (mystery / f"{author}_unknown.txt").write_text(text, encoding="utf-8")

        results = analyzer.attribute_files([mystery])

        assert [(r.document_name, r.author) for r in results] == [
            ("complex_unknown", "complex"),
            ("simple_unknown", "simple"),
        ]
        assert all(r.difference == pytest.approx(0.0, abs=1e-9) for r in results)

    def test_load_known_signatures_from_other_folder(self, analyzer, signatures_folder):
        known = analyzer.load_known_signatures(signatures_folder)
        assert [s.name for s in known] == ["Jane Austen", "Charles Dickens", "Mark Twain"]


class TestExport:

    def test_export_results(self, analyzer):
        analyzer.save_signature(make_signature("Someone", 1.0))
        results = [analyzer.attribute(analyzer.analyze_text(SAMPLE_SIMPLE_TEXT, name="doc"))]

        exported = analyzer.export_results(results, base_filename="run")

        assert set(exported) == {"excel", "csv", "json", "report"}
        for path in exported.values():
            assert path.exists()
            assert path.name.startswith("run_")
