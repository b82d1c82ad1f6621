import textwrap
import sys
from pathlib import Path

# В тестах явно добавляем путь к src, чтобы импортировать пакет
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from author_analyser.config import Config, DEFAULT_FEATURE_WEIGHTS


def test_config_defaults_when_missing_file(tmp_path, monkeypatch):
    """
    Проверяет, что при отсутствии файла конфигурации подставляются дефолтные значения.
    Этот тест важен, чтобы CLI работал и без config.yaml рядом.
    """
    monkeypatch.chdir(tmp_path)
    cfg = Config(config_path=str(tmp_path / "config.yaml"))

    assert cfg.get_feature_weights() == DEFAULT_FEATURE_WEIGHTS
    assert cfg.get_signatures_folder() == "data/signatures"
    assert cfg.get_mystery_folder() == "data/mystery"
    assert cfg.get_results_folder() == "data/results"
    assert cfg.get_encoding() == "utf-8"
    assert cfg.get_text_extensions() == [".txt", ".html", ".htm"]
    # Папка результатов создаётся при загрузке
    assert (tmp_path / "data" / "results").is_dir()


def test_config_overrides_from_yaml(tmp_path, monkeypatch):
    """
    Проверяет, что значения из YAML перекрывают дефолты, а незаданные ключи остаются.
    """
    monkeypatch.chdir(tmp_path)
    yaml_text = textwrap.dedent(
        """
        features:
          weights:
            type_token_ratio: 10
        files:
          signatures_folder: "authors"
          extensions: [".TXT"]
        """
    ).strip()

    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(yaml_text, encoding="utf-8")

    cfg = Config(config_path=str(cfg_path))

    weights = cfg.get_feature_weights()
    assert weights['type_token_ratio'] == 10.0
    assert weights['hapax_legomena_ratio'] == 50.0
    assert cfg.get_signatures_folder() == "authors"
    assert cfg.get_text_extensions() == [".txt"]
    # Неизменённые значения остаются дефолтными
    assert cfg.get_results_filename_prefix() == "authorship_analysis"


def test_invalid_weights_fall_back_to_defaults(tmp_path, monkeypatch):
    """
    Нечисловые и отрицательные веса заменяются значениями по умолчанию,
    неизвестные признаки отбрасываются.
    """
    monkeypatch.chdir(tmp_path)
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        textwrap.dedent(
            """
            features:
              weights:
                average_word_length: "много"
                sentence_complexity: -1
                exclamation_rate: 3
            """
        ).strip(),
        encoding="utf-8",
    )

    weights = Config(config_path=str(cfg_path)).get_feature_weights()

    assert weights == DEFAULT_FEATURE_WEIGHTS
    assert 'exclamation_rate' not in weights


def test_env_overrides(tmp_path, monkeypatch):
    """
    Переменные AUTHOR_ANALYSER_* перекрывают YAML, вложенность задаётся через __.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AUTHOR_ANALYSER_FEATURES__WEIGHTS__SENTENCE_COMPLEXITY", "7.5")
    monkeypatch.setenv("AUTHOR_ANALYSER_FILES__SIGNATURES_FOLDER", "custom/signatures")
    monkeypatch.setenv("AUTHOR_ANALYSER_LOGGING__LOG_TO_FILE", "false")

    cfg = Config(config_path=str(tmp_path / "missing.yaml"))

    assert cfg.get_feature_weights()['sentence_complexity'] == 7.5
    assert cfg.get_signatures_folder() == "custom/signatures"
    assert cfg.is_logging_to_file_enabled() is False


def test_profile_selection(tmp_path, monkeypatch):
    """
    AUTHOR_ANALYSER_ENV=testing выбирает config.test.yaml рядом с основным файлом.
    """
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("files:\n  mystery_folder: main\n", encoding="utf-8")
    (tmp_path / "config.test.yaml").write_text("files:\n  mystery_folder: testing\n", encoding="utf-8")
    monkeypatch.setenv("AUTHOR_ANALYSER_ENV", "testing")

    cfg = Config(config_path=str(tmp_path / "config.yaml"))

    assert cfg.get_mystery_folder() == "testing"
    assert cfg.get_env("AUTHOR_ANALYSER_ENV") == "testing"


def test_get_with_dotted_keys(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = Config(config_path=str(tmp_path / "none.yaml"))

    assert cfg.get("logging.level") == "INFO"
    assert cfg.get("logging.nope", "x") == "x"
    assert cfg.get("files.encoding.deeper", 1) == 1
    assert cfg.get_env("AUTHOR_ANALYSER_UNSET", "default") == "default"


def test_config_found_in_parent_directory(tmp_path, monkeypatch):
    """
    Без явного пути config.yaml ищется в текущей директории и выше.
    """
    (tmp_path / "config.yaml").write_text("files:\n  encoding: latin-1\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    cfg = Config()

    assert cfg.config_path.resolve() == (tmp_path / "config.yaml").resolve()
    assert cfg.get_encoding() == "latin-1"


def test_log_file_path_comes_from_config(tmp_path, monkeypatch):
    """
    Путь к файлу лога берётся из logging.log_file; {timestamp} заменяется
    одной и той же меткой на всё время жизни Config.
    """
    monkeypatch.chdir(tmp_path)
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text('logging:\n  log_file: "custom/run_{timestamp}.log"\n', encoding="utf-8")

    cfg = Config(config_path=str(cfg_path))

    log_file = cfg.get_logging_file()
    assert log_file.startswith("custom/run_")
    assert log_file.endswith(".log")
    assert "{timestamp}" not in log_file
    assert cfg.get_logging_file() == log_file

    cfg_path.write_text('logging:\n  log_file: "custom/app.log"\n', encoding="utf-8")
    assert Config(config_path=str(cfg_path)).get_logging_file() == "custom/app.log"


def test_cleanup_old_log_files_uses_log_file_template(tmp_path, monkeypatch):
    """
    Старые логи ищутся по шаблону logging.log_file; чужие файлы не трогаются.
    """
    monkeypatch.chdir(tmp_path)
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        'logging:\n  log_file: "custom/run_{timestamp}.log"\n  max_log_files: 1\n', encoding="utf-8"
    )
    logs = tmp_path / "custom"
    logs.mkdir()
    for name in ("run_1.log", "run_2.log", "run_3.log", "other.log"):
        (logs / name).write_text("x", encoding="utf-8")

    Config(config_path=str(cfg_path)).cleanup_old_log_files()

    remaining = sorted(p.name for p in logs.iterdir())
    assert "other.log" in remaining
    assert len([name for name in remaining if name.startswith("run_")]) == 1
