"""
Модуль для работы с конфигурацией проекта

Функции:
- Загрузка config.yaml (+ профили: config.prod.yaml, config.test.yaml)
- ENV-переопределения (префикс AUTHOR_ANALYSER_, вложенность через __)
- Валидация весов признаков и подготовка директорий
- Настройка логирования
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List
from dotenv import load_dotenv
import logging
from datetime import datetime

logger = logging.getLogger(__name__)


DEFAULT_FEATURE_WEIGHTS = {
    'average_word_length': 11.0,
    'type_token_ratio': 33.0,
    'hapax_legomena_ratio': 50.0,
    'average_words_per_sentence': 0.4,
    'sentence_complexity': 4.0,
}

DEFAULT_LOG_FILE = "logs/author_analyser_{timestamp}.log"


class Config:
    """Класс для работы с конфигурацией проекта"""

    def __init__(self, config_path: str = None):
        """
        Инициализация конфигурации

        Args:
            config_path: Путь к файлу конфигурации
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            # Ищем config.yaml в текущей директории и выше
            current_dir = Path.cwd()
            config_path = current_dir / "config.yaml"

            while not config_path.exists() and current_dir.parent != current_dir:
                current_dir = current_dir.parent
                config_path = current_dir / "config.yaml"

            self.config_path = config_path

        self.config_data = {}
        self.env_data = {}
        self._session_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        self._load_config()
        self._load_env()
        try:
            self._apply_env_overrides()
            self._validate_and_prepare()
        except Exception as e:
            logger.warning(f"Проблема при применении ENV/валидации: {e}")
        self._configure_logging_if_needed()

    def _resolve_config_path(self) -> Path:
        env = os.getenv('AUTHOR_ANALYSER_ENV', '').lower().strip()
        root = self.config_path.parent if self.config_path else Path.cwd()
        if env == 'production':
            candidate = root / 'config.prod.yaml'
        elif env == 'testing':
            candidate = root / 'config.test.yaml'
        else:
            return self.config_path
        if candidate.exists():
            return candidate
        # Фолбэк на исходный путь
        return self.config_path

    def _load_config(self):
        """Загружает конфигурацию из YAML файла (поверх значений по умолчанию)"""
        defaults = self._get_default_config()
        try:
            self.config_path = self._resolve_config_path()
            if self.config_path.exists():
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                self.config_data = self._merge(defaults, loaded)
                logger.info(f"Конфигурация загружена: {self.config_path}")
            else:
                logger.warning(f"Файл конфигурации {self.config_path} не найден, используются значения по умолчанию")
                self.config_data = defaults
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Ошибка загрузки конфигурации: {e}")
            self.config_data = defaults

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Рекурсивно накладывает override на base."""
        result = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def _load_env(self):
        """Загружает переменные окружения из .env файла"""
        load_dotenv()
        self.env_data = {
            'AUTHOR_ANALYSER_ENV': os.getenv('AUTHOR_ANALYSER_ENV'),
            'AUTHOR_ANALYSER_DEBUG': os.getenv('AUTHOR_ANALYSER_DEBUG'),
        }
        logger.info("Переменные окружения загружены из .env (если есть)")

    def _set_nested(self, data: Dict[str, Any], dotted: str, value: Any) -> None:
        cur = data
        keys = dotted.split('.')
        for k in keys[:-1]:
            if k not in cur or not isinstance(cur[k], dict):
                cur[k] = {}
            cur = cur[k]
        cur[keys[-1]] = value

    def _apply_env_overrides(self) -> None:
        """Переопределяет конфиг значениями из ENV (AUTHOR_ANALYSER_*)."""
        prefix = 'AUTHOR_ANALYSER_'
        for key, val in os.environ.items():
            if not key.startswith(prefix):
                continue
            # Служебные переменные не являются ключами конфига
            if key in ('AUTHOR_ANALYSER_ENV', 'AUTHOR_ANALYSER_DEBUG'):
                continue
            tail = key[len(prefix):]
            dotted = tail.replace('__', '.').lower()
            parsed: Any = val
            if val.lower() in ('true', 'false'):
                parsed = (val.lower() == 'true')
            else:
                try:
                    if '.' in val:
                        parsed = float(val)
                    else:
                        parsed = int(val)
                except ValueError:
                    parsed = val
            self._set_nested(self.config_data, dotted, parsed)
        if os.getenv('AUTHOR_ANALYSER_ENV'):
            logger.info(f"Активирован профиль: {os.getenv('AUTHOR_ANALYSER_ENV')}")

    def _validate_and_prepare(self) -> None:
        """Проверяет веса признаков и создаёт папку результатов."""
        weights = self.get('features.weights', {}) or {}
        validated = {}
        for feature, default in DEFAULT_FEATURE_WEIGHTS.items():
            raw = weights.get(feature, default)
            try:
                value = float(raw)
            except (TypeError, ValueError):
                logger.warning(f"Вес '{feature}'={raw!r} не является числом, используется {default}")
                value = default
            if value < 0:
                logger.warning(f"Вес '{feature}' < 0, используется {default}")
                value = default
            validated[feature] = value
        for extra in set(weights) - set(DEFAULT_FEATURE_WEIGHTS):
            logger.warning(f"Неизвестный признак в features.weights проигнорирован: {extra}")
        self._set_nested(self.config_data, 'features.weights', validated)

        try:
            Path(self.get_results_folder()).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug(f"Не удалось создать директорию результатов: {e}")

    def _configure_logging_if_needed(self, force: bool = False) -> None:
        """Инициализирует/переинициализирует базовое логирование по config.

        Повторная конфигурация выполняется, если:
          - ранее не конфигурировалось, или
          - изменился уровень/формат/файл логирования, или
          - явно указан force=True
        """
        root = logging.getLogger()

        console_level_name = str(self.get_console_logging_level()).upper()
        file_level_name = str(self.get_file_logging_level()).upper()
        console_level = getattr(logging, console_level_name, logging.INFO)
        file_level = getattr(logging, file_level_name, logging.DEBUG)

        desired_fmt = self.get_logging_format()
        desired_file = self.get_logging_file() if self.is_logging_to_file_enabled() else None

        if getattr(root, "_author_analyser_configured", False) and not force:
            if (
                getattr(root, "_author_analyser_console_level", None) == console_level_name and
                getattr(root, "_author_analyser_file_level", None) == file_level_name and
                getattr(root, "_author_analyser_format", None) == desired_fmt and
                getattr(root, "_author_analyser_file", None) == desired_file
            ):
                return

        handlers: List[logging.Handler] = []
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(desired_fmt))
        handlers.append(console)

        if desired_file:
            self.cleanup_old_log_files()

            log_file = Path(desired_file)
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding='utf-8')
                fh.setLevel(file_level)
                fh.setFormatter(logging.Formatter(desired_fmt))
                handlers.append(fh)
            except OSError as e:
                logger.debug(f"Не удалось открыть файл лога: {e}")

        root_level = min(console_level, file_level) if desired_file else console_level
        logging.basicConfig(level=root_level, handlers=handlers, format=desired_fmt, force=True)
        setattr(root, "_author_analyser_configured", True)
        setattr(root, "_author_analyser_console_level", console_level_name)
        setattr(root, "_author_analyser_file_level", file_level_name)
        setattr(root, "_author_analyser_format", desired_fmt)
        setattr(root, "_author_analyser_file", desired_file)

    def _get_default_config(self) -> Dict[str, Any]:
        """Возвращает конфигурацию по умолчанию"""
        return {
            'features': {
                # Веса признаков для взвешенной суммы при сравнении с авторами
                'weights': dict(DEFAULT_FEATURE_WEIGHTS),
            },
            'files': {
                'signatures_folder': "data/signatures",
                'mystery_folder': "data/mystery",
                'results_folder': "data/results",
                'results_filename_prefix': "authorship_analysis",
                'encoding': "utf-8",
                'extensions': [".txt", ".html", ".htm"],
            },
            'logging': {
                'level': "INFO",
                'format': "%(asctime)s - %(levelname)s - %(message)s",
                'log_to_file': False,
                'log_file': DEFAULT_LOG_FILE,
                'max_log_files': 10,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Получает значение конфигурации по ключу

        Args:
            key: Ключ в формате 'section.subsection.parameter'
            default: Значение по умолчанию

        Returns:
            Значение параметра или default
        """
        try:
            keys = key.split('.')
            value = self.config_data

            for k in keys:
                value = value[k]

            return value
        except (KeyError, TypeError):
            return default

    def get_env(self, key: str, default: Any = None) -> Any:
        """
        Получает значение переменной окружения

        Args:
            key: Ключ переменной окружения
            default: Значение по умолчанию

        Returns:
            Значение переменной окружения или default
        """
        value = self.env_data.get(key)
        return default if value is None else value

    def get_feature_weights(self) -> Dict[str, float]:
        """Получает веса признаков (копию)"""
        return dict(self.get('features.weights', DEFAULT_FEATURE_WEIGHTS))

    def get_signatures_folder(self) -> str:
        """Получает папку с сигнатурами известных авторов"""
        return self.get('files.signatures_folder', "data/signatures")

    def get_mystery_folder(self) -> str:
        """Получает папку с текстами неизвестного авторства"""
        return self.get('files.mystery_folder', "data/mystery")

    def get_results_folder(self) -> str:
        """Получает папку для результатов"""
        return self.get('files.results_folder', "data/results")

    def get_results_filename_prefix(self) -> str:
        """Получает префикс для файлов результатов"""
        return self.get('files.results_filename_prefix', "authorship_analysis")

    def get_encoding(self) -> str:
        """Кодировка входных текстов и файлов сигнатур"""
        return self.get('files.encoding', "utf-8")

    def get_text_extensions(self) -> List[str]:
        """Расширения файлов, которые берутся из папок с текстами"""
        return [ext.lower() for ext in self.get('files.extensions', [".txt", ".html", ".htm"])]

    def get_console_logging_level(self) -> str:
        """Получает уровень логирования для консоли"""
        return self.get('logging.console_level', self.get('logging.level', "INFO"))

    def get_file_logging_level(self) -> str:
        """Получает уровень логирования для файла"""
        return self.get('logging.file_level', "DEBUG")

    def get_logging_format(self) -> str:
        """Получает формат логов"""
        return self.get('logging.format', "%(asctime)s - %(levelname)s - %(message)s")

    def get_logging_file(self) -> str:
        """Получает путь к файлу логов ({timestamp} заменяется меткой сессии)"""
        log_file_template = self.get('logging.log_file', DEFAULT_LOG_FILE)
        return log_file_template.replace("{timestamp}", self._session_timestamp)

    def is_logging_to_file_enabled(self) -> bool:
        """Проверяет, включено ли логирование в файл"""
        return bool(self.get('logging.log_to_file', False))

    def get_max_log_files(self) -> int:
        """Получает максимальное количество файлов логов для хранения"""
        return self.get('logging.max_log_files', 10)

    def cleanup_old_log_files(self) -> None:
        """Удаляет старые файлы логов, оставляя только последние max_log_files"""
        log_file_template = Path(self.get('logging.log_file', DEFAULT_LOG_FILE))
        if "{timestamp}" not in log_file_template.name:
            return
        logs_dir = log_file_template.parent
        if not logs_dir.exists():
            return

        log_files = list(logs_dir.glob(log_file_template.name.replace("{timestamp}", "*")))
        max_files = self.get_max_log_files()
        if len(log_files) <= max_files:
            return

        log_files.sort(key=lambda f: f.stat().st_mtime)
        for old_file in log_files[:-max_files]:
            try:
                old_file.unlink()
                logger.debug(f"Удален старый лог файл: {old_file}")
            except OSError as e:
                logger.debug(f"Не удалось удалить лог файл {old_file}: {e}")


# Глобальный экземпляр конфигурации
config = Config()
