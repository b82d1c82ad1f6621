"""
Компонент для экспорта результатов атрибуции.

Отвечает за экспорт результатов в различные форматы:
Excel, CSV, JSON и текстовый отчёт с временными метками.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import pandas as pd

from ..interfaces.document_processor import FEATURE_NAMES, MatchResult, ResultExporterInterface
import logging

logger = logging.getLogger(__name__)


class ResultExporter(ResultExporterInterface):
    """Экспортёр результатов атрибуции."""

    def __init__(self, output_dir: str = "data/results", weights: Optional[Mapping[str, float]] = None):
        """
        Инициализирует экспортёр.

        Args:
            output_dir: Папка для сохранения результатов
            weights: Веса признаков, попадающие в отчёты
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.weights = dict(weights) if weights else {}

    def _results_frame(self, results: List[MatchResult]) -> pd.DataFrame:
        return pd.DataFrame([
            {
                'Документ': result.document_name,
                'Автор': result.author,
                'Разница': result.difference,
                'Оценка документа': result.document_score,
                'Оценка автора': result.author_score,
            }
            for result in results
        ])

    def _features_frame(self, results: List[MatchResult]) -> pd.DataFrame:
        rows = []
        for result in results:
            if result.signature is None:
                continue
            row = {'Документ': result.document_name}
            row.update(result.signature.as_dict())
            rows.append(row)
        return pd.DataFrame(rows, columns=['Документ', *FEATURE_NAMES])

    def export_to_excel(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """
        Экспортирует результаты в Excel формат.

        Args:
            results: Результаты атрибуции
            filepath: Путь для сохранения файла
        """
        if not results:
            logger.info("Нет данных для экспорта в Excel")
            return

        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix('.xlsx')

        try:
            with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
                self._results_frame(results).to_excel(writer, sheet_name='Атрибуция', index=False)
                self._features_frame(results).to_excel(writer, sheet_name='Признаки', index=False)
                if self.weights:
                    weights_df = pd.DataFrame({
                        'Признак': list(self.weights.keys()),
                        'Вес': list(self.weights.values()),
                    })
                    weights_df.to_excel(writer, sheet_name='Веса', index=False)
            logger.info(f"Результат экспортирован в Excel: {filepath}")
        except Exception as e:
            logger.error(f"Ошибка экспорта в Excel: {e}")
            raise

    def export_to_csv(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """
        Экспортирует результаты в CSV (атрибуция и признаки в одной таблице).

        Args:
            results: Результаты атрибуции
            filepath: Путь для сохранения файла
        """
        if not results:
            logger.info("Нет данных для экспорта в CSV")
            return

        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix('.csv')

        try:
            # Имена документов не уникальны: склейка по позиции
            features = pd.DataFrame(
                [result.signature.as_dict() if result.signature else {} for result in results],
                columns=list(FEATURE_NAMES),
            )
            df = pd.concat([self._results_frame(results), features], axis=1)
            df.to_csv(filepath, index=False, encoding='utf-8')
            logger.info(f"Результат экспортирован в CSV: {filepath}")
        except Exception as e:
            logger.error(f"Ошибка экспорта в CSV: {e}")
            raise

    def export_to_json(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """
        Экспортирует результаты в JSON формат.

        Args:
            results: Результаты атрибуции
            filepath: Путь для сохранения файла
        """
        if not results:
            logger.info("Нет данных для экспорта в JSON")
            return

        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix('.json')

        json_data = {
            'metadata': {
                'timestamp': datetime.now().isoformat(),
                'documents': len(results),
                'weights': self.weights,
            },
            'results': [
                {
                    'document': result.document_name,
                    'author': result.author,
                    'difference': result.difference,
                    'document_score': result.document_score,
                    'author_score': result.author_score,
                    'features': result.signature.as_dict() if result.signature else {},
                }
                for result in results
            ],
        }

        try:
            with open(filepath, 'w', encoding='utf-8') as jsonfile:
                json.dump(json_data, jsonfile, ensure_ascii=False, indent=2)
            logger.info(f"Результат экспортирован в JSON: {filepath}")
        except Exception as e:
            logger.error(f"Ошибка экспорта в JSON: {e}")
            raise

    def export_summary_report(self, results: List[MatchResult], filepath: Union[str, Path]) -> None:
        """
        Экспортирует краткий текстовый отчёт.

        Args:
            results: Результаты атрибуции
            filepath: Путь для сохранения файла
        """
        if not results:
            logger.info("Нет данных для экспорта отчёта")
            return

        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix('.txt')

        try:
            with open(filepath, 'w', encoding='utf-8') as report_file:
                report_file.write("ОТЧЁТ ПО АТРИБУЦИИ АВТОРСТВА\n")
                report_file.write("=" * 50 + "\n\n")
                report_file.write(f"Документов: {len(results)}\n")
                report_file.write(f"Дата анализа: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

                for result in results:
                    report_file.write(f"{result.document_name}: {result.author}\n")
                    report_file.write(f"   Разница: {result.difference:.4f}\n")
                    if result.signature is not None:
                        for feature, value in result.signature.as_dict().items():
                            report_file.write(f"   {feature}: {value:.4f}\n")
                    report_file.write("-" * 40 + "\n")

                if self.weights:
                    report_file.write("\nВЕСА ПРИЗНАКОВ:\n")
                    for feature, weight in self.weights.items():
                        report_file.write(f"{feature}: {weight}\n")
            logger.info(f"Краткий отчёт сохранён: {filepath}")
        except Exception as e:
            logger.error(f"Ошибка экспорта отчёта: {e}")
            raise

    def export_all_formats(self, results: List[MatchResult], base_filename: str) -> Dict[str, Path]:
        """
        Экспортирует результаты во все доступные форматы.

        Args:
            results: Результаты атрибуции
            base_filename: Базовое имя файла без расширения

        Returns:
            Словарь с путями к экспортированным файлам
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        base_filename = f"{base_filename}_{timestamp}"

        exported_files = {
            'excel': self.output_dir / f"{base_filename}.xlsx",
            'csv': self.output_dir / f"{base_filename}.csv",
            'json': self.output_dir / f"{base_filename}.json",
            'report': self.output_dir / f"{base_filename}_report.txt",
        }

        self.export_to_excel(results, exported_files['excel'])
        self.export_to_csv(results, exported_files['csv'])
        self.export_to_json(results, exported_files['json'])
        self.export_summary_report(results, exported_files['report'])

        logger.info(f"Результат экспортирован во все форматы в папку: {self.output_dir}")
        return exported_files
