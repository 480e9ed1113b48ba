# catalog_pipeline/delegates/file_manager_delegate.py
import csv
import json
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import yaml

from .. import config
from ..models import ProductRecord

CSV_HEADERS = ["name", "price", "availability", "rating", "url", "description", "media_path", "category"]

PathLike = Union[str, Path]


class FileManagerDelegate:
    """Writes catalog snapshots to disk. Every save_* method is an independent export sink."""
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _prepare(file_path: Path):
        file_path.parent.mkdir(parents=True, exist_ok=True)

    def save_to_csv(self, records: Sequence[ProductRecord], path: PathLike) -> Path:
        """One row per record, fixed column order; the header is written even for an empty catalog."""
        file_path = Path(path)
        try:
            self._prepare(file_path)
            with file_path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                writer.writerow(CSV_HEADERS)
                for record in records:
                    row = record.to_dict()
                    writer.writerow(["" if row[key] is None else row[key] for key in CSV_HEADERS])
            self.logger.info("Saved %d records to CSV: %s", len(records), file_path)
            return file_path
        except Exception as e:
            self.logger.error("Failed to save CSV to %s: %s", file_path, e, exc_info=True)
            raise

    def save_to_json(self, records: Sequence[ProductRecord], path: PathLike) -> Path:
        file_path = Path(path)
        try:
            self._prepare(file_path)
            with file_path.open("w", encoding="utf-8") as f:
                json.dump([record.to_dict() for record in records], f, indent=2, ensure_ascii=False)
            self.logger.info("Saved %d records to JSON: %s", len(records), file_path)
            return file_path
        except Exception as e:
            self.logger.error("Failed to save JSON to %s: %s", file_path, e, exc_info=True)
            raise

    def save_to_products_yaml(self, records: Sequence[ProductRecord], path: PathLike) -> Path:
        """
        Writes the categories/products YAML document. Every record is listed
        under the single GROUPED_CATEGORY_LABEL category, reduced to
        name, price, description and media.
        """
        file_path = Path(path)
        yaml_data = {
            "categories": [
                {
                    "name": config.GROUPED_CATEGORY_LABEL,
                    "products": [
                        {
                            "name": record.name,
                            "price": record.price,
                            "description": record.description or "",
                            "media": record.media_path or record.url or "",
                        }
                        for record in records
                    ],
                }
            ]
        }
        try:
            self._prepare(file_path)
            with file_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(yaml_data, f, sort_keys=False, allow_unicode=True)
            self.logger.info("Saved %d records to grouped YAML: %s", len(records), file_path)
            return file_path
        except Exception as e:
            self.logger.error("Failed to save grouped YAML to %s: %s", file_path, e, exc_info=True)
            raise

    def save_to_yaml_directory(self, records: Sequence[ProductRecord], directory: PathLike) -> Path:
        """Writes item_1.yml, item_2.yml, ... (catalog position), overwriting existing files."""
        dir_path = Path(directory)
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
            for index, record in enumerate(records, start=1):
                file_path = dir_path / f"item_{index}.yml"
                with file_path.open("w", encoding="utf-8") as f:
                    yaml.safe_dump(record.to_dict(), f, sort_keys=False, allow_unicode=True)
            self.logger.info("Saved %d records to YAML directory: %s", len(records), dir_path)
            return dir_path
        except Exception as e:
            self.logger.error("Failed to save YAML directory %s: %s", dir_path, e, exc_info=True)
            raise

    def save_to_text(self, records: Sequence[ProductRecord], path: PathLike) -> Path:
        """Quick-look dump, one info line per record. Not meant to be read back."""
        file_path = Path(path)
        try:
            self._prepare(file_path)
            with file_path.open("w", encoding="utf-8") as f:
                for record in records:
                    f.write(record.info() + "\n")
            self.logger.info("Saved %d records to text file: %s", len(records), file_path)
            return file_path
        except Exception as e:
            self.logger.error("Failed to save text file to %s: %s", file_path, e, exc_info=True)
            raise
