# catalog_pipeline/config.py

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

# --- Core Settings ---
# The catalog page to scrape when the configuration does not name one.
START_PAGE = "https://books.toscrape.com/"
# Every product on the catalog page lives inside one of these nodes.
PRODUCT_CONTAINER_SELECTOR = "article.product_pod"
# Category assigned to every extracted record (the demo site only lists books).
DEFAULT_CATEGORY = "Books"
# Label used by the grouped YAML export. All products go under this single category.
GROUPED_CATEGORY_LABEL = "Books"

# --- Selector Settings ---
# Primary selectors can be overridden from the `web_scraping` config section.
NAME_SELECTOR = "article.product_pod h3 a"
PRICE_SELECTOR = "article.product_pod p.price_color"
IMAGE_SELECTOR = "article.product_pod div.image_container img"
AVAILABILITY_SELECTOR = "p.instock.availability"
RATING_SELECTOR = "p.star-rating"
# Fallbacks are tried when the primary selector matches nothing.
NAME_FALLBACK_SELECTOR = "h3 a"
PRICE_FALLBACK_SELECTOR = "p.price_color"
IMAGE_FALLBACK_SELECTOR = "div.image_container img"

# --- File Path Settings ---
SRC_PATH = Path(__file__).parent
PROJECT_PATH = SRC_PATH.parent
DEFAULT_CONFIG_PATH = PROJECT_PATH / "config" / "default_config.yaml"
DEFAULT_CONFIG_DIR = PROJECT_PATH / "config" / "yaml_config"

CSV_PATH = "output/data.csv"
JSON_PATH = "output/data.json"
TEXT_PATH = "output/items.txt"
YAML_PRODUCTS_PATH = "output/books_from_site.yaml"
YAML_DIR = "output/products"

# Persistence stubs only record these targets, nothing is written to them.
SQLITE_PATH = "output/catalog.sqlite3"
MONGODB_URI = "mongodb://localhost:27017/catalog"

# --- Logging Settings ---
LOG_DIRECTORY = "logs"
APPLICATION_LOG = "app.log"
ERROR_LOG = "error.log"
LOG_LEVEL = "INFO"

# --- Network Settings ---
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
# None disables the timeout: a hung fetch hangs the run.
REQUEST_TIMEOUT: Optional[float] = None


def _deep_merge(base: Any, override: Any) -> Any:
    if not isinstance(base, dict) or not isinstance(override, dict):
        return override
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Reads one YAML file, expanding $VAR / ${VAR} references before parsing."""
    raw = os.path.expandvars(path.read_text(encoding="utf-8"))
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def load_config(main_config_path: Path = DEFAULT_CONFIG_PATH, yaml_dir: Path = DEFAULT_CONFIG_DIR) -> Dict[str, Any]:
    """
    Loads the main config file, then deep-merges every YAML file found under
    `yaml_dir` on top of it. Missing files or directories contribute nothing.
    """
    main_config_path = Path(main_config_path)
    yaml_dir = Path(yaml_dir)

    config_data: Dict[str, Any] = {}
    if main_config_path.exists():
        config_data = _load_yaml_file(main_config_path)
        logger.debug("Loaded main config from: %s", main_config_path)
    else:
        logger.warning("Main config file not found at %s, using built-in defaults.", main_config_path)

    if yaml_dir.is_dir():
        extra_files = sorted(p for p in yaml_dir.rglob("*") if p.suffix in (".yml", ".yaml") and p.is_file())
        for file_path in extra_files:
            config_data = _deep_merge(config_data, _load_yaml_file(file_path))
            logger.debug("Merged config overrides from: %s", file_path)

    return config_data


def web_settings(config_data: Mapping[str, Any]) -> Dict[str, Any]:
    return dict(config_data.get("web_scraping") or {})


def output_settings(config_data: Mapping[str, Any]) -> Dict[str, Any]:
    output = dict(config_data.get("output") or {})
    output.setdefault("csv_path", CSV_PATH)
    output.setdefault("json_path", JSON_PATH)
    output.setdefault("yaml_products_path", YAML_PRODUCTS_PATH)
    output.setdefault("yaml_dir", YAML_DIR)
    output.setdefault("text_path", TEXT_PATH)
    return output


def database_settings(config_data: Mapping[str, Any]) -> Dict[str, Any]:
    database = dict(config_data.get("database") or {})
    database.setdefault("sqlite_path", SQLITE_PATH)
    database.setdefault("mongodb_uri", MONGODB_URI)
    return database


def logging_settings(config_data: Mapping[str, Any]) -> Dict[str, Any]:
    logging_config = dict(config_data.get("logging") or {})
    files = dict(logging_config.get("files") or {})
    return {
        "directory": logging_config.get("directory") or LOG_DIRECTORY,
        "level": str(logging_config.get("level") or LOG_LEVEL).upper(),
        "application_log": files.get("application_log") or APPLICATION_LOG,
        "error_log": files.get("error_log") or ERROR_LOG,
    }


class FeatureToggles:
    """On/off switches consulted before each gated pipeline stage."""

    VALID_KEYS = (
        "run_website_parser",
        "run_save_to_csv",
        "run_save_to_json",
        "run_save_to_yaml",
        "run_save_to_yaml_dir",
        "run_save_to_text",
        "run_save_to_sqlite",
        "run_save_to_mongodb",
    )
    DEFAULTS = {
        "run_website_parser": 1,
        "run_save_to_csv": 1,
        "run_save_to_json": 1,
        "run_save_to_yaml": 1,
        "run_save_to_yaml_dir": 1,
        "run_save_to_text": 1,
        "run_save_to_sqlite": 0,
        "run_save_to_mongodb": 0,
    }

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._values: Dict[str, Any] = dict(self.DEFAULTS)
        if overrides:
            self.configure(overrides)
        self.logger.debug("Feature toggles initialized with: %s", self._values)

    def configure(self, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(overrides, Mapping):
            raise ValueError(f"Feature toggles must be a mapping, got {type(overrides).__name__}")
        for key, value in overrides.items():
            if key in self._values:
                self._values[key] = value
            else:
                self.logger.warning("Ignoring unknown feature toggle: %s", key)
        return dict(self._values)

    def enabled(self, name: str) -> bool:
        if name not in self._values:
            self.logger.warning("Unknown feature toggle '%s' requested, treating it as disabled.", name)
            return False
        value = self._values[name]
        if value is None:
            return False
        if isinstance(value, str):
            try:
                return int(value) != 0
            except ValueError:
                return value.strip().lower() in ("true", "yes", "on")
        return bool(value)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    @classmethod
    def available_toggles(cls) -> Iterable[str]:
        return cls.VALID_KEYS
