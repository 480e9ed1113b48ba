import logging

import pytest

from catalog_pipeline import config
from catalog_pipeline.config import FeatureToggles


def test_load_config_deep_merges_extra_yaml(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_START_PAGE", "https://example.test/")
    main_path = tmp_path / "default_config.yaml"
    main_path.write_text(
        "web_scraping:\n"
        "  start_page: ${CATALOG_START_PAGE}\n"
        "  product_price_selector: p.price_color\n"
        "logging:\n"
        "  level: INFO\n",
        encoding="utf-8",
    )
    extra_dir = tmp_path / "yaml_config" / "nested"
    extra_dir.mkdir(parents=True)
    (extra_dir / "override.yml").write_text("web_scraping:\n  product_price_selector: span.cost\n", encoding="utf-8")
    (extra_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    data = config.load_config(main_path, tmp_path / "yaml_config")

    assert data["web_scraping"] == {"start_page": "https://example.test/", "product_price_selector": "span.cost"}
    assert data["logging"] == {"level": "INFO"}


def test_load_config_missing_files_gives_empty(tmp_path):
    assert config.load_config(tmp_path / "nope.yaml", tmp_path / "nope") == {}


def test_section_helpers_fill_defaults():
    outputs = config.output_settings({"output": {"csv_path": "x.csv"}})
    assert outputs["csv_path"] == "x.csv"
    assert outputs["json_path"] == config.JSON_PATH
    assert config.database_settings({})["mongodb_uri"] == config.MONGODB_URI
    assert config.logging_settings({"logging": {"level": "debug"}})["level"] == "DEBUG"


def test_toggle_defaults_and_overrides():
    toggles = FeatureToggles({"run_save_to_csv": 0, "run_save_to_sqlite": "1"})
    assert toggles.enabled("run_website_parser") is True
    assert toggles.enabled("run_save_to_csv") is False
    assert toggles.enabled("run_save_to_sqlite") is True
    assert toggles.enabled("run_save_to_mongodb") is False


def test_unknown_toggle_is_disabled_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="catalog_pipeline.config"):
        toggles = FeatureToggles({"run_save_to_xml": 1})
        assert toggles.enabled("run_save_to_xml") is False
    messages = [r.getMessage() for r in caplog.records]
    assert any("run_save_to_xml" in m for m in messages)
    assert "run_save_to_xml" not in toggles.as_dict()


def test_toggles_must_be_a_mapping():
    with pytest.raises(ValueError):
        FeatureToggles(["run_save_to_csv"])
