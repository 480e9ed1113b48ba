# catalog_pipeline/pipeline/__init__.py

# This file makes the step functions directly available from the 'pipeline' package.
from .extractor import FieldSelectorConfig, extract_products, parse_document
from .steps import (
    SinkResult,
    step_1_fetch_catalog_page,
    step_2_extract_products,
    step_3_export_catalog,
    step_4_persist_stubs,
)
