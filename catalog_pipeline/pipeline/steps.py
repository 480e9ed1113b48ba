# catalog_pipeline/pipeline/steps.py
import logging
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence

from ..config import FeatureToggles
from ..delegates import DownloaderDelegate, FileManagerDelegate
from ..exceptions import ExportFailure, TransportFailure
from ..models import Catalog, ProductRecord
from .extractor import FieldSelectorConfig, extract_products, parse_document

logger = logging.getLogger(__name__)

SINK_OK = "ok"
SINK_FAILED = "failed"
SINK_SKIPPED = "skipped"
SINK_STUB = "stub"


class SinkResult(NamedTuple):
    name: str
    status: str
    target: str
    error: Optional[ExportFailure] = None


class ExportSink(NamedTuple):
    name: str
    toggle: str
    output_key: str
    method: str


# Fixed order; each sink is gated by its own toggle and writes to its own output path.
EXPORT_SINKS = (
    ExportSink("csv", "run_save_to_csv", "csv_path", "save_to_csv"),
    ExportSink("json", "run_save_to_json", "json_path", "save_to_json"),
    ExportSink("yaml", "run_save_to_yaml", "yaml_products_path", "save_to_products_yaml"),
    ExportSink("yaml_dir", "run_save_to_yaml_dir", "yaml_dir", "save_to_yaml_directory"),
    ExportSink("text", "run_save_to_text", "text_path", "save_to_text"),
)

# Persistence placeholders: when enabled they only record the target they would write to.
PERSIST_STUBS = (
    ("sqlite", "run_save_to_sqlite", "sqlite_path"),
    ("mongodb", "run_save_to_mongodb", "mongodb_uri"),
)


async def step_1_fetch_catalog_page(downloader: DownloaderDelegate, url: str) -> bytes:
    """
    Step 1: Downloads the catalog page. Anything but a 200 raises TransportFailure.
    """
    logger.info("--- STEP 1: FETCHING CATALOG PAGE ---")
    logger.info("Attempting to retrieve HTML from: %s", url)
    result = await downloader.fetch_page(url)
    if not result.ok:
        logger.error("Request for %s failed with status %d.", url, result.status_code)
        raise TransportFailure(f"Request failed with code {result.status_code}", url=url, status_code=result.status_code)
    logger.info("--- STEP 1 COMPLETE (%d bytes) ---", len(result.body))
    return result.body


def step_2_extract_products(body: bytes, selectors: FieldSelectorConfig, base_url: str) -> List[ProductRecord]:
    """
    Step 2: Parses the page and extracts normalized product records.
    Raises ExtractionFailure when the document cannot be parsed or queried.
    """
    logger.info("--- STEP 2: EXTRACTING PRODUCT RECORDS ---")
    document_root = parse_document(body)
    records = extract_products(document_root, selectors, base_url)
    logger.info("--- STEP 2 COMPLETE: %d products extracted ---", len(records))
    return records


def step_3_export_catalog(
    catalog: Catalog,
    file_manager: FileManagerDelegate,
    toggles: FeatureToggles,
    output_paths: Mapping[str, str],
) -> List[SinkResult]:
    """
    Step 3: Runs every enabled export sink against one catalog snapshot.
    An I/O failure is reported for its own sink only; the remaining sinks still run.
    """
    logger.info("--- STEP 3: EXPORTING CATALOG ---")
    snapshot: Sequence[ProductRecord] = catalog.snapshot()
    results: List[SinkResult] = []

    for sink in EXPORT_SINKS:
        target = str(output_paths[sink.output_key])
        if not toggles.enabled(sink.toggle):
            logger.info("Sink '%s' disabled by toggle '%s', skipping.", sink.name, sink.toggle)
            results.append(SinkResult(sink.name, SINK_SKIPPED, target))
            continue

        save: Callable = getattr(file_manager, sink.method)
        try:
            save(snapshot, target)
        except Exception as e:
            failure = ExportFailure(f"{sink.name} export to {target} failed: {e}", sink=sink.name, target=target)
            logger.error("Sink '%s' failed: %s", sink.name, failure)
            results.append(SinkResult(sink.name, SINK_FAILED, target, failure))
        else:
            results.append(SinkResult(sink.name, SINK_OK, target))

    failed = [r.name for r in results if r.status == SINK_FAILED]
    if failed:
        logger.warning("--- STEP 3 COMPLETE with failed sinks: %s ---", ", ".join(failed))
    else:
        logger.info("--- STEP 3 COMPLETE ---")
    return results


def step_4_persist_stubs(toggles: FeatureToggles, database_targets: Dict[str, str]) -> List[SinkResult]:
    """
    Step 4: Placeholder persistence stages. Enabled ones are reported as attempted;
    nothing is written.
    """
    results: List[SinkResult] = []
    for name, toggle, target_key in PERSIST_STUBS:
        target = str(database_targets[target_key])
        if toggles.enabled(toggle):
            logger.info("Persistence to %s requested (target: %s); not implemented, recording attempt only.", name, target)
            results.append(SinkResult(name, SINK_STUB, target))
        else:
            results.append(SinkResult(name, SINK_SKIPPED, target))
    return results
