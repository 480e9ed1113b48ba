# catalog_pipeline/main.py
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from . import config
from .config import FeatureToggles
from .delegates import DownloaderDelegate, FileManagerDelegate
from .exceptions import CatalogPipelineError, ExtractionFailure, TransportFailure
from .models import Catalog
from .pipeline.extractor import FieldSelectorConfig
from .pipeline.steps import (
    SINK_FAILED,
    SinkResult,
    step_1_fetch_catalog_page,
    step_2_extract_products,
    step_3_export_catalog,
    step_4_persist_stubs,
)


class PipelineState(enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    EXPORTING = "exporting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineReport:
    state: PipelineState
    catalog: Catalog
    sinks: List[SinkResult] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def failed_sinks(self) -> List[SinkResult]:
        return [s for s in self.sinks if s.status == SINK_FAILED]


class CatalogPipeline:
    """
    Runs fetch -> extract -> populate catalog -> export, consulting the feature
    toggles before each gated stage.

    The logger is injectable; it is handed down to the catalog and the file manager.
    """
    def __init__(
        self,
        config_data: Dict[str, Any],
        toggles: FeatureToggles,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config_data = config_data
        self.toggles = toggles
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport
        self.state = PipelineState.IDLE

    def _transition(self, state: PipelineState):
        self.logger.debug("Pipeline state: %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(self) -> PipelineReport:
        self.state = PipelineState.IDLE
        web = config.web_settings(self.config_data)
        start_page = web.get("start_page") or config.START_PAGE
        catalog = Catalog(logger=self.logger)
        report = PipelineReport(state=self.state, catalog=catalog)

        if not self.toggles.enabled("run_website_parser"):
            self.logger.info("Website parser disabled by toggle 'run_website_parser'; nothing to do.")
            self._transition(PipelineState.DONE)
            report.state = self.state
            return report

        operation = "fetch"
        try:
            self._transition(PipelineState.FETCHING)
            async with DownloaderDelegate(user_agent=config.USER_AGENT, timeout=config.REQUEST_TIMEOUT, transport=self.transport) as downloader:
                body = await step_1_fetch_catalog_page(downloader, start_page)

            operation = "extract"
            self._transition(PipelineState.EXTRACTING)
            selectors = FieldSelectorConfig.from_settings(web)
            for record in step_2_extract_products(body, selectors, start_page):
                catalog.add(record)

            operation = "export"
            self._transition(PipelineState.EXPORTING)
            file_manager = FileManagerDelegate(logger=self.logger)
            report.sinks.extend(step_3_export_catalog(catalog, file_manager, self.toggles, config.output_settings(self.config_data)))
            report.sinks.extend(step_4_persist_stubs(self.toggles, config.database_settings(self.config_data)))
        except (TransportFailure, ExtractionFailure) as e:
            self.logger.error("Pipeline failed during %s: %s", operation, e)
            self._transition(PipelineState.FAILED)
            report.error = e
        except Exception as e:
            self.logger.critical("Unexpected error during %s: %s", operation, e, exc_info=True)
            self._transition(PipelineState.FAILED)
            report.error = CatalogPipelineError(f"Unexpected error during {operation}: {e}", {"operation": operation})
        else:
            self._transition(PipelineState.DONE)
            self.logger.info("Pipeline finished: %d products, %d failed sinks.", len(catalog), len(report.failed_sinks))

        report.state = self.state
        return report


async def main(
    config_data: Dict[str, Any],
    toggles: FeatureToggles,
    logger: Optional[logging.Logger] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PipelineReport:
    """The main orchestrator entry point."""
    pipeline = CatalogPipeline(config_data, toggles, logger=logger, transport=transport)
    return await pipeline.run()
