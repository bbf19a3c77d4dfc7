import logging
from typing import override

from rich.console import Console

from task_updates.clients.image_registry_client import ImageRegistryClient
from task_updates.clients.nomad_client import NomadClient
from task_updates.models import Config, ReportRow
from task_updates.repositories import ConfigRepository, InstanceRepository
from task_updates.services.instance_matcher import match
from task_updates.services.service import Service
from task_updates.services.tag_fetcher import TagFetcher
from task_updates.services.version_resolution_service import VersionResolutionService
from task_updates.utils.logging import setup_logger
from task_updates.utils.report_renderer import render_json, render_table


class UpdateReportService(Service):
    def __init__(
        self,
        config_file_path: str,
        server: str | None = None,
        namespaces: list[str] | None = None,
        output: str = "table",
    ):
        self.config_repository: ConfigRepository = ConfigRepository(config_file_path)
        self.server: str | None = server
        self.namespaces: list[str] | None = namespaces
        self.output: str = output
        self.resolver: VersionResolutionService = VersionResolutionService(TagFetcher(ImageRegistryClient()))
        self.console: Console = Console()
        self.logger: logging.Logger = setup_logger("UpdateReportService")

    @override
    def run(self) -> None:
        rows = self.build_report()
        if self.output == "json":
            print(render_json(rows))
        else:
            render_table(rows, self.console)

    def build_report(self) -> list[ReportRow]:
        config = self.config_repository.load()
        self.logger.info(f"Loaded {len(config.images)} watched images from {self.config_repository.file_path}")

        versions = self.resolver.resolve(config.images)
        instances = self.instance_repository(config).find_all(self.namespaces or config.namespaces)

        rows = match(instances, versions)
        updates = sum(1 for r in rows if r.update_available)
        self.logger.info(f"{updates} of {len(rows)} watched instances have an update available")
        return rows

    def instance_repository(self, config: Config) -> InstanceRepository:
        return InstanceRepository(NomadClient(self.server or config.server))
