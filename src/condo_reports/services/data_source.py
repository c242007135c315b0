"""JSON-file data source standing in for the condominium data-access layer."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from condo_reports.exceptions import DataSourceError
from condo_reports.models import ExpenseDataset, KPISnapshot, MaintenanceDataset

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class JsonDataSource:
    """Loads domain collections from JSON documents on disk."""

    async def _load(self, path: Path, model: type[M]) -> M:
        try:
            raw = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
            data = json.loads(raw)
            return model.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise DataSourceError(f"Cannot load {model.__name__} from {path}: {exc}") from exc

    async def load_maintenance(self, path: Path) -> MaintenanceDataset:
        dataset = await self._load(path, MaintenanceDataset)
        log.debug(
            "Loaded maintenance data: %d reports, %d tickets, %d appointments, %d contracts, %d costs",
            len(dataset.reports),
            len(dataset.tickets),
            len(dataset.appointments),
            len(dataset.contracts),
            len(dataset.costs),
        )
        return dataset

    async def load_expenses(self, path: Path) -> ExpenseDataset:
        return await self._load(path, ExpenseDataset)

    async def load_kpis(self, path: Path) -> KPISnapshot:
        return await self._load(path, KPISnapshot)

    async def load_narrative(self, path: Path) -> str:
        try:
            return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        except OSError as exc:
            raise DataSourceError(f"Cannot read narrative from {path}: {exc}") from exc
