"""Pydantic data models for condo-reports.

Domain records mirror the collections supplied by the data-access layer
(maintenance reports, tickets, appointments, contracts, costs, expenses).
Money is always integer minor units (cents).  Engine models (``Block``,
``TableBlock``, ``AggregateRow``, ``ImageAsset``) are what flows between the
parser, the aggregators and the renderers.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator

from condo_reports.dates import parse_date

Day = Annotated[Optional[date], BeforeValidator(parse_date)]


# ── Request-level models ─────────────────────────────────────────────


class DateRange(BaseModel):
    """Inclusive calendar-day range used to filter every section."""

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.end < self.start:
            raise ValueError(f"end {self.end} precedes start {self.start}")
        return self

    def contains(self, day: date | None) -> bool:
        return day is not None and self.start <= day <= self.end


class AdminContact(BaseModel):
    """Administrator contact fields printed on the context block and signature page."""

    company: str = ""
    phone: str = ""
    email: str = ""

    @property
    def has_any(self) -> bool:
        return bool(self.company or self.phone or self.email)


class BrandingAssets(BaseModel):
    """Remote branding assets; either URL may be absent."""

    logo_url: Optional[str] = None
    signature_url: Optional[str] = None


class KPISnapshot(BaseModel):
    """Canonical headline figures supplied by the caller, in cents. Never recomputed."""

    opening_balance: int = 0
    period_income: int = 0
    period_expenses: int = 0
    period_net_flow: int = 0
    consolidated_balance: int = 0
    period_charges: int = 0
    outstanding_balance: int = 0


class ReportContent(BaseModel):
    """Narrative (markdown-lite) plus the metadata of one generation request."""

    narrative: str = ""
    title: str = "Reporte Financiero"
    template_label: str = ""
    period_label: str = ""
    generated_at: datetime = Field(default_factory=datetime.now)
    admin: AdminContact = Field(default_factory=AdminContact)
    kpis: KPISnapshot = Field(default_factory=KPISnapshot)


# ── Domain records ───────────────────────────────────────────────────


class MaintenanceReport(BaseModel):
    id: str = ""
    report_date: Day = None
    area: str = ""
    responsible: str = ""
    detail: str = ""
    evidence_url: Optional[str] = None


class Ticket(BaseModel):
    id: str = ""
    created_at: Day = None
    folio: str = ""
    title: str = ""
    description: str = ""
    status: str = ""
    priority: Optional[str] = None
    area: str = ""
    provider_id: Optional[str] = None


class MaintenanceAppointment(BaseModel):
    id: str = ""
    scheduled_date: Day = None
    time: str = ""
    title: str = ""
    description: str = ""
    status: str = ""
    location: str = ""
    technician: str = ""
    contact_phone: str = ""


class MaintenanceContract(BaseModel):
    id: str = ""
    provider_name: str = ""
    service_type: str = ""
    value_cents: int = 0
    start_date: Day = None
    end_date: Day = None
    status: str = ""
    description: str = ""
    contact_name: str = ""
    notes: str = ""


class MaintenanceCost(BaseModel):
    id: str = ""
    cost_date: Day = None
    amount_cents: int = 0
    category: str = ""
    status: str = ""
    description: str = ""
    provider_id: Optional[str] = None


class ExpenseRecord(BaseModel):
    id: str = ""
    expense_date: Day = None
    concept: str = ""
    description: str = ""
    amount_cents: int = 0


class MaintenanceDataset(BaseModel):
    """Already-fetched maintenance collections for one generation request."""

    reports: list[MaintenanceReport] = Field(default_factory=list)
    tickets: list[Ticket] = Field(default_factory=list)
    appointments: list[MaintenanceAppointment] = Field(default_factory=list)
    contracts: list[MaintenanceContract] = Field(default_factory=list)
    costs: list[MaintenanceCost] = Field(default_factory=list)
    providers: dict[str, str] = Field(default_factory=dict)


class ExpenseDataset(BaseModel):
    expenses: list[ExpenseRecord] = Field(default_factory=list)


# ── Engine models ────────────────────────────────────────────────────


class BlockKind(str, Enum):
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"
    TABLE = "table"
    SPACER = "spacer"


class Block(BaseModel):
    """One classified narrative unit.

    ``raw`` holds the source line; table blocks keep every consumed line in
    ``lines`` so the table parser sees the run exactly as written.
    """

    kind: BlockKind
    raw: str = ""
    lines: list[str] = Field(default_factory=list)


class TableBlock(BaseModel):
    head: list[str] = Field(default_factory=list)
    body: list[list[str]] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.head


class AggregateRow(BaseModel):
    """One summarized line of a group-by reduction."""

    group_key: str
    total: int = 0
    count: Optional[int] = None

    @property
    def is_total(self) -> bool:
        return self.group_key == "Total"


class ImageRequest(BaseModel):
    source_url: str
    max_width: int = 300
    max_height: int = 150
    quality: float = Field(default=0.7, gt=0.0, le=1.0)


class ImageAsset(BaseModel):
    """An embeddable image.  ``width``/``height`` are 0 when the raw-bytes fallback was used."""

    base64: str
    mime_type: str = "image/jpeg"
    width: int = 0
    height: int = 0
    optimized: bool = True


class ResolvedAssets(BaseModel):
    logo: Optional[ImageAsset] = None
    signature: Optional[ImageAsset] = None


class GeneratedReport(BaseModel):
    """A finished artifact. ``location`` is set once an artifact store has accepted it."""

    filename: str
    content: bytes
    page_count: int
    content_type: str = "application/pdf"
    location: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
