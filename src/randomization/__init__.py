"""Clinical trial randomization: assignment tables and the tutorial report."""

from .schema import (
    TreatmentArm,
    AssignmentRow,
    AssignmentTable,
    GenerationConfig,
    ReportConfig,
)
from .errors import (
    RandomizationError,
    InvalidParameterError,
    UnknownStratumError,
    TableExhaustedError,
    ReportRenderError,
)
from .blocks import block_catalog
from .simple import simple_randomize, simple_randomization_table
from .strata import build_strata
from .generator import generate, generate_from_config, stratified_generate
from .consumption import next_assignment, peek_next
from .table_store import write_table, read_table, export_upload
from .report import build_report_context, render_report
from .pipeline import RenderTarget, RANDOMIZATION_REPORT, run_target

__all__ = [
    "TreatmentArm",
    "AssignmentRow",
    "AssignmentTable",
    "GenerationConfig",
    "ReportConfig",
    "RandomizationError",
    "InvalidParameterError",
    "UnknownStratumError",
    "TableExhaustedError",
    "ReportRenderError",
    "block_catalog",
    "simple_randomize",
    "simple_randomization_table",
    "build_strata",
    "generate",
    "generate_from_config",
    "stratified_generate",
    "next_assignment",
    "peek_next",
    "write_table",
    "read_table",
    "export_upload",
    "build_report_context",
    "render_report",
    "RenderTarget",
    "RANDOMIZATION_REPORT",
    "run_target",
]
