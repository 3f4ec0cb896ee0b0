"""
The report build: one target that renders the narrative document to HTML.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .report import render_report
from .schema import ReportConfig

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


@dataclass(frozen=True)
class RenderTarget:
    """A narrative document and where its rendered HTML goes."""
    name: str
    source: str
    output_dir: str
    output_file: str

    def output_path(self, root: Union[str, Path] = PROJECT_ROOT) -> Path:
        return Path(root) / self.output_dir / self.output_file


RANDOMIZATION_REPORT = RenderTarget(
    name="randomization_report",
    source="reports/randomization_report.html.j2",
    output_dir="output",
    output_file="randomization_report.html",
)


def run_target(
    target: RenderTarget = RANDOMIZATION_REPORT,
    root: Union[str, Path] = PROJECT_ROOT,
    config: Optional[ReportConfig] = None,
) -> Path:
    """
    Render a target relative to the project root.

    Returns:
        Path to the rendered HTML

    Raises:
        ReportRenderError: rendering failed; no output is written
    """
    root = Path(root)
    logger.info(f"Rendering target {target.name}: {target.source}")
    return render_report(
        source=root / target.source,
        output_dir=root / target.output_dir,
        output_file=target.output_file,
        config=config,
    )
