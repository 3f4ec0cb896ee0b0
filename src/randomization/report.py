"""
Randomization tutorial report.

Runs the small example computations (simple, block and stratified block
randomization, handing out assignments, imbalance simulation) and renders
them into the narrative Jinja2 document as a single static HTML file.
"""

import base64
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jinja2
import numpy as np
import pandas as pd

from .blocks import block_catalog, catalog_size, n_blocks_needed
from .consumption import next_assignment
from .errors import RandomizationError, ReportRenderError
from .generator import generate, stratified_generate
from .schema import ReportConfig, TreatmentArm
from .simple import simple_randomize
from .stats import (
    arm_counts,
    check_balance,
    max_abs_imbalance,
    prob_imbalance_exceeds,
    running_imbalance,
    simulate_simple_imbalance,
    stratum_summary,
)
from .strata import build_strata

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_OUTPUT_FILE = "randomization_report.html"
PREVIEW_ROWS = 12


def _html_table(df: pd.DataFrame) -> str:
    return df.to_html(index=False, border=0, classes="data", na_rep="")


def _imbalance_chart(simple_labels, block_labels, block_size: int) -> str:
    """Running imbalance of one simple vs one block sequence, as a PNG data URI."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(7, 3.5))
    x = np.arange(1, len(simple_labels) + 1)
    ax.axhline(0, color="gray", linestyle="--", linewidth=1)
    ax.step(x, running_imbalance(simple_labels), where="post", color="#c0392b", label="Simple")
    ax.step(x, running_imbalance(block_labels), where="post", color="#2471a3",
            label=f"Block (size {block_size})")
    ax.set_xlabel("Participants enrolled")
    ax.set_ylabel("# intervention - # control")
    ax.set_title("Running imbalance")
    ax.legend(loc="upper left")
    plt.tight_layout()

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=100)
    plt.close(fig)
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def build_report_context(config: Optional[ReportConfig] = None) -> Dict[str, Any]:
    """
    Run the example computations shown in the report.

    Args:
        config: ReportConfig; defaults are used when omitted

    Returns:
        Template context dict
    """
    config = config or ReportConfig()
    bs = config.block_size

    # Simple randomization
    simple_draws = simple_randomize(config.simple_n, prob=config.simple_prob, seed=config.seed)
    simple_df = pd.DataFrame({
        "participant": np.arange(1, config.simple_n + 1),
        "treatment_assignment": simple_draws,
    })
    s_control, s_int = arm_counts(simple_draws)
    _, _, simple_p = check_balance(s_control, s_int, expected_frac=config.simple_prob)

    # Block catalog
    catalog = block_catalog(bs)
    catalog_df = pd.DataFrame(
        [[i + 1] + list(block) for i, block in enumerate(catalog)],
        columns=["block"] + [f"position_{p + 1}" for p in range(bs)],
    )

    # Block randomization
    block_table = generate(
        total_target_n=config.target_n,
        block_size=bs,
        oversample_factor=config.oversample_factor,
        seed=config.seed,
    )
    b_control, b_int = arm_counts(block_table.sequence())

    # Stratified block randomization
    strata = build_strata(config.dimensions)
    stratified_table = stratified_generate(
        total_target_n=config.stratified_target_n,
        dimensions=config.dimensions,
        block_size=bs,
        oversample_factor=config.oversample_factor,
        seed=config.seed,
    )

    # Hand out a few assignments the way a statistician would
    enrollments = []
    for i in range(config.demo_enrollments):
        stratum = strata[i % len(strata)]
        row = next_assignment(stratified_table, stratum)
        enrollments.append({
            "enrollment": i + 1,
            "stratum": stratum,
            "identifier": row.identifier,
            "treatment_assignment": row.treatment_assignment,
            "arm": TreatmentArm(row.treatment_assignment).name.lower(),
        })
    enrollments_df = pd.DataFrame(enrollments)
    first_stratum_df = stratified_table.to_dataframe()
    first_stratum_df = first_stratum_df[first_stratum_df["stratum"] == strata[0]]

    # Simple vs block imbalance
    imbalance = simulate_simple_imbalance(
        config.imbalance_n, config.imbalance_sims, prob=0.5, seed=config.seed
    )
    chart_seed = int(np.random.SeedSequence(config.seed).generate_state(1)[0])
    chart_simple = simple_randomize(config.imbalance_n, seed=chart_seed)
    chart_block = generate(config.imbalance_n, block_size=bs, seed=chart_seed).sequence()
    chart_block = chart_block[: config.imbalance_n]

    context = {
        "generated_at": datetime.now().strftime("%Y-%m-%d %H:%M"),
        "config": config,
        "seed": config.seed,
        "simple": {
            "n": config.simple_n,
            "prob": config.simple_prob,
            "table": _html_table(simple_df),
            "n_control": s_control,
            "n_intervention": s_int,
            "p_value": simple_p,
        },
        "catalog": {
            "block_size": bs,
            "size": catalog_size(bs),
            "table": _html_table(catalog_df),
        },
        "block": {
            "target_n": config.target_n,
            "oversample_factor": config.oversample_factor,
            "n_blocks": n_blocks_needed(config.target_n, bs, config.oversample_factor),
            "n_rows": len(block_table),
            "n_control": b_control,
            "n_intervention": b_int,
            "preview": _html_table(block_table.to_dataframe().head(PREVIEW_ROWS)),
        },
        "stratified": {
            "dimensions": config.dimensions,
            "strata": strata,
            "target_n": config.stratified_target_n,
            "n_rows": len(stratified_table),
            "preview": _html_table(first_stratum_df.head(PREVIEW_ROWS)),
            "first_stratum": strata[0],
            "summary": _html_table(stratum_summary(stratified_table, bs)),
            "enrollments": _html_table(enrollments_df),
            "upload_columns": list(stratified_table.upload_frame().columns),
        },
        "imbalance": {
            "n": config.imbalance_n,
            "n_sims": config.imbalance_sims,
            "mean": float(np.mean(imbalance)),
            "p95": float(np.percentile(imbalance, 95)),
            "threshold": config.imbalance_threshold,
            "simulated_exceed": float(np.mean(imbalance > config.imbalance_threshold)),
            "exact_exceed": prob_imbalance_exceeds(config.imbalance_n, config.imbalance_threshold),
            "simple_max": max_abs_imbalance(chart_simple),
            "block_max": max_abs_imbalance(chart_block),
            "chart": _imbalance_chart(chart_simple, chart_block, bs),
        },
    }
    return context


def render_report(
    source: Union[str, Path],
    output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
    output_file: str = DEFAULT_OUTPUT_FILE,
    context: Optional[Dict[str, Any]] = None,
    config: Optional[ReportConfig] = None,
) -> Path:
    """
    Render the narrative document to a static HTML file.

    Args:
        source: Jinja2 narrative document
        output_dir: Directory for the rendered file (created if needed)
        output_file: File name of the rendered HTML
        context: Template context; built from config when omitted
        config: ReportConfig for build_report_context

    Returns:
        Path to the written HTML file

    Raises:
        ReportRenderError: source missing, the examples could not be computed
                           from config, or the template failed to render.
                           Nothing is written in that case.
    """
    source = Path(source)
    if not source.is_file():
        raise ReportRenderError(f"Narrative document not found: {source}")

    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(source.parent)),
        autoescape=jinja2.select_autoescape(enabled_extensions=("html", "j2")),
        undefined=jinja2.StrictUndefined,
    )
    if context is None:
        try:
            context = build_report_context(config)
        except RandomizationError as exc:
            raise ReportRenderError(f"Report examples could not be computed: {exc}") from exc

    try:
        html = env.get_template(source.name).render(**context)
    except jinja2.TemplateError as exc:
        raise ReportRenderError(f"Failed to render {source}: {exc}") from exc

    out_path = Path(output_dir) / output_file
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html, encoding="utf-8")
    logger.info(f"Report written to {out_path}")
    return out_path
