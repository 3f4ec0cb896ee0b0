"""
Randomization Report DAG - renders the tutorial report.

Single task: reports/randomization_report.html.j2 -> output/randomization_report.html.
Triggered manually; a failed render is left failed for the operator to look at.
"""

from datetime import datetime
from pathlib import Path

from airflow import DAG
from airflow.operators.python import PythonOperator

# Project root - adjust if DAG runs from different location
PROJECT_ROOT = Path(__file__).parent.parent


def _render_randomization_report(**kwargs):
    """Render the report target and return the output path."""
    import sys
    sys.path.insert(0, str(PROJECT_ROOT))

    from src.randomization.pipeline import RANDOMIZATION_REPORT, run_target

    out_path = run_target(RANDOMIZATION_REPORT, root=PROJECT_ROOT)
    return str(out_path)


default_args = {
    "owner": "biostatistics",
    "depends_on_past": False,
    "start_date": datetime(2025, 1, 1),
    "email_on_failure": False,
    "retries": 0,
}

dag = DAG(
    "randomization_report",
    default_args=default_args,
    description="Render the randomization tutorial report",
    schedule=None,
    catchup=False,
    max_active_runs=1,
    tags=["randomization", "report"],
)

render_task = PythonOperator(
    task_id="randomization_report",
    python_callable=_render_randomization_report,
    dag=dag,
)
