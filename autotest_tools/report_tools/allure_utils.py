"""
================================================================================
Allure Report Utilities
================================================================================

Helpers for attaching request/response artefacts to Allure reports and for
turning an allure-results directory into an HTML report.

Features:
- JSON/text attachment helpers
- cURL command generation for request reproduction
- Result summary and report generation

================================================================================
"""

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import allure
from loguru import logger


MASK = "***MASKED***"
SENSITIVE_HEADERS = {"authorization", "x-api-key", "cookie", "set-cookie"}


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """Attach JSON data to Allure report."""
    json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """Attach text content to Allure report."""
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def build_curl_command(
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[Any] = None
) -> str:
    """
    Build a copy-paste ready cURL command.

    Sensitive headers are masked.
    """
    cmd_parts = [f"curl -X {method}"]

    for key, value in (headers or {}).items():
        if key.lower() in SENSITIVE_HEADERS:
            value = MASK
        cmd_parts.append(f"-H '{key}: {value}'")

    if body is not None:
        body_str = json.dumps(body, ensure_ascii=False) if isinstance(body, (dict, list)) else str(body)
        cmd_parts.append(f"-d '{body_str}'")

    cmd_parts.append(f"'{url}'")

    return " \\\n  ".join(cmd_parts)


def attach_curl_command(
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[Any] = None
):
    """Attach cURL command for API request reproduction."""
    attach_text(build_curl_command(method, url, headers, body), name="cURL Command")


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0

    @property
    def pass_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100


def summarize_results(results_dir: Path) -> TestResultSummary:
    """
    Count result statuses in an allure-results directory.

    Unreadable result files are skipped with a warning.
    """
    summary = TestResultSummary()

    for result_file in Path(results_dir).glob("*-result.json"):
        try:
            with open(result_file, encoding="utf-8") as f:
                status = json.load(f).get("status")
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")
            continue

        summary.total += 1
        if status == "passed":
            summary.passed += 1
        elif status == "failed":
            summary.failed += 1
        elif status == "skipped":
            summary.skipped += 1
        else:
            summary.broken += 1

    return summary


def generate_allure_report(results_dir: Path, report_dir: Path) -> bool:
    """
    Generate Allure HTML report using the allure CLI.

    Returns:
        True if the report was generated
    """
    cmd = ["allure", "generate", str(results_dir), "-o", str(report_dir), "--clean"]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    summary = summarize_results(results_dir)
    logger.info(
        f"Report generated at {report_dir} "
        f"({summary.passed}/{summary.total} passed, {summary.pass_rate:.2f}%)"
    )
    return True
