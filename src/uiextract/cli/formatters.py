"""Result formatters for CLI output.

Provides formatting for validation results in multiple formats:
- JSON: Machine-readable format
- JUnit XML: CI/CD integration format
- TAP: Test Anything Protocol format
"""

import json
import time
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any


def format_results(
    results: list[dict[str, Any]],
    summary: dict[str, Any],
    format_type: str,
) -> str:
    """Format validation results in the specified format.

    Args:
        results: Validation result dictionaries (``ValidationResult.to_dict()``)
        summary: Summary statistics dictionary
        format_type: Output format ("json", "junit", or "tap")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return _format_json(results, summary)
    elif format_type == "junit":
        return _format_junit(results, summary)
    elif format_type == "tap":
        return _format_tap(results, summary)
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _component_name(detail: dict[str, Any], index: int) -> str:
    expected = detail.get("expected", {})
    name = f"{expected.get('type', 'component')}[{index}]"
    if expected.get("state"):
        name += f" ({expected['state']})"
    return name


def _failure_message(detail: dict[str, Any]) -> str:
    if detail.get("reason"):
        return str(detail["reason"])
    failed = [
        name
        for name, check in detail.get("propertyValidations", {}).items()
        if not check.get("valid", False)
    ]
    return "Property mismatch: " + ", ".join(failed)


def _format_json(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    timestamp = summary.get("timestamp", time.time())
    output = {
        "summary": summary,
        "results": results,
        "timestamp_iso": datetime.fromtimestamp(timestamp).isoformat(),
    }
    return json.dumps(output, indent=2)


def _format_junit(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    """Format results as JUnit XML, one testsuite per test case.

    Args:
        results: Validation result dictionaries
        summary: Summary statistics dictionary

    Returns:
        JUnit XML formatted string
    """
    testsuites = ET.Element("testsuites")
    testsuites.set("tests", str(summary.get("passed", 0) + summary.get("failed", 0)))
    testsuites.set("failures", str(summary.get("failed", 0)))

    for result in results:
        details = result.get("details", [])
        testsuite = ET.SubElement(testsuites, "testsuite")
        testsuite.set("name", result.get("testCaseId", "Unknown"))
        testsuite.set("tests", str(len(details)))
        testsuite.set("failures", str(result.get("failed", 0)))

        for index, detail in enumerate(details):
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", _component_name(detail, index))
            testcase.set("classname", f"uiextract.validation.{result.get('testCaseId', '')}")

            if not detail.get("passed", False):
                message = _failure_message(detail)
                failure = ET.SubElement(testcase, "failure")
                failure.set("message", message)
                failure.set("type", "ValidationError")
                failure.text = message

    xml_string = ET.tostring(testsuites, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def _format_tap(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    """Format results as TAP (Test Anything Protocol).

    Args:
        results: Validation result dictionaries
        summary: Summary statistics dictionary

    Returns:
        TAP formatted string
    """
    lines = ["TAP version 13"]

    entries = [
        (result.get("testCaseId", "Unknown"), index, detail)
        for result in results
        for index, detail in enumerate(result.get("details", []))
    ]
    lines.append(f"1..{len(entries)}")

    for number, (test_case_id, index, detail) in enumerate(entries, 1):
        name = f"{test_case_id} {_component_name(detail, index)}"
        if detail.get("passed", False):
            lines.append(f"ok {number} - {name}")
        else:
            lines.append(f"not ok {number} - {name}")
            lines.append("  ---")
            lines.append(f"  message: {_failure_message(detail)}")
            lines.append("  ...")

    lines.append("")
    lines.append(f"# Passed: {summary.get('passed', 0)}")
    lines.append(f"# Failed: {summary.get('failed', 0)}")
    lines.append(f"# Accuracy: {summary.get('overallAccuracy', 0):.1f}%")

    return "\n".join(lines)
