"""uiextract CLI - Main entry point.

Provides commands for detecting components, extracting style palettes
and validating saved detections against test case fixtures.

Exit codes:
    0: Success
    1: Validation failures
    2: Input or configuration error
    3: Runtime error
"""

import json
import sys
import time
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..base_exceptions import UIExtractException
from ..config import ExtractionStrategy, get_settings, get_tolerance_settings
from ..detection import ComponentDetector
from ..detection_exceptions import DetectionTimeout, InputError
from ..logging import setup_logging
from ..model import RasterBuffer
from ..oracles import extract_style_palette
from ..validation import ComponentValidator, TestCaseRegistry, ToleranceConfig, ValidationSuite
from .formatters import format_results

# Exit codes
EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_INPUT_ERROR = 2
EXIT_RUNTIME_ERROR = 3


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI.

    Args:
        verbose: Enable debug logging
    """
    settings = get_settings()
    level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=level, structured=False, colorize=False)


def echo_error(error: UIExtractException, verbose: bool = False, prefix: str = "Error") -> None:
    """Report an error on stderr; verbose mode appends its JSON description."""
    click.echo(f"{prefix}: {error}", err=True)
    if verbose:
        click.echo(json.dumps(error.to_dict(), indent=2), err=True)


def load_raster(image_path: str) -> RasterBuffer:
    try:
        return RasterBuffer.from_file(image_path)
    except InputError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)


def load_components(results_path: str) -> list[dict[str, Any]]:
    """Load detected components from a saved detection JSON file.

    Accepts the ``detect`` output (an object with ``components``) or a bare
    list of components.
    """
    path = Path(results_path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON in {results_path}: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)
    except OSError as e:
        click.echo(f"Error: Cannot read {results_path}: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    if isinstance(data, dict):
        data = data.get("components")
    if not isinstance(data, list):
        click.echo(f"Error: No component list found in {results_path}", err=True)
        sys.exit(EXIT_INPUT_ERROR)
    return data


def load_registry(fixtures: str | None) -> TestCaseRegistry:
    if fixtures is None:
        return TestCaseRegistry()
    try:
        return TestCaseRegistry.from_json(fixtures)
    except InputError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)


@click.group()
@click.version_option(version=__version__, prog_name="uiextract")
@click.pass_context
def main(ctx: click.Context) -> None:
    """uiextract CLI - UI component extraction from screenshots.

    Detect components, extract style palettes and validate detections.
    """
    ctx.ensure_object(dict)


@main.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strategy",
    type=click.Choice([strategy.value for strategy in ExtractionStrategy]),
    help="Region extraction strategy (defaults to configured strategy)",
)
@click.option("--no-ocr", is_flag=True, help="Use the size heuristic instead of Tesseract")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write JSON to file")
@click.option("--timeout", type=float, help="Detection timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def detect(
    image_path: str,
    strategy: str | None,
    no_ocr: bool,
    output: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Detect UI components in an image.

    IMAGE_PATH: Path to a PNG or JPEG screenshot
    """
    configure_logging(verbose)

    updates: dict[str, Any] = {}
    if strategy:
        updates["strategy"] = ExtractionStrategy(strategy)
    if no_ocr:
        updates["use_text_oracle"] = False
    if timeout is not None:
        if timeout <= 0:
            click.echo("Error: --timeout must be positive", err=True)
            sys.exit(EXIT_INPUT_ERROR)
        updates["detection_timeout"] = timeout
    settings = get_settings().model_copy(update=updates)

    buffer = load_raster(image_path)

    start = time.time()
    try:
        result = ComponentDetector(settings).detect(buffer)
    except DetectionTimeout as e:
        echo_error(e, verbose)
        sys.exit(EXIT_RUNTIME_ERROR)
    except UIExtractException as e:
        echo_error(e, verbose, prefix="Detection error")
        sys.exit(EXIT_RUNTIME_ERROR)

    payload = result.to_json()
    if output:
        Path(output).write_text(payload, encoding="utf-8")
        click.echo(f"Results written to: {output}", err=True)
    else:
        click.echo(payload)

    if verbose:
        counts = ", ".join(
            f"{name}={count}" for name, count in result.analysis.component_types.items()
        )
        click.echo(
            f"Detected {len(result.components)} components ({counts or 'none'}) "
            f"in {time.time() - start:.2f}s using {result.strategy}",
            err=True,
        )

    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-k", "colors", default=8, show_default=True, help="Number of palette colors")
def palette(image_path: str, colors: int) -> None:
    """Extract the style palette of an image.

    IMAGE_PATH: Path to a PNG or JPEG screenshot
    """
    configure_logging()

    if colors < 1:
        click.echo("Error: -k must be at least 1", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    buffer = load_raster(image_path)
    style_palette = extract_style_palette(buffer, k=colors)
    click.echo(json.dumps(style_palette.to_dict(), indent=2))
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.argument("results_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--test-case", "-t", "test_case_id", required=True, help="Test case id")
@click.option("--fixtures", type=click.Path(exists=True, dir_okay=False), help="Fixture JSON")
@click.option(
    "--format",
    "format_type",
    type=click.Choice(["json", "junit", "tap"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def validate(
    results_path: str,
    test_case_id: str,
    fixtures: str | None,
    format_type: str,
    verbose: bool,
) -> None:
    """Validate saved detection results against a test case.

    RESULTS_PATH: JSON written by ``uiextract detect``
    """
    configure_logging(verbose)

    components = load_components(results_path)
    registry = load_registry(fixtures)
    validator = ComponentValidator(ToleranceConfig.from_settings(get_tolerance_settings()))
    suite = ValidationSuite(registry, validator)

    try:
        result = suite.run_test_case(test_case_id, components)
    except InputError as e:
        echo_error(e, verbose)
        sys.exit(EXIT_INPUT_ERROR)

    summary = suite.summary()
    summary["timestamp"] = time.time()
    click.echo(format_results([result.to_dict()], summary, format_type))

    if verbose:
        click.echo(
            f"{result.passed} passed, {result.failed} failed, "
            f"accuracy {result.accuracy:.1f}%",
            err=True,
        )

    sys.exit(EXIT_SUCCESS if result.failed == 0 else EXIT_VALIDATION_FAILED)


@main.command("test-cases")
@click.option("--fixtures", type=click.Path(exists=True, dir_okay=False), help="Fixture JSON")
def test_cases(fixtures: str | None) -> None:
    """List available validation test cases."""
    configure_logging()

    registry = load_registry(fixtures)
    for test_case in registry:
        click.echo(
            f"{test_case.id}: {test_case.name} "
            f"({len(test_case.expected_components)} expected components)"
        )
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
