"""Shared test fixtures for yang2swagger.

Provides the schema document fixtures (raw and resolved), a small in-memory
schema builder for scenario tests, config isolation, output state
management, and a CLI runner. These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from yang2swagger.models import SchemaContext
from yang2swagger.output import OutputFormat, OutputManager, reset_output, set_output
from yang2swagger.parser import resolve_schema


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test, the cached references go stale once the test finishes.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_logging_between_tests() -> None:
    """Undo the log level and handler installed by the CLI callback.

    ``--quiet`` raises the ``yang2swagger`` logger to ERROR, which would
    hide warnings from ``caplog`` in later tests.
    """
    yield
    logger = logging.getLogger("yang2swagger")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Schema fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def network_path() -> Path:
    return FIXTURES_DIR / "network.yaml"


@pytest.fixture
def network_raw(network_path: Path) -> dict[str, Any]:
    """Raw network schema document (two modules, augment, groupings, RPCs)."""
    with open(network_path) as f:
        return yaml.safe_load(f)


@pytest.fixture
def network_context(network_raw: dict[str, Any]) -> SchemaContext:
    """The network schema, resolved."""
    return resolve_schema(network_raw)


@pytest.fixture
def make_context() -> Callable[..., SchemaContext]:
    """Build a resolved context from module mappings.

    Example::

        context = make_context({"name": "m", "data": [...]})
    """

    def _make(*modules: dict[str, Any]) -> SchemaContext:
        return resolve_schema({"modules": list(modules)})

    return _make


@pytest.fixture
def scenario_context(make_context: Callable[..., SchemaContext]) -> SchemaContext:
    """Module ``M``: container ``A`` (config) > list ``B`` (operational, key ``id``) > leaf ``x``."""
    return make_context(
        {
            "name": "M",
            "data": [
                {
                    "kind": "container",
                    "name": "A",
                    "children": [
                        {
                            "kind": "list",
                            "name": "B",
                            "config": False,
                            "key": "id",
                            "children": [
                                {"kind": "leaf", "name": "id", "type": "string"},
                                {"kind": "leaf", "name": "x", "type": "int32"},
                            ],
                        }
                    ],
                }
            ],
        }
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no YANG2SWAGGER_* variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in [
        "YANG2SWAGGER_HOST",
        "YANG2SWAGGER_BASE_PATH",
        "YANG2SWAGGER_FORMAT",
        "YANG2SWAGGER_STRATEGY",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
