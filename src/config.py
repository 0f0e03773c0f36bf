"""Runtime configuration for Concertina Fingering.

Holds the package-relative locations of the YAML configuration files and
the logging setup used by the CLI and the Streamlit app.
The engine itself never configures logging; it only emits records.
"""

from __future__ import annotations

import logging
from pathlib import Path


# ── Config paths ──────────────────────────────────────────────
# Shipped as package data next to this module, so regular installs find them.
CONFIG_DIR: Path = Path(__file__).resolve().parent / "configs"
DEFAULT_COSTS_PATH: Path = CONFIG_DIR / "fingering_costs.yaml"
DEFAULT_LAYOUT_PATH: Path = CONFIG_DIR / "layouts" / "jeffries_30.yaml"

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for command-line and app use.

    Args:
        verbose: If ``True``, emit the engine's DEBUG traces (resolved key,
            extracted notes, chosen buttons). Otherwise only warnings.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging initialised (verbose=%s)", verbose)
