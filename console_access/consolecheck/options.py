"""Runtime options: options file first, environment as fallback."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from consolecheck.validator.pipeline import DEFAULT_REGION

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Options(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default_region: str = DEFAULT_REGION
    dev_mode: bool = False


def load_options() -> Options:
    """Load options from CONSOLECHECK_OPTIONS_PATH or env fallback."""
    opts_path = os.environ.get("CONSOLECHECK_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return Options.model_validate(json.loads(Path(opts_path).read_text()))
    return Options(
        default_region=os.environ.get("CONSOLECHECK_DEFAULT_REGION", DEFAULT_REGION),
        dev_mode=bool(os.environ.get("CONSOLECHECK_DEV_MODE")),
    )


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
    )
