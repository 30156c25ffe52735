from __future__ import annotations
from dataclasses import dataclass, fields, replace
from importlib.resources import files as importlib_files
from pathlib import Path
from typing import Any, Dict, Optional, TextIO
import logging

from data_calc.config.yaml_io import read_yaml
from data_calc.utils.logging_utils import setup_logger, PACKAGE_LOGGER_NAME

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class CalcConfig:
    """
    Runtime settings shared by the distance, algebra and tree routines.

    Attributes
    ----------
    n_jobs : int
        Worker count for thread fan-out in `parallel_map`. 1 runs
        sequentially, -1 uses every core, >1 uses that many threads.
    max_recursion_depth : int
        Upper bound on the depth of the recursive routines (memoized edit
        distance, random tree generation). Kept below the interpreter's
        default recursion limit.
    hamming_bit_width : int
        Word width used to read a negative XOR as an unsigned bit pattern in
        the integer Hamming distance.
    verbose : bool
        If True, long loops display a tqdm progress bar.
    log_level : str
        Level name applied to the package logger by `configure_logging`.
    """
    n_jobs: int = 1
    max_recursion_depth: int = 800
    hamming_bit_width: int = 64
    verbose: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError(f"n_jobs must be -1 or a positive integer, got {self.n_jobs}.")
        if self.max_recursion_depth < 1:
            raise ValueError(f"max_recursion_depth must be positive, got {self.max_recursion_depth}.")
        if self.hamming_bit_width not in (32, 64):
            raise ValueError(f"hamming_bit_width must be 32 or 64, got {self.hamming_bit_width}.")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{self.log_level}'.")


DEFAULT_CONFIG = CalcConfig()


def resolve_config(config: Optional[CalcConfig]) -> CalcConfig:
    """Returns `config`, or `DEFAULT_CONFIG` when it is None."""
    return DEFAULT_CONFIG if config is None else config


def load_config(yaml_path: str | Path, base: Optional[CalcConfig] = None) -> CalcConfig:
    """
    Builds a `CalcConfig` from a YAML file.

    Keys present in the file override the matching fields of `base` (or of
    the defaults). The file may be empty.

    Parameters
    ----------
    yaml_path : str | Path
        Path to a `.yml` or `.yaml` file holding a flat mapping.
    base : Optional[CalcConfig], optional
        Configuration supplying the values of absent keys.

    Returns
    -------
    CalcConfig
        The merged, validated configuration.

    Raises
    ------
    ValueError
        If the file is not YAML, contains unknown keys or invalid values.
    """
    raw: Dict[str, Any] = read_yaml(yaml_path)
    known = {f.name for f in fields(CalcConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning(f"Rejected configuration keys in {yaml_path}: {unknown}")
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    config = replace(resolve_config(base), **raw)
    logger.debug(f"Loaded configuration from {yaml_path}: {config}")
    return config


def load_default_config() -> CalcConfig:
    """Loads the settings bundled with the package in `data/calc_config.yaml`."""
    yaml_path = importlib_files("data_calc") / "data" / "calc_config.yaml"
    return load_config(str(yaml_path))


def configure_logging(
    config: Optional[CalcConfig] = None,
    log_file: Optional[str | Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attaches handlers to the package logger at the level named in
    `config.log_level`.

    Parameters
    ----------
    config : Optional[CalcConfig], optional
        Supplies `log_level`; `DEFAULT_CONFIG` when None.
    log_file : Optional[str | Path], optional
        Also append records to this file.
    stream : Optional[TextIO], optional
        Console stream, by default `sys.stdout`.
    """
    config = resolve_config(config)
    level = logging.getLevelName(config.log_level.upper())
    return setup_logger(name=PACKAGE_LOGGER_NAME, level=level, log_file=log_file, stream=stream)
