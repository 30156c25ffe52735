from data_calc.config.calc_config import (
    CalcConfig,
    DEFAULT_CONFIG,
    load_config,
    load_default_config,
    resolve_config,
    configure_logging,
)

__all__ = [
    "CalcConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "load_default_config",
    "resolve_config",
    "configure_logging",
]
