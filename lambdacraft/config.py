"""Process-wide settings and logging setup for lambdacraft.

Settings are read once from the environment on import:
    LAMBDACRAFT_MAX_STEPS   safety bound on linked traversals ("0" or "none" disables it)
    LAMBDACRAFT_LOG_LEVEL   level used by setup_logging when none is given
"""

from dataclasses import dataclass, fields
import logging
import os
import sys

from lambdacraft.error import InvalidArgument

DEFAULT_MAX_STEPS = 10_000_000
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def check_max_steps(max_steps):
    """Returns max_steps if it is a usable traversal bound (positive int or None), raises InvalidArgument otherwise."""
    if max_steps is None:
        return None
    if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps <= 0:
        raise InvalidArgument("max_steps must be a positive integer or None, got {}", (max_steps,))
    return max_steps


def check_log_level(level):
    if not isinstance(level, str) or level.upper() not in LEVELS:
        raise InvalidArgument("log level must be one of {}, got {}", (LEVELS, level))
    return level.upper()


@dataclass
class Settings:
    """Defaults shared by every combinator call. Per-call arguments take precedence."""
    max_steps: int = DEFAULT_MAX_STEPS
    log_level: str = "WARNING"

    def __post_init__(self):
        self.max_steps = check_max_steps(self.max_steps)
        self.log_level = check_log_level(self.log_level)

    @classmethod
    def from_env(cls, environ=None):
        """Builds Settings from LAMBDACRAFT_* variables, falling back to defaults for unset ones."""
        if environ is None:
            environ = os.environ

        kwargs = {}
        raw_steps = environ.get("LAMBDACRAFT_MAX_STEPS")
        if raw_steps is not None:
            raw_steps = raw_steps.strip().lower()
            if raw_steps in ("0", "none"):
                kwargs["max_steps"] = None
            else:
                try:
                    kwargs["max_steps"] = int(raw_steps)
                except ValueError:
                    raise InvalidArgument("LAMBDACRAFT_MAX_STEPS must be an integer, got {}", (raw_steps,))

        raw_level = environ.get("LAMBDACRAFT_LOG_LEVEL")
        if raw_level is not None:
            kwargs["log_level"] = raw_level.strip()

        return cls(**kwargs)


settings = Settings.from_env()


def configure(**changes):
    """Validates and applies changes to the global settings. Returns the previous values of the changed fields, so
    callers can restore them with configure(**previous).
    """
    known = {field.name for field in fields(Settings)}
    for name in changes:
        if name not in known:
            raise InvalidArgument("unknown setting {}", (name,))

    checked = Settings(**{**{name: getattr(settings, name) for name in known}, **changes})
    previous = {name: getattr(settings, name) for name in changes}
    for name in changes:
        setattr(settings, name, getattr(checked, name))
    return previous


def setup_logging(level=None, log_file=None):
    """Configure logging for a host program using lambdacraft. The library itself never calls this.

    :param level: logging level name, defaults to settings.log_level
    :param log_file: optional path to log file, logs to stdout if None
    """
    level = check_log_level(level if level is not None else settings.log_level)

    config = {"level": getattr(logging, level), "format": LOG_FORMAT}
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        config["filename"] = log_file
    else:
        config["stream"] = sys.stdout

    logging.basicConfig(**config)
    logging.getLogger(__name__).info("Logging initialized at %s level", level)


def get_logger(name):
    """Returns the logger for name, typically __name__ of the calling module."""
    return logging.getLogger(name)
