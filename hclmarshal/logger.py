from typing import NotRequired, TypedDict
import logging
from hclmarshal.utils import resolve_config


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "hclmarshal",
    "is_enabled": True,
    "level": logging.DEBUG,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class Logger:
    """Named logger that only configures itself when enabled.

    A disabled Logger leaves the shared ``logging`` logger untouched; callers
    check ``is_enabled`` before logging.
    """

    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.logger = logging.getLogger(self.config["name"])
        if self.is_enabled:
            self.set_configuration()

    @property
    def is_enabled(self) -> bool:
        return self.config["is_enabled"]

    def set_configuration(self):
        if self.logger.level == logging.NOTSET or self.logger.level > self.config["level"]:
            self.logger.setLevel(self.config["level"])
        if any(isinstance(handler, _StreamHandler) for handler in self.logger.handlers):
            return
        handler = _StreamHandler()
        handler.setFormatter(logging.Formatter(self.config["format"]))
        self.logger.addHandler(handler)


class _StreamHandler(logging.StreamHandler):
    pass
