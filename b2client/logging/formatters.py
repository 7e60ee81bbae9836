import logging
import re

PREFIX = "b2client: "


class B2ClientLogFormatter(logging.Formatter):
    """Console formatter: prefixed messages, failures (warning and above) in red."""

    red = "\x1b[31;1m"
    reset = "\x1b[0m"

    def __init__(self):
        super().__init__(f"{PREFIX}%(message)s")

    def format(self, record):
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{self.red}{message}{self.reset}"
        return message


class B2ClientLogFileFormatter(logging.Formatter):
    """Formatter for file logging that removes ANSI escape codes."""

    ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    def format(self, record):
        return self.ANSI_ESCAPE_PATTERN.sub("", super().format(record))
