import logging
import re
from typing import Iterable


# Leaf values are logged with %r, so a quoted repr (escapes included) is masked
# whole; unquoted values are masked up to the next whitespace.
_LEAF_VALUE = re.compile(
    r"(value=)('(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|\S+)", re.IGNORECASE
)


class RedactingFilter(logging.Filter):
    """Mask raw leaf values in log records; hashes and indices pass through."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = str(record.getMessage())
        record.msg = _LEAF_VALUE.sub(r"\1***", msg)
        record.args = None
        return True


def setup_logging(
    level: int = logging.INFO,
    loggers: Iterable[str] = ("hashtree", "uvicorn", "uvicorn.access"),
) -> None:
    logging.basicConfig(level=level)
    f = RedactingFilter()
    # Logger filters skip records propagated from child loggers such as
    # hashtree.main, so the root handlers carry the filter too.
    for handler in logging.getLogger().handlers:
        if not any(isinstance(x, RedactingFilter) for x in handler.filters):
            handler.addFilter(f)
    for name in loggers:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.addFilter(f)
