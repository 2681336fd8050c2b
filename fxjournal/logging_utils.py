"""
Logging utilities.

Primary goals:
- One log format for the CLI and library use.
- Keep a trader's private journal text (notes, emotions) out of logs.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

JOURNAL_TEXT_FIELDS = (
    "notes",
    "emotions_before",
    "emotions_during",
    "emotions_after",
    "emotionsBefore",
    "emotionsDuring",
    "emotionsAfter",
)


class RedactJournalTextFilter(logging.Filter):
    """
    Best-effort redaction of free-text journal fields in log messages.

    Only redacts ``field=value`` and ``'field': 'value'`` shapes, which is
    how trade records end up in log lines (reprs and f-strings).
    """

    _fields = "|".join(JOURNAL_TEXT_FIELDS)
    _kv_re = re.compile(rf"\b({_fields})=('[^']*'|\"[^\"]*\"|[^\s,)]+)")
    _dict_re = re.compile(rf"(['\"]({_fields})['\"]\s*:\s*)('[^']*'|\"[^\"]*\")")

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 (Filter.filter)
        try:
            msg = record.getMessage()
        except Exception:
            return True

        redacted = self._kv_re.sub(lambda m: f"{m.group(1)}=REDACTED", msg)
        redacted = self._dict_re.sub(lambda m: f"{m.group(1)}'REDACTED'", redacted)

        if redacted != msg:
            # Replace the fully formatted message to avoid re-formatting with args.
            record.msg = redacted
            record.args = ()
        return True


_FILTER_NAME = "fxjournal_redact_journal_text"


def _has_filter(filters: Iterable[logging.Filter], name: str) -> bool:
    return any(getattr(f, "name", None) == name for f in filters)


def install_log_safety() -> None:
    """Attach the journal-text redaction filter to the root logger and its handlers."""
    redact_filter = RedactJournalTextFilter()
    redact_filter.name = _FILTER_NAME  # type: ignore[attr-defined]

    root = logging.getLogger()
    if not _has_filter(root.filters, _FILTER_NAME):
        root.addFilter(redact_filter)
    for handler in root.handlers:
        if not _has_filter(handler.filters, _FILTER_NAME):
            handler.addFilter(redact_filter)


def configure_logging(level: str | int = "INFO") -> None:
    """Configure basic logging and install log safety defaults."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    install_log_safety()
