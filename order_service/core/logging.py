from __future__ import annotations

import logging

from order_service.core.config import get_settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured

    settings = get_settings()
    resolved = (level or settings.log_level).upper()

    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.log_format))
        root.addHandler(handler)
        _configured = True
    root.setLevel(resolved)
