"""
Qt integration helpers for long-running work.

Generation runs on the caller's thread. Between iterations it hands control
back to the Qt event loop (when the host runs one) so windows keep painting,
and progress can be delivered through a Qt signal.
"""

import logging
from typing import Any

from PySide6.QtCore import QCoreApplication, QObject, Signal

logger = logging.getLogger(__name__)


def process_events() -> bool:
    """Let a running Qt application process pending events.

    Returns:
        True if a Qt application instance was found and pumped
    """
    app = QCoreApplication.instance()
    if app is None:
        return False
    app.processEvents()
    return True


class ProgressEmitter(QObject):
    """Qt object re-emitting batch progress as a signal.

    Pass an instance wherever a progress sink is accepted; connect
    `progress` to the widget that displays it.
    """

    progress = Signal(object)

    def __call__(self, update: Any) -> None:
        self.progress.emit(update)  # type: ignore
