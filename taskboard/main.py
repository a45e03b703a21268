from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication, QMessageBox, QStyleFactory

from taskboard.config import PROJECT_ROOT, SETTINGS
from taskboard.infra.logging import setup_logging
from taskboard.services.board import BoardModel
from taskboard.services.gateway import BoardGateway, LocalGateway, PersistenceDispatcher
from taskboard.ui.kanban import KanbanWindow

logger = logging.getLogger(__name__)


def _apply_light_palette(app: QApplication) -> None:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor("#F0F5FF"))
    palette.setColor(QPalette.WindowText, QColor("#161A3E"))
    palette.setColor(QPalette.Base, QColor("#FFFFFF"))
    palette.setColor(QPalette.AlternateBase, QColor("#ECF2FF"))
    palette.setColor(QPalette.Text, QColor("#161A3E"))
    palette.setColor(QPalette.Button, QColor("#FFFFFF"))
    palette.setColor(QPalette.ButtonText, QColor("#161A3E"))
    palette.setColor(QPalette.Highlight, QColor("#1161FF"))
    palette.setColor(QPalette.HighlightedText, QColor("#FFFFFF"))
    app.setPalette(palette)


def _find_qss_path() -> Path | None:
    candidates = [
        Path(__file__).resolve().parent / "ui" / "styles.qss",
        PROJECT_ROOT / "taskboard" / "ui" / "styles.qss",
    ]
    for path in candidates:
        if path.exists():
            return path
    return None


def load_styles(app: QApplication) -> None:
    qss_path = _find_qss_path()
    if not qss_path:
        return
    app.setStyleSheet(qss_path.read_text(encoding="utf-8"))


def build_gateway() -> BoardGateway:
    if SETTINGS.api_base_url:
        from taskboard.infra.api_client import HttpGateway

        logger.info("Using board API at %s", SETTINGS.api_base_url)
        return HttpGateway(SETTINGS.api_base_url, timeout=SETTINGS.http_timeout)

    from taskboard.infra.repository import CommentRepository, TaskRepository
    from taskboard.infra.store import build_store
    from taskboard.services.task_service import CommentService, TaskService

    store = build_store(SETTINGS)
    logger.info("Using local %s store", store.backend)
    return LocalGateway(TaskService(TaskRepository(store)), CommentService(CommentRepository(store)))


def main() -> None:
    setup_logging()
    app = QApplication(sys.argv)
    try:
        gateway = build_gateway()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Could not open the board store")
        QMessageBox.critical(None, "Storage error", str(exc))
        return

    app.setStyle(QStyleFactory.create("Fusion"))
    _apply_light_palette(app)
    app.setFont(QFont("Poppins", 10))
    load_styles(app)

    dispatcher = PersistenceDispatcher(gateway)
    model = BoardModel(gateway, dispatcher, author=SETTINGS.comment_author)
    if not model.load():
        QMessageBox.warning(None, "Load failed", "The board could not be loaded. See the log for details.")

    window = KanbanWindow(model)
    window.show()
    exit_code = app.exec()
    dispatcher.shutdown(wait=True)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
