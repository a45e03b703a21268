from __future__ import annotations

from PySide6.QtCore import QMimeData, QSize, Qt
from PySide6.QtGui import QDrag
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QProgressBar,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from taskboard.domain.entities import CardRef, TaskEntity
from taskboard.domain.enums import IMPORTANCE_COLORS, TaskStatus

CARD_MIME_TYPE = "application/x-taskboard-card"

LIGHT_IMPORTANCE = {1, 2}

PERCENT_STEP = 10


def _importance_style(importance: int) -> str:
    background = IMPORTANCE_COLORS.get(importance, "#9CA3AF")
    foreground = "#000000" if importance in LIGHT_IMPORTANCE else "#FFFFFF"
    return f"background-color: {background}; color: {foreground};"


class TaskCardWidget(QWidget):
    def __init__(self, task: TaskEntity, on_percent, on_delete, on_comments, parent=None):
        super().__init__(parent)
        self.task = task

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setMinimumHeight(96)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(4)

        category = QLabel(task.category)
        category.setProperty("class", "task-category")
        category.setStyleSheet(_importance_style(task.importance))
        category.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        name = QLabel(task.name.strip() or "Untitled")
        name.setProperty("class", "task-title")
        name.setWordWrap(True)
        name.setMinimumWidth(0)
        name.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)

        progress = QProgressBar()
        progress.setRange(0, 100)
        progress.setValue(task.success_percent)
        progress.setFormat("%p%")
        progress.setProperty("class", "task-progress")

        meta = QHBoxLayout()
        meta.addWidget(QLabel(f"Importance: {task.importance}"))
        meta.addStretch()
        meta.addWidget(QLabel(task.timeline))

        actions = QHBoxLayout()
        actions.setSpacing(6)
        minus = QPushButton(f"-{PERCENT_STEP}%")
        minus.setProperty("variant", "ghost")
        minus.clicked.connect(lambda: on_percent(task.id, -PERCENT_STEP))
        plus = QPushButton(f"+{PERCENT_STEP}%")
        plus.setProperty("variant", "ghost")
        plus.clicked.connect(lambda: on_percent(task.id, PERCENT_STEP))
        comments = QPushButton("Comments")
        comments.setProperty("variant", "secondary")
        comments.clicked.connect(lambda: on_comments(task.id))
        delete = QPushButton("Delete")
        delete.setProperty("variant", "ghost")
        delete.clicked.connect(lambda: on_delete(task.id))
        actions.addWidget(minus)
        actions.addWidget(plus)
        actions.addStretch()
        actions.addWidget(comments)
        actions.addWidget(delete)

        layout.addWidget(category, 0, Qt.AlignLeft)
        layout.addWidget(name)
        layout.addWidget(progress)
        layout.addLayout(meta)
        layout.addLayout(actions)

    def set_dragging(self, dragging: bool) -> None:
        self.setProperty("dragging", dragging)
        self.style().unpolish(self)
        self.style().polish(self)


class KanbanListWidget(QListWidget):
    """One board column.

    Dragging a card hands a :class:`CardRef` to ``on_drag_start``; dropping
    reports the target card (or ``None`` for the empty area below the last
    card) through ``on_drop``. The list never rearranges its own items: the
    board model decides the result and the window re-renders.
    """

    def __init__(self, status: TaskStatus, on_drag_start, on_drop, on_drag_cancel, parent=None):
        super().__init__(parent)
        self.status = status
        self._on_drag_start = on_drag_start
        self._on_drop = on_drop
        self._on_drag_cancel = on_drag_cancel
        self._h_margin = 12
        self._v_margin = 10
        self.setAcceptDrops(True)
        self.setDragEnabled(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.DragDrop)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self._update_viewport_margins()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.sync_item_sizes()

    def _update_viewport_margins(self) -> None:
        scrollbar_width = self.verticalScrollBar().width() or self.verticalScrollBar().sizeHint().width()
        right_margin = self._h_margin + (scrollbar_width if self.verticalScrollBar().isVisible() else 0)
        self.setViewportMargins(self._h_margin, self._v_margin, right_margin, self._v_margin)

    def sync_item_sizes(self) -> None:
        self._update_viewport_margins()
        viewport_width = self.viewport().width()
        for index in range(self.count()):
            item = self.item(index)
            widget = self.itemWidget(item)
            if widget:
                widget.setMinimumWidth(viewport_width)
                widget.setMaximumWidth(viewport_width)
                widget.adjustSize()
                hint = widget.sizeHint()
                item.setSizeHint(QSize(viewport_width, hint.height()))
                widget.resize(viewport_width, hint.height())

    def startDrag(self, supportedActions: Qt.DropActions) -> None:  # type: ignore[name-defined]
        item = self.currentItem()
        if not item:
            return
        task_id = item.data(Qt.UserRole)
        if not task_id:
            return
        self._on_drag_start(CardRef(self.status, task_id))

        mime = QMimeData()
        mime.setData(CARD_MIME_TYPE, b"card")
        drag = QDrag(self)
        drag.setMimeData(mime)
        widget = self.itemWidget(item)
        if widget:
            drag.setPixmap(widget.grab())
        if drag.exec(Qt.MoveAction) == Qt.IgnoreAction:
            self._on_drag_cancel()

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasFormat(CARD_MIME_TYPE):
            event.acceptProposedAction()

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasFormat(CARD_MIME_TYPE):
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        if not event.mimeData().hasFormat(CARD_MIME_TYPE):
            return
        pos = event.position().toPoint() if hasattr(event, "position") else event.pos()
        item = self.itemAt(pos)
        anchor_id = item.data(Qt.UserRole) if item else None
        event.setDropAction(Qt.MoveAction)
        event.accept()
        self._on_drop(CardRef(self.status, anchor_id))
