from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from taskboard.domain.entities import CardRef
from taskboard.domain.enums import COLUMN_TITLES, TaskStatus
from taskboard.domain.errors import TaskSaveError
from taskboard.services.board import BoardModel, CardState

from .dialogs import AddTaskDialog, CommentsDialog
from .widgets import KanbanListWidget, TaskCardWidget


class KanbanWindow(QWidget):
    def __init__(self, model: BoardModel, parent=None):
        super().__init__(parent)
        self.model = model
        self.setWindowTitle("TaskBoard")
        self.resize(1200, 700)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        self.columns: dict[TaskStatus, KanbanListWidget] = {}
        for status, title in COLUMN_TITLES.items():
            column = QVBoxLayout()
            header = QHBoxLayout()
            label = QLabel(title)
            label.setProperty("class", "panel-title")
            add_button = QPushButton("+")
            add_button.setProperty("variant", "ghost")
            add_button.setFixedWidth(32)
            add_button.clicked.connect(lambda _checked=False, s=status: self.open_add_task(s))
            header.addWidget(label)
            header.addStretch()
            header.addWidget(add_button)

            list_widget = KanbanListWidget(status, self.on_drag_start, self.on_drop, self.on_drag_cancel)
            list_widget.setObjectName("KanbanList")
            column.addLayout(header)
            column.addWidget(list_widget)
            layout.addLayout(column, 1)
            self.columns[status] = list_widget

        self.model.subscribe(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        for status, list_widget in self.columns.items():
            list_widget.clear()
            for task in self.model.column(status):
                item = QListWidgetItem()
                list_widget.addItem(item)
                item.setData(Qt.UserRole, task.id)
                widget = TaskCardWidget(task, self.on_percent, self.on_delete, self.on_comments)
                widget.set_dragging(self.model.state_of(task.id) == CardState.DRAGGING)
                item.setSizeHint(widget.sizeHint())
                list_widget.setItemWidget(item, widget)
            list_widget.sync_item_sizes()

    def on_drag_start(self, ref: CardRef) -> None:
        self.model.begin_drag(ref)

    def on_drop(self, target: CardRef) -> None:
        # Re-rendering clears the source list, so wait until the drag has returned.
        QTimer.singleShot(0, lambda: self.model.end_drag(target))

    def on_drag_cancel(self) -> None:
        if self.model.active_task is not None:
            self.model.end_drag(None)

    def on_percent(self, task_id: int, delta: int) -> None:
        self.model.increment_percent(task_id, delta)

    def on_delete(self, task_id: int) -> None:
        task = self.model.find(task_id)
        if task is None or not self.model.request_delete(task_id):
            return
        confirm = QMessageBox.question(
            self,
            "Delete task",
            f"Delete \"{task.name}\"?",
            QMessageBox.Yes | QMessageBox.No,
        )
        if confirm != QMessageBox.Yes:
            self.model.cancel_delete()
            return
        self.model.confirm_delete()

    def on_comments(self, task_id: int) -> None:
        task = self.model.find(task_id)
        if task is None:
            return
        comments = self.model.load_comments(task_id)
        dialog = CommentsDialog(
            task.name,
            comments,
            lambda message: self.model.add_comment(task_id, message),
            self,
        )
        dialog.exec()

    def open_add_task(self, status: TaskStatus) -> None:
        dialog = AddTaskDialog(status, self)
        if dialog.exec() != QDialog.Accepted:
            return
        try:
            self.model.add_task(status, dialog.draft())
        except TaskSaveError as exc:
            QMessageBox.warning(self, "Save failed", f"The task could not be saved.\n{exc.cause}")
