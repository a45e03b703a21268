from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from taskboard.domain.drafts import TaskDraft
from taskboard.domain.entities import CommentEntity
from taskboard.domain.enums import (
    COLUMN_TITLES,
    MAX_IMPORTANCE,
    MAX_PERCENT,
    MIN_IMPORTANCE,
    MIN_PERCENT,
    TaskStatus,
)

FIELD_LABELS = {
    "category": "Category",
    "name": "Name",
    "success_percent": "% complete",
    "importance": "Importance",
    "timeline_days": "Timeline",
}


class AddTaskDialog(QDialog):
    """Collects a :class:`TaskDraft`; the add button stays disabled until the
    whole draft is valid."""

    def __init__(self, status: TaskStatus, parent=None):
        super().__init__(parent)
        self.status = status
        self.setWindowTitle(f"New task - {COLUMN_TITLES[status]}")
        self.setObjectName("AddTaskDialog")
        self.resize(400, 360)

        self.category_input = QLineEdit()
        self.name_input = QLineEdit()

        # A spin box at its minimum shows blank text and counts as "not entered".
        self.percent_input = QSpinBox()
        self.percent_input.setRange(MIN_PERCENT - 1, MAX_PERCENT)
        self.percent_input.setSpecialValueText(" ")
        self.percent_input.setValue(MIN_PERCENT - 1)

        self.importance_input = QSpinBox()
        self.importance_input.setRange(MIN_IMPORTANCE - 1, MAX_IMPORTANCE)
        self.importance_input.setSpecialValueText(" ")
        self.importance_input.setValue(MIN_IMPORTANCE - 1)

        self.timeline_input = QDoubleSpinBox()
        self.timeline_input.setDecimals(0)
        self.timeline_input.setRange(0, 3650)
        self.timeline_input.setSuffix(" days")
        self.timeline_input.setSpecialValueText(" ")
        self.timeline_input.setValue(0)

        self.comment_input = QPlainTextEdit()
        self.comment_input.setPlaceholderText("First comment (optional)")
        self.comment_input.setFixedHeight(60)

        self.error_label = QLabel()
        self.error_label.setObjectName("FormErrors")
        self.error_label.setWordWrap(True)

        form = QFormLayout()
        form.addRow("Category", self.category_input)
        form.addRow("Name", self.name_input)
        form.addRow("% complete (0-100)", self.percent_input)
        form.addRow("Importance (1-5)", self.importance_input)
        form.addRow("Timeline", self.timeline_input)
        form.addRow("Comment", self.comment_input)

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.setProperty("variant", "ghost")
        self.cancel_button.clicked.connect(self.reject)
        self.submit_button = QPushButton("Add")
        self.submit_button.clicked.connect(self._submit)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(self.cancel_button)
        buttons.addWidget(self.submit_button)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(self.error_label)
        layout.addLayout(buttons)

        for line_edit in (self.category_input, self.name_input):
            line_edit.textChanged.connect(self._revalidate)
        for spin in (self.percent_input, self.importance_input, self.timeline_input):
            spin.valueChanged.connect(self._revalidate)
        self._revalidate()

    def draft(self) -> TaskDraft:
        def _value(spin, minimum):
            value = spin.value()
            return None if value < minimum else value

        return TaskDraft(
            category=self.category_input.text(),
            name=self.name_input.text(),
            success_percent=_value(self.percent_input, MIN_PERCENT),
            importance=_value(self.importance_input, MIN_IMPORTANCE),
            timeline_days=_value(self.timeline_input, 1),
            initial_comment=self.comment_input.toPlainText(),
        )

    def _revalidate(self) -> None:
        errors = self.draft().errors()
        self.submit_button.setEnabled(not errors)
        self.error_label.setText(
            "\n".join(f"{FIELD_LABELS.get(field, field)}: {message}" for field, message in errors.items())
        )

    def _submit(self) -> None:
        if self.draft().is_valid:
            self.accept()


class CommentsDialog(QDialog):
    def __init__(self, task_name: str, comments: list[CommentEntity], on_submit, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"Comments - {task_name}")
        self.resize(420, 380)
        self._on_submit = on_submit

        self.comment_list = QListWidget()
        self.comment_list.setObjectName("CommentList")
        self.comment_list.setWordWrap(True)
        for comment in comments:
            self._append(comment)

        self.message_input = QPlainTextEdit()
        self.message_input.setPlaceholderText("Write a comment")
        self.message_input.setFixedHeight(70)

        send_button = QPushButton("Send")
        send_button.clicked.connect(self._send)
        close_button = QPushButton("Close")
        close_button.setProperty("variant", "ghost")
        close_button.clicked.connect(self.accept)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(close_button)
        buttons.addWidget(send_button)

        layout = QVBoxLayout(self)
        layout.addWidget(self.comment_list)
        layout.addWidget(self.message_input)
        layout.addLayout(buttons)

    def _append(self, comment: CommentEntity) -> None:
        self.comment_list.addItem(f"{comment.author} ({comment.date})\n{comment.message}")

    def _send(self) -> None:
        comment = self._on_submit(self.message_input.toPlainText())
        if comment is None:
            return
        self._append(comment)
        self.message_input.clear()
