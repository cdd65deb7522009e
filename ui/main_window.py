import os

from PySide6.QtCore import QObject, Signal, QThread, Qt
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QLineEdit,
    QFileDialog,
    QMessageBox,
    QGroupBox,
    QFormLayout,
    QProgressBar,
    QListWidget,
)

from artifacts.logger import RunLogger
from domain.constants import RUN_STATUS_FATAL
from domain.errors import TypeCopierError
from domain.models import CopyRequest, ProgressSnapshot, RunResult
from services.run_service import RunService


class Worker(QObject):
    progress = Signal(str)
    copy_progress = Signal(int, int, str, str)  # (copied, total, src, dst)
    log_line = Signal(str)
    finished = Signal(object)  # RunResult

    def __init__(self, request: CopyRequest):
        super().__init__()
        self.request = request
        self.runner = RunService(RunLogger(echo=self.log_line.emit))

    def run(self):
        def cp(snap: ProgressSnapshot):
            self.copy_progress.emit(snap.copied, snap.total, snap.source_path, snap.dest_path)
            self.progress.emit(self.runner.report.progress_line(snap))

        try:
            result = self.runner.run(self.request, progress_cb=cp, stage_cb=self.progress.emit)
        except Exception as e:
            result = self.runner.report.fatal(TypeCopierError(f"{type(e).__name__}: {e}"))
        self.finished.emit(result)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("File Copier")

        self.worker = None
        self.thread = None

        self.setCentralWidget(self._build_form())
        self._update_run_button()

    def _build_form(self):
        w = QWidget()
        v = QVBoxLayout(w)
        v.setContentsMargins(24, 24, 24, 24)
        v.setSpacing(14)

        title = QLabel("File Copier")
        title.setStyleSheet("font-size: 18px; font-weight: 600;")
        v.addWidget(title)

        card = QGroupBox("Copy files by type")
        form = QFormLayout(card)
        form.setLabelAlignment(Qt.AlignLeft)
        form.setHorizontalSpacing(12)
        form.setVerticalSpacing(10)

        self.ext_edit = QLineEdit()
        self.ext_edit.setPlaceholderText("jpg, pdf, txt…")
        self.ext_edit.setToolTip("Enter the file extension without the dot")
        self.ext_edit.setMinimumHeight(34)

        self.source_edit = QLineEdit()
        self.source_edit.setReadOnly(True)
        self.source_edit.setMinimumHeight(34)

        self.dest_edit = QLineEdit()
        self.dest_edit.setReadOnly(True)
        self.dest_edit.setMinimumHeight(34)

        def pick_into(edit: QLineEdit, title_txt: str):
            p = QFileDialog.getExistingDirectory(self, title_txt)
            if p:
                edit.setText(p)

        src_row = QHBoxLayout()
        src_row.addWidget(self.source_edit, 1)
        src_btn = QPushButton("Browse…")
        src_btn.clicked.connect(lambda: pick_into(self.source_edit, "Select Source Folder"))
        src_row.addWidget(src_btn)

        dst_row = QHBoxLayout()
        dst_row.addWidget(self.dest_edit, 1)
        dst_btn = QPushButton("Browse…")
        dst_btn.clicked.connect(lambda: pick_into(self.dest_edit, "Select Destination Folder"))
        dst_row.addWidget(dst_btn)

        form.addRow("File type", self.ext_edit)
        form.addRow("Source folder", src_row)
        form.addRow("Destination folder", dst_row)
        v.addWidget(card)

        for edit in (self.ext_edit, self.source_edit, self.dest_edit):
            edit.textChanged.connect(self._update_run_button)

        self.run_btn = QPushButton("Copy files")
        self.run_btn.setMinimumHeight(36)
        self.run_btn.clicked.connect(self.start_copy)
        v.addWidget(self.run_btn)

        self.progress_bar = QProgressBar()
        self.progress_bar.setMinimum(0)
        self.progress_bar.setMaximum(1)
        self.progress_bar.setValue(0)
        self.progress_bar.setTextVisible(True)
        v.addWidget(self.progress_bar)

        self.stage_label = QLabel("")
        self.stage_label.setWordWrap(True)
        v.addWidget(self.stage_label)

        self.progress_detail = QLabel("")
        self.progress_detail.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.progress_detail.setStyleSheet("color: #444;")
        v.addWidget(self.progress_detail)

        v.addWidget(QLabel("Log"))
        self.log_list = QListWidget()
        v.addWidget(self.log_list, 1)

        return w

    def _inputs(self):
        return (
            self.ext_edit.text().strip(),
            self.source_edit.text().strip(),
            self.dest_edit.text().strip(),
        )

    def can_start(self) -> bool:
        return all(self._inputs()) and self.thread is None

    def _update_run_button(self):
        self.run_btn.setEnabled(self.can_start())
        self.run_btn.setText("Copying…" if self.thread else "Copy files")

    def start_copy(self):
        if not self.can_start():
            return
        ext, source_root, dest_root = self._inputs()

        if not os.path.isdir(source_root):
            QMessageBox.warning(self, "Invalid source", "Source folder does not exist.")
            return

        self.progress_bar.setMaximum(0)  # indeterminate while searching
        self.progress_detail.setText("")
        self.log_list.clear()

        self.thread = QThread()
        self.worker = Worker(CopyRequest(extension=ext, source_root=source_root, dest_root=dest_root))
        self.worker.moveToThread(self.thread)

        self.worker.progress.connect(self.stage_label.setText)
        self.worker.copy_progress.connect(self.on_copy_progress)
        self.worker.log_line.connect(self.log_list.addItem)
        self.worker.finished.connect(self.on_worker_finished)

        self.thread.started.connect(self.worker.run)
        self.thread.start()
        self._update_run_button()

    def on_copy_progress(self, copied, total, src, dst):
        self.progress_bar.setMaximum(total)
        self.progress_bar.setValue(copied)
        self.progress_bar.setFormat(f"{copied}/{total}")
        self.progress_detail.setText(f"{src}\n→ {dst}")

    def on_worker_finished(self, result: RunResult):
        if self.thread:
            self.thread.quit()
            self.thread.wait()
        self.thread = None
        self.worker = None
        self._update_run_button()

        self.progress_bar.setMaximum(max(result.outcome.total, 1))
        self.progress_bar.setValue(result.outcome.successes)

        if result.status == RUN_STATUS_FATAL:
            self.stage_label.setText("Failed")
            QMessageBox.critical(self, "Failed", result.message)
            return

        o = result.outcome
        self.stage_label.setText(f"{o.successes} files copied, {o.failures} errors")
        QMessageBox.information(self, "Done", result.message)
