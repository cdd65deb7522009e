import sys
from PySide6.QtWidgets import QApplication
from ui.main_window import MainWindow

APP_NAME = "File Copier"

def run_app():
    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    app.setStyleSheet("""
        QMainWindow { background-color: #f6f7f9; }
        QWidget { font-size: 12px; color: #111; }

        QLabel { color: #111; }

        QLineEdit {
        background: #ffffff;
        color: #111;
        border: 1px solid #dcdfe4;
        border-radius: 8px;
        padding: 6px;
    }

        QGroupBox {
        background: #ffffff;
        border: 1px solid #dcdfe4;
        border-radius: 10px;
        margin-top: 14px;
        color: #111;
    }
        QGroupBox::title {
        subcontrol-origin: margin;
        left: 12px;
        padding: 0 6px;
        color: #111;
    }

        QPushButton {
        background: #ffffff;
        color: #111;
        border: 1px solid #dcdfe4;
        border-radius: 8px;
        padding: 8px 14px;
    }
        QPushButton:hover { background: #eef1f5; }
        QPushButton:disabled { color: #888; }
    """)

    app.setApplicationName(APP_NAME)

    w = MainWindow()
    w.resize(560, 420)
    w.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run_app()
