from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QStackedWidget,
    QSizePolicy,
    QLabel,
    QFileDialog,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt
from importlib import import_module
from pathlib import Path
import logging
import sqlite3
import sys

from .constants import APP_NAME, STYLE_FILE
from .database import get_connection
from .database.backup import create_backup
from .modules.base_module import BaseModule
from .utils.helpers import today_str
from .utils.loggers import get_logger
from .utils.ui_helpers import wrap_center, info, error

_log = logging.getLogger(__name__)


def load_qss() -> str:
    qss = ""
    f = Path(__file__).resolve().parent / STYLE_FILE
    if f.exists():
        qss = f.read_text(encoding="utf-8")
    return qss


def _lazy_get(name: str, attr: str):
    """Import a module by name and fetch an attribute from it, with a clear error if missing."""
    try:
        mod = import_module(name)
    except ImportError as e:
        raise ImportError(f"Failed to import module '{name}': {e}") from e
    try:
        return getattr(mod, attr)
    except AttributeError as e:
        raise ImportError(f"'{attr}' not found in module '{name}'.") from e


class MainWindow(QMainWindow):
    def __init__(self, conn: sqlite3.Connection):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(820, 520)

        self.conn = conn

        # ---- Central layout: left nav + stacked pages ----
        central = QWidget(self)
        layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        self.nav = QListWidget()
        self.nav.setFixedWidth(120)
        self.nav.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        self.stack = QStackedWidget()

        row = QWidget()
        row_lay = QHBoxLayout(row)
        row_lay.addWidget(self.nav)
        row_lay.addWidget(self.stack, 1)
        layout.addWidget(row, 1)

        # module info for lazy loading; loaded controllers keyed by nav index
        self.module_info: list[dict] = []
        self.modules: dict[int, BaseModule] = {}

        self.nav.currentRowChanged.connect(self._on_nav_item_changed)

        self._add_module_deferred(
            "Dashboard", "pharmacy_pos.modules.dashboard.controller", "DashboardController"
        )
        self._add_module_deferred(
            "Sales History", "pharmacy_pos.modules.sales_history.controller", "SalesHistoryController"
        )

        self._build_menu()

        if self.nav.count():
            self.nav.setCurrentRow(0)
            self._load_module_at_index(0)

    # ---------- menu ----------
    def _build_menu(self):
        file_menu = self.menuBar().addMenu("&File")
        backup_action = QAction("Backup Database…", self)
        backup_action.triggered.connect(self._backup_database)
        file_menu.addAction(backup_action)
        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    def _backup_database(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Backup Database", f"pharmacy-{today_str()}.db", "SQLite database (*.db)"
        )
        if not path:
            return
        try:
            create_backup(self.conn, path)
        except (sqlite3.Error, OSError) as e:
            _log.warning("backup to %s failed: %s", path, e)
            error(self, "Backup failed", str(e))
            return
        info(self, "Backup", f"Database copied to:\n{path}")

    # ---------- lazy modules ----------
    def _add_module_deferred(self, title: str, module_path: str, class_name: str):
        self.module_info.append({
            "title": title,
            "module_path": module_path,
            "class_name": class_name,
        })
        self.nav.addItem(QListWidgetItem(title))
        self.stack.addWidget(wrap_center(QLabel(f"Loading {title}...")))

    def _on_nav_item_changed(self, index: int):
        if 0 <= index < len(self.module_info):
            self._load_module_at_index(index)

    def _load_module_at_index(self, index: int):
        if index not in self.modules:
            self._load_module(index)
        self.stack.setCurrentIndex(index)

    def _load_module(self, index: int):
        info_ = self.module_info[index]
        QApplication.setOverrideCursor(Qt.WaitCursor)
        try:
            Controller = _lazy_get(info_["module_path"], info_["class_name"])
            controller = Controller(self.conn)
            self._replace_widget(index, controller.get_widget())
            self.modules[index] = controller
        except (ImportError, sqlite3.Error) as e:
            _log.exception("module %s failed to load", info_["title"])
            self._replace_widget(index, wrap_center(QLabel(f"{info_['title']}\n\nLoading failed: {e}")))
        finally:
            QApplication.restoreOverrideCursor()

    def _replace_widget(self, index: int, widget: QWidget):
        current = self.stack.widget(index)
        self.stack.removeWidget(current)
        current.deleteLater()
        self.stack.insertWidget(index, widget)

    def controller(self, title: str):
        """Loaded controller for a nav title (loads it on demand)."""
        for i, info_ in enumerate(self.module_info):
            if info_["title"] == title:
                self._load_module_at_index(i)
                return self.modules.get(i)
        return None


def main():
    get_logger()

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    conn = get_connection()

    qss = load_qss()
    if qss:
        app.setStyleSheet(qss)

    win = MainWindow(conn)
    win.resize(1000, 620)
    win.show()
    code = app.exec()
    conn.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
