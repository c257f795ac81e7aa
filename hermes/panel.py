#===============================================================================
#  Hermes | panel.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  The overlay window. Translates key presses into navigation events and
#  redraws itself from the controller's state after every transition.
#
#  Keys
#  ----
#    Command : letter/digit select, Enter activate, Backspace back, : search,
#              a apps, w windows (root only), arrows move, Esc close
#    Others  : type to filter, Up/Down move, Enter activate, Esc back
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Dict

from PySide6.QtCore import QEvent, QSize, Qt
from PySide6.QtGui import QColor, QGuiApplication, QIcon
from PySide6.QtWidgets import QLabel, QLineEdit, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from .constants import (
    APP_TITLE,
    BREADCRUMB_SEPARATOR,
    PANEL_ACCENT,
    PANEL_BG,
    PANEL_HEIGHT,
    PANEL_ITEM_BG,
    PANEL_SUBMENU_TEXT,
    PANEL_TEXT,
    PANEL_TEXT_DIM,
    PANEL_WIDTH,
)
from .controller import PanelController
from .icons import IconProvider
from .models import Submenu
from .navigation import (
    Activate,
    Back,
    Cancel,
    KeyPressed,
    Mode,
    MoveSelection,
    QueryChanged,
)

FOOTERS = {
    Mode.COMMAND: "ESC close  |  DEL back  |  : search",
    Mode.SEARCH: "ESC cancel  |  ↑↓ navigate  |  ENTER execute",
    Mode.APP_LAUNCH: "ESC back  |  ↑↓ navigate  |  ENTER launch",
    Mode.WINDOW_SWITCH: "ESC back  |  ↑↓ navigate  |  ENTER focus",
}

PLACEHOLDERS = {
    Mode.SEARCH: "Search commands...",
    Mode.APP_LAUNCH: "Search apps...",
    Mode.WINDOW_SWITCH: "Filter windows...",
}

MOVE_KEYS = {
    Qt.Key_Up: -1,
    Qt.Key_Down: 1,
    Qt.Key_Left: -1,
    Qt.Key_Right: 1,
}


class HermesPanel(QWidget):
    def __init__(self, controller: PanelController, icons: IconProvider, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.icons = icons
        self._app_rows: Dict[str, QListWidgetItem] = {}

        self.setWindowTitle(APP_TITLE)
        self.setWindowFlags(Qt.FramelessWindowHint | Qt.WindowStaysOnTopHint | Qt.Tool)
        self.setFixedSize(PANEL_WIDTH, PANEL_HEIGHT)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setObjectName("HermesPanel")
        self.setStyleSheet(f"""
        QWidget#HermesPanel {{ background: {PANEL_BG}; }}
        QLabel {{ color: {PANEL_TEXT_DIM}; }}
        QLineEdit {{ background: {PANEL_ITEM_BG}; color: {PANEL_TEXT}; border: none; padding: 4px; }}
        QListWidget {{ background: transparent; color: {PANEL_TEXT}; border: none; }}
        QListWidget::item:selected {{ background: {PANEL_ITEM_BG}; color: {PANEL_ACCENT}; }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)

        self.breadcrumb = QLabel(APP_TITLE)
        layout.addWidget(self.breadcrumb)

        self.query = QLineEdit()
        self.query.setVisible(False)
        self.query.textEdited.connect(lambda text: self.controller.handle(QueryChanged(text)))
        self.query.installEventFilter(self)
        layout.addWidget(self.query)

        self.items = QListWidget()
        self.items.setFocusPolicy(Qt.NoFocus)
        self.items.setIconSize(QSize(32, 32))
        layout.addWidget(self.items, 1)

        self.footer = QLabel(FOOTERS[Mode.COMMAND])
        self.footer.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.footer)

        self.controller.state_changed.connect(self.refresh_view)
        self.icons.icon_ready.connect(self._on_icon_ready)

    # ----------------------------
    # Showing
    # ----------------------------
    def show_centered(self):
        screen = QGuiApplication.primaryScreen()
        if screen is not None:
            geo = screen.geometry()
            self.move(geo.x() + (geo.width() - self.width()) // 2,
                      geo.y() + (geo.height() - self.height()) // 2)
        self.show()
        self.raise_()
        self.activateWindow()
        self.controller.show()

    # ----------------------------
    # Keyboard
    # ----------------------------
    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_Escape:
            self.controller.handle(Cancel())
        elif key == Qt.Key_Backspace:
            self.controller.handle(Back())
        elif key in (Qt.Key_Return, Qt.Key_Enter):
            self.controller.handle(Activate())
        elif key in MOVE_KEYS:
            self.controller.handle(MoveSelection(MOVE_KEYS[key]))
        elif len(event.text()) == 1 and event.text().isprintable():
            self.controller.handle(KeyPressed(event.text()))
        else:
            super().keyPressEvent(event)

    def eventFilter(self, obj, event):
        # text field owns typing; only navigation keys are taken from it
        if obj is self.query and event.type() == QEvent.KeyPress:
            key = event.key()
            if key == Qt.Key_Escape:
                self.controller.handle(Cancel())
                return True
            if key in (Qt.Key_Return, Qt.Key_Enter):
                self.controller.handle(Activate())
                return True
            if key in (Qt.Key_Up, Qt.Key_Down):
                self.controller.handle(MoveSelection(MOVE_KEYS[key]))
                return True
        return super().eventFilter(obj, event)

    # ----------------------------
    # Rendering
    # ----------------------------
    def refresh_view(self):
        state = self.controller.state
        mode = state.mode

        self.footer.setText(FOOTERS[mode])
        if mode is Mode.WINDOW_SWITCH:
            self.breadcrumb.setText("Windows")
        else:
            self.breadcrumb.setText(state.breadcrumb or APP_TITLE)
        self.breadcrumb.setVisible(mode in (Mode.COMMAND, Mode.WINDOW_SWITCH))

        typing = mode is not Mode.COMMAND
        self.query.setVisible(typing)
        if typing:
            self.query.setPlaceholderText(PLACEHOLDERS[mode])
            if self.query.text() != state.search_query:
                self.query.setText(state.search_query)
            self.query.setFocus()
        else:
            self.query.clear()
            self.setFocus()

        self.items.clear()
        self._app_rows = {}
        if mode is Mode.COMMAND:
            for key in state.sorted_keys:
                entry = state.current_items[key]
                row = QListWidgetItem(f"[{key}]  {entry.title}")
                if isinstance(entry, Submenu):
                    row.setForeground(QColor(PANEL_SUBMENU_TEXT))
                self.items.addItem(row)
        elif mode is Mode.SEARCH:
            for cmd in state.search_results:
                where = BREADCRUMB_SEPARATOR.join(cmd.path)
                self.items.addItem(f"{cmd.label}    {where}" if where else cmd.label)
        elif mode is Mode.APP_LAUNCH:
            for app in state.visible_apps:
                row = QListWidgetItem(self.icons.icon_for(app), app.name)
                self._app_rows[app.name] = row
                self.items.addItem(row)
        else:
            for win in state.visible_windows:
                self.items.addItem(f"[{win.space}]  {win.app}  |  {win.title}")

        if 0 <= state.selected_index < self.items.count():
            self.items.setCurrentRow(state.selected_index)

    def _on_icon_ready(self, name: str, icon: QIcon):
        row = self._app_rows.get(name)
        if row is not None:
            row.setIcon(icon)
