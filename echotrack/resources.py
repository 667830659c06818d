from __future__ import annotations
from pathlib import Path
from PySide6.QtGui import QIcon, QPixmap, QColor
from PySide6.QtWidgets import QStyle, QApplication


def resource_path(*parts: str) -> Path:
    # Works in dev and in PyInstaller
    import sys
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        base = Path(sys._MEIPASS)  # type: ignore[attr-defined]
    else:
        base = Path(__file__).resolve().parent
    return base.joinpath(*parts)


def tray_icon() -> QIcon:
    p = resource_path("assets", "tray.png")
    if p.exists():
        return QIcon(str(p))
    # No bundled asset: fall back to the platform's clock-ish standard icon
    style = QApplication.style()
    if style is not None:
        return style.standardIcon(QStyle.StandardPixmap.SP_BrowserReload)
    pm = QPixmap(16, 16)
    pm.fill(QColor("#10b981"))
    return QIcon(pm)
