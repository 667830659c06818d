from __future__ import annotations
import os
import sqlite3
import sys
from pathlib import Path
from typing import Optional, Union

DB_NAME = "echotrack.sqlite3"
DATA_DIR_ENV = "ECHOTRACK_DATA_DIR"


def data_dir(app_name: str = "EchoTrack") -> Path:
    # macOS: ~/Library/Application Support/EchoTrack
    # Windows: %APPDATA%\EchoTrack
    # ECHOTRACK_DATA_DIR wins everywhere
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        d = Path(override)
    else:
        home = Path.home()
        if sys.platform == "darwin":
            base = home / "Library" / "Application Support"
        elif sys.platform.startswith("win"):
            base = Path(os.environ.get("APPDATA", str(home)))
        else:
            base = home / ".local" / "share"
        d = base / app_name
    d.mkdir(parents=True, exist_ok=True)
    return d


def db_path() -> Path:
    return data_dir() / DB_NAME


def connect(path: Optional[Union[str, Path]] = None) -> sqlite3.Connection:
    conn = sqlite3.connect(str(path or db_path()))
    conn.row_factory = sqlite3.Row
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS meta (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL -- JSON array
        );
        """
    )
    if conn.execute("SELECT value FROM meta WHERE key='schema_version'").fetchone() is None:
        conn.execute("INSERT INTO meta(key,value) VALUES('schema_version','1')")
    conn.commit()
