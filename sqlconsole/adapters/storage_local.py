from __future__ import annotations
import json, os
from typing import Dict
from sqlconsole.domain.ports import StoragePort


class StorageLocal(StoragePort):
    """Local filesystem storage for user prefs (JSON)."""

    PREFS_FILE = "user_prefs.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    def save_user_prefs(self, prefs: Dict) -> None:
        path = os.path.join(self.root, self.PREFS_FILE)
        os.makedirs(self.root, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(prefs, f, ensure_ascii=False, indent=2)

    def load_user_prefs(self) -> Dict:
        path = os.path.join(self.root, self.PREFS_FILE)
        if not os.path.exists(path):
            return {}
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
