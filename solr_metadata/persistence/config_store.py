import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional


# ==============================================
# ConfigStore
# ==============================================
#
# PURPOSE:
#   Hierarchical key-value store addressed by dotted paths such as
#   "configs.my_config.description.description_label". Mutations are
#   held in memory until save() writes them to disk in one step.
#
# WHAT IS PERSISTED:
#   One JSON document. Every dotted path is a walk through nested
#   objects, so "configs.a.fields" is data["configs"]["a"]["fields"].
#
#   metadata/
#   └── solr_metadata.json  → {"configs": {<name>: {...}}}
#
# CLASS: ConfigStore
# ------------------
#   Stateful — holds the storage file path and any unsaved mutations.
#
#   Constructor:
#   ------------
#   - __init__(storage_path: str | None = None)
#       Create the parent directory if needed. With no path the
#       store lives in memory only (save() just marks it clean).
#
#   Methods:
#   --------
#   - get(path) -> Any            → Value at path, None if absent
#   - set(path, value) -> None    → Stage a write
#   - clear(path) -> bool         → Stage removal of a subtree
#   - save() -> bool              → Persist staged mutations
#   - has_pending() -> bool       → Unsaved mutations exist?
#   - exists() -> bool            → Backing file exists?
#
#   Reads never cache: without staged mutations every get() re-reads
#   the file, so a save from another process is seen immediately.
#
class ConfigStore:
    """
    Dotted-path configuration store persisted to a single JSON file.
    """

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize the config store.

        Args:
            storage_path: JSON file to persist to. None keeps the
                store in memory.
        """
        self.storage_path = Path(storage_path) if storage_path else None

        if self.storage_path is not None:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)

        self._data: Dict[str, Any] = {}
        self._dirty = False

    @staticmethod
    def _split(path: str) -> List[str]:
        keys = path.split(".")
        if not path or any(key == "" for key in keys):
            raise ValueError(f"Invalid config path: {path!r}")
        return keys

    def _load(self) -> Dict[str, Any]:
        # Staged mutations win over whatever is on disk
        if self._dirty or self.storage_path is None:
            return self._data

        if self.storage_path.exists():
            with open(self.storage_path, "r") as f:
                self._data = json.load(f)
        else:
            self._data = {}
        return self._data

#   READING:
    def get(self, path: str) -> Any:
        """
        Read the value stored at a dotted path.

        Args:
            path: Dotted path, e.g. "configs.my_config.cmodels"

        Returns:
            A copy of the stored value, or None if any segment is absent
        """
        node: Any = self._load()
        for key in self._split(path):
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return copy.deepcopy(node)

    def has_pending(self) -> bool:
        return self._dirty

    def exists(self) -> bool:
        return self.storage_path is not None and self.storage_path.exists()

#   WRITING:
    def set(self, path: str, value: Any) -> None:
        """
        Stage a write. Missing parents are created as empty objects.

        Args:
            path: Dotted path
            value: Any JSON-serializable value
        """
        keys = self._split(path)
        node = self._load()
        for key in keys[:-1]:
            if not isinstance(node.get(key), dict):
                node[key] = {}
            node = node[key]
        node[keys[-1]] = copy.deepcopy(value)
        self._dirty = True

    def clear(self, path: str) -> bool:
        """
        Stage removal of the subtree at path.

        Args:
            path: Dotted path

        Returns:
            True if something was removed, False if the path was absent
        """
        keys = self._split(path)
        node: Any = self._load()
        for key in keys[:-1]:
            if not isinstance(node, dict) or key not in node:
                return False
            node = node[key]
        if not isinstance(node, dict) or keys[-1] not in node:
            return False
        del node[keys[-1]]
        self._dirty = True
        return True

    def save(self) -> bool:
        """
        Persist all staged mutations as one unit.

        The document is written to a temporary sibling file and moved
        over the old one, so readers see either the old or the new
        content.

        Returns:
            True if anything was written, False if nothing was pending
        """
        if not self._dirty:
            return False

        if self.storage_path is not None:
            tmp_path = self.storage_path.with_name(self.storage_path.name + ".tmp")
            with open(tmp_path, "w") as f:
                json.dump(self._data, f, indent=2)
            os.replace(tmp_path, self.storage_path)
            print(f"Saved config store to {self.storage_path}")

        self._dirty = False
        return True
