"""
In-memory kubeconfig document.

A kubeconfig holds three ordered lists (clusters, contexts, users) whose
entries are ``{name, <kind>}`` pairs. Entries are kept as plain mappings
so that fields this server never writes survive a load/save cycle.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from gke_mcp.kubeconfig.types import (
    DEFAULT_API_VERSION,
    DEFAULT_KIND,
    KubeconfigParseError,
)


# Root keys managed by CredentialDocument, in the order they are written
ROOT_KEYS = (
    "apiVersion",
    "clusters",
    "contexts",
    "current-context",
    "kind",
    "preferences",
    "users",
)


class NamedEntries:
    """
    Ordered list of kubeconfig entries with a name index.

    The list keeps file order. The index maps each name to the position of
    its first occurrence, so an upsert replaces that entry in place and
    never appends a duplicate. Entries without a usable name, and later
    duplicates found in hand-edited files, are kept as they are.
    """

    def __init__(self, entries: Optional[list[dict[str, Any]]] = None):
        self._items: list[dict[str, Any]] = []
        self._index: dict[str, int] = {}
        for entry in entries or []:
            self._append(entry)

    def _append(self, entry: dict[str, Any]) -> None:
        name = entry.get("name")
        if isinstance(name, str) and name not in self._index:
            self._index[name] = len(self._items)
        self._items.append(entry)

    def upsert(self, entry: dict[str, Any]) -> bool:
        """
        Insert or replace an entry by name.

        Args:
            entry: Entry mapping with a ``name`` key

        Returns:
            True if an existing entry was replaced, False if appended
        """
        position = self._index.get(entry["name"])
        if position is None:
            self._append(entry)
            return False
        self._items[position] = entry
        return True

    def get(self, name: str) -> Optional[dict[str, Any]]:
        position = self._index.get(name)
        return None if position is None else self._items[position]

    def names(self) -> list[str]:
        return [
            entry["name"] for entry in self._items if isinstance(entry.get("name"), str)
        ]

    def to_list(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._items)

    def copy(self) -> "NamedEntries":
        return NamedEntries(self.to_list())

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedEntries):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"NamedEntries({self.names()!r})"


@dataclass
class CredentialDocument:
    """
    A kubeconfig file loaded into memory.

    Attributes:
        api_version: Document schema version (``v1``)
        kind: Document kind (``Config``)
        clusters: Cluster entries
        contexts: Context entries
        users: User entries
        current_context: Name of the active context
        preferences: Opaque preferences mapping
        extra: Any other root keys, passed through unchanged
    """

    api_version: str = DEFAULT_API_VERSION
    kind: str = DEFAULT_KIND
    clusters: NamedEntries = field(default_factory=NamedEntries)
    contexts: NamedEntries = field(default_factory=NamedEntries)
    users: NamedEntries = field(default_factory=NamedEntries)
    current_context: str = ""
    preferences: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "CredentialDocument":
        """Create a fresh document for a kubeconfig file that does not exist yet."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CredentialDocument":
        """
        Build a document from parsed YAML, filling in missing fields.

        Null or absent lists become empty, absent preferences become an
        empty mapping, and absent apiVersion/kind get their defaults.

        Raises:
            KubeconfigParseError: If a managed key has the wrong shape
        """
        preferences = data.get("preferences") or {}
        if not isinstance(preferences, dict):
            raise KubeconfigParseError("'preferences' must be a mapping")

        current_context = data.get("current-context") or ""
        if not isinstance(current_context, str):
            raise KubeconfigParseError("'current-context' must be a string")

        return cls(
            api_version=data.get("apiVersion") or DEFAULT_API_VERSION,
            kind=data.get("kind") or DEFAULT_KIND,
            clusters=_load_entries(data, "clusters"),
            contexts=_load_entries(data, "contexts"),
            users=_load_entries(data, "users"),
            current_context=current_context,
            preferences=copy.deepcopy(preferences),
            extra={
                key: copy.deepcopy(value)
                for key, value in data.items()
                if key not in ROOT_KEYS
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the mapping written to disk."""
        data: dict[str, Any] = {
            "apiVersion": self.api_version,
            "clusters": self.clusters.to_list(),
            "contexts": self.contexts.to_list(),
            "current-context": self.current_context,
            "kind": self.kind,
            "preferences": copy.deepcopy(self.preferences),
            "users": self.users.to_list(),
        }
        data.update(copy.deepcopy(self.extra))
        return data

    def copy(self) -> "CredentialDocument":
        return CredentialDocument(
            api_version=self.api_version,
            kind=self.kind,
            clusters=self.clusters.copy(),
            contexts=self.contexts.copy(),
            users=self.users.copy(),
            current_context=self.current_context,
            preferences=copy.deepcopy(self.preferences),
            extra=copy.deepcopy(self.extra),
        )


def _load_entries(data: dict[str, Any], key: str) -> NamedEntries:
    """Validate one of the entry lists of a parsed kubeconfig."""
    entries = data.get(key)
    if entries is None:
        return NamedEntries()
    if not isinstance(entries, list):
        raise KubeconfigParseError(f"'{key}' must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise KubeconfigParseError(f"every entry in '{key}' must be a mapping")
    return NamedEntries(copy.deepcopy(entries))
