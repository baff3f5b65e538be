"""
Kubeconfig file storage.

Reads and writes a kubeconfig file as YAML. Writes go through a temporary
file in the target directory followed by an atomic rename, so readers
never see a partially written file. There is no locking: two concurrent
read-modify-write cycles on the same file can lose one update (last
writer wins).
"""

import contextlib
import os
import tempfile
from pathlib import Path

import yaml

from gke_mcp.kubeconfig.document import CredentialDocument
from gke_mcp.kubeconfig.merge import merge_records
from gke_mcp.kubeconfig.types import (
    ClusterEntry,
    ClusterIdentity,
    ContextEntry,
    KubeconfigIOError,
    KubeconfigParseError,
    UserEntry,
)
from gke_mcp.utils import get_logger

logger = get_logger(__name__)

DIRECTORY_MODE = 0o700
FILE_MODE = 0o600


def parse_document(content: str) -> CredentialDocument:
    """
    Parse kubeconfig YAML.

    An empty document is treated like a missing file.

    Raises:
        KubeconfigParseError: If the content is not a kubeconfig mapping
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise KubeconfigParseError(f"invalid YAML: {e}") from e

    if data is None:
        return CredentialDocument.empty()
    if not isinstance(data, dict):
        raise KubeconfigParseError("top-level value must be a mapping")
    return CredentialDocument.from_dict(data)


def serialize_document(document: CredentialDocument) -> str:
    """Serialize a document to the YAML accepted by parse_document."""
    return yaml.safe_dump(
        document.to_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


class CredentialStore:
    """
    A kubeconfig file on disk.

    Each call is a fresh load/modify/save cycle; nothing is cached
    between calls.
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Kubeconfig file location
        """
        self.path = Path(path)

    def load(self) -> CredentialDocument:
        """
        Load the kubeconfig file.

        Returns:
            The parsed document, or an empty one if the file does not exist

        Raises:
            KubeconfigIOError: If the file exists but cannot be read
            KubeconfigParseError: If the file cannot be parsed
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No kubeconfig at {self.path}, starting from an empty document")
            return CredentialDocument.empty()
        except (OSError, UnicodeDecodeError) as e:
            raise KubeconfigIOError(
                f"failed to read existing kubeconfig file {self.path}: {e}",
                path=self.path,
            ) from e

        try:
            return parse_document(content)
        except KubeconfigParseError as e:
            raise KubeconfigParseError(
                f"failed to parse existing kubeconfig file {self.path}: {e}",
                path=self.path,
            ) from e

    def save(self, document: CredentialDocument) -> Path:
        """
        Write the document to disk with owner-only permissions.

        Returns:
            Path of the written file

        Raises:
            KubeconfigIOError: If the directory or file cannot be written
        """
        content = serialize_document(document)
        target = Path(os.path.realpath(self.path))
        self._ensure_directory(target.parent)

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
        except OSError as e:
            raise KubeconfigIOError(
                f"failed to write kubeconfig to {self.path}: {e}", path=self.path
            ) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, target)
        except OSError as e:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise KubeconfigIOError(
                f"failed to write kubeconfig to {self.path}: {e}", path=self.path
            ) from e

        logger.debug(f"Wrote kubeconfig to {target}")
        return self.path

    def upsert_cluster(
        self,
        identity: ClusterIdentity,
        cluster: ClusterEntry,
        context: ContextEntry,
        user: UserEntry,
    ) -> Path:
        """
        Add or update one cluster's entries and make its context current.

        Args:
            identity: Cluster the entries belong to
            cluster: Cluster entry
            context: Context entry
            user: User entry

        Returns:
            Path of the written file
        """
        document = self.load()
        replaced = context.name in document.contexts
        merged = merge_records(document, cluster, context, user)
        path = self.save(merged)
        logger.info(
            f"{'Updated' if replaced else 'Added'} kubeconfig entries for {identity} "
            f"in {path}"
        )
        return path

    def _ensure_directory(self, directory: Path) -> None:
        """Create directory and missing ancestors as owner-only."""
        missing = []
        current = directory
        while not current.exists():
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent

        for path in reversed(missing):
            try:
                path.mkdir(mode=DIRECTORY_MODE)
            except FileExistsError:
                continue
            except OSError as e:
                raise KubeconfigIOError(
                    f"failed to create directory {path}: {e}", path=self.path
                ) from e
