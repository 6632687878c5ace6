"""Full-system JSON backup: export, validation and restore."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from gestao_docs.exceptions import BackupValidationError
from gestao_docs.logging import get_logger
from gestao_docs.store.gestao import CASAS, DOCUMENTOS_FALTANTES, GESTAO, GestaoDataStore

logger = get_logger(__name__)

BACKUP_VERSION = "1.0.0"
BACKUP_COLLECTIONS = (CASAS, GESTAO, DOCUMENTOS_FALTANTES)


@dataclass
class SystemBackup:
    """Snapshot of the stored collections."""

    version: str
    timestamp: str
    data: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"version": self.version, "timestamp": self.timestamp, "data": self.data}


def export_backup(store: GestaoDataStore, now: datetime | None = None) -> SystemBackup:
    """Snapshot the store's raw records."""
    return SystemBackup(
        version=BACKUP_VERSION,
        timestamp=(now or datetime.now()).isoformat(),
        data={name: store.backend.load(name) for name in BACKUP_COLLECTIONS},
    )


def backup_filename(now: datetime | None = None) -> str:
    """Default file name, e.g. ``sistema-igreja-backup-2024-05-01.json``."""
    return f"sistema-igreja-backup-{(now or datetime.now()).date().isoformat()}.json"


def write_backup(store: GestaoDataStore, path: str | Path) -> Path:
    """Export the store to a JSON file."""
    path = Path(path)
    backup = export_backup(store)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(backup.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Backup written to %s", path)
    return path


def validate_backup(payload: Any) -> SystemBackup:
    """Check the structure of a decoded backup.

    Raises
    ------
    BackupValidationError
        If required fields are missing or a collection is not a list.
    """
    if not isinstance(payload, dict):
        raise BackupValidationError("Invalid backup structure")

    if not payload.get("version") or not payload.get("timestamp") or "data" not in payload:
        raise BackupValidationError("Incomplete backup: required fields missing")

    data = payload["data"]
    if not isinstance(data, dict):
        raise BackupValidationError("Invalid data section")

    for name in BACKUP_COLLECTIONS:
        if name in data and data[name] is not None and not isinstance(data[name], list):
            raise BackupValidationError(f"Invalid {name} data")

    return SystemBackup(
        version=str(payload["version"]),
        timestamp=str(payload["timestamp"]),
        data={name: list(data.get(name) or []) for name in BACKUP_COLLECTIONS if name in data},
    )


def read_backup(path: str | Path) -> SystemBackup:
    """Read and validate a backup file."""
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise BackupValidationError("Please select a valid JSON file")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise BackupValidationError(f"Error reading file: {e}") from e
    return validate_backup(payload)


def merge_by_key(existing: list[dict], incoming: list[dict], key: str = "codigo") -> list[dict]:
    """Merge records by key; incoming fields update the existing record."""
    merged = [dict(record) for record in existing]
    positions = {record.get(key): i for i, record in enumerate(merged)}
    for record in incoming:
        index = positions.get(record.get(key))
        if index is None:
            positions[record.get(key)] = len(merged)
            merged.append(dict(record))
        else:
            merged[index] = {**merged[index], **record}
    return merged


def _observed_at(record: dict) -> datetime:
    raw = record.get("data_observacao") or record.get("dataObservacao")
    if not raw:
        return datetime.min
    try:
        parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return datetime.min
    # Compare naive and aware timestamps on the same footing
    return parsed.replace(tzinfo=None)


def merge_overrides(existing: list[dict], incoming: list[dict]) -> list[dict]:
    """Merge override records by ``(codigo, documento)``, keeping the most recent."""
    merged = [dict(record) for record in existing]
    positions = {(r.get("codigo"), r.get("documento")): i for i, r in enumerate(merged)}
    for record in incoming:
        key = (record.get("codigo"), record.get("documento"))
        index = positions.get(key)
        if index is None:
            positions[key] = len(merged)
            merged.append(dict(record))
        elif _observed_at(record) > _observed_at(merged[index]):
            merged[index] = dict(record)
    return merged


def apply_backup(store: GestaoDataStore, backup: SystemBackup, merge: bool = False) -> dict[str, int]:
    """Restore a backup into the store.

    In replace mode every backed-up collection is cleared first. In merge
    mode properties and management rows are merged by code and overrides
    by ``(codigo, documento)`` keeping the latest observation.

    Returns
    -------
    dict[str, int]
        Record count per collection after the restore.
    """
    if not merge:
        for name in BACKUP_COLLECTIONS:
            store.backend.clear(name)

    for name in BACKUP_COLLECTIONS:
        if name not in backup.data:
            continue
        incoming = backup.data[name]
        if merge:
            existing = store.backend.load(name)
            if name == DOCUMENTOS_FALTANTES:
                incoming = merge_overrides(existing, incoming)
            else:
                incoming = merge_by_key(existing, incoming)
        store.backend.save(name, incoming)

    counts = {name: len(store.backend.load(name)) for name in BACKUP_COLLECTIONS}
    logger.info("Backup applied (%s): %s", "merge" if merge else "replace", counts)
    return counts


def backup_summary(backup: SystemBackup) -> dict[str, Any]:
    """Counts and metadata for previewing a backup."""
    return {
        "casas": len(backup.data.get(CASAS, [])),
        "gestao": len(backup.data.get(GESTAO, [])),
        "documentos_faltantes": len(backup.data.get(DOCUMENTOS_FALTANTES, [])),
        "timestamp": backup.timestamp,
        "version": backup.version,
    }
