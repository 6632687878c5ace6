"""Tests for system backup and restore."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from gestao_docs.backup import (
    BACKUP_VERSION,
    SystemBackup,
    apply_backup,
    backup_filename,
    backup_summary,
    export_backup,
    merge_by_key,
    merge_overrides,
    read_backup,
    validate_backup,
    write_backup,
)
from gestao_docs.exceptions import BackupValidationError
from gestao_docs.models import CasaOracao, DocumentoFaltante, GestaoRow
from gestao_docs.store import GestaoDataStore, MemoryBackend


@pytest.fixture
def filled_store(store: GestaoDataStore, casas: list[CasaOracao], rows: list[GestaoRow]) -> GestaoDataStore:
    """Store with a registry, a matrix and one override."""
    store.save_casas(casas)
    store.save_gestao(rows)
    store.update_override("BR 21-0001", "Bombeiros", "Aguardando vistoria", False, now=datetime(2024, 1, 1))
    return store


class TestExport:
    """Tests for export and file writing."""

    def test_export_backup(self, filled_store: GestaoDataStore) -> None:
        """Test the snapshot holds every backed-up collection."""
        backup = export_backup(filled_store, now=datetime(2024, 5, 1, 12, 0))

        assert backup.version == BACKUP_VERSION
        assert backup.timestamp == "2024-05-01T12:00:00"
        assert len(backup.data["casas"]) == 3
        assert len(backup.data["gestao"]) == 3
        assert len(backup.data["documentos_faltantes"]) == 1

    def test_backup_filename(self) -> None:
        """Test the default file name."""
        assert backup_filename(datetime(2024, 5, 1)) == "sistema-igreja-backup-2024-05-01.json"

    def test_write_and_read(self, filled_store: GestaoDataStore, tmp_path: Path) -> None:
        """Test a written backup reads back identically."""
        path = write_backup(filled_store, tmp_path / "backup.json")

        backup = read_backup(path)

        assert backup.data == export_backup(filled_store).data
        assert "JARDIM AMÉRICA" in path.read_text(encoding="utf-8")


class TestValidation:
    """Tests for backup validation."""

    def test_valid(self) -> None:
        """Test a minimal valid payload."""
        backup = validate_backup({"version": "1.0.0", "timestamp": "t", "data": {"casas": []}})

        assert backup == SystemBackup(version="1.0.0", timestamp="t", data={"casas": []})

    @pytest.mark.parametrize(
        "payload, message",
        [
            ([], "Invalid backup structure"),
            ({"timestamp": "t", "data": {}}, "required fields"),
            ({"version": "1", "data": {}}, "required fields"),
            ({"version": "1", "timestamp": "t"}, "required fields"),
            ({"version": "1", "timestamp": "t", "data": []}, "Invalid data section"),
            ({"version": "1", "timestamp": "t", "data": {"casas": {}}}, "Invalid casas data"),
            ({"version": "1", "timestamp": "t", "data": {"gestao": "x"}}, "Invalid gestao data"),
        ],
    )
    def test_invalid(self, payload: object, message: str) -> None:
        """Test malformed payloads are rejected."""
        with pytest.raises(BackupValidationError, match=message):
            validate_backup(payload)

    def test_wrong_extension(self, tmp_path: Path) -> None:
        """Test only JSON files are accepted."""
        path = tmp_path / "backup.txt"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(BackupValidationError, match="valid JSON file"):
            read_backup(path)

    def test_corrupt_file(self, tmp_path: Path) -> None:
        """Test unreadable JSON is rejected."""
        path = tmp_path / "backup.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(BackupValidationError, match="Error reading file"):
            read_backup(path)


class TestApply:
    """Tests for restoring backups."""

    def test_replace(self, filled_store: GestaoDataStore) -> None:
        """Test replace mode restores the snapshot exactly."""
        backup = export_backup(filled_store)
        target = GestaoDataStore(MemoryBackend({"casas": [{"codigo": "OLD", "nome": "OLD"}]}))

        counts = apply_backup(target, backup)

        assert counts == {"casas": 3, "gestao": 3, "documentos_faltantes": 1}
        assert target.load_casas() == filled_store.load_casas()
        assert target.load_gestao() == filled_store.load_gestao()

    def test_replace_clears_missing_collections(self, filled_store: GestaoDataStore) -> None:
        """Test collections absent from the backup end up empty."""
        backup = SystemBackup(version="1.0.0", timestamp="t", data={"casas": []})

        apply_backup(filled_store, backup)

        assert filled_store.load_gestao() == []
        assert filled_store.load_overrides() == []

    def test_merge(self, filled_store: GestaoDataStore) -> None:
        """Test merge mode updates by code and keeps the newest override."""
        backup = SystemBackup(
            version="1.0.0",
            timestamp="t",
            data={
                "casas": [
                    {"codigo": "BR 21-0001", "nome": "JARDIM AMÉRICA II"},
                    {"codigo": "BR 21-0004", "nome": "NOVA"},
                ],
                "documentos_faltantes": [
                    {
                        "codigo": "BR 21-0001",
                        "documento": "Bombeiros",
                        "observacao": "Vistoria agendada",
                        "desconsiderar": False,
                        "data_observacao": "2024-03-01T00:00:00",
                    }
                ],
            },
        )

        counts = apply_backup(filled_store, backup, merge=True)

        assert counts == {"casas": 4, "gestao": 3, "documentos_faltantes": 1}
        casa = filled_store.get_casa("BR 21-0001")
        assert casa.nome == "JARDIM AMÉRICA II"
        assert casa.tipo_imovel == "IP - Imóvel Próprio"
        assert filled_store.get_override("BR 21-0001", "Bombeiros").observacao == "Vistoria agendada"

    def test_merge_overrides_keeps_newest(self) -> None:
        """Test older incoming overrides do not replace newer stored ones."""
        existing = [{"codigo": "A", "documento": "D", "observacao": "new", "data_observacao": "2024-05-01T00:00:00"}]
        incoming = [
            {"codigo": "A", "documento": "D", "observacao": "old", "dataObservacao": "2023-01-01T00:00:00.000Z"},
            {"codigo": "B", "documento": "D", "observacao": "other"},
        ]

        merged = merge_overrides(existing, incoming)

        assert [r["observacao"] for r in merged] == ["new", "other"]

    def test_merge_by_key(self) -> None:
        """Test dict update per code."""
        merged = merge_by_key([{"codigo": "A", "x": 1, "y": 1}], [{"codigo": "A", "y": 2}])

        assert merged == [{"codigo": "A", "x": 1, "y": 2}]


class TestSummary:
    """Tests for backup_summary."""

    def test_summary(self, filled_store: GestaoDataStore) -> None:
        """Test counts and metadata."""
        backup = export_backup(filled_store, now=datetime(2024, 5, 1))

        assert backup_summary(backup) == {
            "casas": 3,
            "gestao": 3,
            "documentos_faltantes": 1,
            "timestamp": "2024-05-01T00:00:00",
            "version": BACKUP_VERSION,
        }

    def test_round_trip_overrides(self, filled_store: GestaoDataStore, tmp_path: Path) -> None:
        """Test overrides survive a file round trip."""
        path = write_backup(filled_store, tmp_path / "b.json")
        target = GestaoDataStore()
        apply_backup(target, read_backup(path))

        assert target.load_overrides() == filled_store.load_overrides()
        assert isinstance(target.load_overrides()[0], DocumentoFaltante)
        assert json.loads(path.read_text(encoding="utf-8"))["version"] == BACKUP_VERSION
