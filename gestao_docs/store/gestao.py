"""Typed data store for properties, the document matrix and overrides."""

from datetime import datetime

from gestao_docs.exceptions import DuplicateEntityError, EntityNotFoundError, InvalidEntityStateError
from gestao_docs.logging import get_logger
from gestao_docs.matrix import unregistered_codes
from gestao_docs.models import CasaOracao, DocumentoFaltante, GestaoRow, GestaoVistaData
from gestao_docs.serialization import (
    casa_from_dict,
    dataclass_to_dict,
    gestao_row_from_dict,
    gestao_row_to_dict,
    override_from_dict,
    vista_from_dict,
)
from gestao_docs.store.backends import MemoryBackend, StorageBackend

logger = get_logger(__name__)

CASAS = "casas"
GESTAO = "gestao"
DOCUMENTOS_FALTANTES = "documentos_faltantes"
GESTAO_VISTA = "gestao_vista"

COLLECTIONS = (CASAS, GESTAO, DOCUMENTOS_FALTANTES, GESTAO_VISTA)


class GestaoDataStore:
    """Persistent store for prayer houses and their document records.

    Every read goes to the backend, and every write replaces a whole
    collection. Read-modify-write sequences (``save_casa``,
    ``update_override``...) are not atomic: two writers working on the same
    collection race and the last write wins.
    """

    def __init__(self, backend: StorageBackend | None = None) -> None:
        self.backend = backend if backend is not None else MemoryBackend()

    # Properties
    def load_casas(self) -> list[CasaOracao]:
        """Load the property registry."""
        return [casa_from_dict(r) for r in self.backend.load(CASAS)]

    def save_casas(self, casas: list[CasaOracao]) -> None:
        """Replace the property registry."""
        self.backend.save(CASAS, [dataclass_to_dict(c) for c in casas])

    def clear_casas(self) -> None:
        """Remove every property."""
        self.backend.clear(CASAS)

    def get_casa(self, codigo: str) -> CasaOracao | None:
        """Get a property by code."""
        for casa in self.load_casas():
            if casa.codigo == codigo:
                return casa
        return None

    def save_casa(self, casa: CasaOracao, old_codigo: str | None = None) -> None:
        """Add a property, or update the one stored under ``old_codigo``.

        Raises
        ------
        InvalidEntityStateError
            If ``codigo`` or ``nome`` is blank.
        DuplicateEntityError
            If another property already uses ``casa.codigo``.
        EntityNotFoundError
            If ``old_codigo`` is given but not stored.
        """
        if not (casa.codigo or "").strip() or not (casa.nome or "").strip():
            raise InvalidEntityStateError("Code and name are required fields")

        casas = self.load_casas()
        codes = [c.codigo for c in casas]

        if old_codigo is None:
            if casa.codigo in codes:
                raise DuplicateEntityError(f"Casa {casa.codigo} already exists")
            casas.append(casa)
            logger.info("Added casa %s", casa.codigo)
        else:
            if old_codigo not in codes:
                raise EntityNotFoundError(f"Casa {old_codigo} not found")
            if old_codigo != casa.codigo and casa.codigo in codes:
                raise DuplicateEntityError(f"Casa {casa.codigo} already exists")
            casas = [casa if c.codigo == old_codigo else c for c in casas]
            logger.info("Updated casa %s", casa.codigo)

        self.save_casas(casas)

    def delete_casa(self, codigo: str) -> None:
        """Delete a property by code."""
        casas = self.load_casas()
        remaining = [c for c in casas if c.codigo != codigo]
        if len(remaining) == len(casas):
            raise EntityNotFoundError(f"Casa {codigo} not found")
        self.save_casas(remaining)
        logger.info("Deleted casa %s", codigo)

    # Document matrix
    def load_gestao(self) -> list[GestaoRow]:
        """Load the document presence matrix."""
        return [gestao_row_from_dict(r) for r in self.backend.load(GESTAO)]

    def save_gestao(self, rows: list[GestaoRow]) -> None:
        """Replace the document presence matrix."""
        self.backend.save(GESTAO, [gestao_row_to_dict(r) for r in rows])

    def clear_gestao(self) -> None:
        """Remove the document presence matrix."""
        self.backend.clear(GESTAO)

    def unregistered_codes(self) -> list[str]:
        """Codes that have management data but no registered property."""
        return unregistered_codes(self.load_gestao(), self.load_casas())

    # Overrides
    def load_overrides(self) -> list[DocumentoFaltante]:
        """Load every missing-document override."""
        return [override_from_dict(r) for r in self.backend.load(DOCUMENTOS_FALTANTES)]

    def save_overrides(self, overrides: list[DocumentoFaltante]) -> None:
        """Replace every missing-document override."""
        self.backend.save(DOCUMENTOS_FALTANTES, [dataclass_to_dict(o) for o in overrides])

    def clear_overrides(self) -> None:
        """Remove every missing-document override."""
        self.backend.clear(DOCUMENTOS_FALTANTES)

    def get_override(self, codigo: str, documento: str) -> DocumentoFaltante | None:
        """Get the override for ``(codigo, documento)``."""
        for override in self.load_overrides():
            if override.key == (codigo, documento):
                return override
        return None

    def update_override(
        self,
        codigo: str,
        documento: str,
        observacao: str,
        desconsiderar: bool,
        responsavel: str | None = None,
        now: datetime | None = None,
    ) -> DocumentoFaltante:
        """Create or replace the override for ``(codigo, documento)``.

        A blank observation is stored as None. The observation timestamp is
        set to ``now``.
        """
        override = DocumentoFaltante(
            codigo=codigo,
            documento=documento,
            observacao=(observacao or "").strip() or None,
            desconsiderar=desconsiderar,
            data_observacao=(now or datetime.now()).isoformat(),
            responsavel=responsavel,
        )

        overrides = self.load_overrides()
        for i, existing in enumerate(overrides):
            if existing.key == override.key:
                overrides[i] = override
                break
        else:
            overrides.append(override)

        self.save_overrides(overrides)
        return override

    def add_overrides_if_absent(self, candidates: list[DocumentoFaltante]) -> list[DocumentoFaltante]:
        """Insert overrides whose key is not stored yet; never overwrite.

        Returns
        -------
        list[DocumentoFaltante]
            The overrides actually written.
        """
        overrides = self.load_overrides()
        stored = {o.key for o in overrides}
        written = []
        for candidate in candidates:
            if candidate.key in stored:
                continue
            overrides.append(candidate)
            stored.add(candidate.key)
            written.append(candidate)

        if written:
            self.save_overrides(overrides)
        return written

    # Gestão à vista
    def load_gestao_vista(self) -> list[GestaoVistaData]:
        """Load dated document records."""
        return [vista_from_dict(r) for r in self.backend.load(GESTAO_VISTA)]

    def save_gestao_vista(self, data: list[GestaoVistaData]) -> None:
        """Replace dated document records."""
        self.backend.save(GESTAO_VISTA, [dataclass_to_dict(v) for v in data])

    def clear_gestao_vista(self) -> None:
        """Remove dated document records."""
        self.backend.clear(GESTAO_VISTA)

    def summary(self) -> dict[str, int]:
        """Return record counts for every collection."""
        return {name: len(self.backend.load(name)) for name in COLLECTIONS}
