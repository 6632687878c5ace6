"""Document presence matrix model."""

from dataclasses import dataclass, field

from gestao_docs.models.enums import Presence


@dataclass
class GestaoRow:
    """One management record: document key -> raw marker for a property.

    Keys are canonical document names once the row has been built by
    :func:`gestao_docs.matrix.build_row`.
    """

    codigo: str
    valores: dict[str, str] = field(default_factory=dict)

    def presence(self, documento: str) -> Presence:
        """Return the presence of a document; missing keys are absent."""
        return Presence.from_marker(self.valores.get(documento))

    def has(self, documento: str) -> bool:
        """Return True when the document is marked present."""
        return self.presence(documento) is Presence.PRESENT

    def documentos(self) -> list[str]:
        """Document keys carried by this row."""
        return list(self.valores)
