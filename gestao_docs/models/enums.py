"""Enumeration types for property and document entities."""

from enum import Enum


class TipoImovel(str, Enum):
    """Property tenure, keyed by the prefix used in the registry export."""

    PROPRIO = "IP"
    ALUGADO = "AL"
    CEDIDO = "CD"
    INDETERMINADO = "ND"

    @classmethod
    def from_text(cls, text: str | None) -> "TipoImovel | None":
        """Parse free text such as ``"AL - Imóvel Alugado"``.

        Returns ``None`` for blank or unrecognized text.
        """
        if not text:
            return None
        prefix = text.strip().upper()[:2]
        for tipo in cls:
            if tipo.value == prefix:
                return tipo
        return None


class Presence(str, Enum):
    """Presence of a document in the management matrix."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_marker(cls, value: object) -> "Presence":
        """Classify a raw spreadsheet cell.

        Only ``"X"`` (trimmed, any case) means present. Blank cells are
        absent; any other text is kept as unknown.
        """
        if value is None:
            return cls.ABSENT
        text = str(value).strip()
        if not text:
            return cls.ABSENT
        if text.upper() == "X":
            return cls.PRESENT
        return cls.UNKNOWN
