"""Document name normalization.

Spreadsheet exports spell the same document many ways ("Habite-se",
"HABITE-SE", "Averbação da Construção na Matricula"...). :func:`normalize`
maps any of them to a canonical name using accent-insensitive substring
matching against :data:`DOCUMENTOS`.

Matching walks the dictionary in declaration order and returns the first
key that contains, or is contained in, the folded input. Short legacy keys
such as ``"rg"`` or ``"fe"`` can therefore capture unrelated names that
happen to contain them; keep longer, more specific keys first.
"""

import unicodedata

# Complete document name -> canonical name. Order matters (first match wins).
DOCUMENTOS: dict[str, str] = {
    # Documentos de propriedade
    "Escritura Definitiva - Compra e Venda/Permuta": "Escritura de Compra e Venda",
    "Escritura Pública - Inventário/Arrolamento": "Escritura de Inventário",
    "Escritura de Usucapião": "Escritura de Usucapião",
    "Sentença de Usucapião": "Sentença de Usucapião",
    "Formal de Partilha/Carta de Adjudicação": "Formal de Partilha",
    # Construção e funcionamento
    "Habite-se": "Habite-se",
    "Projeto Aprovado Pela Prefeitura": "Projeto Aprovado",
    "Alvará de Funcionamento": "Alvará de Funcionamento",
    "Averbação da Construção na Matricula": "Averbação de Construção",
    # Segurança
    "AVCB - Auto de Vistoria do Corpo de Bombeiros": "Bombeiros",
    "CLCB - Certificado de Licença Corpo de Bombeiros": "Bombeiros",
    "SCPO - Sistema de Comunicação Prévia de Obras": "SCPO",
    # Instrumentos particulares
    "Instrumento Particular - Cessão de Direitos de Compra e Venda": "Cessão de Direitos Particular",
    "Instrumento Particular - Cessão de Posse": "Cessão de Posse Particular",
    "Instrumento Particular - Cessão de Direitos Hereditários": "Cessão Hereditária Particular",
    "Instrumento Particular - Doação": "Doação Particular",
    "Instrumento Particular - Promessa de Compra e Venda": "Promessa de Compra Particular",
    # Instrumentos públicos
    "Instrumento Público - Cessão de Direitos de Compra e Venda": "Cessão de Direitos Público",
    "Instrumento Público - Cessão de Direitos Hereditários": "Cessão Hereditária Público",
    "Instrumento Público - Cessão de Posse": "Cessão de Posse Público",
    "Instrumento Público - Doação": "Doação Público",
    "Instrumento Público - Promessa de Compra e Venda": "Promessa de Compra Público",
    # Outros
    "CNO – Cadastro Nacional de Obras": "CNO",
    "Licença de Ocupação": "Licença de Ocupação",
    "Regularização Fundiária": "REURB",
    "Contrato de Aluguel": "Contrato de Aluguel",
    # Documentos pessoais (legacy keys kept for older spreadsheets)
    "certidao": "certidao_nascimento",
    "certidão": "certidao_nascimento",
    "certidao de nascimento": "certidao_nascimento",
    "certidão de nascimento": "certidao_nascimento",
    "nascimento": "certidao_nascimento",
    "rg": "rg",
    "identidade": "rg",
    "carteira de identidade": "rg",
    "cpf": "cpf",
    "cadastro de pessoa fisica": "cpf",
    "cadastro de pessoa física": "cpf",
    "titulo": "titulo_eleitor",
    "título": "titulo_eleitor",
    "titulo de eleitor": "titulo_eleitor",
    "título de eleitor": "titulo_eleitor",
    "eleitor": "titulo_eleitor",
    "comprovante": "comprovante_residencia",
    "comprovante de residencia": "comprovante_residencia",
    "comprovante de residência": "comprovante_residencia",
    "residencia": "comprovante_residencia",
    "residência": "comprovante_residencia",
    "batismo": "certidao_batismo",
    "certidao de batismo": "certidao_batismo",
    "certidão de batismo": "certidao_batismo",
    "profissao": "profissao_fe",
    "profissão": "profissao_fe",
    "profissao de fe": "profissao_fe",
    "profissão de fé": "profissao_fe",
    "fe": "profissao_fe",
    "fé": "profissao_fe",
}


def fold(text: str) -> str:
    """Strip diacritics, lowercase and trim.

    >>> fold("  Averbação ")
    'averbacao'
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


def _build_folded_index(documentos: dict[str, str]) -> dict[str, str]:
    # Keys that fold to the same text keep the position of the first one.
    index: dict[str, str] = {}
    for key, value in documentos.items():
        index[fold(key)] = value
    return index


_FOLDED_DOCUMENTOS = _build_folded_index(DOCUMENTOS)
_FOLDED_CANONICAL = {fold(value): value for value in DOCUMENTOS.values()}

CANONICAL_NAMES: frozenset[str] = frozenset(DOCUMENTOS.values())


def normalize(nome: str) -> str:
    """Map a raw document or column name to its canonical name.

    Parameters
    ----------
    nome : str
        Raw name as found in a spreadsheet header or document description.

    Returns
    -------
    str
        The canonical name, or ``nome`` unchanged when nothing matches.
        Canonical names map to themselves, so the function is idempotent.
    """
    if not isinstance(nome, str):
        return nome

    folded = fold(nome)
    if not folded:
        return nome

    canonical = _FOLDED_CANONICAL.get(folded)
    if canonical is not None:
        return canonical

    for key, value in _FOLDED_DOCUMENTOS.items():
        if key in folded or folded in key:
            return value

    return nome
