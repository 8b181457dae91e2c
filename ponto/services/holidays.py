"""
State and municipal holiday templates.
Used to pre-populate an organization's holiday calendar from its address.
"""
import unicodedata
from datetime import date
from typing import Dict, List, NamedTuple, Optional


class HolidayTemplate(NamedTuple):
    name: str
    month: int
    day: int


class HolidayRow(NamedTuple):
    name: str
    date: date
    type: str  # state|municipal
    state_code: Optional[str]
    city_name: Optional[str]
    is_custom: bool = False


STATE_HOLIDAYS: Dict[str, List[HolidayTemplate]] = {
    "AC": [
        HolidayTemplate("Dia do Evangélico", 1, 23),
        HolidayTemplate("Aniversário do Acre", 6, 15),
        HolidayTemplate("Início da Revolução Acreana", 8, 6),
        HolidayTemplate("Dia da Amazônia", 9, 5),
        HolidayTemplate("Assinatura do Tratado de Petrópolis", 11, 17),
    ],
    "AL": [
        HolidayTemplate("Emancipação Política de Alagoas", 9, 16),
        HolidayTemplate("São João", 6, 24),
    ],
    "AM": [HolidayTemplate("Elevação do Amazonas à Categoria de Província", 9, 5)],
    "AP": [
        HolidayTemplate("Dia de São José", 3, 19),
        HolidayTemplate("Criação do Território Federal do Amapá", 9, 13),
    ],
    "BA": [HolidayTemplate("Independência da Bahia", 7, 2)],
    "CE": [
        HolidayTemplate("Dia de São José", 3, 19),
        HolidayTemplate("Data Magna do Ceará", 3, 25),
    ],
    "DF": [
        HolidayTemplate("Fundação de Brasília", 4, 21),
        HolidayTemplate("Dia do Evangélico", 11, 30),
    ],
    "ES": [],
    "GO": [],
    "MA": [HolidayTemplate("Adesão do Maranhão à Independência do Brasil", 7, 28)],
    "MG": [],
    "MS": [HolidayTemplate("Criação do Estado de Mato Grosso do Sul", 10, 11)],
    "MT": [],
    "PA": [HolidayTemplate("Adesão do Grão-Pará à Independência do Brasil", 8, 15)],
    "PB": [HolidayTemplate("Fundação do Estado da Paraíba", 8, 5)],
    "PE": [],
    "PI": [HolidayTemplate("Dia do Piauí", 10, 19)],
    "PR": [HolidayTemplate("Emancipação Política do Paraná", 12, 19)],
    "RJ": [HolidayTemplate("Dia de São Jorge", 4, 23)],
    "RN": [HolidayTemplate("Mártires de Cunhaú e Uruaçu", 10, 3)],
    "RO": [
        HolidayTemplate("Criação do Estado de Rondônia", 1, 4),
        HolidayTemplate("Dia do Evangélico", 6, 18),
    ],
    "RR": [HolidayTemplate("Criação do Estado de Roraima", 10, 5)],
    "RS": [HolidayTemplate("Dia do Gaúcho - Revolução Farroupilha", 9, 20)],
    "SC": [HolidayTemplate("Criação da Capitania de Santa Catarina", 8, 11)],
    "SE": [HolidayTemplate("Emancipação Política de Sergipe", 7, 8)],
    "SP": [HolidayTemplate("Revolução Constitucionalista de 1932", 7, 9)],
    "TO": [
        HolidayTemplate("Criação do Estado do Tocantins", 10, 5),
        HolidayTemplate("Autonomia do Estado do Tocantins", 3, 18),
        HolidayTemplate("Nossa Senhora da Natividade", 9, 8),
    ],
}

# Keyed by upper-case city name; lookups also match without accents
MUNICIPAL_HOLIDAYS: Dict[str, List[HolidayTemplate]] = {
    "PORTO ALEGRE": [
        HolidayTemplate("Nossa Senhora dos Navegantes", 2, 2),
        HolidayTemplate("Aniversário de Porto Alegre", 3, 26),
    ],
    "SÃO PAULO": [HolidayTemplate("Aniversário de São Paulo", 1, 25)],
    "RIO DE JANEIRO": [
        HolidayTemplate("Dia de São Sebastião", 1, 20),
        HolidayTemplate("Aniversário do Rio de Janeiro", 3, 1),
    ],
    "BELO HORIZONTE": [HolidayTemplate("Aniversário de Belo Horizonte", 12, 12)],
    "SALVADOR": [HolidayTemplate("Aniversário de Salvador", 3, 29)],
    "BRASÍLIA": [HolidayTemplate("Aniversário de Brasília", 4, 21)],
    "CURITIBA": [HolidayTemplate("Aniversário de Curitiba", 3, 29)],
    "RECIFE": [HolidayTemplate("Aniversário de Recife", 3, 12)],
    "FORTALEZA": [
        HolidayTemplate("Aniversário de Fortaleza", 4, 13),
        HolidayTemplate("Nossa Senhora da Assunção", 8, 15),
    ],
    "BELÉM": [HolidayTemplate("Aniversário de Belém", 1, 12)],
    "MANAUS": [HolidayTemplate("Aniversário de Manaus", 10, 24)],
    "GOIÂNIA": [HolidayTemplate("Aniversário de Goiânia", 10, 24)],
    "FLORIANÓPOLIS": [HolidayTemplate("Aniversário de Florianópolis", 3, 23)],
    "VITÓRIA": [HolidayTemplate("Aniversário de Vitória", 9, 8)],
    "NATAL": [HolidayTemplate("Aniversário de Natal", 12, 25)],
    "CAMPO GRANDE": [HolidayTemplate("Aniversário de Campo Grande", 8, 26)],
    "CUIABÁ": [HolidayTemplate("Aniversário de Cuiabá", 4, 8)],
    "JOÃO PESSOA": [HolidayTemplate("Aniversário de João Pessoa", 8, 5)],
    "TERESINA": [HolidayTemplate("Aniversário de Teresina", 8, 16)],
    "SÃO LUÍS": [HolidayTemplate("Aniversário de São Luís", 9, 8)],
    "MACEIÓ": [HolidayTemplate("Aniversário de Maceió", 12, 5)],
    "ARACAJU": [HolidayTemplate("Aniversário de Aracaju", 3, 17)],
    "MACAPÁ": [HolidayTemplate("Aniversário de Macapá", 2, 4)],
    "RIO BRANCO": [HolidayTemplate("Aniversário de Rio Branco", 12, 28)],
    "BOA VISTA": [HolidayTemplate("Aniversário de Boa Vista", 6, 9)],
    "PORTO VELHO": [HolidayTemplate("Aniversário de Porto Velho", 10, 2)],
    "PALMAS": [HolidayTemplate("Aniversário de Palmas", 5, 20)],
}


def _strip_accents(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value)
    return "".join(c for c in normalized if not unicodedata.combining(c))


_MUNICIPAL_BY_PLAIN_NAME = {_strip_accents(k): k for k in MUNICIPAL_HOLIDAYS}


def normalize_city(city_name: Optional[str]) -> Optional[str]:
    """Upper-case, trimmed city key as stored in MUNICIPAL_HOLIDAYS, if known."""
    if not city_name:
        return None
    upper = city_name.strip().upper()
    if upper in MUNICIPAL_HOLIDAYS:
        return upper
    return _MUNICIPAL_BY_PLAIN_NAME.get(_strip_accents(upper), upper)


def state_holidays_for_year(state_code: Optional[str], year: int) -> List[HolidayRow]:
    if not state_code:
        return []
    uf = state_code.strip().upper()
    return [
        HolidayRow(h.name, date(year, h.month, h.day), "state", uf, None)
        for h in STATE_HOLIDAYS.get(uf, [])
    ]


def municipal_holidays_for_year(city_name: Optional[str], year: int) -> List[HolidayRow]:
    city = normalize_city(city_name)
    if city is None:
        return []
    return [
        HolidayRow(h.name, date(year, h.month, h.day), "municipal", None, city)
        for h in MUNICIPAL_HOLIDAYS.get(city, [])
    ]


def holidays_for_location(state_code: Optional[str], city_name: Optional[str], year: int) -> List[HolidayRow]:
    rows = state_holidays_for_year(state_code, year) + municipal_holidays_for_year(city_name, year)
    return sorted(rows, key=lambda r: r.date)
