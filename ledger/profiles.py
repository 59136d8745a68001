"""Country, currency and locale profiles a company can be configured with."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Countries: addresses, phones, names
# ---------------------------------------------------------------------------

COUNTRY_PROFILES: dict[str, dict] = {
    "BR": {
        "name": "Brasil",
        "phone_code": "55",
        "timezone": "America/Sao_Paulo",
        "week_start": 0,  # Sunday
        "email_tld": "com.br",
        "sales_tax_rate": 0.05,  # ISS
        "states": [
            {"code": "SP", "area_code": "11", "cities": ["São Paulo", "Campinas", "Santos", "Ribeirão Preto"]},
            {"code": "RJ", "area_code": "21", "cities": ["Rio de Janeiro", "Niterói", "Petrópolis"]},
            {"code": "PR", "area_code": "41", "cities": ["Curitiba", "Londrina", "Maringá"]},
            {"code": "MG", "area_code": "31", "cities": ["Belo Horizonte", "Uberlândia", "Juiz de Fora"]},
            {"code": "RS", "area_code": "51", "cities": ["Porto Alegre", "Caxias do Sul", "Pelotas"]},
            {"code": "BA", "area_code": "71", "cities": ["Salvador", "Feira de Santana"]},
            {"code": "PE", "area_code": "81", "cities": ["Recife", "Olinda"]},
            {"code": "SC", "area_code": "48", "cities": ["Florianópolis", "Joinville", "Blumenau"]},
        ],
        "streets": [
            "Rua das Flores", "Avenida Paulista", "Rua Augusta", "Avenida Brasil",
            "Rua XV de Novembro", "Avenida Atlântica", "Rua da Consolação",
            "Avenida Sete de Setembro", "Rua Voluntários da Pátria",
        ],
        "company_words": [
            "Horizonte", "Aurora", "Ipê", "Cerrado", "Atlântica", "Pampa",
            "Vértice", "Sertão", "Nova Era", "Alvorada", "Boa Vista", "Tupã",
        ],
        "company_kinds": ["Comércio", "Serviços", "Tecnologia", "Consultoria", "Distribuidora", "Engenharia"],
        "entity_types": ["Ltda", "S.A.", "ME", "EIRELI"],
        "first_names": [
            "Ana", "João", "Maria", "Pedro", "Beatriz", "Lucas", "Juliana",
            "Rafael", "Camila", "Gabriel", "Fernanda", "Mateus", "Larissa",
        ],
        "last_names": [
            "Silva", "Santos", "Oliveira", "Souza", "Rodrigues", "Ferreira",
            "Almeida", "Pereira", "Lima", "Gomes", "Costa", "Ribeiro",
        ],
    },
    "US": {
        "name": "United States",
        "phone_code": "1",
        "timezone": "America/New_York",
        "week_start": 0,  # Sunday
        "email_tld": "com",
        "sales_tax_rate": 0.08,
        "states": [
            {"code": "NY", "area_code": "212", "cities": ["New York", "Buffalo", "Albany"]},
            {"code": "CA", "area_code": "415", "cities": ["San Francisco", "Los Angeles", "San Diego"]},
            {"code": "TX", "area_code": "512", "cities": ["Austin", "Dallas", "Houston"]},
            {"code": "IL", "area_code": "312", "cities": ["Chicago", "Springfield"]},
            {"code": "WA", "area_code": "206", "cities": ["Seattle", "Spokane", "Tacoma"]},
        ],
        "streets": [
            "Main Street", "Oak Avenue", "Maple Drive", "Pine Street",
            "Cedar Lane", "Elm Street", "Washington Avenue", "Lake Shore Drive",
        ],
        "company_words": [
            "Apex", "Nova", "Summit", "Horizon", "Catalyst", "Vertex",
            "Pinnacle", "Atlas", "Keystone", "Bluebird", "Ironwood",
        ],
        "company_kinds": ["Software", "Consulting", "Supply", "Media", "Logistics", "Partners"],
        "entity_types": ["LLC", "Inc.", "Corp."],
        "first_names": [
            "James", "Mary", "John", "Patricia", "Robert", "Jennifer",
            "Michael", "Linda", "David", "Elizabeth", "Daniel", "Sarah",
        ],
        "last_names": [
            "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia",
            "Miller", "Davis", "Wilson", "Anderson", "Taylor", "Moore",
        ],
    },
}


# ---------------------------------------------------------------------------
# Currencies
# ---------------------------------------------------------------------------

CURRENCY_PROFILES: dict[str, dict] = {
    "BRL": {
        "name": "Real Brasileiro",
        "symbol": "R$",
        "precision": 2,
        "symbol_first": True,
        "decimal_mark": ",",
        "thousands_separator": ".",
        "rate": 1.0,
    },
    "USD": {
        "name": "United States Dollar",
        "symbol": "$",
        "precision": 2,
        "symbol_first": True,
        "decimal_mark": ".",
        "thousands_separator": ",",
        "rate": 1.0,
    },
}


# ---------------------------------------------------------------------------
# Locales
# ---------------------------------------------------------------------------

LOCALE_PROFILES: dict[str, dict] = {
    "pt": {
        "date_format": "%d/%m/%Y",
        "number_format": "1.234,56",
        "percentage_first": False,
    },
    "en": {
        "date_format": "%m/%d/%Y",
        "number_format": "1,234.56",
        "percentage_first": False,
    },
}


def localization_for(locale: str, country: str) -> dict:
    """Localization row values for a locale/country pair."""
    locale_profile = LOCALE_PROFILES[locale]
    country_profile = COUNTRY_PROFILES[country]
    return {
        "language": locale,
        "timezone": country_profile["timezone"],
        "date_format": locale_profile["date_format"],
        "number_format": locale_profile["number_format"],
        "percentage_first": locale_profile["percentage_first"],
        "week_start": country_profile["week_start"],
    }

