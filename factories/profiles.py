"""Fake addresses, phones, names and emails driven by the country profiles."""

from __future__ import annotations

import random
import re
import unicodedata

from ledger.profiles import COUNTRY_PROFILES


# ---------------------------------------------------------------------------
# Fake data helpers
# ---------------------------------------------------------------------------

def slugify(text: str) -> str:
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", ".", ascii_text.lower()).strip(".")


def fake_postal_code(country: str, rng: random.Random) -> str:
    if country == "BR":
        return f"{rng.randint(1000, 99999):05d}-{rng.randint(0, 999):03d}"
    return f"{rng.randint(10000, 99999)}"


def fake_phone(country: str, rng: random.Random, area_code: str | None = None) -> str:
    profile = COUNTRY_PROFILES[country]
    area_code = area_code or rng.choice(profile["states"])["area_code"]
    if country == "BR":
        return f"+55 ({area_code}) 9{rng.randint(1000, 9999)}-{rng.randint(0, 9999):04d}"
    return f"+{profile['phone_code']} ({area_code}) {rng.randint(200, 999)}-{rng.randint(0, 9999):04d}"


def fake_address(country: str, rng: random.Random) -> dict:
    profile = COUNTRY_PROFILES[country]
    state = rng.choice(profile["states"])
    street = rng.choice(profile["streets"])
    number = rng.randint(1, 2500)
    line_1 = f"{street}, {number}" if country == "BR" else f"{number} {street}"
    return {
        "address_line_1": line_1,
        "city": rng.choice(state["cities"]),
        "state": state["code"],
        "postal_code": fake_postal_code(country, rng),
        "country_code": country,
        "area_code": state["area_code"],
    }


def fake_company_name(country: str, rng: random.Random) -> str:
    profile = COUNTRY_PROFILES[country]
    word = rng.choice(profile["company_words"])
    kind = rng.choice(profile["company_kinds"])
    suffix = rng.choice(profile["entity_types"])
    return f"{word} {kind} {suffix}"


def fake_person_name(country: str, rng: random.Random) -> str:
    profile = COUNTRY_PROFILES[country]
    return f"{rng.choice(profile['first_names'])} {rng.choice(profile['last_names'])}"


def fake_email(name: str, country: str, domain: str | None = None) -> str:
    tld = COUNTRY_PROFILES[country]["email_tld"]
    local = slugify(name) or "contato"
    return f"{local}@{domain or 'example'}.{tld}"
