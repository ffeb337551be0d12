from __future__ import annotations

import pytest

from conftest import FakeResponse, FakeSession
from models import Candidate
from services.fallback_chain import UNAVAILABLE
from sources.base import DiscoveryUnavailable
from sources.discovery import BusinessDiscovery
from sources.firecrawl_search import (
    FirecrawlSearchSource,
    candidate_from_hit,
    extract_address_from_content,
    extract_business_name,
    extract_phone_from_content,
    extract_website_from_content,
)
from sources.pagesjaunes_directory import PagesJaunesDirectorySource, parse_listings


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Plomberie Dupont - Pages Jaunes", "Plomberie Dupont"),
        ("Garage Martin - Yelp", "Garage Martin"),
        ("Boulangerie Petit | Google Maps", "Boulangerie Petit"),
        ("https://www.example.fr/", "Business"),
        ("", ""),
    ],
)
def test_extract_business_name(title, expected):
    assert extract_business_name(title) == expected


def test_extract_website_prefers_labelled_site():
    content = "Fiche annuaire. Site web : www.dupont-plomberie.fr. Horaires 9h-18h"
    assert extract_website_from_content(content) == "https://www.dupont-plomberie.fr"
    assert extract_website_from_content("Website: https://garage.fr") == "https://garage.fr"
    assert extract_website_from_content("Aucun lien ici") is None


def test_extract_address_patterns():
    assert extract_address_from_content("Nous sommes au 12 rue de la Paix, 75002 Paris") == "12 rue de la Paix"
    assert extract_address_from_content("Adresse: Zone artisanale des Prés\nLyon") == "Zone artisanale des Prés"
    assert extract_address_from_content("Pas d'adresse") is None


def test_extract_phone_patterns():
    assert extract_phone_from_content("Appelez le 01 23 45 67 89 !") == "0123456789"
    assert extract_phone_from_content("Mobile +336 12 34 56 78") == "+33612345678"
    assert extract_phone_from_content("Phone: 04.78.00.00.00") == "04.78.00.00.00"
    assert extract_phone_from_content("ouvert 7j/7") is None


def test_candidate_from_hit():
    hit = {
        "url": "https://www.pagesjaunes.fr/pros/123",
        "metadata": {"title": "Plomberie Dupont - Pages Jaunes"},
        "content": "Plombier. 8 avenue Foch, Lyon.\nTel: 04 72 00 00 00\nSite web: plomberie-dupont.fr",
    }
    c = candidate_from_hit(hit)
    assert c == Candidate(
        name="Plomberie Dupont",
        website="https://plomberie-dupont.fr",
        address="8 avenue Foch",
        phone="0472000000",
    )


def test_candidate_from_hit_without_title_or_url_is_dropped():
    assert candidate_from_hit({"url": "", "metadata": {}, "content": ""}) is None


class _Provider:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.queries = []

    def search(self, query, limit):
        self.queries.append((query, limit))
        if self.error:
            raise self.error
        return self.response


def test_firecrawl_source_builds_query_and_parses_hits(settings):
    provider = _Provider({
        "success": True,
        "data": [
            {"url": "https://garage-martin.fr", "metadata": {"title": "Garage Martin"}, "content": ""},
            {"url": "", "metadata": {}, "content": ""},
        ],
    })
    source = FirecrawlSearchSource(settings, provider=provider)

    result = source.attempt("Rhône", "garage")

    assert provider.queries == [("garage Rhône France", 10)]
    assert result == [Candidate(name="Garage Martin", website="https://garage-martin.fr")]


def test_firecrawl_source_failure_reply_raises(settings):
    source = FirecrawlSearchSource(settings, provider=_Provider({"success": False, "data": None, "error": "quota"}))
    with pytest.raises(DiscoveryUnavailable):
        source.attempt("Rhône", "garage")


def test_firecrawl_source_without_key_is_unavailable(settings):
    assert settings.firecrawl_api_key is None
    assert FirecrawlSearchSource(settings).attempt("Rhône", "garage") is UNAVAILABLE


class _Strategy:
    def __init__(self, name, result=None, error=None):
        self.name = name
        self.result = result
        self.error = error
        self.calls = 0

    def attempt(self, area, sector):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


def test_discovery_falls_back_when_primary_raises():
    fallback_rows = [Candidate(name="Dupont")]
    primary = _Strategy("primary", error=DiscoveryUnavailable("down"))
    fallback = _Strategy("fallback", result=fallback_rows)
    assert BusinessDiscovery([primary, fallback]).discover("Lyon", "plombier") == fallback_rows
    assert fallback.calls == 1


def test_discovery_does_not_mix_or_fallback_on_empty_success():
    primary = _Strategy("primary", result=[])
    fallback = _Strategy("fallback", result=[Candidate(name="Dupont")])
    assert BusinessDiscovery([primary, fallback]).discover("Lyon", "plombier") == []
    assert fallback.calls == 0


def test_discovery_total_failure_is_empty_list():
    primary = _Strategy("primary", result=UNAVAILABLE)
    fallback = _Strategy("fallback", error=RuntimeError("parse error"))
    assert BusinessDiscovery([primary, fallback]).discover("Lyon", "plombier") == []


def test_discovery_from_settings_uses_registered_order(settings):
    discovery = BusinessDiscovery.from_settings(settings, session=FakeSession())
    assert [s.name for s in discovery.strategies] == ["firecrawl_search", "pagesjaunes_directory"]


PRIMARY_HTML = """
<div class="bi-bloc">
  <h3 class="bi-denomination"> Plomberie
     Dupont </h3>
  <div class="bi-address">8 avenue Foch 69006 Lyon</div>
  <div class="bi-phone">04 72 00 00 00</div>
  <div class="bi-website"><a href="https://www.pagesjaunes.fr/pros/redirect?url=https%3A%2F%2Fwww.dupont.fr%2F&amp;t=1">Site</a></div>
</div>
<div class="bi-bloc"><div class="adresse">sans nom</div></div>
<div class="bi-bloc">
  <span class="bi-nom">Garage Martin</span>
  <span class="coord-numero">04 78 11 22 33</span>
  <a data-pj-label="Site internet" href="https://garage-martin.fr">Site internet</a>
</div>
"""


def test_parse_primary_listings():
    rows = parse_listings(PRIMARY_HTML)
    assert rows == [
        Candidate(name="Plomberie Dupont", website="https://www.dupont.fr/", address="8 avenue Foch 69006 Lyon", phone="04 72 00 00 00"),
        Candidate(name="Garage Martin", website="https://garage-martin.fr", phone="04 78 11 22 33"),
    ]


def test_parse_primary_listings_caps_blocks():
    html = "".join(f'<div class="bi-bloc"><h3>Entreprise {i}</h3></div>' for i in range(12))
    rows = parse_listings(html, max_listings=10)
    assert len(rows) == 10
    assert rows[-1].name == "Entreprise 9"


def test_parse_falls_back_to_secondary_selectors():
    html = """
    <article><h2>Boulangerie Petit</h2><p class="address">2 place Bellecour</p><p class="tel">04 00 00 00 00</p></article>
    <div class="entreprise"><p>pas de nom</p></div>
    """
    assert parse_listings(html) == [
        Candidate(name="Boulangerie Petit", address="2 place Bellecour", phone="04 00 00 00 00"),
    ]


def test_directory_source_fetches_and_parses(settings):
    session = FakeSession({settings.directory_search_url: FakeResponse(200, PRIMARY_HTML)})
    rows = PagesJaunesDirectorySource(settings, session=session).attempt("Lyon", "plombier")
    assert [r.name for r in rows] == ["Plomberie Dupont", "Garage Martin"]
    call = session.calls[0]
    assert call["params"] == {"quoiqui": "plombier", "ou": "Lyon", "proximite": "0"}
    assert call["headers"]["Accept-Language"].startswith("fr-FR")


def test_directory_source_http_error_is_empty(settings):
    session = FakeSession({settings.directory_search_url: FakeResponse(403, "blocked")})
    assert PagesJaunesDirectorySource(settings, session=session).attempt("Lyon", "plombier") == []
