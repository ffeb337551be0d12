from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pydantic import ValidationError

from config.settings import Settings, get_settings
from models import Candidate, ContactResult, PageExtractionResult
from ports.llm import LLMClientPort
from services.domain_utils import ensure_scheme, hostname_of
from services.fallback_chain import UNAVAILABLE, first_available
from services.llm_json import parse_json_reply
from services.page_fetcher import FetchedPage, FetchFailure, PageFetcher


logger = logging.getLogger(__name__)

EMAIL_PATTERNS = [
    re.compile(r"([a-zA-Z0-9._%-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"),
    re.compile(r"mailto:([a-zA-Z0-9._%-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", re.IGNORECASE),
]

# Automated-mail local parts that are never reported as a business contact
ROLE_ADDRESS_MARKERS = ("noreply", "no-reply", "donotreply")

PLACEHOLDER_LOCAL_PARTS = ("contact", "info")

EXTRACTION_PROMPT = """Tu es un expert en extraction de données d'entreprises françaises. Analyse cette page web et extrais les informations suivantes :

CONTEXTE DE RECHERCHE:
- Secteur attendu : {sector}
- Département/Ville : {area}

PAGE WEB:
URL: {url}
HTML: {html}

TÂCHE:
1. Détermine si cette page correspond VRAIMENT à une entreprise du secteur "{sector}" dans la zone "{area}"
2. Extrais les informations suivantes (si disponibles):
   - Nom exact de l'entreprise
   - Email(s) de contact (pas de noreply/donotreply)
   - Téléphone(s) français
   - Adresse complète
   - Site web
3. Donne un score de pertinence de 0 à 100:
   - 100 = correspond parfaitement au secteur ET à la zone géographique
   - 50-99 = correspond au secteur mais zone incertaine
   - 0-49 = ne correspond pas au secteur ou zone incorrecte

RÉPONDS UNIQUEMENT EN JSON VALIDE (sans markdown):
{{
  "businessName": "nom exact",
  "email": ["email1@example.com"],
  "phone": ["+33123456789"],
  "address": "adresse complète",
  "website": "{url}",
  "isRelevant": true,
  "relevanceScore": 85,
  "extractedInfo": "brève explication de ce que fait l'entreprise"
}}"""


def is_role_address(email: str) -> bool:
    lowered = email.lower()
    return any(marker in lowered for marker in ROLE_ADDRESS_MARKERS)


def clean_emails(emails: Iterable[str]) -> List[str]:
    """Keep the bare address of each entry, lower-cased; drop role-addresses and duplicates (first seen wins)."""
    seen: dict[str, None] = {}
    for raw in emails:
        match = EMAIL_PATTERNS[0].search(raw or "")
        if match is None:
            continue
        email = match.group(1).lower()
        if is_role_address(email):
            continue
        seen.setdefault(email, None)
    return list(seen)


def harvest_emails(html: str) -> List[str]:
    """Collect bare and mailto: email addresses from raw HTML."""
    found: List[str] = []
    for pattern in EMAIL_PATTERNS:
        found.extend(m.group(1) for m in pattern.finditer(html or ""))
    return clean_emails(found)


def placeholder_emails(url: str) -> List[str]:
    host = hostname_of(url)
    if not host:
        return []
    return [f"{local}@{host}" for local in PLACEHOLDER_LOCAL_PARTS]


@dataclass
class PageContext:
    candidate: Candidate
    sector: str
    area: str
    url: str
    page: Optional[FetchedPage] = None

    def result(self, email: str, origin: str, **overrides) -> ContactResult:
        fields = {
            "business_name": self.candidate.name,
            "website": self.candidate.website,
            "email": email,
            "phone": self.candidate.phone,
            "address": self.candidate.address,
            "city": self.area,
            "email_source": self.candidate.website,
            "email_origin": origin,
        }
        fields.update({k: v for k, v in overrides.items() if v})
        return ContactResult(**fields)


class AiPageExtraction:
    name = "ai_extraction"

    def __init__(self, llm: LLMClientPort, excerpt_chars: int = 8000) -> None:
        self.llm = llm
        self.excerpt_chars = excerpt_chars

    def attempt(self, ctx: PageContext):
        if ctx.page is None:
            return UNAVAILABLE
        prompt = EXTRACTION_PROMPT.format(
            sector=ctx.sector,
            area=ctx.area,
            url=ctx.url,
            html=ctx.page.html[: self.excerpt_chars],
        )
        try:
            reply = self.llm.complete(use_case="page_extraction", prompt=prompt)
            extracted = PageExtractionResult.model_validate(parse_json_reply(reply))
        except (ValueError, ValidationError) as e:
            logger.warning(
                "Unusable extraction reply for %s", ctx.url,
                extra={"step": self.name, "status": "malformed", "error": str(e)},
            )
            return UNAVAILABLE
        except Exception as e:
            logger.warning(
                "Extraction call failed for %s", ctx.url,
                extra={"step": self.name, "status": "error", "error": str(e)},
            )
            return UNAVAILABLE

        logger.info(
            "Analyzed %s: relevance=%s%% name=%r", ctx.url, extracted.relevance_score, extracted.business_name,
            extra={"step": self.name},
        )
        emails = clean_emails(extracted.email)
        if not extracted.is_relevant or not emails:
            return UNAVAILABLE
        return [
            ctx.result(
                email,
                "ai",
                business_name=extracted.business_name,
                phone=extracted.phone[0] if extracted.phone else None,
                address=extracted.address,
            )
            for email in emails
        ]


class RegexHarvest:
    name = "regex_harvest"

    def attempt(self, ctx: PageContext):
        if ctx.page is None:
            return UNAVAILABLE
        emails = harvest_emails(ctx.page.html)
        if not emails:
            return UNAVAILABLE
        return [ctx.result(email, "regex") for email in emails]


class PlaceholderEmails:
    """Last resort: synthesizes contact@/info@ for the site's hostname (not verified data)."""

    name = "placeholder"

    def attempt(self, ctx: PageContext):
        return [ctx.result(email, "placeholder") for email in placeholder_emails(ctx.url)]


class ContactExtractor:
    """Fetches one candidate website and turns it into contact rows."""

    def __init__(
        self,
        fetcher: PageFetcher,
        llm: Optional[LLMClientPort] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.fetcher = fetcher
        self.llm = llm
        self.strategies = []
        if llm is not None:
            self.strategies.append(AiPageExtraction(llm, excerpt_chars=self.settings.page_excerpt_chars))
        self.strategies.extend([RegexHarvest(), PlaceholderEmails()])

    @property
    def fetch_timeout(self) -> int:
        # Full-page fetches feed AI extraction; harvest-only fetches get a shorter budget
        if self.llm is not None:
            return self.settings.page_fetch_timeout_seconds
        return self.settings.harvest_fetch_timeout_seconds

    def extract(self, candidate: Candidate, sector: str, area: str) -> List[ContactResult]:
        if not candidate.website:
            return []
        try:
            url = ensure_scheme(candidate.website)
            ctx = PageContext(candidate=candidate, sector=sector, area=area, url=url)
            try:
                ctx.page = self.fetcher.fetch(url, timeout=self.fetch_timeout)
            except FetchFailure as e:
                logger.info(
                    "Fetch failed for %s", url,
                    extra={"step": "fetch_page", "status": "failed", "error": str(e)},
                )
            stage, results = first_available(self.strategies, ctx)
            if results is UNAVAILABLE:
                return []
            logger.info(
                "%d email(s) for %s via %s", len(results), candidate.name, stage,
                extra={"step": "extract_contacts", "status": stage},
            )
            return results
        except Exception as e:
            logger.error(
                "Error processing business %s", candidate.name,
                extra={"step": "extract_contacts", "status": "error", "error": str(e)},
                exc_info=True,
            )
            return []
