from __future__ import annotations

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from models import Candidate, ScoredCandidate
from ports.llm import LLMClientPort
from services.llm_json import parse_json_reply


logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50

SCORING_PROMPT = """Tu es un expert en validation de données d'entreprises françaises.

CONTEXTE:
- Secteur recherché: {sector}
- Zone géographique: {area}

RÉSULTATS BRUTS ({count} entreprises):
{candidates_json}

TÂCHE:
Pour chaque entreprise, évalue sa pertinence (score 0-100) par rapport au secteur et à la zone:
- 100 = correspond exactement au secteur ET à la zone
- 50-99 = correspond au secteur mais zone incertaine
- 0-49 = ne correspond pas au secteur ou zone incorrecte
Corrige les noms d'entreprises si nécessaire (enlève les suffixes inutiles, normalise).

RÉPONDS UNIQUEMENT EN JSON VALIDE (sans markdown):
[
  {{
    "name": "Nom corrigé",
    "website": "https://...",
    "address": "adresse",
    "phone": "téléphone",
    "relevanceScore": 85
  }}
]

Trie par score de pertinence décroissant."""


def neutral_scores(candidates: List[Candidate]) -> List[ScoredCandidate]:
    return [ScoredCandidate.from_candidate(c, NEUTRAL_SCORE) for c in candidates]


class RelevanceFilter:
    """Scores and normalizes raw candidates in one batched AI call.

    Without an AI client, or when the reply cannot be used, every candidate is
    kept in its original order with a neutral score.
    """

    def __init__(self, llm: Optional[LLMClientPort] = None) -> None:
        self.llm = llm

    def filter(self, candidates: List[Candidate], sector: str, area: str) -> List[ScoredCandidate]:
        if not candidates:
            return []
        if self.llm is None:
            return neutral_scores(candidates)

        prompt = SCORING_PROMPT.format(
            sector=sector,
            area=area,
            count=len(candidates),
            candidates_json=json.dumps([c.model_dump() for c in candidates], ensure_ascii=False, indent=2),
        )
        try:
            reply = self.llm.complete(use_case="candidate_scoring", prompt=prompt)
            parsed = parse_json_reply(reply)
        except Exception as e:
            logger.warning(
                "Candidate scoring unavailable, keeping original order",
                extra={"step": "score_candidates", "status": "degraded", "error": str(e)},
            )
            return neutral_scores(candidates)

        if not isinstance(parsed, list):
            logger.warning(
                "Candidate scoring reply is not a JSON array, keeping original order",
                extra={"step": "score_candidates", "status": "degraded"},
            )
            return neutral_scores(candidates)

        scored: List[ScoredCandidate] = []
        for item in parsed:
            if not isinstance(item, dict):
                continue
            try:
                scored.append(ScoredCandidate.model_validate(item))
            except (ValidationError, TypeError, ValueError, OverflowError) as e:
                logger.debug("Dropping malformed scored candidate %r: %s", item, e)
        logger.info(
            "Scored %d candidates, model returned %d", len(candidates), len(scored),
            extra={"step": "score_candidates", "status": "ok"},
        )
        return scored
