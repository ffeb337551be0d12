from __future__ import annotations

import os


# Central routing for LLM use-cases. Edit here to change per-operation defaults.
# Per-route model can be overridden via env vars for quick testing.
#
# Keys are use_case identifiers consumed by services/llm_client.py
ROUTES: dict[str, dict] = {
    # Batch scoring/normalization of discovered candidates
    "candidate_scoring": {
        "model": os.getenv("OPENROUTER_MODEL_SCORING"),  # falls back to global OPENROUTER_MODEL
        "temperature": 0.1,
        "max_tokens": 2000,
        # Logical operation name for logging (not a vendor API name)
        "operation": "candidate_scoring",
    },
    # Structured contact extraction from one business page
    "page_extraction": {
        "model": os.getenv("OPENROUTER_MODEL_EXTRACTION"),
        "temperature": 0.1,
        "max_tokens": 500,
        "operation": "page_extraction",
    },
}
