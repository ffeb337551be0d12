from .candidate import Candidate, ScoredCandidate
from .contact_result import ContactResult, EmailOrigin
from .page_extraction_result import PageExtractionResult
from .search import Search, SearchStatus

__all__ = [
    "Candidate",
    "ScoredCandidate",
    "ContactResult",
    "EmailOrigin",
    "PageExtractionResult",
    "Search",
    "SearchStatus",
]
