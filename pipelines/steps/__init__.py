# Namespace for pipeline steps
from .discover_businesses import DiscoverBusinesses  # noqa: F401
from .score_candidates import ApplyRelevanceThreshold, ScoreCandidates  # noqa: F401
from .extract_contacts import ExtractAndPersistContacts  # noqa: F401
