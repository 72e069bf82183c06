"""Query Engine — filtered, sorted, paginated listing of donation requests.

Invariants:
    - Caller input always passes through build_search_spec (clamped, allow-listed)
    - total and items come from two independent reads of the same filter
    - len(items) <= spec.limit <= max_limit

Design Decisions:
    - No shared snapshot between count and fetch: under concurrent writes the
      two numbers may disagree, which listings tolerate (eventual consistency)
"""

import logging
from dataclasses import dataclass

from app.core.repository_protocols import DonationRequestRepository
from app.core.search_criteria import SearchSpec, build_search_spec

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    items: list[dict]
    total: int
    spec: SearchSpec


class RequestQueryEngine:
    """Read-only search over the donation request pool."""

    def __init__(
        self,
        repository: DonationRequestRepository,
        default_limit: int = 10,
        max_limit: int = 100,
    ):
        self.repository = repository
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def search(self, criteria: dict) -> SearchResult:
        spec = build_search_spec(criteria, self.default_limit, self.max_limit)
        total = await self.repository.count(spec)
        items = await self.repository.find(spec)
        logger.debug(
            f"Search matched {total} request(s), returned {len(items)}",
        )
        return SearchResult(items=items, total=total, spec=spec)
