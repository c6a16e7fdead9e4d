import logging
from typing import Iterable, List

from jiji.core.query.keywords import (
    DEFAULT_KEYWORD_CONFIG,
    KeywordConfig,
    extract_keywords,
)
from jiji.core.query.store import QueryStore, ResourceRecord, StoreError


logger = logging.getLogger(__name__)

# How many active catalog rows are pulled per request before filtering
DEFAULT_RESOURCE_SAMPLE_LIMIT = 10


def resource_matches(resource: ResourceRecord, keywords: Iterable[str]) -> bool:
    """
    True when any keyword is a case-insensitive substring of the title,
    the description or one of the tags.
    """
    haystacks = [resource.title.lower()]
    if resource.description:
        haystacks.append(resource.description.lower())
    # tags come from a JSON column, skip anything that is not a string
    haystacks.extend(tag.lower() for tag in resource.tags or [] if isinstance(tag, str))

    return any(keyword in text for keyword in keywords for text in haystacks)


async def find_matching_resources(
    store: QueryStore,
    query: str,
    *,
    config: KeywordConfig = DEFAULT_KEYWORD_CONFIG,
    sample_limit: int = DEFAULT_RESOURCE_SAMPLE_LIMIT,
) -> List[ResourceRecord]:
    """
    Select catalog entries that share a keyword with the query.

    Only the first `sample_limit` active resources returned by the store are
    considered. Matches keep the store's order; there is no relevance ranking.

    Args:
        store: Catalog source.
        query: Sanitized query text.
        config: Keyword extraction settings.
        sample_limit: Max catalog rows to inspect.

    Returns:
        Matching resources, or an empty list when the catalog is empty or
        the store call failed.
    """
    keywords = extract_keywords(query.lower(), config)

    try:
        resources = await store.list_active_resources(sample_limit)
    except StoreError as error:
        logger.error(f"Resource lookup failed: {error}")
        return []

    if not resources or not keywords:
        return []

    return [r for r in resources if resource_matches(r, keywords)]
