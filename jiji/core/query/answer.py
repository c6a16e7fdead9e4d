from typing import Sequence

from jiji.core.query.store import ResourceRecord


def generate_answer(query: str, resources: Sequence[ResourceRecord]) -> str:
    """Pick one of two fixed templates depending on whether anything matched."""
    if not resources:
        return (
            f'I understand you\'re asking about "{query}". '
            "Relevant resources will appear as more content is added."
        )

    return (
        f'Here are {len(resources)} learning resources related to "{query}" '
        "that you may find helpful."
    )
