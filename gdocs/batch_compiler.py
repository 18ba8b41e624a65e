"""
Batch operation compiler: DocumentFormattingPlan -> batchUpdate requests.

Request order matters. An updateParagraphStyle that sets a heading resets the
inline styling inside its range, so paragraph and bullet requests go first
and text style requests last:

    1. one insertText at index 1 with the whole text
    2. updateParagraphStyle for each paragraph with a mapped style
    3. createParagraphBullets for each list paragraph
    4. updateTextStyle for each styled run
"""

import logging
from typing import Any

from gdocs.docs_helpers import (
    create_bullet_list_request,
    create_insert_text_request,
    create_paragraph_style_request,
    create_text_style_request,
)
from gdocs.models import DocumentFormattingPlan
from gdocs.position import DOCUMENT_START_INDEX

logger = logging.getLogger(__name__)


def to_operations(plan: DocumentFormattingPlan) -> list[dict[str, Any]]:
    """
    Compile a plan into the ordered request list for a single batchUpdate.

    An empty plan compiles to no requests.
    """
    if plan.is_empty:
        return []

    requests: list[dict[str, Any]] = [create_insert_text_request(DOCUMENT_START_INDEX, plan.full_text)]

    paragraph_requests = [
        create_paragraph_style_request(run.start, run.end, run.value) for run in plan.paragraph_style_runs
    ]
    requests.extend(request for request in paragraph_requests if request is not None)

    requests.extend(create_bullet_list_request(run.start, run.end, run.value) for run in plan.list_runs)

    text_requests = [create_text_style_request(run.start, run.end, run.value) for run in plan.text_style_runs]
    requests.extend(request for request in text_requests if request is not None)

    logger.debug(
        f"Compiled {len(requests)} requests: {len(plan.paragraph_style_runs)} paragraphs, "
        f"{len(plan.list_runs)} list paragraphs, {len(plan.text_style_runs)} text runs"
    )
    return requests
