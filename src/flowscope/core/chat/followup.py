"""
Conversational access after (or instead of) an analysis run.

ask_followup answers a question about a finished run using a lightweight description of the
record set plus the previous result; it never resends the records themselves.
explore_records sends the full record JSON with a free-form question.
Provider errors propagate to the caller in both cases.
"""

from __future__ import annotations
from flowscope.core.prompt.builder import build_exploration_prompt, build_followup_prompt
from flowscope.domain.exceptions.exceptions import FlowscopeError
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.core.clients.client_base import Client
    from flowscope.core.orchestration.context import RunContext
    from flowscope.domain.record.record import Record, RecordSet

logger = logging.getLogger(__name__)


def _require_text(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} must not be empty.")
    return value.strip()


async def ask_followup(ctx: RunContext, question: str) -> str:
    if not ctx.completed:
        raise FlowscopeError("Follow-up questions require a completed analysis run.")
    question = _require_text(question, "Question")
    prompt = build_followup_prompt(ctx.record_set, ctx.result, question)
    logger.info(f"Follow-up question over {ctx.record_set.count} records.")
    return await ctx.client.complete(prompt, label="follow-up")


async def explore_records(
    client: Client, records: Sequence[Record] | RecordSet, message: str
) -> str:
    message = _require_text(message, "Message")
    prompt = build_exploration_prompt(records, message)
    logger.info(f"Exploration request: {len(prompt)} chars.")
    return await client.complete(prompt, label="exploration")
