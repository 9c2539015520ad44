"""
Questionnaire session: the live question list and the per-answer state machine.

Answers for one session must be submitted one at a time; each outcome depends
on everything answered before it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from ..core.catalog import ReferenceCatalog
from ..core.errors import NotFoundError, SkippedItemError
from ..core.models import SymptomItem
from .branching import (
    SECONDS_PER_QUESTION,
    determine_skip_items,
    estimate_branching_time,
    evaluate_branching,
)

logger = logging.getLogger(__name__)


class QuestionQueue:
    """Ordered question list that supports insertion right after a given question."""

    def __init__(self, items: Optional[List[SymptomItem]] = None):
        self._items: List[SymptomItem] = []
        for item in items or []:
            if item.item_id not in self:
                self._items.append(item)

    def __iter__(self) -> Iterator[SymptomItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(item.item_id == item_id for item in self._items)

    @property
    def items(self) -> List[SymptomItem]:
        return list(self._items)

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self._items]

    def index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.item_id == item_id:
                return index
        raise NotFoundError("Questionnaire item", item_id)

    def insert_after(self, anchor_item_id: str, items: List[SymptomItem]) -> List[SymptomItem]:
        """
        Insert items immediately after the anchor, preserving their order.

        Items already queued are ignored. Returns what was actually inserted.
        """
        position = self.index_of(anchor_item_id) + 1
        inserted: List[SymptomItem] = []
        for item in items:
            if item.item_id in self or any(i.item_id == item.item_id for i in inserted):
                continue
            inserted.append(item)
        self._items[position:position] = inserted
        return inserted


@dataclass
class AnswerOutcome:
    item_id: str
    value: int
    branching_questions: List[SymptomItem] = field(default_factory=list)
    skip_item_ids: List[str] = field(default_factory=list)
    invalidated_item_ids: List[str] = field(default_factory=list)
    conditional_triggered: bool = False
    is_update: bool = False


class QuestionnaireSession:
    """
    Tracks answers, skip sets and follow-up insertions for one questionnaire.

    Skip sets are kept per triggering item and recomputed from scratch every
    time that item is answered, so editing an answer never leaves stale skips.
    """

    def __init__(self,
                 items: List[SymptomItem],
                 catalog: ReferenceCatalog,
                 seconds_per_question: int = SECONDS_PER_QUESTION):
        self.queue = QuestionQueue(items)
        self.catalog = catalog
        self.seconds_per_question = seconds_per_question
        self._answers: Dict[str, int] = {}
        self._skips_by_trigger: Dict[str, Set[str]] = {}

    @property
    def answers(self) -> Dict[str, int]:
        return dict(self._answers)

    @property
    def skipped_item_ids(self) -> Set[str]:
        skipped: Set[str] = set()
        for ids in self._skips_by_trigger.values():
            skipped.update(ids)
        return skipped

    def pending_items(self) -> List[SymptomItem]:
        skipped = self.skipped_item_ids
        return [
            item for item in self.queue
            if item.item_id not in self._answers and item.item_id not in skipped
        ]

    @property
    def is_complete(self) -> bool:
        return not self.pending_items()

    def estimated_seconds_remaining(self) -> int:
        return estimate_branching_time(len(self.pending_items()), self.seconds_per_question)

    # ------------------------------------------------------------------
    # Answer path
    # ------------------------------------------------------------------

    def submit_answer(self, item_id: str, value: int) -> AnswerOutcome:
        """
        Record an answer and apply skip/branch rules.

        Re-submitting the same answer is idempotent: no duplicate follow-ups,
        the same skip set. Items skipped by another answer are rejected until
        that answer is edited.
        """
        if item_id not in self.queue:
            raise NotFoundError("Questionnaire item", item_id)
        for trigger_id, skipped in self._skips_by_trigger.items():
            if item_id in skipped:
                raise SkippedItemError(item_id, trigger_id)
        item = self.catalog.get_item(item_id)

        is_update = item_id in self._answers
        related = self.catalog.find_items(item.symptom_term)
        evaluation = evaluate_branching(item, value, related)

        queued_related = [i for i in self.queue if i.symptom_term == item.symptom_term]
        skip_ids = [
            sid for sid in determine_skip_items(item, value, queued_related)
            if sid != item_id
        ]
        self._skips_by_trigger[item_id] = set(skip_ids)

        invalidated = [sid for sid in skip_ids if sid in self._answers]
        for sid in invalidated:
            del self._answers[sid]
            self._skips_by_trigger.pop(sid, None)

        self._answers[item_id] = value

        branching_questions: List[SymptomItem] = []
        target = evaluation.target_question
        if (target is not None
                and target.item_id not in self.queue
                and target.item_id not in self._answers):
            branching_questions = self.queue.insert_after(item_id, [target])

        logger.debug(
            "Answer %s=%d: branch=%s follow-ups=%d skip=%d invalidated=%d update=%s",
            item_id, value, evaluation.should_branch, len(branching_questions),
            len(skip_ids), len(invalidated), is_update,
        )

        return AnswerOutcome(
            item_id=item_id,
            value=value,
            branching_questions=branching_questions,
            skip_item_ids=skip_ids,
            invalidated_item_ids=invalidated,
            conditional_triggered=evaluation.should_branch,
            is_update=is_update,
        )
