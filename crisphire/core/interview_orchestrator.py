"""
Interview Orchestrator - the per-answer control loop.

Runs once for every submitted answer. The sequence is strictly ordered,
each step reading what the previous one wrote:

    append answer → evaluate (timed questions only) → generate next step
        → append AI message → apply step → (conclusion) summarize + complete

Collaborator failures are replaced by fixed fallbacks, so after every
invocation the session holds a valid current question and timer.
"""

import asyncio
import logging
from typing import Any

from crisphire.core.ai_reasoning import ERROR_EVALUATION, ERROR_STEP, ERROR_SUMMARY
from crisphire.core.errors import InterviewBusyError
from crisphire.core.session_store import InterviewStore
from crisphire.core.turn_classifier import TurnPlan, classify_turn
from crisphire.models.candidate import MessageAuthor
from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment
from crisphire.models.interview import InterviewStep, StepType

logger = logging.getLogger(__name__)


class InterviewOrchestrator:
    """
    Drives the session store through one turn per answer.

    At most one invocation is in flight; a second call while one is
    pending raises InterviewBusyError.
    """

    def __init__(
        self,
        store: InterviewStore,
        ai_reasoning: Any,  # AIReasoningLayer or anything with the same coroutines
    ):
        self.store = store
        self.ai_reasoning = ai_reasoning
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def process_answer(
        self,
        candidate_id: str,
        question: str,
        answer: str,
    ) -> InterviewStep:
        """
        Process one answer and advance the interview.

        Args:
            candidate_id: Candidate in the active session
            question: The question being answered
            answer: The candidate's answer (may be empty on time-out)

        Returns:
            The step that was applied to the session
        """
        if self._lock.locked():
            raise InterviewBusyError("An answer is already being processed")

        async with self._lock:
            self.store.set_thinking(True)
            try:
                return await self._run_turn(candidate_id, question, answer)
            finally:
                self.store.set_thinking(False)

    async def _run_turn(self, candidate_id: str, question: str, answer: str) -> InterviewStep:
        session = self.store.session
        model = self.store.selected_model
        was_timed = session.timer > 0

        # 1. Record the answer
        message = self.store.append_message(candidate_id, MessageAuthor.USER, answer)

        # 2. Score it if the question was timed
        if was_timed:
            evaluation = await self._evaluate(question, answer, model)
            self.store.attach_evaluation(candidate_id, message.seq, evaluation)

        # 3. Decide the next step from the updated transcript
        candidate = self.store.require_candidate(candidate_id)
        plan = classify_turn(candidate.chat_history)
        step = await self._generate_step(
            role=self.store.session.selected_role,
            resume_text=candidate.resume_text,
            plan=plan,
            candidate_id=candidate_id,
            model=model,
        )

        # 4-5. Record the AI message and show it
        self.store.append_message(candidate_id, MessageAuthor.AI, step.content)
        self.store.apply_step(step)

        # 6. Wrap up
        if step.type == StepType.CONCLUSION:
            assessment = await self._summarize(candidate_id, model)
            self.store.complete_interview(candidate_id, assessment)
            logger.info(
                f"Interview complete for {candidate_id}: final_score={assessment.final_score}"
            )

        return step

    async def _evaluate(self, question: str, answer: str, model: str) -> AnswerEvaluation:
        try:
            return await self.ai_reasoning.evaluate_answer(question, answer, model=model)
        except Exception as e:
            logger.error(f"Evaluation failed, scoring zero: {e}")
            return ERROR_EVALUATION.model_copy()

    async def _generate_step(
        self,
        role: Any,
        resume_text: str,
        plan: TurnPlan,
        candidate_id: str,
        model: str,
    ) -> InterviewStep:
        candidate = self.store.require_candidate(candidate_id)
        try:
            step = await self.ai_reasoning.generate_next_step(
                role,
                resume_text,
                list(candidate.chat_history),
                prior_questions=plan.prior_questions,
                model=model,
            )
        except Exception as e:
            logger.error(f"Step generation failed, concluding: {e}")
            return ERROR_STEP.model_copy()

        if not isinstance(step, InterviewStep) or not step.content.strip():
            logger.warning("Step generation returned an unusable step, concluding")
            return ERROR_STEP.model_copy()

        return self._normalize_step(step, plan)

    def _normalize_step(self, step: InterviewStep, plan: TurnPlan) -> InterviewStep:
        """
        Hold the step to the turn plan.

        Fallback conclusions end the interview as they are; every real
        provider step takes its type and time from the plan.
        """
        if step.is_fallback:
            return step.model_copy(update={"type": StepType.CONCLUSION, "time": 0})

        normalized = step.model_copy(update={"type": plan.step_type, "time": plan.time})
        if normalized.type != step.type or normalized.time != step.time:
            logger.warning(
                f"Provider step ({step.type.value}, {step.time}s) overridden by plan "
                f"({plan.step_type.value}, {plan.time}s)"
            )
        return normalized

    async def _summarize(self, candidate_id: str, model: str) -> FinalAssessment:
        candidate = self.store.require_candidate(candidate_id)
        try:
            return await self.ai_reasoning.summarize(list(candidate.chat_history), model=model)
        except Exception as e:
            logger.error(f"Summary failed, using placeholder: {e}")
            return ERROR_SUMMARY.model_copy()
