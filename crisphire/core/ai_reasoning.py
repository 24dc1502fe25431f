"""
AI Reasoning Layer for CrispHire

Handles all AI-powered operations:
- Résumé detail and skill extraction
- Next interview step generation
- Answer evaluation
- Final summary

Uses the Gemini generateContent REST API. Every call is single-attempt;
failures are replaced by fixed fallback values so the interview never
stalls. Only résumé detail extraction surfaces an error to the caller.
Integrated with Langfuse for observability and tracing.
"""

import json
import logging
from typing import Any

import httpx
from langfuse import Langfuse
from pydantic import ValidationError

from crisphire.config.settings import Settings, get_settings
from crisphire.core.errors import ExtractionError
from crisphire.core.turn_classifier import classify_turn
from crisphire.models.candidate import CandidateDetails, Message
from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment
from crisphire.models.interview import InterviewStep, StepType
from crisphire.models.roles import Role
from crisphire.prompts import (
    EvaluatorPrompts,
    InterviewerPrompts,
    ReportPrompts,
    ResumePrompts,
)

logger = logging.getLogger(__name__)


# Fallbacks used when the model output cannot be used
UNPARSABLE_STEP = InterviewStep(
    type=StepType.CONCLUSION,
    content="It seems we've reached the end of our time. Thank you.",
    time=0,
    is_fallback=True,
)
ERROR_STEP = InterviewStep(
    type=StepType.CONCLUSION,
    content="There was an error. We'll have to end here. Thank you.",
    time=0,
    is_fallback=True,
)
UNPARSABLE_EVALUATION = AnswerEvaluation(feedback="Could not parse response.", score=0)
ERROR_EVALUATION = AnswerEvaluation(feedback="Error evaluating answer.", score=0)
UNPARSABLE_SUMMARY = FinalAssessment(summary="Could not generate summary.", final_score=0)
ERROR_SUMMARY = FinalAssessment(summary="Error generating summary.", final_score=0)


def parse_json_object(text: str) -> dict[str, Any] | None:
    """Pull the outermost JSON object out of a model response."""
    json_start = text.find("{")
    json_end = text.rfind("}") + 1
    if json_start < 0 or json_end <= json_start:
        return None
    try:
        data = json.loads(text[json_start:json_end])
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse model JSON: {e}")
        return None
    return data if isinstance(data, dict) else None


class AIReasoningLayer:
    """
    Central AI reasoning component using Gemini models.

    The model is chosen per call so the interviewer can switch variants
    from the dashboard without restarting the service.

    Observability:
    - Langfuse span around every LLM call when tracing is configured
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the AI layer with Gemini configuration."""
        self.settings = settings or get_settings()

        # HTTP client for API calls
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.gemini_base_url.rstrip("/"),
            timeout=self.settings.llm_timeout_seconds,
        )

        # Prompt templates
        self.resume_prompts = ResumePrompts()
        self.interviewer_prompts = InterviewerPrompts()
        self.evaluator_prompts = EvaluatorPrompts()
        self.report_prompts = ReportPrompts()

        # Initialize Langfuse for observability
        self.langfuse = None
        if self.settings.langfuse_enabled:
            if self.settings.langfuse_secret_key and self.settings.langfuse_public_key:
                try:
                    self.langfuse = Langfuse(
                        secret_key=self.settings.langfuse_secret_key,
                        public_key=self.settings.langfuse_public_key,
                        host=self.settings.langfuse_base_url,
                    )
                    logger.info("Langfuse initialized for LLM observability")
                except Exception as e:
                    logger.warning(f"Failed to initialize Langfuse: {e}")
            else:
                logger.info("Langfuse keys not configured, tracing disabled")

    async def close(self):
        """Close the HTTP client and flush Langfuse."""
        await self.client.aclose()
        if self.langfuse:
            try:
                self.langfuse.flush()
            except Exception as e:
                logger.warning(f"Failed to flush Langfuse: {e}")

    # =========================================================================
    # CORE AI OPERATIONS
    # =========================================================================

    def _extract_content(self, result: Any) -> str:
        """
        Extract text from a generateContent response.

        Raises:
            ValueError: If the response is not shaped like generateContent output
        """
        if not isinstance(result, dict):
            raise ValueError("Gemini response is not a JSON object")
        candidates = result.get("candidates") or [{}]
        first = candidates[0] if isinstance(candidates, list) else None
        if not isinstance(first, dict):
            raise ValueError("Gemini response has malformed candidates")
        content = first.get("content") or {}
        parts = content.get("parts", []) if isinstance(content, dict) else []
        if not isinstance(parts, list):
            raise ValueError("Gemini response has malformed parts")
        text_parts = []
        for part in parts:
            if isinstance(part, dict) and "text" in part:
                text_parts.append(str(part["text"]))
            elif isinstance(part, str):
                text_parts.append(part)
        return "".join(text_parts)

    def _start_span(self, name: str, metadata: dict[str, Any]):
        if not self.langfuse:
            return None
        try:
            return self.langfuse.start_span(name=name, metadata=metadata)
        except Exception as lf_err:
            logger.warning(f"Langfuse span start failed: {lf_err}")
            return None

    def _end_span(self, span, output: dict[str, Any]) -> None:
        if span is None:
            return
        try:
            span.update(output=output)
            span.end()
        except Exception as lf_err:
            logger.warning(f"Langfuse span end failed: {lf_err}")

    async def _call_gemini(
        self,
        prompt: str,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
        trace_name: str = "gemini_call",
    ) -> str:
        """
        Call a Gemini model with a single user prompt.

        Args:
            prompt: The prompt to send
            model: Model name (defaults to the configured default)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature
            trace_name: Name for the Langfuse span

        Returns:
            Model response text

        Raises:
            httpx.HTTPError: On transport or HTTP status failure
            ValueError: If the response body is not usable generateContent JSON
        """
        model = model or self.settings.default_model
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": {
                "maxOutputTokens": max_tokens,
                "temperature": temperature,
            },
        }

        span = self._start_span(trace_name, {"model": model, "prompt_length": len(prompt)})
        try:
            response = await self.client.post(
                f"/models/{model}:generateContent",
                params={"key": self.settings.gemini_api_key},
                json=payload,
            )
            response.raise_for_status()
            text = self._extract_content(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Gemini API error ({model}): {e}")
            self._end_span(span, {"error": str(e)})
            raise

        self._end_span(span, {"response_length": len(text)})
        return text

    # =========================================================================
    # RÉSUMÉ EXTRACTION
    # =========================================================================

    async def extract_candidate_details(
        self,
        resume_text: str,
        model: str | None = None,
    ) -> CandidateDetails:
        """
        Extract name, email and phone from résumé text.

        Raises:
            ExtractionError: If the call fails or yields no usable JSON
        """
        if not resume_text.strip():
            raise ExtractionError("Resume text is empty")

        prompt = self.resume_prompts.details_prompt(resume_text)
        try:
            response = await self._call_gemini(
                prompt, model=model, max_tokens=256, temperature=0.0,
                trace_name="extract_details_llm",
            )
        except (httpx.HTTPError, ValueError) as e:
            raise ExtractionError(f"Could not extract details from resume: {e}") from e

        data = parse_json_object(response)
        if data is None:
            raise ExtractionError("AI could not extract basic details from the resume")

        return CandidateDetails(
            name=data.get("name") or None,
            email=data.get("email") or None,
            phone=data.get("phone") or None,
        )

    async def extract_skills(self, resume_text: str, model: str | None = None) -> list[str]:
        """Extract the key technical skills. Returns an empty list on failure."""
        prompt = self.resume_prompts.skills_prompt(resume_text)
        try:
            response = await self._call_gemini(
                prompt, model=model, max_tokens=512, temperature=0.0,
                trace_name="extract_skills_llm",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Skill extraction failed: {e}")
            return []

        data = parse_json_object(response) or {}
        skills = data.get("skills") or []
        if not isinstance(skills, list):
            return []
        return [str(skill).strip() for skill in skills if str(skill).strip()]

    # =========================================================================
    # STEP GENERATION
    # =========================================================================

    async def generate_next_step(
        self,
        role: Role | str,
        resume_text: str,
        chat_history: list[Message],
        prior_questions: list[str] | None = None,
        model: str | None = None,
    ) -> InterviewStep:
        """
        Generate the next interview step.

        The turn plan derived from the history fixes the phase, difficulty
        and time budget the model is asked to honor.

        Returns:
            The parsed step, or a fixed conclusion step if the call fails
            or the output is unusable
        """
        plan = classify_turn(chat_history)
        if prior_questions is not None:
            plan = plan.model_copy(update={"prior_questions": list(prior_questions)})

        logger.info(
            f"Generating step | phase={plan.phase.value} | "
            f"scored_asked={plan.technical_question_count} | "
            f"difficulty={plan.difficulty.value if plan.difficulty else '-'}"
        )

        prompt = self.interviewer_prompts.generate_step_prompt(
            role, resume_text, chat_history, plan
        )
        try:
            response = await self._call_gemini(
                prompt, model=model, max_tokens=1024, temperature=0.8,
                trace_name="next_step_llm",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error generating next interview step: {e}")
            return ERROR_STEP.model_copy()

        return self._parse_step_response(response)

    def _parse_step_response(self, response: str) -> InterviewStep:
        """Parse AI response into an InterviewStep."""
        data = parse_json_object(response)
        if data is None:
            logger.warning("Step response had no JSON object, concluding")
            return UNPARSABLE_STEP.model_copy()

        try:
            step = InterviewStep(
                type=str(data.get("type", "")).strip().lower(),
                content=str(data.get("content") or "").strip(),
                time=int(data.get("time") or 0),
            )
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Step response failed validation: {e}")
            return UNPARSABLE_STEP.model_copy()

        if not step.content:
            logger.warning("Step response had empty content, concluding")
            return UNPARSABLE_STEP.model_copy()
        return step

    # =========================================================================
    # ANSWER EVALUATION
    # =========================================================================

    async def evaluate_answer(
        self,
        question: str,
        answer: str,
        model: str | None = None,
    ) -> AnswerEvaluation:
        """
        Score one answer from 0 to 10 with a short critique.

        Never raises; returns a zero score with neutral feedback on failure.
        """
        prompt = self.evaluator_prompts.generate_evaluation_prompt(question, answer)
        try:
            response = await self._call_gemini(
                prompt, model=model, max_tokens=512, temperature=0.2,
                trace_name="evaluation_llm",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error evaluating answer: {e}")
            return ERROR_EVALUATION.model_copy()

        data = parse_json_object(response)
        if data is None:
            return UNPARSABLE_EVALUATION.model_copy()

        evaluation = AnswerEvaluation.model_validate(data)
        logger.info(f"Evaluation complete: score={evaluation.score}")
        return evaluation

    # =========================================================================
    # FINAL SUMMARY
    # =========================================================================

    async def summarize(
        self,
        chat_history: list[Message],
        model: str | None = None,
    ) -> FinalAssessment:
        """
        Produce the final prose summary and 0-100 score.

        Never raises; returns a placeholder summary and zero on failure.
        """
        prompt = self.report_prompts.generate_summary_prompt(chat_history)
        try:
            response = await self._call_gemini(
                prompt, model=model, max_tokens=1024, temperature=0.3,
                trace_name="summary_llm",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error generating final summary: {e}")
            return ERROR_SUMMARY.model_copy()

        data = parse_json_object(response)
        if data is None:
            return UNPARSABLE_SUMMARY.model_copy()

        assessment = FinalAssessment.model_validate(data)
        logger.info(f"Final assessment complete: score={assessment.final_score}")
        return assessment
