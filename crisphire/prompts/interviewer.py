"""
AI Interviewer Prompt Templates

Builds the prompt for the next interview step. The turn plan decides the
phase, difficulty and time budget; the model only writes the words.
"""

from crisphire.models.candidate import Message
from crisphire.models.interview import SCORED_QUESTIONS, InterviewPhase, TurnPlan
from crisphire.models.roles import Role
from crisphire.prompts.transcript import render_transcript


class InterviewerPrompts:
    """
    Prompt templates for the AI interviewer.

    Key principles:
    - Insightful, challenging, professional tone
    - One question at a time
    - Questions grounded in the candidate's résumé
    - Strict JSON output
    """

    SYSTEM_CONTEXT = """You are a professional AI Interviewer for a "{role}" position. Your tone is insightful and challenging.
The interview flow is: a brief conversational intro, then exactly {scored} scored technical/behavioral questions, then a conclusion.
"""

    OUTPUT_FORMAT = """Your entire response MUST be a clean JSON object with the keys "type", "content" and "time".
Do not include markdown formatting."""

    def generate_step_prompt(
        self,
        role: Role | str,
        resume_text: str,
        chat_history: list[Message],
        plan: TurnPlan,
    ) -> str:
        """Generate the prompt for the next AI message."""
        role_name = role.value if isinstance(role, Role) else str(role)
        focus = ""
        if isinstance(role, Role) and role.focus_areas:
            focus = f"Role focus areas: {', '.join(role.focus_areas)}\n"

        prompt = f"""{self.SYSTEM_CONTEXT.format(role=role_name, scored=SCORED_QUESTIONS)}
{focus}
=== CURRENT STATE ===
- You have already asked the candidate to introduce themselves.
- Total AI messages sent so far: {plan.ai_message_count}.
- Scored questions asked so far: {plan.technical_question_count} of {SCORED_QUESTIONS}.

=== YOUR TASK ===
{self._task_instructions(plan)}

{self._prior_questions_block(plan)}
=== CONTEXT ===
Resume:
---
{resume_text}
---
History: {render_transcript(chat_history)}

{self.OUTPUT_FORMAT}
"""
        return prompt

    def _task_instructions(self, plan: TurnPlan) -> str:
        if plan.phase == InterviewPhase.INTRO:
            return (
                "The conversational introduction is in progress. Analyze the candidate's "
                "self-introduction from the history and ask one short, conversational follow-up.\n"
                'The "type" MUST be "conversation" and "time" MUST be 0.'
            )
        if plan.phase == InterviewPhase.CONCLUSION:
            return (
                "All scored questions are finished. Provide a professional concluding statement "
                "thanking the candidate.\n"
                'The "type" MUST be "conclusion" and "time" MUST be 0.'
            )

        lead_in = ""
        if plan.phase == InterviewPhase.TRANSITION:
            lead_in = (
                "Briefly close the introduction with one transition sentence, then move straight "
                "into the first scored question in the same message.\n"
            )
        return (
            f"{lead_in}Generate scored question #{plan.question_number}. It MUST be of "
            f"'{plan.difficulty.value}' difficulty and related to the candidate's resume.\n"
            f'The "type" MUST be "question" and "time" MUST be {plan.time}.'
        )

    def _prior_questions_block(self, plan: TurnPlan) -> str:
        if not plan.prior_questions:
            return ""
        listed = "\n".join(
            f"{i}. {text}" for i, text in enumerate(plan.prior_questions, 1)
        )
        return f"""=== QUESTIONS ALREADY ASKED (DO NOT REPEAT OR REPHRASE ANY OF THESE) ===
{listed}
"""
