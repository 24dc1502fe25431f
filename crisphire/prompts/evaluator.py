"""
AI Evaluator Prompt Templates
"""


class EvaluatorPrompts:
    """Prompt templates for scoring a single answer."""

    SYSTEM_CONTEXT = """You are a strict but fair technical interviewer scoring one answer.
An empty answer means the candidate ran out of time and scores 0."""

    def generate_evaluation_prompt(self, question: str, answer: str) -> str:
        """Generate prompt for evaluating a question/answer pair."""
        return f"""{self.SYSTEM_CONTEXT}

Evaluate the answer for the question.
Respond with a JSON object with "feedback" (a short critique) and "score" (integer 0-10).

Question: "{question}"
Answer: "{answer}"
"""
