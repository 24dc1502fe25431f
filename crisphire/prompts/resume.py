"""
Résumé extraction prompts.
"""


class ResumePrompts:
    """Prompt templates for pulling structured data out of résumé text."""

    def details_prompt(self, resume_text: str) -> str:
        """Prompt for contact details."""
        return f"""From the following resume text, extract the full name, email address, and phone number.
Respond with a JSON object with the keys "name", "email", and "phone".
If a field is not found, its value should be null.
Do not include any extra characters or markdown formatting.

Resume Text:
---
{resume_text}
---
"""

    def skills_prompt(self, resume_text: str) -> str:
        """Prompt for the key technical skills."""
        return f"""From the resume text, list the key technical skills.
Respond with a JSON object with a single key "skills" which is an array of strings.
Example: {{"skills": ["React", "Node.js"]}}

Resume Text:
---
{resume_text}
---
"""
