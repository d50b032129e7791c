"""
Interview Service - mock technical interviews.

1. generate_questions: 10 technical or 5 scenario-based questions
2. evaluate_answer: rating 1-10 with feedback and an ideal answer
3. analyze_session: overall verdict for a whole interview
"""
import json
from typing import List, Optional, Union

from careerconnect.services.groq_client import GroqClient, LLMResponseError, extract_json

VERDICTS = ("Strong Hire", "Hire", "Weak Hire", "Reject")


def build_questions_prompt(
    job_role: str,
    tech_stack: str,
    experience: Optional[Union[int, float, str]],
    topic: Optional[str] = None,
    scenario_based: bool = False
) -> str:
    if scenario_based and topic:
        return f"""
Generate 5 scenario-based interview questions for a {job_role} role focusing on {topic}.
The candidate has {experience} years of experience with {tech_stack}.
Each question should present a realistic work scenario or problem related to {topic}.
Return ONLY a raw JSON array of strings (e.g. ["Scenario 1...?", "Scenario 2...?"]).
Do not include Markdown formatting or extra text.
"""
    return f"""
Generate 10 technical interview questions for a {job_role} role requiring experience in {tech_stack}.
The candidate has {experience} years of experience.
Focus on fundamental concepts and practical applications.
Return ONLY a raw JSON array of strings (e.g. ["Question 1?", "Question 2?"]).
Do not include Markdown formatting or extra text.
"""


def build_feedback_prompt(question: str, answer: str) -> str:
    return f"""
Evaluate this interview answer.
Question: "{question}"
Candidate Answer: "{answer}"

Provide a JSON object with:
1. "rating" (Integer 1-10)
2. "feedback" (String, 1-2 sentences)
3. "ideal_answer" (String, brief improvement)

Return ONLY raw JSON.
"""


def build_session_prompt(history: list) -> str:
    return f"""
Analyze this full technical interview session.

History:
{json.dumps(history)}

Provide a comprehensive JSON object with:
1. "overallScore" (Integer 1-100, calculate avg based on ratings)
2. "verdict" (String: {", ".join(f'"{v}"' for v in VERDICTS)})
3. "summary" (String: 2-3 sentences overview)
4. "strengths" (Array of strings)
5. "areasForImprovement" (Array of strings)
6. "recommendedResources" (Array of strings, topics to study)

Return ONLY raw JSON.
"""


class InterviewCoach:
    def __init__(self, llm: GroqClient):
        self.llm = llm

    def generate_questions(self, job_role, tech_stack, experience=None, topic=None, scenario_based=False) -> List[str]:
        prompt = build_questions_prompt(job_role, tech_stack, experience, topic, scenario_based)
        questions = extract_json(self.llm.prompt(prompt), expect="array")
        if not isinstance(questions, list):
            raise LLMResponseError("Expected a JSON array of questions")
        return questions

    def _object(self, prompt: str, what: str) -> dict:
        result = extract_json(self.llm.prompt(prompt))
        if not isinstance(result, dict):
            raise LLMResponseError(f"Expected a JSON object for {what}")
        return result

    def evaluate_answer(self, question: str, answer: str) -> dict:
        return self._object(build_feedback_prompt(question, answer), "answer feedback")

    def analyze_session(self, history: list) -> dict:
        return self._object(build_session_prompt(history), "session analysis")
