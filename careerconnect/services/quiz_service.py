"""
Quiz Service - grading, score statistics and AI-assisted quiz features.

AI is used for:
1. Post-quiz performance analysis (mentor-style JSON report)
2. Webcam proctoring (vision model flags suspicious frames)
"""
import random
from datetime import datetime
from typing import Dict, List, Tuple

from careerconnect.services.groq_client import GroqClient, LLMResponseError, extract_json

STUDENT_QUIZ_SIZE = 10
ANALYSIS_SNAPSHOT_SIZE = 20

MISSING_KEY_ANALYSIS = (
    "## AI Configuration Error\n\n"
    "The server is missing the `GROQ_API_KEY`. Please ask the administrator to configure "
    "the `.env` file with a valid Groq API key to enable AI insights."
)

PROCTOR_PROMPT = (
    "Analyze this webcam frame for an online exam proctoring system. Check for: "
    "1. Multiple people in frame, 2. Person looking away from screen for too long, "
    "3. Mobile phone usage, 4. No person in frame. Return ONLY a JSON object with: "
    "{ 'isSuspicious': boolean, 'reason': 'string description if suspicious else null' }."
)


def round_half_up(value: float) -> int:
    """Round x.5 up, like Math.round on the client."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def hide_answers(questions: List[dict]) -> List[dict]:
    """Strip the answer key before questions go to a student."""
    return [
        {k: v for k, v in q.items() if k not in ("correct_answer", "explanation")}
        for q in questions
    ]


def pick_student_quiz(questions: List[dict], size: int = STUDENT_QUIZ_SIZE) -> List[dict]:
    """Random selection of up to `size` questions, answers hidden."""
    chosen = random.sample(questions, min(size, len(questions)))
    return hide_answers(chosen)


def grade_submission(answers: Dict[str, str], questions_by_id: Dict[str, dict]) -> Tuple[int, int, List[dict]]:
    """
    Grade answers ({question_id: selected_option}).

    Every answer counts toward total; ids with no matching question
    score nothing and get no result row.

    Returns:
        (score, total, results)
    """
    score = 0
    total = len(answers)
    results = []
    for question_id, selected in answers.items():
        question = questions_by_id.get(question_id)
        if question is None:
            continue
        is_correct = question.get("correct_answer") == selected
        if is_correct:
            score += 1
        results.append({
            "question": question.get("question_text"),
            "selected": selected,
            "correct": question.get("correct_answer"),
            "isCorrect": is_correct
        })
    return score, total, results


def build_attempt(category: str, score: int, total: int, proctoring_log: List[dict]) -> dict:
    return {
        "category": category,
        "score": score,
        "total": total,
        "timestamp": datetime.utcnow(),
        "proctoringLog": proctoring_log
    }


def compute_stats(attempts: List[dict]) -> dict:
    """
    totalTests, topScore and averageScore (percentages, rounded).
    Attempts with total 0 count as 0%.
    """
    percentages = []
    for attempt in attempts:
        total = attempt.get("total") or 0
        score = attempt.get("score") or 0
        percentages.append((score / total) * 100 if total else 0.0)

    if not percentages:
        return {"totalTests": 0, "topScore": 0, "averageScore": 0}

    return {
        "totalTests": len(percentages),
        "topScore": round_half_up(max(percentages)),
        "averageScore": round_half_up(sum(percentages) / len(percentages))
    }


def build_analysis_prompt(results: List[dict], score: int, total: int) -> str:
    lines = []
    for i, r in enumerate(results[:ANALYSIS_SNAPSHOT_SIZE]):
        status = "Correct" if r.get("isCorrect") else "Incorrect"
        topic = r.get("category") or "General"
        lines.append(f"Q{i + 1}: {r.get('question')} (Status: {status}, Topic: {topic})")
    summary = "\n".join(lines)

    return f"""
Analyze this quiz performance:
Score: {score}/{total}

Recent Questions Snapshot:
{summary}

You are a career mentor. Return a strictly valid JSON object.

JSON Structure:
{{
  "summary": "One punchy, encouraging sentence about their level.",
  "strengths": ["Key strength 1", "Key strength 2"],
  "weaknesses": ["Key weakness 1", "Key weakness 2"],
  "roadmap": [
     {{ "step": "Step 1", "action": "Short actionable advice" }},
     {{ "step": "Step 2", "action": "Short actionable advice" }},
     {{ "step": "Step 3", "action": "Short actionable advice" }}
  ],
  "resources": ["Topic to study", "Topic to study", "Topic to study"]
}}
"""


def failed_analysis_markdown(error: Exception) -> str:
    return (
        "## Analysis Failed\n\nCould not generate AI insights at this moment.\n\n"
        f"Error: {error}"
    )


class QuizCoach:
    """
    LLM-backed quiz features.
    """

    def __init__(self, llm: GroqClient):
        self.llm = llm

    def analyze(self, results: List[dict], score: int, total: int) -> str:
        """Returns the model's JSON report as text (the client parses it)."""
        prompt = build_analysis_prompt(results, score, total)
        content = self.llm.prompt(prompt, json_mode=True)
        return content or "No analysis generated."

    def inspect_frame(self, image_data_url: str) -> dict:
        """
        Ask the vision model whether a webcam frame looks suspicious.

        Returns:
            {"isSuspicious": bool, "reason": str or None}
        """
        messages = [{
            "role": "user",
            "content": [
                {"type": "text", "text": PROCTOR_PROMPT},
                {"type": "image_url", "image_url": {"url": image_data_url}}
            ]
        }]
        content = self.llm.complete(messages, model=self.llm.vision_model, json_mode=True)
        result = extract_json(content or "{}")
        if not isinstance(result, dict):
            raise LLMResponseError("Expected a JSON object from the proctoring model")
        return {
            "isSuspicious": bool(result.get("isSuspicious")),
            "reason": result.get("reason")
        }
