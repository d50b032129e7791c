"""
ATS Service - resume vs job description scoring.

Flow for one scan:
1. Resume text is extracted (utils/file_upload.py)
2. The LLM compares resume and JD and returns JSON
3. A history record is built for the student's atsScans array
"""
from datetime import datetime

from careerconnect.services.groq_client import GroqClient, LLMResponseError, extract_json

JD_PROMPT_CHARS = 1000
RESUME_PROMPT_CHARS = 2000
JD_HISTORY_CHARS = 500


def build_scan_prompt(resume_text: str, job_description: str) -> str:
    return f"""
You are an expert ATS (Application Tracking System) scanner.

Job Description:
"{job_description[:JD_PROMPT_CHARS]}..." (truncated)

Resume Content:
"{resume_text[:RESUME_PROMPT_CHARS]}..." (truncated)

Analyze the resume against the job description.
Return a JSON object with:
1. "match_percentage" (Integer 0-100)
2. "missing_keywords" (Array of strings)
3. "summary" (Brief professional summary of the candidate's fit)
4. "recommendation" (Actionable advice to improve)

Return ONLY raw JSON. No markdown.
"""


def build_scan_record(analysis: dict, job_description: str, resume_url: str) -> dict:
    """History entry stored on the student, with defaults for missing fields."""
    return {
        "resumeUrl": resume_url,
        "jobDescription": job_description[:JD_HISTORY_CHARS],
        "matchPercentage": analysis.get("match_percentage") or 0,
        "summary": analysis.get("summary") or "No summary provided",
        "missingKeywords": analysis.get("missing_keywords") or [],
        "recommendation": analysis.get("recommendation") or "No recommendation",
        "timestamp": datetime.utcnow()
    }


def sort_history(scans: list) -> list:
    """Newest first; scans without a timestamp go last."""
    return sorted(
        scans,
        key=lambda s: s.get("timestamp") or datetime.min,
        reverse=True
    )


class ResumeScanner:
    def __init__(self, llm: GroqClient):
        self.llm = llm

    def analyze(self, resume_text: str, job_description: str) -> dict:
        content = self.llm.prompt(build_scan_prompt(resume_text, job_description))
        analysis = extract_json(content, expect="object")
        if not isinstance(analysis, dict):
            raise LLMResponseError("Expected a JSON object from the ATS scan")
        return analysis
