"""
CareerConnect - campus placement portal backend.

Architecture:
- MongoDB: students, admins, companies, announcements, question banks
- Groq (OpenAI-compatible) LLM: ATS scoring, quiz analysis, proctoring, coaching
- Cloudinary: profile pictures, resumes, proctoring snapshots
"""

__version__ = "1.0.0"
