"""
Communication Service - English coaching conversations.

Modes:
- voice:    fast model, short spoken-style replies
- chat:     smart model, grammar corrections in a fixed markdown layout
- scenario: smart model, stays in character for a roleplay
Any other mode uses the smart model with an empty system prompt.
"""
from typing import List, Optional, Tuple

from careerconnect.schemas.schemas import CommunicationMode
from careerconnect.services.groq_client import GroqClient

VOICE_PROMPT = """
You are a friendly and encouraging English Communication Coach.
Your goal is to help the user practice spoken English fluency.
Keep your responses polite, conversational, and concise (1-2 sentences max).
If the user makes a major grammar mistake that affects meaning, gently correct it, but prioritize flow.
Do not be overly pedantic. Ask open-ended questions to keep the conversation going.
"""

CHAT_PROMPT = """
You are a strict but helpful **English Grammar and Style Coach**.
Your goal is to improve the user's written English.

For every user input, you MUST Provide the response in this specific Markdown format:

**1. Correction:** (Only if needed, otherwise say "Perfect!")
> [Corrected Sentence]

**2. Feedback:**
(Brief explanation of why the change was made, or a compliment if it was good.)

**3. Reply:**
(A natural, conversational follow-up question or comment to keep the chat going.)

Keep the tone encouraging but educational.
"""

SCENARIO_PROMPT = """
You are an AI Roleplay Partner.
The user wants to practice a specific scenario (e.g., Job Interview, Coffee Shop, Business Meeting).
Stay in character. React naturally to the user's input.
If the user struggles, offer a subtle hint in parentheses, but mostly focus on the roleplay.
"""


class CommunicationCoach:
    def __init__(self, llm: GroqClient):
        self.llm = llm

    def select(self, mode: Optional[str]) -> Tuple[str, str]:
        """(model, system_prompt) for a mode."""
        if mode == CommunicationMode.voice.value:
            return self.llm.fast_model, VOICE_PROMPT
        if mode == CommunicationMode.chat.value:
            return self.llm.model, CHAT_PROMPT
        if mode == CommunicationMode.scenario.value:
            return self.llm.model, SCENARIO_PROMPT
        return self.llm.model, ""

    def build_messages(self, message: str, system_prompt: str, history: List[dict]) -> List[dict]:
        return [
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": message}
        ]

    def reply(self, message: str, mode: Optional[str], history: List[dict]) -> str:
        model, system_prompt = self.select(mode)
        return self.llm.complete(self.build_messages(message, system_prompt, history), model=model)

    def open_scenario(self, scenario: str) -> str:
        prompt = f"""
Act as a roleplay partner for the scenario: "{scenario}".
Generate a short, engaging opening line to start the conversation with the user.
"""
        return self.llm.prompt(prompt, model=self.llm.model)
