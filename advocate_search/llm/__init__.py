"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build prompts from a user's stated need and the candidate advocates.
- Call Groq LLM to pick the best advocate and explain the choice.
- Graceful fallback when the LLM is unavailable or returns invalid output.
"""
