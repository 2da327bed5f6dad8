"""
LLM integration layer.

Responsibilities:
- Manage Groq and OpenAI configuration and credentials.
- Ask the Groq LLM for real, recently published store prices as JSON.
- Generate illustrative establishment images with OpenAI.
- Graceful fallback when a provider is unavailable or returns invalid output.
"""
