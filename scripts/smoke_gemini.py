"""
Standalone Gemini smoke test - NO FastAPI server needed!

Runs one edit-style generation against the real API using GEMINI_API_KEY.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path (BEFORE importing ui2code)
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import httpx

from ui2code.agent import prompts
from ui2code.config import settings
from ui2code.llm.client import GeminiClient, text_part
from ui2code.utils.helpers import strip_code_fences


async def main() -> int:
    print("=" * 60)
    print("🧪 Gemini smoke test")
    print(f"Model: {settings.gemini_model}")
    print("=" * 60 + "\n")

    if not settings.gemini_api_key:
        print("❌ GEMINI_API_KEY not set. Check your .env file.")
        return 1

    async with httpx.AsyncClient() as client:
        gemini = GeminiClient(
            client,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.generation_timeout,
        )
        prompt = prompts.edit_prompt("<html><body><h1>Hi</h1></body></html>", "make the heading blue")
        outcome = await gemini.generate([text_part(prompt)])

    if not outcome.ok:
        print(f"❌ ERROR: {outcome.error}")
        return 1

    print("✅ SUCCESS!\n")
    print(strip_code_fences(outcome.text))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
