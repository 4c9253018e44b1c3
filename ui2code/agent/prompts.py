from __future__ import annotations

from textwrap import dedent
from typing import Optional

from ui2code.utils.helpers import truncate

NO_URL_SENTINEL = "NONE"

_OUTPUT_RULES = (
    "Return ONLY the complete HTML document, nothing else: "
    "no explanation, no markdown code blocks."
)


def url_extraction_prompt() -> str:
    return (
        "Look at this screenshot. If you can see a URL, domain name, or website "
        "address anywhere in the image (in the browser address bar, in text, in a "
        "logo, anywhere), extract and return ONLY the full URL starting with "
        f"https://. If you cannot find any URL, return exactly the word: {NO_URL_SENTINEL}"
    )


def screenshot_prompt(
    source: Optional[str],
    url: Optional[str],
    char_limit: int = 15000,
) -> str:
    """
    Instruction sent alongside the screenshot.

    Richest context first: page source (truncated to ``char_limit``), else
    the page URL as a hint, else the image alone.
    """
    sections = ["You are an expert UI-to-code engineer. Analyze this screenshot carefully."]

    if source:
        sections.append(
            "I also have the actual source code of this page:\n"
            f"```html\n{truncate(source, char_limit)}\n```\n\n"
            "Use BOTH the screenshot AND the source code to recreate this UI "
            "as accurately as possible."
        )
    elif url:
        sections.append(
            f"This screenshot is from: {url}. "
            "Use the visual information to reconstruct the UI."
        )

    sections.append(
        dedent(
            f"""
            Generate clean, complete, production-ready HTML + CSS + JavaScript in a
            single self-contained file that recreates this UI as accurately as possible.
            Include all visible text, colors, fonts, layout, spacing, and interactive elements.
            {_OUTPUT_RULES}
            """
        ).strip()
    )
    return "\n\n".join(sections)


def edit_prompt(current_code: str, instruction: str) -> str:
    return (
        "You are an expert frontend developer. Here is the current HTML/CSS/JS code:\n"
        f"```html\n{current_code}\n```\n\n"
        f'The user wants to make this change: "{instruction}"\n\n'
        "Return the complete updated HTML code with the change applied. "
        f"{_OUTPUT_RULES}"
    )
