from ui2code.llm.client import GeminiClient, GenerationOutcome, image_part, text_part

__all__ = ["GeminiClient", "GenerationOutcome", "image_part", "text_part"]
