from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 20.0
    max_tokens: int = 1024
    temperature: float = 0.3
    enabled: bool = True


@dataclass(frozen=True)
class ImageConfig:
    api_key: str = os.getenv("OPENAI_API_KEY", "")
    model: str = "dall-e-3"
    size: str = "1024x1024"
    quality: str = "standard"
    style: str = "natural"
    timeout: float = 60.0
    enabled: bool = True


DEFAULT_LLM_CONFIG = LLMConfig()
DEFAULT_IMAGE_CONFIG = ImageConfig()


def is_llm_configured(config: LLMConfig = DEFAULT_LLM_CONFIG) -> bool:
    return config.enabled and bool(config.api_key)


def is_image_generation_configured(config: ImageConfig = DEFAULT_IMAGE_CONFIG) -> bool:
    return config.enabled and bool(config.api_key)
