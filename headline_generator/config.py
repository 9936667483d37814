"""
Layout tunables for the headline renderer.
Defaults reproduce the original 1080x1080 share image; every value can be
overridden through the environment (or a .env file).
"""

from pydantic import BaseModel, Field
from dotenv import load_dotenv
import os

load_dotenv()

DEFAULT_BACKGROUND_URL = "https://news.fasttakeoff.org/images/brain.png"


class LayoutSettings(BaseModel):
    max_line_length: int = Field(default=20, ge=1)
    font_ceiling: float = Field(default=60, gt=0)
    width_budget: float = Field(default=800, gt=0)
    height_budget: float = Field(default=900, gt=0)
    compaction_factor: float = Field(default=1.5, gt=0)
    line_spacing_factor: float = Field(default=1.3, gt=0)
    canvas_size: int = Field(default=1080, gt=0)
    background_url: str = DEFAULT_BACKGROUND_URL

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "LayoutSettings":
        """Build settings from HEADLINE_* environment variables"""
        env_names = {
            "max_line_length": "HEADLINE_MAX_LINE_LENGTH",
            "font_ceiling": "HEADLINE_FONT_CEILING",
            "width_budget": "HEADLINE_WIDTH_BUDGET",
            "height_budget": "HEADLINE_HEIGHT_BUDGET",
            "compaction_factor": "HEADLINE_COMPACTION_FACTOR",
            "line_spacing_factor": "HEADLINE_LINE_SPACING",
            "canvas_size": "HEADLINE_CANVAS_SIZE",
            "background_url": "HEADLINE_BACKGROUND_URL",
        }
        values = {}
        for field, env_name in env_names.items():
            raw = os.getenv(env_name)
            if raw is not None and raw.strip():
                values[field] = raw.strip()
        return cls(**values)
