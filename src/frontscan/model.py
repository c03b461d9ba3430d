# src/frontscan/model.py (Core Layer)
from typing import Dict
from pydantic import BaseModel, Field

# BCP 47 shaped tag such as "en", "nl-NL" or "zh-Hant-TW".
LANGUAGE_TAG_PATTERN = r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$"


class DebugSettings(BaseModel):
    level: str = "INFO"
    module_levels: Dict[str, str] = Field(default_factory=dict)
    silenced: Dict[str, str] = Field(default_factory=dict)


class CacheSettings(BaseModel):
    """Tuning for the two-tier scan cache. TTLs are in seconds."""
    dir: str = ".scan-cache"
    memory_ttl_s: float = Field(default=30 * 60, gt=0)
    max_memory_entries: int = Field(default=1000, ge=1)
    disk_ttl_s: float = Field(default=24 * 60 * 60, gt=0)


class ScannerSettings(BaseModel):
    batch_size: int = Field(default=50, ge=1)
    max_dom_depth: int = Field(default=10, ge=1)
    max_font_families: int = Field(default=3, ge=1)
    contrast_min_ratio: float = Field(default=4.5, gt=1.0)
    show_progress: bool = True


class PatcherSettings(BaseModel):
    default_lang: str = Field(default="en-US", pattern=LANGUAGE_TAG_PATTERN)
