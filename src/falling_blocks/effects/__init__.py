"""Presentation feedback planning for line clears."""

from .feedback import (
    BurstSpec,
    Explosion,
    FeedbackPlan,
    FloatingText,
    IntensityLevel,
    ScreenFlash,
    ScreenShake,
    VisualEffectBurst,
    VisualEffectFeed,
    VisualTextKey,
    plan_feedback,
)

__all__ = [
    "BurstSpec",
    "Explosion",
    "FeedbackPlan",
    "FloatingText",
    "IntensityLevel",
    "ScreenFlash",
    "ScreenShake",
    "VisualEffectBurst",
    "VisualEffectFeed",
    "VisualTextKey",
    "plan_feedback",
]
