# -*- coding: utf-8 -*-
"""
Centralized configuration for Note Illustrator.

This module provides a single configuration dataclass holding the numeric
thresholds the analysis core consumes: use-case fallback confidence,
placement score floor, suggestion count and concept count. The core takes
plain values only; nothing here reads files or the environment.
"""

from dataclasses import dataclass
from typing import Literal


AspectRatio = Literal["16:9", "4:3", "1:1", "9:16", "3:4", "3:2", "2:3"]

ASPECT_RATIOS: tuple[str, ...] = ("16:9", "4:3", "1:1", "9:16", "3:4", "3:2", "2:3")

DEFAULT_MAX_CONCEPTS = 8
DEFAULT_MIN_CONFIDENCE_SCORE = 70
DEFAULT_MIN_PLACEMENT_SCORE = 70
DEFAULT_TOP_PLACEMENT_SUGGESTIONS = 3
DEFAULT_IMAGE_COUNT = 3
MIN_IMAGE_COUNT = 1
MAX_IMAGE_COUNT = 10


@dataclass
class AnalysisConfig:
    """
    Configuration for note analysis and image planning.

    Attributes:
        min_confidence_score: Use-case matches below this confidence are
            replaced by the default template (confidence 50).
        min_placement_score: Sections scoring below this are never suggested
            as insertion points.
        top_placement_suggestions: Minimum number of suggestions returned per
            call; the actual cap is max(this, image_count).
        max_concepts: Number of concepts extracted from a note.

        default_style: Style id used when none is requested.
        default_use_case: Use-case id, or "auto_detect" to classify the note.
        use_recommended_style: When True and no style is requested, use the
            first recommended style of the detected use case instead of
            default_style.
        aspect_ratio: Aspect ratio hint appended to generated prompts.

        min_image_count / max_image_count: Bounds for requested image counts.
    """

    # Content analysis
    max_concepts: int = DEFAULT_MAX_CONCEPTS
    min_confidence_score: int = DEFAULT_MIN_CONFIDENCE_SCORE

    # Smart placement
    min_placement_score: int = DEFAULT_MIN_PLACEMENT_SCORE
    top_placement_suggestions: int = DEFAULT_TOP_PLACEMENT_SUGGESTIONS

    # Prompt generation
    default_style: str = "hyper_realism"
    default_use_case: str = "auto_detect"
    use_recommended_style: bool = False
    aspect_ratio: AspectRatio = "16:9"

    # Image count bounds
    min_image_count: int = MIN_IMAGE_COUNT
    max_image_count: int = MAX_IMAGE_COUNT

    @property
    def auto_detect_use_case(self) -> bool:
        """Check if the use case should be detected from the note."""
        return self.default_use_case == "auto_detect"

    def clamp_image_count(self, count: int) -> int:
        """Bound a requested image count to the configured range."""
        return max(self.min_image_count, min(self.max_image_count, count))

    def __post_init__(self):
        """Validate configuration values."""
        if self.max_concepts < 1:
            raise ValueError(f"max_concepts must be >= 1, got {self.max_concepts}")
        if not 0 <= self.min_confidence_score <= 100:
            raise ValueError(
                f"min_confidence_score must be between 0 and 100, "
                f"got {self.min_confidence_score}"
            )
        if not 0 <= self.min_placement_score <= 100:
            raise ValueError(
                f"min_placement_score must be between 0 and 100, "
                f"got {self.min_placement_score}"
            )
        if self.top_placement_suggestions < 1:
            raise ValueError(
                f"top_placement_suggestions must be >= 1, "
                f"got {self.top_placement_suggestions}"
            )
        if self.aspect_ratio not in ASPECT_RATIOS:
            raise ValueError(
                f"aspect_ratio must be one of {', '.join(ASPECT_RATIOS)}, "
                f"got '{self.aspect_ratio}'"
            )
        if self.min_image_count < 1:
            raise ValueError(f"min_image_count must be >= 1, got {self.min_image_count}")
        if self.max_image_count < self.min_image_count:
            raise ValueError(
                f"max_image_count ({self.max_image_count}) must be >= "
                f"min_image_count ({self.min_image_count})"
            )

    @classmethod
    def strict(cls, **overrides) -> "AnalysisConfig":
        """Create config that only accepts strong matches.

        Raises both thresholds so that only clearly relevant sections and
        clearly matching use cases are surfaced.

        Args:
            **overrides: Override any config values

        Returns:
            AnalysisConfig with strict thresholds
        """
        defaults = {
            "min_confidence_score": 85,
            "min_placement_score": 85,
        }
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def lenient(cls, **overrides) -> "AnalysisConfig":
        """Create config that surfaces weaker matches.

        Useful for short notes where few words overlap with the prompt.

        Args:
            **overrides: Override any config values

        Returns:
            AnalysisConfig with relaxed thresholds
        """
        defaults = {
            "min_confidence_score": 40,
            "min_placement_score": 30,
            "use_recommended_style": True,
        }
        defaults.update(overrides)
        return cls(**defaults)
