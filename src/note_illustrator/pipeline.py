"""
Illustration planning orchestration.

This module sequences the analysis steps for one note:
- Parse the note structure
- Extract concepts, content type and language
- Classify the use case
- Choose a style and build one prompt per image
- Validate prompts and suggest a placement for each image

Nothing here performs I/O; the resulting IllustrationPlan is handed to the
CLI, the HTTP API or an image client.
"""

import logging
from typing import Optional

from .concepts import ConceptExtractor
from .config import AnalysisConfig
from .models import IllustrationPlan, StyleTemplate, UseCaseMatch
from .placement import SmartPlacement
from .prompts import AUTO_DETECT, PromptGenerator
from .structure import analyze_structure
from .styles import get_default_style, get_style_by_id, recommend_style_for_use_case
from .use_case_detector import UseCaseDetector
from .use_cases import get_use_case_by_id

logger = logging.getLogger(__name__)


class NoteIllustrator:
    """
    Plans illustrations for markdown notes.

    One instance can plan any number of notes; it keeps no per-note state.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize the planner.

        Args:
            config: Thresholds and defaults. Uses AnalysisConfig() if None.
        """
        self.config = config or AnalysisConfig()
        self.extractor = ConceptExtractor(max_concepts=self.config.max_concepts)
        self.detector = UseCaseDetector(min_confidence_score=self.config.min_confidence_score)
        self.prompt_generator = PromptGenerator(aspect_ratio=self.config.aspect_ratio)
        self.placement = SmartPlacement(
            min_placement_score=self.config.min_placement_score,
            top_suggestions=self.config.top_placement_suggestions,
        )

    def plan(
        self,
        document: str,
        image_count: int = 1,
        style_id: Optional[str] = None,
        use_case_id: Optional[str] = None,
    ) -> IllustrationPlan:
        """
        Build an illustration plan for a note.

        Args:
            document: Markdown note content.
            image_count: Images wanted; clamped to the configured range.
            style_id: Style to use. None picks the configured default, or
                the use case's recommended style when configured so.
            use_case_id: Template id or "auto_detect". None uses the
                configured default.

        Returns:
            IllustrationPlan with prompts, validations and placements.
        """
        count = self.config.clamp_image_count(image_count)
        if count != image_count:
            logger.info(f"Image count {image_count} clamped to {count}")

        use_case_id = use_case_id or self.config.default_use_case

        structure = analyze_structure(document)
        concepts = self.extractor.extract(document)
        content_type = self.extractor.detect_content_type(document)
        language = self.extractor.detect_language(document)
        logger.debug(f"Concepts: {concepts} ({content_type}, {language})")

        use_case = self._resolve_use_case(document, concepts, use_case_id)
        style = self._resolve_style(style_id, use_case)
        logger.info(f"Planning {count} image(s): use case '{use_case.template.id}', style '{style.id}'")

        prompts = self.prompt_generator.generate_multiple_prompts(
            concepts,
            use_case.template.id,
            style.id,
            count,
        )
        validations = [self.prompt_generator.validate_prompt(p) for p in prompts]
        placements = self.placement.suggest_for_multiple_images(document, prompts)

        return IllustrationPlan(
            concepts=concepts,
            content_type=content_type,
            language=language,
            use_case=use_case,
            style=style,
            prompts=prompts,
            validations=validations,
            placements=placements,
            section_count=len(structure.sections),
            heading_count=len(structure.headings),
        )

    def _resolve_use_case(self, document: str, concepts: list[str], use_case_id: str) -> UseCaseMatch:
        if use_case_id != AUTO_DETECT:
            template = get_use_case_by_id(use_case_id)
            if template:
                return UseCaseMatch(
                    template=template,
                    confidence=100,
                    reasoning="Selected explicitly",
                )
            logger.warning(f"Unknown use case '{use_case_id}'; detecting from content")

        return self.detector.detect_use_case(document, concepts)

    def _resolve_style(self, style_id: Optional[str], use_case: UseCaseMatch) -> StyleTemplate:
        if style_id:
            style = get_style_by_id(style_id)
            if style:
                return style
            logger.warning(f"Unknown style '{style_id}'; using default style")
            return get_style_by_id(self.config.default_style) or get_default_style()

        if self.config.use_recommended_style:
            return recommend_style_for_use_case(use_case.template.best_styles)

        return get_style_by_id(self.config.default_style) or get_default_style()
