"""
Note Illustrator

A deterministic toolkit that plans illustrations for markdown notes:
- Parses note structure and extracts weighted key concepts
- Classifies the note into a use case and builds styled image prompts
- Scores note sections to suggest where each image belongs
"""

__version__ = "1.0.0"
__author__ = "Note Illustrator Team"

from .config import AnalysisConfig

from .models import (
    CodeBlock,
    ContentProfile,
    Heading,
    IllustrationPlan,
    InsertionLocation,
    InsertionPosition,
    ListItem,
    NoteStructure,
    Paragraph,
    PlacementSuggestion,
    PromptValidation,
    Section,
    StyleTemplate,
    UseCaseMatch,
    UseCaseTemplate,
)

# Analysis core
from .structure import (
    DocumentStructureParser,
    analyze_structure,
    get_topics_by_section,
)

from .concepts import (
    ConceptExtractor,
    detect_content_type,
    detect_language,
    extract_concepts,
)

from .use_case_detector import (
    UseCaseDetector,
    detect_use_case,
)

from .placement import (
    SmartPlacement,
    analyze_placement_options,
    extract_image_intent,
    suggest_for_multiple_images,
)

# Catalogs
from .use_cases import (
    USE_CASE_TEMPLATES,
    get_default_use_case,
    get_use_case_by_id,
)

from .styles import (
    STYLE_TEMPLATES,
    get_default_style,
    get_style_by_id,
    recommend_style_for_use_case,
)

# Prompts, embeds and insertion
from .prompts import (
    PromptGenerator,
    build_content_profile,
    parse_prompt_response,
    validate_prompt,
)

from .embeds import (
    generate_image_filename,
    markdown_image_link,
    wiki_image_link,
)

from .insertion import (
    insert_at_cursor,
    insert_images,
)

from .pipeline import NoteIllustrator

__all__ = [
    # Configuration
    "AnalysisConfig",
    # Models
    "CodeBlock",
    "ContentProfile",
    "Heading",
    "IllustrationPlan",
    "InsertionLocation",
    "InsertionPosition",
    "ListItem",
    "NoteStructure",
    "Paragraph",
    "PlacementSuggestion",
    "PromptValidation",
    "Section",
    "StyleTemplate",
    "UseCaseMatch",
    "UseCaseTemplate",
    # Structure
    "DocumentStructureParser",
    "analyze_structure",
    "get_topics_by_section",
    # Concepts
    "ConceptExtractor",
    "detect_content_type",
    "detect_language",
    "extract_concepts",
    # Use cases
    "UseCaseDetector",
    "detect_use_case",
    "USE_CASE_TEMPLATES",
    "get_default_use_case",
    "get_use_case_by_id",
    # Placement
    "SmartPlacement",
    "analyze_placement_options",
    "extract_image_intent",
    "suggest_for_multiple_images",
    # Styles
    "STYLE_TEMPLATES",
    "get_default_style",
    "get_style_by_id",
    "recommend_style_for_use_case",
    # Prompts
    "PromptGenerator",
    "build_content_profile",
    "parse_prompt_response",
    "validate_prompt",
    # Embeds and insertion
    "generate_image_filename",
    "markdown_image_link",
    "wiki_image_link",
    "insert_at_cursor",
    "insert_images",
    # Pipeline
    "NoteIllustrator",
]
