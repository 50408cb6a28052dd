"""
Use-case template catalog.

Each template pairs a content category with the keywords that signal it, a
prompt pattern with named slots and the styles that suit it. The catalog is
read-only reference data; look entries up with the functions below.
"""

from typing import Optional

from .models import UseCaseTemplate


USE_CASE_TEMPLATES: tuple[UseCaseTemplate, ...] = (
    UseCaseTemplate(
        id="educational_diagram",
        name="Educational Diagram",
        icon="📊",
        description="Technical concepts, processes, systems, frameworks",
        best_styles=("illustration", "digital_art", "hyper_realism"),
        prompt_pattern=(
            "create a detailed educational diagram illustrating {concepts} showing "
            "{relationships} with clear labels and visual hierarchy"
        ),
        keywords=(
            "learn", "teach", "explain", "concept", "framework", "system", "principle",
            "theory", "fundamentals", "basics", "introduction", "guide", "tutorial",
        ),
    ),
    UseCaseTemplate(
        id="concept_visualization",
        name="Concept Visualization",
        icon="💡",
        description="Abstract ideas, theories, mental models",
        best_styles=("digital_art", "watercolor", "illustration"),
        prompt_pattern=(
            "visualize the concept of {concepts} incorporating {elements} in an "
            "abstract yet clear composition"
        ),
        keywords=(
            "idea", "theory", "abstract", "mental", "model", "philosophy", "thinking",
            "understanding", "perception", "cognition",
        ),
    ),
    UseCaseTemplate(
        id="process_flow",
        name="Process Flow",
        icon="➡️",
        description="Step-by-step procedures, workflows, algorithms",
        best_styles=("illustration", "digital_art", "3d_render"),
        prompt_pattern=(
            "create a step-by-step process flow diagram showing {process} with "
            "sequential stages"
        ),
        keywords=(
            "step", "process", "flow", "workflow", "procedure", "algorithm", "sequence",
            "pipeline", "stages", "phases",
        ),
    ),
    UseCaseTemplate(
        id="character_illustration",
        name="Character Illustration",
        icon="👤",
        description="Fiction writing, personas, character designs",
        best_styles=("anime", "digital_art", "manga", "hyper_realism"),
        prompt_pattern=(
            "create a full character illustration of {character} with {traits} "
            "emphasizing distinctive features"
        ),
        keywords=(
            "character", "person", "protagonist", "hero", "villain", "persona", "figure",
            "portrait", "individual",
        ),
    ),
    UseCaseTemplate(
        id="scene_setting",
        name="Scene Setting",
        icon="🌄",
        description="Environment descriptions, world-building, atmosphere",
        best_styles=("digital_art", "cinematic", "watercolor", "oil_painting"),
        prompt_pattern=(
            "create an atmospheric scene depicting {setting} featuring {elements} "
            "with strong environmental storytelling"
        ),
        keywords=(
            "scene", "environment", "landscape", "setting", "world", "place", "location",
            "atmosphere", "mood", "ambiance",
        ),
    ),
    UseCaseTemplate(
        id="data_visualization",
        name="Data Visualization",
        icon="📈",
        description="Statistics, comparisons, relationships, metrics",
        best_styles=("illustration", "digital_art", "3d_render"),
        prompt_pattern="create a clear data visualization comparing {data} with intuitive visual encoding",
        keywords=(
            "data", "statistics", "graph", "chart", "metrics", "numbers", "comparison",
            "analysis", "trend", "growth",
        ),
    ),
    UseCaseTemplate(
        id="historical_recreation",
        name="Historical Recreation",
        icon="🏛️",
        description="Historical events, figures, periods, artifacts",
        best_styles=("hyper_realism", "oil_painting", "digital_art"),
        prompt_pattern=(
            "create a historically accurate recreation of {subject} with "
            "period-appropriate details"
        ),
        keywords=(
            "history", "historical", "ancient", "medieval", "period", "era", "century",
            "civilization", "empire", "dynasty",
        ),
    ),
    UseCaseTemplate(
        id="scientific_illustration",
        name="Scientific Illustration",
        icon="🔬",
        description="Biology, chemistry, physics concepts, technical accuracy",
        best_styles=("hyper_realism", "illustration", "digital_art", "3d_render"),
        prompt_pattern=(
            "create a detailed scientific illustration of {subject} with technical "
            "accuracy and clear annotations"
        ),
        keywords=(
            "science", "biology", "chemistry", "physics", "cell", "molecule", "atom",
            "organism", "experiment", "research",
        ),
    ),
    UseCaseTemplate(
        id="architectural_visualization",
        name="Architectural Visualization",
        icon="🏗️",
        description="Spaces, structures, designs, interior/exterior",
        best_styles=("3d_render", "hyper_realism", "illustration"),
        prompt_pattern=(
            "create an architectural visualization of {structure} with professional "
            "rendering quality"
        ),
        keywords=(
            "architecture", "building", "structure", "design", "interior", "exterior",
            "space", "room", "house", "construction",
        ),
    ),
    UseCaseTemplate(
        id="product_mockup",
        name="Product Mockup",
        icon="📦",
        description="UI/UX, physical products, prototypes, designs",
        best_styles=("hyper_realism", "3d_render", "illustration"),
        prompt_pattern="create a professional product mockup of {product} with clean presentation",
        keywords=(
            "product", "mockup", "prototype", "design", "ui", "ux", "interface", "app",
            "device", "gadget",
        ),
    ),
)

DEFAULT_USE_CASE_ID = "concept_visualization"

_USE_CASES_BY_ID: dict[str, UseCaseTemplate] = {uc.id: uc for uc in USE_CASE_TEMPLATES}


def get_use_case_by_id(use_case_id: str) -> Optional[UseCaseTemplate]:
    """Look up a template by id; None when the id is unknown."""
    return _USE_CASES_BY_ID.get(use_case_id)


def get_default_use_case() -> UseCaseTemplate:
    """Template used when classification is not confident enough."""
    return _USE_CASES_BY_ID[DEFAULT_USE_CASE_ID]


def list_use_cases() -> list[UseCaseTemplate]:
    """All templates in catalog order."""
    return list(USE_CASE_TEMPLATES)
