"""
FastAPI wrapper for Note Illustrator - Vercel Serverless Function.

This module exposes note analysis, placement and embed insertion as a
REST API. Image generation stays in the CLI.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from note_illustrator import __version__
from note_illustrator.config import DEFAULT_IMAGE_COUNT, DEFAULT_MIN_PLACEMENT_SCORE, AnalysisConfig
from note_illustrator.embeds import size_value, wiki_image_link
from note_illustrator.insertion import insert_at_cursor, insert_images
from note_illustrator.models import InsertionLocation, InsertionPosition, PlacementSuggestion
from note_illustrator.pipeline import NoteIllustrator
from note_illustrator.placement import SmartPlacement
from note_illustrator.styles import STYLE_TIERS, get_styles_by_tier, get_tier_description, get_tier_label
from note_illustrator.use_cases import list_use_cases

app = FastAPI(
    title="Note Illustrator API",
    description="Plans illustrations for markdown notes: concepts, use case, prompts and placements",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class AnalyzeRequest(BaseModel):
    """Request model for note analysis."""
    content: str = Field(..., description="Markdown note content")
    image_count: int = Field(DEFAULT_IMAGE_COUNT, description="Number of images to plan")
    style_id: Optional[str] = Field(None, description="Style id; defaults to the configured style")
    use_case_id: Optional[str] = Field(None, description="Use-case id or 'auto_detect'")
    min_confidence_score: Optional[int] = Field(None, description="Use-case confidence floor (0-100)")
    min_placement_score: Optional[int] = Field(None, description="Placement score floor (0-100)")
    aspect_ratio: str = Field("16:9", description="Aspect ratio hint appended to prompts")
    use_recommended_style: bool = Field(False, description="Use the detected use case's recommended style")


class PlacementRequest(BaseModel):
    """Request model for placement suggestions."""
    content: str = Field(..., description="Markdown note content")
    prompt: str = Field(..., description="Image prompt or description")
    image_count: int = Field(1, description="Number of images being placed")
    min_placement_score: int = Field(DEFAULT_MIN_PLACEMENT_SCORE, description="Placement score floor (0-100)")


class PlacementInput(BaseModel):
    """A placement chosen for one image."""
    image_index: int
    line_number: int
    position: InsertionPosition = InsertionPosition.AFTER


class InsertRequest(BaseModel):
    """Request model for inserting image embeds into a note."""
    content: str = Field(..., description="Markdown note content")
    image_paths: list[str] = Field(..., description="Saved image paths, one per image")
    placements: list[PlacementInput] = Field(
        default_factory=list,
        description="Chosen placements; images without one go to the cursor or the end",
    )
    cursor_line: Optional[int] = Field(None, description="1-indexed fallback line")
    size: str = Field("large", description="Embed display width: small, medium, large, extra-large")
    use_placements: bool = Field(True, description="False inserts every image at the cursor")


class InsertResponse(BaseModel):
    """Response model for embed insertion."""
    content: str
    embeds: list[str]


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.get("/api/styles")
async def styles():
    """List styles grouped by tier."""
    return {
        "tiers": [
            {
                "tier": tier,
                "label": get_tier_label(tier),
                "description": get_tier_description(tier),
                "styles": [style.to_dict() for style in get_styles_by_tier(tier)],
            }
            for tier in STYLE_TIERS
        ]
    }


@app.get("/api/use-cases")
async def use_cases():
    """List use-case templates."""
    return {"use_cases": [template.to_dict() for template in list_use_cases()]}


@app.post("/api/analyze")
async def analyze(request: AnalyzeRequest):
    """
    Plan illustrations for a note.

    Returns concepts, content type, language, use case, style, prompts,
    prompt validations and per-image placements.
    """
    overrides = {
        "aspect_ratio": request.aspect_ratio,
        "use_recommended_style": request.use_recommended_style,
    }
    if request.min_confidence_score is not None:
        overrides["min_confidence_score"] = request.min_confidence_score
    if request.min_placement_score is not None:
        overrides["min_placement_score"] = request.min_placement_score

    try:
        config = AnalysisConfig(**overrides)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    plan = NoteIllustrator(config).plan(
        request.content,
        request.image_count,
        style_id=request.style_id,
        use_case_id=request.use_case_id,
    )
    return plan.to_dict()


@app.post("/api/placements")
async def placements(request: PlacementRequest):
    """Suggest insertion points for one image."""
    if not 0 <= request.min_placement_score <= 100:
        raise HTTPException(
            status_code=422,
            detail=f"min_placement_score must be between 0 and 100, got {request.min_placement_score}",
        )

    placement = SmartPlacement(min_placement_score=request.min_placement_score)
    suggestions = placement.analyze_placement_options(request.content, request.prompt, request.image_count)
    return {"suggestions": [suggestion.to_dict() for suggestion in suggestions]}


@app.post("/api/insert", response_model=InsertResponse)
async def insert(request: InsertRequest):
    """
    Insert wiki-style embeds for saved images into a note.

    Placements referencing an image index outside image_paths are rejected.
    """
    embeds = [wiki_image_link(path, size_value(request.size)) for path in request.image_paths]

    if not request.use_placements:
        return InsertResponse(
            content=insert_at_cursor(request.content, embeds, request.cursor_line),
            embeds=embeds,
        )

    chosen: dict[int, PlacementSuggestion] = {}
    for item in request.placements:
        if not 0 <= item.image_index < len(embeds):
            raise HTTPException(
                status_code=400,
                detail=f"Placement refers to image {item.image_index}, but only {len(embeds)} image(s) given",
            )
        chosen[item.image_index] = PlacementSuggestion(
            location=InsertionLocation(
                line_number=item.line_number,
                position=item.position,
                anchor="",
            ),
            score=100,
            reasoning="Chosen by user",
            context_preview="",
        )

    return InsertResponse(
        content=insert_images(request.content, embeds, chosen, request.cursor_line),
        embeds=embeds,
    )
