"""Opening catalogue and classification endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..catalogue import OpeningForest
from ..moves import ROOT_MOVES
from ..openings import detect_opening
from ..schemas import CatalogueOpening, CatalogueSummary, ClassifyRequest, ClassifyResponse, RootSummary
from .deps import get_forest

router = APIRouter(prefix="/openings", tags=["openings"])

ROOT_PATTERN = f"^({'|'.join(ROOT_MOVES)})$"


@router.get("", response_model=List[CatalogueOpening])
def list_openings(
    root: Optional[str] = Query(None, pattern=ROOT_PATTERN, description="Only openings starting with this move"),
    forest: OpeningForest = Depends(get_forest),
) -> List[CatalogueOpening]:
    return [CatalogueOpening(name=node.name, path=list(node.path)) for node in forest.openings(root)]


@router.get("/summary", response_model=CatalogueSummary)
def catalogue_summary(forest: OpeningForest = Depends(get_forest)) -> CatalogueSummary:
    roots = [
        RootSummary(move=move, nodes=forest.node_count(move), openings=len(forest.openings(move)))
        for move in ROOT_MOVES
    ]
    return CatalogueSummary(roots=roots, total_openings=sum(root.openings for root in roots))


@router.post("/classify", response_model=ClassifyResponse)
def classify_moves(payload: ClassifyRequest, forest: OpeningForest = Depends(get_forest)) -> ClassifyResponse:
    """
    Name the opening played so far.

    ``opening`` is null when the moves match no catalogued opening; that is
    a normal answer, not an error.
    """
    return ClassifyResponse.build(payload.moves, detect_opening(forest, payload.moves))
