from fastapi import APIRouter, Depends, HTTPException

from ontoview.exceptions import UnknownEntityError
from ontoview.models.entity import Entity
from ontoview.services.entity_graph import EntityGraph
from ontoview.services.registry import get_entity_graph

router = APIRouter(prefix="/api/ontology", tags=["ontology"])


@router.get("")
async def ontology_summary(model: EntityGraph = Depends(get_entity_graph)) -> dict:
    return model.summary()


@router.get("/entity/{entity_id:path}", response_model=Entity)
async def get_entity(entity_id: str, model: EntityGraph = Depends(get_entity_graph)) -> Entity:
    try:
        return model.require(entity_id)
    except UnknownEntityError as e:
        raise HTTPException(status_code=404, detail=e.detail) from e
