from contextlib import asynccontextmanager
from typing import List, Dict, Any, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from garden_graph.config import settings
from garden_graph.errors import GraphStoreError
from garden_graph.graph import GraphSeeder, PlantQueryEngine, SQLiteGraphStore
from garden_graph.types import REFERENCE_ENTITY_TYPES
from garden_graph.utils.logger import app_logger


logger = app_logger.bind(component="api_server")

BACKEND_ERROR = "Graph backend error, please retry"


class RecommendationsResponse(BaseModel):
    plants: List[Dict[str, Any]]
    total_results: int
    criteria: Dict[str, Optional[str]]
    fallback: Optional[Dict[str, Any]] = None


class GraphDataResponse(BaseModel):
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]
    metadata: Dict[str, Any]


class NeighborsResponse(BaseModel):
    node_id: str
    neighbors: List[Dict[str, Any]]


def create_app(db_path: Optional[str] = None, seed_on_startup: Optional[bool] = None) -> FastAPI:
    """Build the API. The store is opened at startup and closed at shutdown."""
    db_path = db_path or settings.graph_db_path
    if seed_on_startup is None:
        seed_on_startup = settings.seed_on_startup

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = SQLiteGraphStore(db_path).open()
        try:
            if seed_on_startup:
                GraphSeeder(store).seed()
            app.state.store = store
            app.state.engine = PlantQueryEngine(store)
            yield
        finally:
            store.close()

    app = FastAPI(title="Garden Knowledge Graph API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/graph-recommendations", response_model=RecommendationsResponse)
    def graph_recommendations(
        request: Request,
        soil_type: Optional[str] = Query(None, alias="soilType"),
        sun_exposure: Optional[str] = Query(None, alias="sunExposure"),
        season: Optional[str] = Query(None),
        fallback: bool = Query(False),
    ):
        """Recommend plants for the given soil type, sun exposure and season."""
        engine: PlantQueryEngine = request.app.state.engine
        criteria = {"soil_type": soil_type, "sun_exposure": sun_exposure, "season": season}
        try:
            if fallback:
                result = engine.find_plants_with_fallback(**criteria)
                plants = [plant.to_dict() for plant in result.plants]
                details = result.to_dict()
                details.pop("plants")
            else:
                plants = [plant.to_dict() for plant in engine.find_plants_by_suitability(**criteria)]
                details = None
        except GraphStoreError as e:
            logger.error(f"Error finding plants for {criteria}: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)

        return RecommendationsResponse(
            plants=plants, total_results=len(plants), criteria=criteria, fallback=details
        )

    @app.get("/api/plants/{plant_id}")
    def get_plant(request: Request, plant_id: str):
        """Get a plant with its soils, sun exposures, seasons and companions."""
        try:
            profile = request.app.state.engine.get_plant_profile(plant_id)
        except GraphStoreError as e:
            logger.error(f"Error getting plant {plant_id}: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)
        if profile is None:
            raise HTTPException(status_code=404, detail="Plant not found")
        return profile.to_dict()

    @app.get("/api/nodes/{node_id}")
    def get_node(request: Request, node_id: str):
        """Get a single node."""
        try:
            node = request.app.state.store.get_node(node_id)
        except GraphStoreError as e:
            logger.error(f"Error getting node {node_id}: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)
        if node is None:
            raise HTTPException(status_code=404, detail="Node not found")
        return node.to_dict()

    @app.get("/api/nodes/{node_id}/neighbors", response_model=NeighborsResponse)
    def get_neighbors(request: Request, node_id: str):
        """Get the 1-hop outgoing neighbors of a node."""
        try:
            neighbors = request.app.state.store.get_outgoing_neighbors(node_id)
        except GraphStoreError as e:
            logger.error(f"Error getting neighbors of {node_id}: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)
        return NeighborsResponse(node_id=node_id, neighbors=[n.to_dict() for n in neighbors])

    @app.get("/api/reference/{entity_type}")
    def get_reference_entities(request: Request, entity_type: str):
        """List soil types, sun exposures or seasons."""
        if entity_type not in {t.value for t in REFERENCE_ENTITY_TYPES}:
            raise HTTPException(status_code=404, detail="Unknown reference entity type")
        try:
            nodes = request.app.state.engine.list_reference_entities(entity_type)
        except GraphStoreError as e:
            logger.error(f"Error listing {entity_type}: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)
        return {"entity_type": entity_type, "items": [node.to_dict() for node in nodes]}

    @app.get("/api/graph", response_model=GraphDataResponse)
    def get_graph_data(request: Request):
        """Get complete graph data for visualization."""
        try:
            return GraphDataResponse(**request.app.state.store.get_graph_data())
        except GraphStoreError as e:
            logger.error(f"Error getting graph data: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)

    @app.get("/api/stats")
    def get_stats(request: Request):
        """Get database statistics."""
        try:
            return request.app.state.store.get_database_stats()
        except GraphStoreError as e:
            logger.error(f"Error getting stats: {e}")
            raise HTTPException(status_code=500, detail=BACKEND_ERROR)

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Starting Garden Knowledge Graph API server")

    uvicorn.run(
        "api_server:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="info"
    )
