"""FastAPI app with Strawberry GraphQL."""

import logging
import os

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

import hedging
from app.schema import schema

logging.basicConfig(
    level=os.environ.get("HEDGING_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Hedging API", version=hedging.__version__)
graphql_app = GraphQLRouter(schema)
app.include_router(graphql_app, prefix="/graphql")


@app.get("/health")
def health() -> dict[str, str]:
    """Health check for load balancers and Docker."""
    return {"status": "ok"}
