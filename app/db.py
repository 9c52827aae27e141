import logging
from dataclasses import dataclass

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .config import Settings

logger = logging.getLogger(__name__)

CATEGORIES = "categories"
SPECIES = "species"
ANIMALS = "animals"


@dataclass
class Mongo:
    """Handles de MongoDB creados una sola vez al arrancar la app."""
    client: AsyncIOMotorClient
    db: AsyncIOMotorDatabase

    @classmethod
    async def connect(cls, settings: Settings) -> "Mongo":
        client = AsyncIOMotorClient(settings.mongodb_uri)
        # Igual que antes: si no hay servidor, la app no arranca
        await client.admin.command("ping")
        logger.info(f"Connected to MongoDB, database '{settings.db_name}'")
        return cls(client=client, db=client[settings.db_name])

    def close(self) -> None:
        self.client.close()
        logger.info("MongoDB connection closed")


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.mongo.db
