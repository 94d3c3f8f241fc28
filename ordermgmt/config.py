"""MongoDB connection settings and a small database handle."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from pymongo import MongoClient
from pymongo.server_api import ServerApi

from ordermgmt import logger as log


@dataclass
class Database:
    """A connected client together with the database the application uses."""

    client: Any
    db: Any

    def ping(self) -> None:
        """Check that the primary server answers."""
        self.client.admin.command("ping")

    def close(self) -> None:
        """Disconnect the client."""
        try:
            self.client.close()
        except Exception as exc:
            log.error("Failed to disconnect from MongoDB", error=str(exc))
            raise

    def get_collection(self, name: str) -> Any:
        """Return a collection of the application database."""
        return self.db[name]

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def connect_db(uri: str | None = None, db_name: str | None = None) -> Database:
    """Create a client for the Stable API version 1.

    The URI and database name default to MONGODB_URI and MONGODB_DBNAME.
    """
    if uri is None:
        uri = os.environ.get("MONGODB_URI", "")
    if db_name is None:
        db_name = os.environ.get("MONGODB_DBNAME", "")
    if not uri:
        raise ValueError("MongoDB URI is not set")
    client: MongoClient = MongoClient(uri, server_api=ServerApi("1"))
    try:
        db = client[db_name]
    except Exception:
        client.close()
        raise
    log.info("Connected to MongoDB")
    return Database(client=client, db=db)