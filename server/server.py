import contextlib
import logging
from typing import Any, Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from document_store import Db, get_user_store
from errors import ConfigurationError, StorageError
from host import App
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

class SaveFieldRequest(BaseModel):
    value: Any = None

def build_store(settings: Settings) -> Db:
    if settings.user_store == "mongodb":
        return get_user_store(
            "mongodb",
            connection_uri=settings.mongodb_uri,
            database_name=settings.mongodb_database,
            collection_name=settings.mongodb_collection,
            primary_key_field=settings.mongodb_primary_key,
        )
    return get_user_store(settings.user_store, primary_key_field=settings.mongodb_primary_key)

def create_app(store: Optional[Db] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        host_config = {"db": {"default": settings.default_db}} if settings.default_db else {}
        host = App(host_config)
        await host.use(store or build_store(settings))
        app.state.host = host
        try:
            yield
        finally:
            await host.shutdown()

    app = FastAPI(title="User data API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        return JSONResponse(status_code=500, content=exc.to_dict())

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.warning("Storage error on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=503, content=exc.to_dict())

    def active_store(request: Request) -> Db:
        db = request.app.state.host.db
        if db is None:
            raise StorageError("No active user store.", hint="Check the db.default setting.")
        return db

    @app.get("/health")
    async def health(request: Request):
        db = request.app.state.host.db
        return {"status": "ok", "store": db.identifier if db else None}

    @app.get("/users/{user_id}")
    async def get_user(user_id: str, request: Request):
        """
        Returns the stored record for user_id.
        """
        record = await active_store(request).load(user_id)
        if record is None:
            return JSONResponse(status_code=404, content={"status": "error", "message": "User not found"})
        return record

    @app.put("/users/{user_id}/{field}")
    async def put_user_field(user_id: str, field: str, body: SaveFieldRequest, request: Request):
        await active_store(request).save(user_id, field, body.value)
        return {"status": "success"}

    @app.delete("/users/{user_id}")
    async def delete_user(user_id: str, request: Request):
        await active_store(request).delete(user_id)
        return {"status": "success"}

    return app

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(create_app(settings=settings), host="0.0.0.0", port=8000)
