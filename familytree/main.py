from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from familytree.core.config import settings
from familytree.core.logging import configure_logging
from familytree.db.store import open_store, close_store
from familytree.routers import auth, persons, relationships, tree

configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await open_store()
    yield
    await close_store()

# Expose the Swagger UI at the root URL so visiting http://127.0.0.1:8000 opens the docs
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan, docs_url="/")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(persons.router)
app.include_router(relationships.router)
app.include_router(tree.router)

@app.get("/healthz")
async def healthz():
    return {"status": "ok"}

@app.get("/version")
async def version():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "familytree.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
