import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI

from krishi_mitra.api.rest_routes.activity_logs import router as activity_logs_router
from krishi_mitra.api.rest_routes.advisory import router as advisory_router
from krishi_mitra.api.rest_routes.farmer_profile import router as farmer_profile_router
from krishi_mitra.core.genai_client import GenAIClientProvider, get_client_provider
from krishi_mitra.core.mongodb import close_mongo_client, init_mongo_client

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_mongo_client()
    yield
    await close_mongo_client()


app = FastAPI(lifespan=lifespan)

app.include_router(advisory_router)
app.include_router(activity_logs_router)
app.include_router(farmer_profile_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Krishi Mitra AI!"}


@app.get("/health")
async def health(provider: GenAIClientProvider = Depends(get_client_provider)):
    client = await provider.get_client()
    return {"ai_service": "available" if client is not None else "unavailable"}
