# backend/main.py
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database_models import init_database
from routers import (
    conversation_router,
    health_router,
    legal_chat_router,
    upload_router,
)


# --- FastAPI Application Lifespan (for startup and shutdown events) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup event
    # Initialize database tables
    init_database()
    yield


# --- FastAPI App Setup ---
app = FastAPI(
    title="LegalAI Advisor API",
    description="Conversations, document uploads and the legal-chat function for the LegalAI Advisor.",
    version="0.1.0",
    lifespan=lifespan,  # Use the lifespan context manager
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],  # Allow all methods
    allow_headers=["*"],  # Allow all headers
)


# --- Include Routers ---
@app.get("/")
async def read_root():
    return {
        "message": "Welcome to the LegalAI Advisor API. See /docs for API documentation."
    }


app.include_router(health_router.router)
app.include_router(legal_chat_router.router, prefix="/functions/v1", tags=["Function Endpoints"])
app.include_router(conversation_router.router, prefix="/api", tags=["Conversation Endpoints"])
app.include_router(upload_router.router, prefix="/api", tags=["Upload Endpoints"])


# --- Main execution (for running with uvicorn directly) ---
if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_flag = False
    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload_flag,
        log_level="info",
    )
