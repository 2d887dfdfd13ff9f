# backend/config.py
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file in the backend directory
backend_dir = Path(__file__).parent
env_path = backend_dir / ".env"
load_dotenv(env_path)

# --- Logging Setup ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("legal_backend")

# --- Environment Variables ---
# PostgreSQL Configuration
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
POSTGRES_DB = os.getenv("POSTGRES_DB", "legal_advisor")
POSTGRES_USER = os.getenv("POSTGRES_USER", "legal_user")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "legal_password")

# SQLAlchemy-style URI; DATABASE_URL wins when set (e.g. sqlite for local runs)
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+psycopg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@"
    f"{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}",
)

# --- LLM Gateway (OpenAI-compatible chat completions) ---
LLM_GATEWAY_URL = os.getenv("LLM_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
LLM_API_KEY = os.getenv("LLM_API_KEY", None)
LLM_MODEL = os.getenv("LLM_MODEL", "google/gemini-2.5-flash")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))

# --- Storage ---
BLOB_STORAGE_DIR = os.getenv("BLOB_STORAGE_DIR", "legal_documents")
MAX_UPLOAD_SIZE_BYTES = 10 * 1024 * 1024  # 10 MB

# Where the chat controller reaches the legal-chat proxy
LEGAL_CHAT_URL = os.getenv(
    "LEGAL_CHAT_URL", "http://localhost:8000/functions/v1/legal-chat"
)

# --- Prompt Templates ---
LEGAL_SYSTEM_PROMPT = """You are an expert legal AI advisor with the following capabilities:

CAPABILITIES:
1. Analyze legal documents and provide detailed insights
2. Answer questions based on Indian law, international law, and legal precedents
3. Provide structured legal guidance with proper citations
4. Reference uploaded documents when available

RESPONSE FORMAT:
- Use # for main headings
- Use ## for subheadings
- Use **text** for bold emphasis
- Use *text* for italic emphasis
- Use bullet points and numbered lists for clarity
- Include legal citations in [Square Brackets]

WHEN ANALYZING DOCUMENTS:
- Reference specific sections, clauses, or paragraphs
- Highlight key legal terms and their implications
- Point out potential legal issues or concerns
- Suggest relevant case laws or statutes that apply

IMPORTANT:
- Always include a disclaimer: "This is general legal information, not legal advice. Consult a qualified attorney for specific legal matters."
- If you need current legal information or recent case laws, acknowledge the limitation
- Provide 3-5 relevant legal references or judgments when applicable

After your response, provide a JSON array of relevant references:
REFERENCES: ["Reference 1", "Reference 2", "Reference 3"]"""

DOCUMENT_CONTEXT_TEMPLATE_STR = "\n\nDocument Context from {file_name}:\n{extracted_text}"

# Log key configurations on startup
logger.info("Configuration loaded successfully")
