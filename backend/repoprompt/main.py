import logging
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from . import __version__, config
from .errors import MissingParameterError, RepoPromptError
from .github import GitHubClient, create_http_client, parse_repo_url
from .prompt import escape_html, generate_prompt

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="GitHub Repository to Prompt Service",
    description="Fetches a GitHub repository's tree and code files and flattens them into one text prompt.",
    version=__version__
)

# --- CORS Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # Allows all methods (GET, POST, etc.)
    allow_headers=["*"], # Allows all headers
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One upstream client per request, closed once the response is built."""
    async with create_http_client() as client:
        yield client


@app.exception_handler(RepoPromptError)
async def repo_prompt_error_handler(request: Request, exc: RepoPromptError):
    return PlainTextResponse(f"Error: {exc}", status_code=400)


@app.get("/", summary="Landing Page", include_in_schema=False)
async def read_root():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/generate", response_class=HTMLResponse, summary="Generate Repository Prompt")
async def generate(
    url: Optional[str] = None,
    token: Optional[str] = None,
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Flattens a GitHub repository into a text prompt, HTML-escaped inside ``<pre>``.
    - **url**: URL of the GitHub repository, optionally ``/tree/<branch>``.
    - **token**: Optional GitHub token for private repos or higher rate limits.
    """
    if not url:
        raise MissingParameterError()

    target = parse_repo_url(url)
    client = GitHubClient(http_client, token=token or config.GITHUB_TOKEN)

    try:
        text_prompt = await generate_prompt(client, target)
    except RepoPromptError:
        raise
    except Exception as e: # Anything unexpected still fails the request with a readable message
        logger.exception("Unexpected server error processing %s/%s", target.owner, target.repo)
        raise RepoPromptError(str(e)) from e

    return HTMLResponse(f"<pre>{escape_html(text_prompt)}</pre>")


@app.get("/health", summary="Health Check", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


def run() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on port %d", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
