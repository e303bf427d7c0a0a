import asyncio
import contextlib
import logging
from typing import Iterable, List, Sequence

from . import config
from .github import GitHubClient
from .models import FileContent, PathEntry, RepoTarget
from .tree import build_nested_tree, render_repository_structure

logger = logging.getLogger(__name__)

# --- Files whose contents go into the prompt ---
CODE_EXTENSIONS = (
    '.js', '.html', '.css', '.py', '.java', '.ts', '.jsx', '.tsx', '.json', '.yml', '.yaml', '.md'
)
CODE_FILE_NAMES = {'Dockerfile'} # Exact file names to include


def escape_html(text: str) -> str:
    return (
        text
        .replace("&", "&amp;") # Must be first to avoid double-escaping
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def is_code_file(entry: PathEntry) -> bool:
    if entry.type != "blob":
        return False
    return entry.path.endswith(CODE_EXTENSIONS) or entry.path.split("/")[-1] in CODE_FILE_NAMES


def select_code_files(entries: Iterable[PathEntry]) -> List[PathEntry]:
    return [entry for entry in entries if is_code_file(entry)]


async def fetch_file_contents(
    client: GitHubClient, owner: str, repo: str, ref: str,
    files: Sequence[PathEntry], max_concurrency: int = 0,
) -> List[FileContent]:
    """Fetches every file's raw content concurrently.

    Results come back in the order of ``files`` whatever order the requests
    finish in. The first failure cancels the fetches still in flight and is
    re-raised. ``max_concurrency`` > 0 bounds the number of requests in flight.
    """
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None

    async def fetch_one(entry: PathEntry) -> FileContent:
        async with (semaphore or contextlib.nullcontext()):
            content = await client.get_raw_content(owner, repo, entry.path, ref)
        return FileContent(path=entry.path, content=content)

    tasks = [asyncio.ensure_future(fetch_one(entry)) for entry in files]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def assemble_prompt(structure: str, files: Iterable[FileContent]) -> str:
    parts = [structure, "\n"]
    for file in files:
        parts.append(f"=== {file.path} ===\n\n{file.content}\n\n")
    return "".join(parts)


async def generate_prompt(
    client: GitHubClient, target: RepoTarget, max_concurrent_fetches: int = config.MAX_CONCURRENT_FETCHES,
) -> str:
    """Fetches ``target`` from GitHub and returns the unescaped text prompt."""
    owner, repo = target.owner, target.repo
    branch = target.branch or await client.get_default_branch(owner, repo)
    logger.info("Generating prompt for %s/%s@%s", owner, repo, branch)

    tree = await client.get_tree(owner, repo, branch)
    structure = render_repository_structure(build_nested_tree(tree))

    code_files = select_code_files(tree)
    logger.info("Fetching %d of %d entries for %s/%s", len(code_files), len(tree), owner, repo)
    contents = await fetch_file_contents(
        client, owner, repo, branch, code_files, max_concurrency=max_concurrent_fetches
    )

    return assemble_prompt(structure, contents)
