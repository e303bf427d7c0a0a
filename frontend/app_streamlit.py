import html
import os
from typing import Optional

import requests
import streamlit as st

# --- Configuration ---
BACKEND_API_URL = os.getenv("BACKEND_API_URL", "http://localhost:7777/generate")
REQUEST_TIMEOUT_SECONDS = 90


class PromptRequestError(Exception):
    pass


def unwrap_prompt(body: str) -> str:
    """Turns the backend's ``<pre>escaped</pre>`` body back into plain text."""
    if body.startswith("<pre>") and body.endswith("</pre>"):
        body = body[len("<pre>"):-len("</pre>")]
    return html.unescape(body)


def fetch_prompt(repo_url: str, token: Optional[str] = None, backend_url: str = BACKEND_API_URL) -> str:
    """Calls the backend and returns the plain-text prompt."""
    params = {"url": repo_url}
    if token:
        params["token"] = token
    try:
        response = requests.get(backend_url, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
    except requests.exceptions.RequestException as req_err:
        raise PromptRequestError(f"Network error: {req_err}") from req_err
    if not response.ok:
        # The backend answers failures with "Error: <message>"
        raise PromptRequestError(response.text or f"Backend returned status {response.status_code}")
    return unwrap_prompt(response.text)


def repo_name_from_url(repo_url: str) -> str:
    parts = [part for part in repo_url.strip().split("/") if part]
    if "github.com" in parts:
        after_host = parts[parts.index("github.com") + 1:]
        if len(after_host) >= 2:
            return after_host[1].removesuffix(".git")
    return "repository"


def main():
    st.set_page_config(page_title="GitHub to Prompt", layout="wide")

    # --- Initialize session state variables ---
    default_session_states = {
        'prompt_text': None,
        'error_message': None,
        'user_github_token': "",
        'last_repo_url': ""
    }
    for key, default_value in default_session_states.items():
        if key not in st.session_state:
            st.session_state[key] = default_value

    # --- Main App UI ---
    st.title("GitHub Repository to Prompt 📝")
    st.markdown("""
    Enter a GitHub repository URL (optionally `/tree/<branch>`). Optionally, provide a GitHub
    Personal Access Token (PAT) for private repositories or to increase API rate limits.
    The token is sent to the backend for API requests and is not stored long-term by this UI.
    """)

    # --- Inputs: Repo URL and Optional GitHub Token ---
    repo_url_input = st.text_input(
        "GitHub Repository URL:",
        value=st.session_state.last_repo_url,
        placeholder="https://github.com/owner/repo",
        key="repo_url_input_key"
    )
    st.session_state.last_repo_url = repo_url_input

    github_token_input = st.text_input(
        "Optional GitHub Token (PAT):",
        type="password",
        value=st.session_state.user_github_token,
        help="Your GitHub Personal Access Token. Used for private repos or higher rate limits.",
        key="github_token_input_key"
    )
    st.session_state.user_github_token = github_token_input

    # --- Top Buttons (Generate & Download) ---
    top_button_cols = st.columns([1, 1, 3]) # Generate Button, Download Button, Spacer

    with top_button_cols[0]:
        if st.button("🚀 Generate Prompt", type="primary", use_container_width=True, key="generate_button"):
            st.session_state.prompt_text = None
            st.session_state.error_message = None
            if not repo_url_input:
                st.session_state.error_message = "Please enter a GitHub repository URL."
            else:
                with st.spinner("Fetching repository data..."):
                    try:
                        st.session_state.prompt_text = fetch_prompt(repo_url_input, github_token_input or None)
                    except PromptRequestError as e:
                        st.session_state.error_message = str(e)

    with top_button_cols[1]:
        if st.session_state.prompt_text:
            st.download_button(
                label="⬇️ Download Prompt",
                data=st.session_state.prompt_text,
                file_name=f"{repo_name_from_url(repo_url_input)}_prompt.txt",
                mime="text/plain",
                use_container_width=True,
                key="download_prompt_button"
            )

    if st.session_state.error_message:
        st.error(st.session_state.error_message)

    st.divider()

    if st.session_state.prompt_text:
        st.subheader("Prompt")
        st.code(st.session_state.prompt_text, language=None)

    st.sidebar.header("About")
    st.sidebar.info(
        "Flattens a GitHub repository into one text prompt: the directory tree followed by "
        "the contents of its code files. Optionally use a GitHub PAT for private repos or higher rate limits."
    )


if __name__ == "__main__":
    main()
