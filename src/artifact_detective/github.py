import io
import re
import zipfile

import click
import requests


GITHUB_API = "https://api.github.com"
REQUEST_TIMEOUT = 60

# Top-level entries of the run log archive are whole job logs: "0_build.txt"
_JOB_LOG_NAME = re.compile(r"^(?:\d+_)?(?P<job>[^/]+)\.txt$")


def get_headers(token):
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def fetch_run_logs(repo, run_id, token):
    """Download and extract workflow run logs from GitHub Actions.

    Args:
        repo: "owner/repo" string
        run_id: Workflow run ID
        token: GitHub personal access token

    Returns:
        List of (filename, content) tuples for each log file.
    """
    url = f"{GITHUB_API}/repos/{repo}/actions/runs/{run_id}/logs"
    resp = requests.get(url, headers=get_headers(token), allow_redirects=True,
                        timeout=REQUEST_TIMEOUT)

    if resp.status_code == 404:
        raise click.ClickException(
            f"Run {run_id} not found in {repo}. "
            "Check the repo name and run ID, or ensure logs haven't expired."
        )
    resp.raise_for_status()

    logs = []
    with zipfile.ZipFile(io.BytesIO(resp.content)) as zf:
        for name in sorted(zf.namelist()):
            if name.endswith(".txt"):
                content = zf.read(name).decode("utf-8", errors="replace")
                logs.append((name, content))
    return logs


def job_logs(log_files):
    """Keep the whole-job logs from fetch_run_logs output.

    Returns:
        List of (job_name, content) tuples. Per-step files inside job
        directories are skipped; they repeat the job log.
    """
    jobs = []
    for name, content in log_files:
        m = _JOB_LOG_NAME.match(name)
        if m:
            jobs.append((m.group("job"), content))
    return jobs
