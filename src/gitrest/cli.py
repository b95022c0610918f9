"""CLI entry point for the gitrest command."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gitrest.api.client import GitClient
from gitrest.api.endpoints.commits import CommitsAPI
from gitrest.api.endpoints.items import ItemsAPI
from gitrest.api.endpoints.pull_requests import PullRequestsAPI
from gitrest.api.endpoints.refs import RefsAPI
from gitrest.api.endpoints.repositories import RepositoriesAPI
from gitrest.api.exceptions import GitAPIError, InvalidIdentityError
from gitrest.api.models import (
    GitPullRequestSearchCriteria,
    GitQueryCommitsCriteria,
    GitVersionDescriptor,
    GitVersionType,
    PullRequestStatus,
)
from gitrest.config import (
    GitRestConfig,
    load_config,
    load_project_config,
    save_config,
)
from gitrest.log import configure_logging

app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


def _make_client(config: GitRestConfig) -> GitClient:
    return GitClient(
        config.server.url,
        config.server.token,
        auth_scheme=config.server.auth_scheme,
        timeout=config.server.timeout,
        method_override=config.server.method_override,
    )


def _resolve(project: Optional[str], repo: Optional[str]) -> tuple[str | None, str | None]:
    """Fill project/repository from .gitrest and the user config."""
    local = load_project_config()
    config = load_config()
    project = project or local.project or config.defaults.project or None
    repo = repo or local.repository
    return project, repo


def _run(call: Callable[[GitClient], Awaitable[Any]]) -> Any:
    config = load_config()
    if not config.server.url:
        console.print("[red]No server configured.[/red] Run [bold]gitrest config --url ...[/bold] first.")
        raise typer.Exit(1)

    async def runner() -> Any:
        client = _make_client(config)
        try:
            return await call(client)
        finally:
            await client.close()

    try:
        return asyncio.run(runner())
    except (GitAPIError, InvalidIdentityError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc
    except httpx.HTTPError as exc:
        console.print(f"[red]Connection failed:[/red] {escape(str(exc) or type(exc).__name__)}")
        raise typer.Exit(1) from exc


def _require_repo(repo: Optional[str]) -> str:
    if not repo:
        raise typer.BadParameter("No repository given and none pinned in .gitrest")
    return repo


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests"),
) -> None:
    """Browse repositories on a Git REST service."""
    configure_logging(verbose)


@app.command()
def repos(
    project: Optional[str] = typer.Option(None, "--project", "-p"),
) -> None:
    """List repositories."""
    project, _ = _resolve(project, None)
    repositories = _run(lambda c: RepositoriesAPI(c).list(project))

    table = Table("Name", "Project", "Default branch", "Id")
    for r in repositories:
        table.add_row(
            escape(r.name),
            escape(r.project.name or "") if r.project else "",
            escape(r.default_branch or ""),
            r.id,
        )
    console.print(table)


@app.command()
def refs(
    repo: Optional[str] = typer.Argument(None, help="Repository name or id"),
    project: Optional[str] = typer.Option(None, "--project", "-p"),
    filter: Optional[str] = typer.Option(None, "--filter", help="Ref name prefix, e.g. heads/"),
) -> None:
    """List refs of a repository."""
    project, repo = _resolve(project, repo)
    repo = _require_repo(repo)
    results = _run(lambda c: RefsAPI(c).list(repo, project, filter=filter))

    table = Table("Ref", "Object")
    for ref in results:
        table.add_row(escape(ref.name), (ref.object_id or "")[:12])
    console.print(table)


@app.command()
def commits(
    repo: Optional[str] = typer.Argument(None, help="Repository name or id"),
    project: Optional[str] = typer.Option(None, "--project", "-p"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b"),
    top: Optional[int] = typer.Option(None, "--top", "-n"),
) -> None:
    """List recent commits."""
    project, repo = _resolve(project, repo)
    repo = _require_repo(repo)
    criteria = None
    if branch:
        criteria = GitQueryCommitsCriteria(
            item_version=GitVersionDescriptor(version=branch, version_type=GitVersionType.BRANCH)
        )
    top = top or load_config().ui.max_rows
    results = _run(
        lambda c: CommitsAPI(c).list(repo, project, search_criteria=criteria, top=top)
    )

    table = Table("Commit", "Author", "Date", "Comment")
    for commit in results:
        author = commit.author
        table.add_row(
            commit.short_id,
            escape(author.name or "") if author else "",
            author.date.strftime("%Y-%m-%d %H:%M") if author and author.date else "",
            escape((commit.comment or "").splitlines()[0] if commit.comment else ""),
        )
    console.print(table)


@app.command()
def prs(
    repo: Optional[str] = typer.Argument(None, help="Repository name or id"),
    project: Optional[str] = typer.Option(None, "--project", "-p"),
    status: PullRequestStatus = typer.Option(PullRequestStatus.ACTIVE, "--status"),
    top: Optional[int] = typer.Option(None, "--top", "-n"),
) -> None:
    """List pull requests."""
    project, repo = _resolve(project, repo)
    repo = _require_repo(repo)
    criteria = GitPullRequestSearchCriteria(status=status)
    top = top or load_config().ui.max_rows
    results = _run(
        lambda c: PullRequestsAPI(c).list(repo, project, search_criteria=criteria, top=top)
    )

    table = Table("Id", "Title", "Source", "Target", "Status")
    for pr in results:
        table.add_row(
            str(pr.pull_request_id or ""),
            escape(pr.title or ""),
            escape(pr.source_ref_name or ""),
            escape(pr.target_ref_name or ""),
            pr.status.value if pr.status else "",
        )
    console.print(table)


@app.command()
def show(
    repo: str = typer.Argument(..., help="Repository name or id"),
    path: str = typer.Argument(..., help="Path of the file in the repository"),
    project: Optional[str] = typer.Option(None, "--project", "-p"),
    version: Optional[str] = typer.Option(None, "--version", help="Branch to read from"),
) -> None:
    """Print a file's text."""
    project, _ = _resolve(project, None)
    descriptor = None
    if version:
        descriptor = GitVersionDescriptor(version=version, version_type=GitVersionType.BRANCH)
    text = _run(
        lambda c: ItemsAPI(c).get_text(repo, path, project, version_descriptor=descriptor)
    )
    console.print(text, markup=False, highlight=False, end="")


@app.command("config")
def configure(
    url: Optional[str] = typer.Option(None, "--url", help="Collection URL"),
    token: Optional[str] = typer.Option(None, "--token", help="Personal access token"),
    project: Optional[str] = typer.Option(None, "--project", help="Default project"),
    check: bool = typer.Option(False, "--check", help="Test the connection"),
) -> None:
    """Show or update the saved configuration."""
    if url is None and token is None and project is None:
        config = load_config()
        console.print(f"url:     {escape(config.server.url or '-')}")
        console.print(f"token:   {'set' if config.server.token else '-'}")
        console.print(f"project: {escape(config.defaults.project or '-')}")
    else:
        # GITREST_* overrides stay out of the file
        config = load_config(apply_env=False)
        if url is not None:
            config.server.url = url
        if token is not None:
            config.server.token = token
        if project is not None:
            config.defaults.project = project
        save_config(config)
        console.print("[green]Configuration saved.[/green]")

    if check:
        if _run(lambda c: c.check_connection()):
            console.print("[green]Connection OK.[/green]")
        else:
            console.print("[red]Connection failed.[/red] Check the URL and token.")
            raise typer.Exit(1)
