"""Image reference parsing helpers."""

from ..models import DEFAULT_TAG


def parse_repository_tag(repo_tag: str) -> tuple[str, str]:
    """Split a ``repository:tag`` string into its repository and tag.

    Args:
        repo_tag: Image reference
            - "nginx:alpine"
            - "localhost:5000/myapp:latest"
            - "gcr.io/x/pause:1.0"

    Returns:
        tuple[str, str]: (repository, tag), tag defaults to "latest"

    Examples:
        parse_repository_tag("localhost:5000/myapp:latest")
        # ("localhost:5000/myapp", "latest")

        parse_repository_tag("localhost:5000/myapp")
        # ("localhost:5000/myapp", "latest")
    """
    repository, sep, tag = repo_tag.rpartition(":")
    # A colon before the last '/' belongs to a registry port, not a tag
    if not sep or "/" in tag:
        return repo_tag, DEFAULT_TAG
    if not tag:
        return repository, DEFAULT_TAG
    return repository, tag
