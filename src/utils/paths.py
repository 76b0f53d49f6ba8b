from pathlib import Path


def resolve_project_root(project_root: Path | None = None) -> Path:
    """Resolve the root of the application being deployed.

    The deployment runs against the directory holding the env file and the
    frontend/backend build contexts, which is the working directory unless
    one is given explicitly.

    Args:
        project_root: Explicit root, or None to use the current directory

    Returns:
        Absolute path to the project root
    """
    return (project_root or Path.cwd()).resolve()
