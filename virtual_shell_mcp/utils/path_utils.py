DEFAULT_HOME = "/home/user"


def normalize_path(path: str) -> str:
    """
    Canonicalizes an absolute path lexically.

    Empty and `.` segments are dropped, `..` pops one segment and never climbs
    above `/`. The result has no trailing slash (except for the root itself).
    """
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return "/" + "/".join(parts)


def resolve_path(cwd: str, raw: str, home: str = DEFAULT_HOME) -> str:
    """
    Resolves a user-provided path against the current working directory.

    Args:
        cwd: The session's current working directory (absolute).
        raw: The path argument as typed by the user.
        home: The directory `~` expands to.

    Returns:
        The absolute, normalized path. The function is pure and touches no store.
    """
    if raw.startswith("/"):
        target = raw
    elif raw == "~":
        target = home
    elif raw.startswith("~/"):
        target = home + raw[1:]
    elif cwd == "/":
        target = "/" + raw
    else:
        target = f"{cwd}/{raw}"
    return normalize_path(target)


def parent_path(path: str) -> str | None:
    """Returns the derived parent of an absolute path, or None for the root."""
    if path == "/":
        return None
    head = path.rsplit("/", 1)[0]
    return head or "/"


def base_name(path: str) -> str:
    """Returns the final segment of a path; the root is named `/`."""
    if path == "/":
        return "/"
    return path.rstrip("/").rsplit("/", 1)[-1]


def is_descendant(path: str, ancestor: str) -> bool:
    """True if `path` lies strictly below `ancestor`."""
    if ancestor == "/":
        return path != "/"
    return path.startswith(ancestor + "/")


def ancestors(path: str) -> list[str]:
    """All proper ancestors of `path`, root first."""
    chain = []
    current = parent_path(path)
    while current is not None:
        chain.append(current)
        current = parent_path(current)
    return list(reversed(chain))
