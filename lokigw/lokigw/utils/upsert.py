"""Update-or-append helpers over ordered manifest lists.

Every mutation that adds a container, volume, mount, port, endpoint or flag
goes through these so that re-running a pass never duplicates anything.
"""

from typing import Any, Callable

Merge = Callable[[dict, dict], dict]


def find(items: list[dict] | None, value: Any, key: str = "name") -> dict | None:
    """Return the first item whose ``key`` equals ``value``."""
    for item in items or []:
        if item.get(key) == value:
            return item
    return None


def upsert(
    items: list[dict],
    item: dict,
    key: str = "name",
    merge: Merge | None = None,
) -> list[dict]:
    """Replace the entry matching ``item[key]`` in place, or append ``item``.

    With ``merge`` the stored entry becomes ``merge(existing, item)``
    instead of ``item``. Position of an existing entry is preserved.
    """
    for i, existing in enumerate(items):
        if existing.get(key) == item[key]:
            items[i] = merge(existing, item) if merge else item
            return items
    items.append(item)
    return items


def flag_value(args: list[str], flag: str) -> str | None:
    prefix = f"{flag}="
    for arg in args:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def upsert_flag(args: list[str], flag: str, value: str) -> list[str]:
    """Set ``--flag=value``, replacing an existing occurrence of the flag."""
    prefix = f"{flag}="
    for i, arg in enumerate(args):
        if arg.startswith(prefix):
            args[i] = f"{prefix}{value}"
            return args
    args.append(f"{prefix}{value}")
    return args


def rewrite_flag(
    args: list[str], flag: str, rewrite: Callable[[str], str]
) -> list[str]:
    """Apply ``rewrite`` to the value of ``flag`` if the flag is present."""
    prefix = f"{flag}="
    for i, arg in enumerate(args):
        if arg.startswith(prefix):
            args[i] = f"{prefix}{rewrite(arg[len(prefix):])}"
    return args
