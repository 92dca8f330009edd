"""Output-path derivation — logical route paths to output files.

Clean URL convention: every non-index page becomes its own directory holding
an ``index.html`` document.

    ``index``            -> ``index.html``
    ``about``            -> ``about/index.html``
    ``docs/index``       -> ``docs/index.html``
    ``docs/intro``       -> ``docs/intro/index.html``
    ``todo/[id]`` + 1    -> ``todo/1/index.html``
"""

from collections.abc import Sequence

INDEX_NAME = "index"
INDEX_DOCUMENT = "index.html"

_DYNAMIC_OPEN = "["
_DYNAMIC_CLOSE = "]"


def derive_output_file(
    base_path: Sequence[str],
    leaf_name: str,
    is_index: bool,
) -> str:
    """Return the output file for a static page.

    Args:
        base_path: Directory segments leading to the page.
        leaf_name: Page name without extension.
        is_index: Whether the leaf is the reserved index name.

    """
    segments = list(base_path)
    if not is_index:
        segments.append(leaf_name)
    segments.append(INDEX_DOCUMENT)
    return "/".join(segments)


def join_logical(base_path: Sequence[str], leaf_name: str) -> str:
    """Join directory segments and a leaf into a slash-separated logical path."""
    return "/".join([*base_path, leaf_name])


def is_dynamic_segment(name: str) -> bool:
    """``[id]`` is dynamic, ``id``, ``[]`` and ``[id`` are not."""
    return (
        len(name) > 2
        and name.startswith(_DYNAMIC_OPEN)
        and name.endswith(_DYNAMIC_CLOSE)
    )


def placeholder_name(leaf_name: str) -> str:
    """Return the parameter name inside a dynamic segment (``[id]`` -> ``id``)."""
    return leaf_name[len(_DYNAMIC_OPEN):-len(_DYNAMIC_CLOSE)]


def dynamic_output_file(logical_path: str, name: str, value: str) -> str:
    """Substitute *value* for the ``[name]`` leaf and append the index document.

    Only the final segment is substituted; the directories above a dynamic
    page are always literal.

    """
    head, _, leaf = logical_path.rpartition("/")
    placeholder = f"{_DYNAMIC_OPEN}{name}{_DYNAMIC_CLOSE}"
    if leaf != placeholder:
        msg = f"{logical_path!r} does not end in placeholder {placeholder!r}"
        raise ValueError(msg)
    parts = [head, value] if head else [value]
    return "/".join([*parts, INDEX_DOCUMENT])
