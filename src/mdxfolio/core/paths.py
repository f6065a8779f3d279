"""Static path enumeration for pre-rendering post pages"""

from mdxfolio.core.repository import PostRepository


def static_paths(repository: PostRepository) -> list[str]:
    """Return every slug to pre-render, deduplicated with order preserved.

    Order follows the repository listing (date descending, then filename), so
    repeated calls against an unchanged content directory agree exactly.
    """
    return list(dict.fromkeys(repository.get_all_slugs()))


def static_params(repository: PostRepository) -> list[dict[str, str]]:
    """static_paths() shaped as route parameters: [{"slug": ...}, ...]."""
    return [{"slug": slug} for slug in static_paths(repository)]
