from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .content import Post


class PostCollection(Sequence["Post"]):
    """Lightweight helper for working with lists of Posts in templates and code."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return PostCollection(self._posts[item])
        return self._posts[item]

    def sorted(self, reverse: bool = True) -> PostCollection:
        """Sort posts by date.

        The sort is stable: posts sharing a date keep their current order in
        either direction, so repeated builds list them identically.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new PostCollection with sorted posts.
        """
        return PostCollection(
            sorted(self._posts, key=lambda p: p.metadata.date, reverse=reverse)
        )

    def tags(self) -> dict[str, PostCollection]:
        """Map each tag to the posts carrying it, in first-seen order."""
        index: dict[str, list[Post]] = {}
        for post in self._posts:
            for tag in dict.fromkeys(post.metadata.tags):
                index.setdefault(tag, []).append(post)
        return {tag: PostCollection(posts) for tag, posts in index.items()}

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"
