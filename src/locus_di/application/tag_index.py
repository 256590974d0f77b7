from typing import Dict, Iterable, List, Union


class TagIndex:
    """Maps tag names to identifiers in tagging order.

    Membership only grows; an identifier appears at most once per tag
    (compared by identifier string).
    """

    def __init__(self) -> None:
        self._tags: Dict[str, List[str]] = {}

    def tag(self, service_id: str, tags: Union[str, Iterable[str]]) -> None:
        """Append an identifier to each tag it is not already part of.

        Args:
            service_id: The identifier to tag.
            tags: A tag name or several tag names.
        """
        if isinstance(tags, str):
            tags = [tags]
        for tag in tags:
            members = self._tags.setdefault(tag, [])
            if service_id not in members:
                members.append(service_id)

    def members(self, tag: str) -> List[str]:
        """Return the identifiers under a tag; unknown tags give an empty list."""
        return list(self._tags.get(tag, []))

    def tags(self) -> Dict[str, List[str]]:
        """Return a copy of the whole index."""
        return {tag: list(members) for tag, members in self._tags.items()}
