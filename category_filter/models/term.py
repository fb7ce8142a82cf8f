"""
Taxonomy term data models.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple

ORDERBY_FIELDS = ('name', 'id', 'slug', 'count')


@dataclass(frozen=True)
class Term:
    """
    Taxonomy term (category or tag).

    Attributes:
        id: Term identifier
        name: Display name
        slug: URL slug
        count: Number of published posts in the term
    """

    id: int
    name: str
    slug: str = ''
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Term':
        """Build a term from its dictionary form."""
        return cls(
            id=int(data['id']),
            name=str(data['name']),
            slug=str(data.get('slug', '')),
            count=int(data.get('count', 0)),
        )


@dataclass(frozen=True)
class TermQuery:
    """
    Parameters of a term list lookup.

    Attributes:
        taxonomy: Taxonomy name ('category', 'post_tag')
        include: Only keep these term ids (empty keeps all)
        exclude: Drop these term ids
        hide_empty: Drop terms without posts
        orderby: One of name, id, slug, count
        order: ASC or DESC
    """

    taxonomy: str = 'category'
    include: Tuple[int, ...] = field(default_factory=tuple)
    exclude: Tuple[int, ...] = field(default_factory=tuple)
    hide_empty: bool = True
    orderby: str = 'name'
    order: str = 'ASC'

    def __post_init__(self):
        """Normalize ordering fields."""
        if self.orderby not in ORDERBY_FIELDS:
            object.__setattr__(self, 'orderby', 'name')
        object.__setattr__(self, 'order', 'DESC' if str(self.order).upper() == 'DESC' else 'ASC')
        object.__setattr__(self, 'include', tuple(int(i) for i in self.include))
        object.__setattr__(self, 'exclude', tuple(int(i) for i in self.exclude))

    def cache_parts(self) -> Tuple[Any, ...]:
        """Ordered tuple identifying this query in the cache."""
        return (
            self.taxonomy,
            sorted(self.include),
            sorted(self.exclude),
            self.hide_empty,
            self.orderby,
            self.order,
        )
