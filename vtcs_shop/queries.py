"""
Query Builder

Backend commands are fixed templates with user values pasted straight in.
VULNERABLE: no parameterization and no escaping, on purpose. Trainees are
expected to break out of the quoted slots.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class QueryTemplate:
    """Named command text with {placeholder} slots"""
    name: str
    text: str

    def bind(self, **values: Any) -> "UnsafeQuery":
        return UnsafeQuery(template=self, values=values)


@dataclass(frozen=True)
class UnsafeQuery:
    """A template bound to raw, untrusted values"""
    template: QueryTemplate
    values: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def sql(self) -> str:
        # plain textual substitution, values are never quoted or escaped
        return self.template.text.format_map(
            {key: str(value) for key, value in self.values.items()}
        )

    def __str__(self) -> str:
        return self.sql


LOGIN_QUERY = QueryTemplate(
    name="login",
    text="SELECT * FROM users WHERE username = '{username}' AND password = '{password}'",
)

PRODUCT_SEARCH_QUERY = QueryTemplate(
    name="product_search",
    text="SELECT * FROM products WHERE name LIKE '%{term}%'",
)

USER_LIST_QUERY = QueryTemplate(
    name="user_list",
    text="SELECT id, username, role FROM users",
)
