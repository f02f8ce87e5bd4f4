"""Keep relationships: attributes, proxies and the rules compiling them."""

from .ancestors import common_superview
from .attribute import KeepAttribute
from .proxy import PROXY_GROUPS, KeepProxyAttribute, ProxyGroup
from .relationships import RELATIONSHIP_RULES, RelationshipKind, RelationshipRule

__all__ = [
    "common_superview",
    "KeepAttribute",
    "KeepProxyAttribute",
    "ProxyGroup",
    "PROXY_GROUPS",
    "RelationshipKind",
    "RelationshipRule",
    "RELATIONSHIP_RULES",
]
