"""YAML loader for view hierarchies and their keep relationships."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.geometry import Rect
from ..core.priority import Priority
from ..core.view import View
from ..solver.constraint import Relation
from .proxy import PROXY_GROUPS
from .relationships import RELATIONSHIP_RULES, RelationshipKind

logger = logging.getLogger(__name__)

# Keys of a keep entry mapping that are not proxy fields
RESERVED_KEYS = frozenset({"value", "to", "priority", "relation"})

# Proxy groups that relate the view to a target instead of its superview
TARGET_GROUPS = frozenset({"size_to", "edge_align", "center_align"})


class LayoutLoader:
    """Builds a view hierarchy from a YAML layout definition.

    YAML format:
    ```yaml
    name: screen
    frame: [0, 0, 320, 480]     # root frame, fixed during layout
    views:
      header:                   # parent defaults to the root
        keep:
          height: 44
          horizontal_insets: 0
          top_inset: 0
      title:
        parent: header
        baseline: 4             # baseline offset above the bottom edge
        keep:
          centered: true
      body:
        frame: [0, 0, 100, 100] # starting frame (optional)
        keep:
          top_offset: {to: header, value: 8}
          insets: {left: 10, right: 10, bottom: 10}
          width: {value: 100, relation: min, priority: high}
    ```

    Keep keys are relationship kinds (``left_inset``, ``top_offset``, ...),
    proxy groups (``size``, ``insets``, ``center``, ``edge_align``, ...) or
    ``centered``. A value is a number, a list of proxy components in
    grouping order, or a mapping with ``value``, ``to``, ``priority`` and
    ``relation`` (``equal``, ``min`` or ``max``); proxy mappings may also
    name components (``left``, ``width``, ...) directly. An entry with no
    value activates the relationship with its default value.
    """

    def load(self, path: str | Path) -> View:
        """Load a layout from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Root view of the hierarchy, with keep relationships installed
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        return self._build_hierarchy(data or {})

    def load_string(self, yaml_string: str) -> View:
        """Load a layout from a YAML string.

        Args:
            yaml_string: YAML content as a string

        Returns:
            Root view of the hierarchy, with keep relationships installed
        """
        data = yaml.safe_load(yaml_string)
        return self._build_hierarchy(data or {})

    def _build_hierarchy(self, data: dict[str, Any]) -> View:
        """Build the view tree from parsed YAML data."""
        root = View(data.get("name", "root"), frame=Rect.from_sequence(data.get("frame", [0, 0, 0, 0])))
        view_defs: dict[str, dict[str, Any]] = data.get("views") or {}

        # First pass: create every view so references can point forward
        views: dict[str, View] = {root.name: root}
        for view_name, view_def in view_defs.items():
            view_def = view_def or {}
            if view_name in views:
                raise ValueError(f"View '{view_name}' is defined twice")
            view = View(view_name, baseline_offset=float(view_def.get("baseline", 0.0)))
            if "frame" in view_def:
                view.frame = Rect.from_sequence(view_def["frame"])
            views[view_name] = view

        # Second pass: build the tree
        for view_name, view_def in view_defs.items():
            parent_name = (view_def or {}).get("parent", root.name)
            parent = views.get(parent_name)
            if parent is None:
                raise ValueError(f"View '{view_name}' has unknown parent '{parent_name}'")
            if parent.is_descendant_of(views[view_name]):
                raise ValueError(f"View '{view_name}' cannot be nested inside itself")
            parent.add_subview(views[view_name])

        # Third pass: keep relationships
        for view_name, view_def in view_defs.items():
            for key, spec in ((view_def or {}).get("keep") or {}).items():
                self._apply_keep(views[view_name], key, spec, views)

        logger.debug("Loaded layout '%s' with %d views", root.name, len(views))
        return root

    def _apply_keep(self, view: View, key: str, spec: Any, views: dict[str, View]) -> None:
        """Apply one keep entry to a view."""
        options = spec if isinstance(spec, dict) else {"value": spec}
        target = self._resolve_target(options.get("to"), views, key)
        priority = Priority.parse(options["priority"]) if "priority" in options else None
        relation = Relation.parse(options.get("relation", "equal"))

        if key == "centered":
            if target is not None:
                raise ValueError(f"Keep '{key}' of '{view.name}' takes no 'to' view")
            if options.get("value", True):
                view.keep_centered(priority)
            return

        if key in PROXY_GROUPS:
            if key in TARGET_GROUPS and target is None:
                raise ValueError(f"Keep '{key}' of '{view.name}' needs a 'to' view")
            if key not in TARGET_GROUPS and target is not None:
                raise ValueError(f"Keep '{key}' of '{view.name}' takes no 'to' view")
            proxy = view.keep_group(key, target, relation)
            components = {k: v for k, v in options.items() if k not in RESERVED_KEYS}
            if components and options.get("value") is not None:
                raise ValueError(f"Keep '{key}' of '{view.name}' mixes 'value' with components")
            if components:
                proxy.set_value(components, priority)
            elif options.get("value") is not None:
                proxy.set_value(options["value"], priority)
            else:
                if priority is not None:
                    proxy.priority = priority
                proxy.activate()
            return

        try:
            kind = RelationshipKind(key)
        except ValueError:
            raise ValueError(f"Unknown keep '{key}' on view '{view.name}'") from None
        unknown = set(options) - RESERVED_KEYS
        if unknown:
            raise ValueError(f"Unknown options {sorted(unknown)} for keep '{key}' on '{view.name}'")
        if target is not None and not RELATIONSHIP_RULES[kind].requires_target:
            raise ValueError(f"Keep '{key}' of '{view.name}' takes no 'to' view")

        attribute = view.keep(kind, target, relation)
        if options.get("value") is not None:
            attribute.set_value(options["value"], priority)
        else:
            if priority is not None:
                attribute.priority = priority
            attribute.activate()

    def _resolve_target(self, name: str | None, views: dict[str, View], key: str) -> View | None:
        if name is None:
            return None
        target = views.get(name)
        if target is None:
            raise ValueError(f"Keep '{key}' refers to unknown view '{name}'")
        return target
